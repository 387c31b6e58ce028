"""Category tree records."""

from dataclasses import dataclass

from docrepo_browser.config import ROOT_NODE_ID, ROOT_NODE_LABEL


@dataclass(frozen=True)
class CategoryNode:
    """A vertex of the category hierarchy."""

    id: int
    label: str
    parent_id: int | None = None
    child_ids: tuple[int, ...] = ()

    @property
    def is_root(self) -> bool:
        return self.id == ROOT_NODE_ID


ROOT_NODE = CategoryNode(id=ROOT_NODE_ID, label=ROOT_NODE_LABEL, parent_id=None)


@dataclass(frozen=True)
class TreeResolution:
    """Everything needed to navigate at one node.

    ``ancestors`` runs from the root to the node's parent and is empty for the
    root itself. ``descendant_ids`` always contains ``node_id``.
    """

    node_id: int
    ancestors: tuple[CategoryNode, ...]
    children: tuple[CategoryNode, ...]
    descendant_ids: frozenset[int]
