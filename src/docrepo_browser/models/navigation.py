"""Navigation state published to the presentation layer."""

from dataclasses import dataclass
from enum import Enum

from docrepo_browser.config import ROOT_NODE_ID
from docrepo_browser.errors import TreeResolutionError
from docrepo_browser.models.category import CategoryNode
from docrepo_browser.models.document import Document


class NavigationMode(Enum):
    SCOPED = "scoped"
    GLOBAL = "global"


class NavigationOutcome(Enum):
    """What happened to a navigation request once its lookup returned."""

    COMMITTED = "committed"
    DISCARDED = "discarded"
    FAILED = "failed"


@dataclass(frozen=True)
class NavigationView:
    """A complete, atomically replaced navigation snapshot."""

    mode: NavigationMode = NavigationMode.SCOPED
    current_node_id: int = ROOT_NODE_ID
    breadcrumb: tuple[CategoryNode, ...] = ()
    children: tuple[CategoryNode, ...] = ()
    visible: tuple[Document, ...] = ()
    error: TreeResolutionError | None = None
    sequence: int = 0
    new_category: bool = False

    @property
    def is_global(self) -> bool:
        return self.mode is NavigationMode.GLOBAL

    @property
    def is_empty(self) -> bool:
        """True when the lookup succeeded and no document matched."""
        return not self.visible and self.error is None


@dataclass(frozen=True)
class ResetCatalogue:
    """Command: reload the catalogue and restart navigation at the root."""

    reason: str
