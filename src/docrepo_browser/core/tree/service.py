"""Category tree lookups: the remote `docTree` endpoint and an in-memory tree."""

import dataclasses
from collections import deque
from collections.abc import Iterable
from typing import Any

import requests
from loguru import logger

from docrepo_browser.config import ROOT_NODE_ID
from docrepo_browser.errors import TreeResolutionError
from docrepo_browser.models.category import ROOT_NODE, CategoryNode, TreeResolution
from docrepo_browser.protocols import ApiProtocol


def _descriptor_id(descriptor: Any) -> int:
    """Extract the node id from a server node descriptor."""
    if isinstance(descriptor, dict):
        return int(descriptor["id"])
    if isinstance(descriptor, list | tuple):
        return int(descriptor[0])
    return int(descriptor)


def _descriptor_to_node(descriptor: Any) -> CategoryNode:
    """Build a node from `{id, category_name, parent_id}` or `[id, label, parent_id]`."""
    if isinstance(descriptor, list | tuple):
        label = descriptor[1] if len(descriptor) > 1 else ""
        parent = descriptor[2] if len(descriptor) > 2 else None
        node_id = descriptor[0]
    else:
        label = descriptor.get("category_name")
        parent = descriptor.get("parent_id")
        node_id = descriptor["id"]
    return CategoryNode(
        id=int(node_id),
        label=str(label or ""),
        parent_id=int(parent) if parent not in (None, "") else None,
    )


class HttpCategoryTree:
    """Resolve nodes through `GET <module>/docTree/<node_id>`."""

    def __init__(self, api: ApiProtocol) -> None:
        self._api = api

    def resolve(self, node_id: int) -> TreeResolution:
        try:
            payload = self._api.get_json(f"docTree/{node_id}")
        except (requests.RequestException, ValueError) as e:
            raise TreeResolutionError(node_id, str(e)) from e

        try:
            return self._parse(node_id, payload)
        except (AttributeError, IndexError, KeyError, TypeError, ValueError) as e:
            raise TreeResolutionError(node_id, f"malformed docTree response: {e!r}") from e

    def _parse(self, node_id: int, payload: dict[str, Any]) -> TreeResolution:
        descendant_ids = frozenset(
            {node_id, *(_descriptor_id(d) for d in payload["allsubcategories"])}
        )
        children = tuple(_descriptor_to_node(d) for d in payload["subcategories"])

        ancestors: tuple[CategoryNode, ...] = ()
        if node_id != ROOT_NODE_ID:
            parents = tuple(_descriptor_to_node(d) for d in payload["parentcategory"])
            # The server leaves out the synthetic root.
            if not parents or parents[0].id != ROOT_NODE_ID:
                parents = (ROOT_NODE, *parents)
            ancestors = parents

        logger.debug(
            "Resolved node {}: {} ancestors, {} children, {} in closure",
            node_id,
            len(ancestors),
            len(children),
            len(descendant_ids),
        )
        return TreeResolution(
            node_id=node_id,
            ancestors=ancestors,
            children=children,
            descendant_ids=descendant_ids,
        )


class InMemoryCategoryTree:
    """A fully loaded category tree.

    Child order follows the order in which nodes are given. The synthetic root
    is added when it is not among the nodes.
    """

    def __init__(self, nodes: Iterable[CategoryNode]) -> None:
        given: dict[int, CategoryNode] = {}
        for node in nodes:
            if node.id in given:
                msg = f"Duplicate category id {node.id}"
                raise ValueError(msg)
            given[node.id] = node
        given.setdefault(ROOT_NODE_ID, ROOT_NODE)
        if given[ROOT_NODE_ID].parent_id is not None:
            msg = "The root category cannot have a parent"
            raise ValueError(msg)

        children: dict[int, list[int]] = {node_id: [] for node_id in given}
        for node in given.values():
            if node.id == ROOT_NODE_ID:
                continue
            if node.parent_id is None:
                msg = f"Category {node.id} has no parent"
                raise ValueError(msg)
            if node.parent_id not in given:
                msg = f"Category {node.id} has unknown parent {node.parent_id}"
                raise ValueError(msg)
            children[node.parent_id].append(node.id)

        self._nodes = {
            node_id: dataclasses.replace(node, child_ids=tuple(children[node_id]))
            for node_id, node in given.items()
        }

        unreachable = set(self._nodes) - self._closure(ROOT_NODE_ID)
        if unreachable:
            msg = f"Categories not reachable from root (cycle?): {sorted(unreachable)!r}"
            raise ValueError(msg)

    @property
    def nodes(self) -> dict[int, CategoryNode]:
        return dict(self._nodes)

    def _closure(self, node_id: int) -> frozenset[int]:
        seen = {node_id}
        todo = deque([node_id])
        while todo:
            for child_id in self._nodes[todo.popleft()].child_ids:
                if child_id not in seen:
                    seen.add(child_id)
                    todo.append(child_id)
        return frozenset(seen)

    def resolve(self, node_id: int) -> TreeResolution:
        node = self._nodes.get(node_id)
        if node is None:
            raise TreeResolutionError(node_id, "unknown category")

        ancestors: list[CategoryNode] = []
        parent_id = node.parent_id
        while parent_id is not None:
            parent = self._nodes[parent_id]
            ancestors.append(parent)
            parent_id = parent.parent_id

        return TreeResolution(
            node_id=node_id,
            ancestors=tuple(reversed(ancestors)),
            children=tuple(self._nodes[c] for c in node.child_ids),
            descendant_ids=self._closure(node_id),
        )
