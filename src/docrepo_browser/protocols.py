"""Protocols for dependency injection in the repository browser."""

from typing import Any, Protocol, runtime_checkable

from docrepo_browser.models.category import TreeResolution


@runtime_checkable
class ApiProtocol(Protocol):
    """Protocol for document repository HTTP clients."""

    def get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET a module endpoint and return the decoded JSON body."""
        ...

    def delete(self, path: str) -> Any:
        """DELETE a module endpoint and return the decoded JSON body."""
        ...


@runtime_checkable
class CategoryTreeProtocol(Protocol):
    """Protocol for category tree lookups."""

    def resolve(self, node_id: int) -> TreeResolution:
        """Return ancestors, children and descendant closure of a node.

        Raises:
            TreeResolutionError: If the lookup fails.
        """
        ...
