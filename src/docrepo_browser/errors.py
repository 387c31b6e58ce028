"""Error taxonomy for catalogue loading and tree navigation."""


class DocRepoError(Exception):
    """Base class for document repository browser errors."""


class CatalogueLoadError(DocRepoError):
    """The document catalogue could not be loaded. Fatal for the view."""


class TreeResolutionError(DocRepoError):
    """A category tree lookup failed. The caller may retry navigation."""

    def __init__(self, node_id: int, message: str) -> None:
        super().__init__(f"Cannot resolve category node {node_id}: {message}")
        self.node_id = node_id
