"""One browsing session: catalogue load, navigation engine, reload on change."""

import asyncio

import requests
from loguru import logger

from docrepo_browser.core.navigation.engine import GlobalScope, NavigationFilterEngine
from docrepo_browser.core.tree.service import HttpCategoryTree
from docrepo_browser.errors import CatalogueLoadError
from docrepo_browser.models.document import Catalogue, Document
from docrepo_browser.models.navigation import ResetCatalogue
from docrepo_browser.protocols import ApiProtocol, CategoryTreeProtocol


class BrowseSession:
    """Tie the catalogue, the category tree and the engine together.

    Mutations never patch the engine: they return a ``ResetCatalogue`` command
    and ``apply`` reloads everything and starts again at the root.
    """

    def __init__(
        self,
        api: ApiProtocol,
        *,
        tree: CategoryTreeProtocol | None = None,
        global_scope: GlobalScope = GlobalScope.ROOT_CLOSURE,
    ) -> None:
        self._api = api
        self.tree = tree if tree is not None else HttpCategoryTree(api)
        self._global_scope = global_scope
        self.engine: NavigationFilterEngine | None = None

    def load_catalogue(self) -> Catalogue:
        """Fetch the full document list.

        Raises:
            CatalogueLoadError: On any transport or format failure.
        """
        try:
            payload = self._api.get_json("", {"format": "json"})
        except (requests.RequestException, ValueError) as e:
            msg = f"Failed to load the document catalogue: {e}"
            raise CatalogueLoadError(msg) from e

        try:
            catalogue = Catalogue.from_json(payload)
        except (AttributeError, TypeError, ValueError) as e:
            msg = f"Malformed document catalogue: {e}"
            raise CatalogueLoadError(msg) from e

        logger.info("Loaded {} documents", len(catalogue.documents))
        return catalogue

    async def start(self) -> NavigationFilterEngine:
        """Load the catalogue and open a fresh engine at the root."""
        catalogue = await asyncio.to_thread(self.load_catalogue)
        self.engine = await NavigationFilterEngine.open(
            catalogue, self.tree, global_scope=self._global_scope
        )
        return self.engine

    def delete_document(self, document: Document) -> ResetCatalogue:
        """Delete a file on the server. HTTP errors propagate."""
        self._api.delete(f"Files/{document.id}")
        logger.info("Deleted {} (id={})", document.file_name, document.id)
        return ResetCatalogue(reason=f"deleted document {document.id}")

    async def apply(self, command: ResetCatalogue) -> NavigationFilterEngine:
        """Carry out a command returned by a mutating call."""
        logger.debug("Reloading catalogue: {}", command.reason)
        return await self.start()
