"""Category-tree navigation and filtering for a document repository catalogue."""

from docrepo_browser.api import DocumentRepositoryApi
from docrepo_browser.core.navigation.engine import GlobalScope, NavigationFilterEngine
from docrepo_browser.core.session import BrowseSession
from docrepo_browser.core.tree.service import HttpCategoryTree, InMemoryCategoryTree
from docrepo_browser.errors import CatalogueLoadError, DocRepoError, TreeResolutionError
from docrepo_browser.protocols import ApiProtocol, CategoryTreeProtocol

__all__ = [
    "ApiProtocol",
    "BrowseSession",
    "CatalogueLoadError",
    "CategoryTreeProtocol",
    "DocRepoError",
    "DocumentRepositoryApi",
    "GlobalScope",
    "HttpCategoryTree",
    "InMemoryCategoryTree",
    "NavigationFilterEngine",
    "TreeResolutionError",
]
