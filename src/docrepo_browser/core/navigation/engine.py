"""Navigation state machine: scoped/global filtering of the catalogue."""

import asyncio
import dataclasses
from collections.abc import Callable, Coroutine
from enum import Enum
from typing import Any

from loguru import logger

from docrepo_browser.config import ROOT_NODE_ID
from docrepo_browser.errors import TreeResolutionError
from docrepo_browser.models.document import Catalogue, Document
from docrepo_browser.models.navigation import NavigationMode, NavigationOutcome, NavigationView
from docrepo_browser.protocols import CategoryTreeProtocol

Listener = Callable[[NavigationView], None]


class GlobalScope(Enum):
    """What "filter globally" shows.

    ROOT_CLOSURE filters by the root's descendant closure fetched from the
    tree; ALL_DOCUMENTS shows the whole catalogue without a lookup.
    """

    ROOT_CLOSURE = "root_closure"
    ALL_DOCUMENTS = "all_documents"


def filter_by_closure(
    documents: tuple[Document, ...], descendant_ids: frozenset[int]
) -> tuple[Document, ...]:
    """Documents tagged with any node in the closure, in catalogue order."""
    return tuple(d for d in documents if d.category_node_id in descendant_ids)


class NavigationFilterEngine:
    """Own the navigation state of one catalogue view.

    Navigation calls return an ``asyncio.Task`` right away; the view keeps
    showing the last committed state until the lookup finishes. Every request
    gets a sequence number when issued and only the most recently issued one
    may commit, so a slow superseded lookup never overwrites a newer result.
    Must be driven from a running event loop.
    """

    def __init__(
        self,
        catalogue: Catalogue,
        tree: CategoryTreeProtocol,
        *,
        global_scope: GlobalScope = GlobalScope.ROOT_CLOSURE,
    ) -> None:
        self._catalogue = catalogue
        self._tree = tree
        self._global_scope = global_scope
        self._issued = 0
        self._view = NavigationView()
        self._listeners: list[Listener] = []
        self._pending: set[asyncio.Task[NavigationOutcome]] = set()

    @classmethod
    async def open(
        cls,
        catalogue: Catalogue,
        tree: CategoryTreeProtocol,
        *,
        global_scope: GlobalScope = GlobalScope.ROOT_CLOSURE,
    ) -> "NavigationFilterEngine":
        """Create an engine and commit the initial root view."""
        engine = cls(catalogue, tree, global_scope=global_scope)
        await engine.descend_into(ROOT_NODE_ID)
        return engine

    @property
    def catalogue(self) -> Catalogue:
        return self._catalogue

    def current_view(self) -> NavigationView:
        """The last committed view. Does not recompute anything."""
        return self._view

    def subscribe(self, listener: Listener) -> None:
        """Call ``listener`` with every newly published view.

        Listener errors are logged and do not fail the navigation request.
        """
        self._listeners.append(listener)

    def select(self, document: Document) -> int:
        """Category node a document row links to."""
        return document.category_node_id

    def request_new_category(self) -> None:
        """Record the user's intent to create a category."""
        self._publish(dataclasses.replace(self._view, new_category=True))

    def descend_into(self, node_id: int) -> "asyncio.Task[NavigationOutcome]":
        """Scope the view to ``node_id`` and everything below it."""
        seq = self._issue(f"descend into {node_id}")
        return self._schedule(self._resolve_and_commit(seq, node_id, NavigationMode.SCOPED))

    def go_global(self) -> "asyncio.Task[NavigationOutcome]":
        """Switch to the global view, without breadcrumb or children."""
        seq = self._issue("go global")
        if self._global_scope is GlobalScope.ALL_DOCUMENTS:
            return self._schedule(self._commit_all_documents(seq))
        return self._schedule(self._resolve_and_commit(seq, ROOT_NODE_ID, NavigationMode.GLOBAL))

    def toggle_global(self, enabled: bool) -> "asyncio.Task[NavigationOutcome]":
        """Handler for the "filter globally" checkbox."""
        if enabled:
            return self.go_global()
        return self.descend_into(ROOT_NODE_ID)

    def _issue(self, what: str) -> int:
        self._issued += 1
        logger.debug("Navigation #{}: {}", self._issued, what)
        return self._issued

    def _is_latest(self, seq: int) -> bool:
        return seq == self._issued

    def _schedule(
        self, coro: Coroutine[Any, Any, NavigationOutcome]
    ) -> "asyncio.Task[NavigationOutcome]":
        task = asyncio.get_running_loop().create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _resolve_and_commit(
        self, seq: int, node_id: int, mode: NavigationMode
    ) -> NavigationOutcome:
        try:
            resolution = await asyncio.to_thread(self._tree.resolve, node_id)
        except TreeResolutionError as e:
            if not self._is_latest(seq):
                logger.debug("Navigation #{} failed after being superseded: {}", seq, e)
                return NavigationOutcome.DISCARDED
            logger.warning("Navigation #{} failed: {}", seq, e)
            self._publish(dataclasses.replace(self._view, error=e, sequence=seq))
            return NavigationOutcome.FAILED

        if not self._is_latest(seq):
            logger.debug("Navigation #{} discarded, #{} is newer", seq, self._issued)
            return NavigationOutcome.DISCARDED

        visible = filter_by_closure(self._catalogue.documents, resolution.descendant_ids)
        if mode is NavigationMode.GLOBAL:
            view = NavigationView(
                mode=NavigationMode.GLOBAL,
                current_node_id=ROOT_NODE_ID,
                visible=visible,
                sequence=seq,
                new_category=self._view.new_category,
            )
        else:
            view = NavigationView(
                mode=NavigationMode.SCOPED,
                current_node_id=node_id,
                breadcrumb=resolution.ancestors,
                children=resolution.children,
                visible=visible,
                sequence=seq,
                new_category=self._view.new_category,
            )
        self._publish(view)
        return NavigationOutcome.COMMITTED

    async def _commit_all_documents(self, seq: int) -> NavigationOutcome:
        if not self._is_latest(seq):
            return NavigationOutcome.DISCARDED
        self._publish(
            NavigationView(
                mode=NavigationMode.GLOBAL,
                current_node_id=ROOT_NODE_ID,
                visible=self._catalogue.documents,
                sequence=seq,
                new_category=self._view.new_category,
            )
        )
        return NavigationOutcome.COMMITTED

    def _publish(self, view: NavigationView) -> None:
        self._view = view
        logger.debug(
            "Committed #{}: {} node {}, {} visible",
            view.sequence,
            view.mode.value,
            view.current_node_id,
            len(view.visible),
        )
        for listener in self._listeners:
            try:
                listener(view)
            except Exception:
                # The view stays committed.
                logger.exception("Navigation listener {!r} failed", listener)
