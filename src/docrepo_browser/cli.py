"""CLI for browsing the document repository by category."""

import asyncio
import json
from typing import Annotated, Any

import requests
import typer
from loguru import logger

from docrepo_browser.api import DocumentRepositoryApi
from docrepo_browser.config import DEFAULT_BASE_URL, ROOT_NODE_ID, resolve_session_token
from docrepo_browser.core.navigation.engine import GlobalScope
from docrepo_browser.core.session import BrowseSession
from docrepo_browser.errors import CatalogueLoadError
from docrepo_browser.logging_config import configure_logging
from docrepo_browser.models.navigation import NavigationView

app = typer.Typer(help="Browse the document repository by category.")

BaseUrlOption = Annotated[
    str,
    typer.Option("--base-url", "-u", envvar="DOCREPO_BASE_URL", help="Site base URL"),
]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def _make_session(base_url: str, *, all_documents: bool = False) -> BrowseSession:
    api = DocumentRepositoryApi(base_url, session_token=resolve_session_token())
    scope = GlobalScope.ALL_DOCUMENTS if all_documents else GlobalScope.ROOT_CLOSURE
    return BrowseSession(api, global_scope=scope)


def _view_as_dict(view: NavigationView) -> dict[str, Any]:
    return {
        "mode": view.mode.value,
        "node_id": view.current_node_id,
        "breadcrumb": [{"id": n.id, "label": n.label} for n in view.breadcrumb],
        "children": [{"id": n.id, "label": n.label} for n in view.children],
        "documents": [
            {
                "id": d.id,
                "file_name": d.file_name,
                "version": d.version,
                "category_node_id": d.category_node_id,
                "uploaded_by": d.uploaded_by,
                "date_uploaded": d.date_uploaded,
            }
            for d in view.visible
        ],
        "error": str(view.error) if view.error else None,
    }


def _echo_view(view: NavigationView) -> None:
    if view.is_global:
        typer.echo("Filtering globally\n")
    else:
        trail = " > ".join(n.label for n in view.breadcrumb)
        typer.echo(f"Category {view.current_node_id}" + (f"  ({trail})" if trail else ""))
        if view.children:
            typer.echo("Subcategories:")
            for node in view.children:
                typer.echo(f"  [{node.id}] {node.label}")
        typer.echo()

    typer.echo(f"{len(view.visible)} documents:")
    for d in view.visible:
        typer.echo(f"  {d.file_name} (v{d.version})  {d.uploaded_by}  {d.date_uploaded}  [id={d.id}]")


async def _browse(session: BrowseSession, node_id: int, go_global: bool) -> NavigationView:
    engine = await session.start()
    if go_global:
        await engine.go_global()
    elif node_id != ROOT_NODE_ID:
        await engine.descend_into(node_id)
    return engine.current_view()


@app.command()
def browse(
    node_id: int = typer.Argument(ROOT_NODE_ID, help="Category node to show"),
    go_global: bool = typer.Option(False, "--global", "-g", help="Filter globally"),
    all_documents: bool = typer.Option(
        False, "--all-documents", help="Global view shows every document, tagged or not"
    ),
    base_url: BaseUrlOption = DEFAULT_BASE_URL,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Show a category: breadcrumb, subcategories and the documents below it."""
    session = _make_session(base_url, all_documents=all_documents)
    try:
        view = asyncio.run(_browse(session, node_id, go_global))
    except CatalogueLoadError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e

    if output_json:
        typer.echo(json.dumps(_view_as_dict(view), indent=2))
    else:
        _echo_view(view)

    if view.error:
        logger.warning("{}", view.error)
        raise typer.Exit(1)


async def _delete(session: BrowseSession, document_id: int) -> int | None:
    engine = await session.start()
    document = next((d for d in engine.catalogue.documents if d.id == document_id), None)
    if document is None:
        return None
    command = await asyncio.to_thread(session.delete_document, document)
    engine = await session.apply(command)
    return len(engine.catalogue.documents)


@app.command()
def delete(
    document_id: int = typer.Argument(..., help="Edit id of the document to delete"),
    base_url: BaseUrlOption = DEFAULT_BASE_URL,
) -> None:
    """Delete a document and reload the catalogue."""
    session = _make_session(base_url)
    try:
        remaining = asyncio.run(_delete(session, document_id))
    except CatalogueLoadError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e
    except requests.RequestException as e:
        logger.error("Failed to delete document {}: {}", document_id, e)
        raise typer.Exit(1) from e

    if remaining is None:
        typer.echo(f"Document '{document_id}' not found.")
        raise typer.Exit(1)
    typer.echo(f"Deleted document {document_id}, {remaining} documents remain.")
