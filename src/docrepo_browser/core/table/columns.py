"""Table columns for the catalogue and the per-cell link targets."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from docrepo_browser.config import MODULE_PATH
from docrepo_browser.models.document import Document

DELETE_PERMISSIONS = frozenset({"superUser", "document_repository_delete"})


@dataclass(frozen=True)
class ColumnFilter:
    """Filter control shown above a column."""

    name: str
    type: str
    options: Any = None


@dataclass(frozen=True)
class Column:
    """One catalogue column, bound to a Document field."""

    label: str
    field: str
    show: bool = True
    filter: ColumnFilter | None = None


def has_delete_permission(permissions: Iterable[str]) -> bool:
    """Whether the user may delete files."""
    return not DELETE_PERMISSIONS.isdisjoint(permissions)


def build_columns(field_options: dict[str, Any], *, can_delete: bool) -> tuple[Column, ...]:
    """Columns in catalogue row order.

    Select filters take their option lists from the catalogue's field options.
    """
    return (
        Column("File Name", "file_name", filter=ColumnFilter("fileName", "text")),
        Column("Version", "version", filter=ColumnFilter("version", "text")),
        Column(
            "File Type",
            "file_type",
            filter=ColumnFilter("fileTypes", "select", field_options.get("fileTypes")),
        ),
        Column("Instrument", "instrument", show=False),
        Column("Uploaded By", "uploaded_by", filter=ColumnFilter("uploadedBy", "text")),
        Column("For Site", "site", filter=ColumnFilter("site", "select", field_options.get("sites"))),
        Column("Comments", "comments", filter=ColumnFilter("Comments", "text")),
        Column("Date Uploaded", "date_uploaded"),
        Column("Edit", "id"),
        Column("Delete File", "delete_id", show=can_delete),
        Column("File Category", "category_node_id", show=False),
        Column("Category", "category_label", show=False),
        Column("Data Dir", "data_dir", show=False),
    )


def project_row(document: Document, columns: Iterable[Column]) -> dict[str, Any]:
    """Values of the shown columns, keyed by label."""
    return {c.label: getattr(document, c.field) for c in columns if c.show}


def _module_url(base_url: str) -> str:
    return f"{base_url.rstrip('/')}/{MODULE_PATH}"


def download_url(base_url: str, document: Document) -> str:
    return f"{_module_url(base_url)}/Files/{quote(document.file_name, safe='')}"


def edit_url(base_url: str, document: Document) -> str:
    return f"{_module_url(base_url)}/edit/{document.id}"


def delete_url(base_url: str, document: Document) -> str:
    # Deletion is keyed by the edit id, not the delete column.
    return f"{_module_url(base_url)}/Files/{document.id}"
