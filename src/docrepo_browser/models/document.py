"""Catalogue records for the document repository."""

from dataclasses import dataclass, field
from typing import Any

ROW_WIDTH = 13

_HTML_ENTITIES = (
    ("&amp;", "&"),
    ("&quot;", '"'),
    ("&lt;", "<"),
    ("&gt;", ">"),
)


def decode_html_entities(text: str | None) -> str | None:
    """Undo the server's HTML escaping of cell text."""
    if text is None:
        return None
    for entity, char in _HTML_ENTITIES:
        text = text.replace(entity, char)
    return text


def _text(value: Any) -> str:
    if value is None:
        return ""
    return decode_html_entities(str(value)) or ""


@dataclass(frozen=True)
class Document:
    """An uploaded file in the catalogue, tagged with one category node."""

    file_name: str
    version: str
    file_type: str
    instrument: str
    uploaded_by: str
    site: str
    comments: str
    date_uploaded: str
    id: int
    delete_id: str
    category_node_id: int
    category_label: str
    data_dir: str

    @classmethod
    def from_row(cls, row: list[Any]) -> "Document":
        """Build a Document from one positional catalogue row.

        Raises:
            ValueError: If the row has the wrong width or non-integer ids.
        """
        if len(row) != ROW_WIDTH:
            msg = f"Expected {ROW_WIDTH} fields in catalogue row, got {len(row)}: {row!r}"
            raise ValueError(msg)
        try:
            doc_id = int(row[8])
            category_node_id = int(row[10])
        except (TypeError, ValueError) as e:
            msg = f"Bad id in catalogue row {row!r}"
            raise ValueError(msg) from e
        return cls(
            file_name=_text(row[0]),
            version=_text(row[1]),
            file_type=_text(row[2]),
            instrument=_text(row[3]),
            uploaded_by=_text(row[4]),
            site=_text(row[5]),
            comments=_text(row[6]),
            date_uploaded=_text(row[7]),
            id=doc_id,
            delete_id=_text(row[9]),
            category_node_id=category_node_id,
            category_label=_text(row[11]),
            data_dir=_text(row[12]),
        )


@dataclass(frozen=True)
class Catalogue:
    """Immutable snapshot of the document list as loaded from the server."""

    documents: tuple[Document, ...] = ()
    field_options: dict[str, Any] = field(default_factory=dict)
    max_upload_size: int | None = None

    @classmethod
    def from_json(cls, payload: dict[str, Any]) -> "Catalogue":
        """Parse the `?format=json` response of the repository index.

        Raises:
            ValueError: If the payload lacks the row list or a row is malformed.
        """
        rows = payload.get("Data")
        if not isinstance(rows, list):
            msg = f"Catalogue payload has no 'Data' list: keys {sorted(payload)!r}"
            raise ValueError(msg)
        max_upload = payload.get("maxUploadSize")
        return cls(
            documents=tuple(Document.from_row(row) for row in rows),
            field_options=dict(payload.get("fieldOptions") or {}),
            max_upload_size=int(max_upload) if max_upload is not None else None,
        )
