"""Conversion between stored JSON text, documents and response envelopes."""

import json
from typing import Any

from doclite.domain.entities.document import Document, PageResult
from doclite.domain.exceptions import DocumentDecodeError, MalformedInputError


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


class DocumentCodec:
    """Encodes and decodes document payloads and shapes API responses."""

    @staticmethod
    def encode(data: dict[str, Any]) -> str:
        """Encode document data as compact JSON text, preserving key order."""
        return json.dumps(data, ensure_ascii=False, separators=(",", ":"))

    @staticmethod
    def decode(raw: str | bytes | None) -> dict[str, Any]:
        """Decode a stored payload.

        Raises:
            DocumentDecodeError: If the payload is missing, is not valid
                JSON, or is not a JSON object.
        """
        if raw is None:
            raise DocumentDecodeError("Stored payload is empty")
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as e:
            raise DocumentDecodeError(f"Stored payload is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise DocumentDecodeError(
                f"Stored payload is a JSON {type(data).__name__}, expected an object"
            )
        return data

    @staticmethod
    def parse_body(body: bytes) -> dict[str, Any]:
        """Parse a request body into document data.

        Raises:
            MalformedInputError: If the body is not UTF-8 JSON or its top
                level value is not an object.
        """
        try:
            # NaN and the infinities are Python extensions that SQLite's json() refuses
            data = json.loads(body, parse_constant=_reject_constant)
        except ValueError as e:
            raise MalformedInputError(f"Invalid JSON body: {e}") from e
        if not isinstance(data, dict):
            raise MalformedInputError(
                f"Request body must be a JSON object, got {type(data).__name__}"
            )
        return data

    @classmethod
    def from_row(cls, row: Any) -> Document:
        """Build a document from an ``(id, data, created, updated)`` row."""
        mapping = row._mapping if hasattr(row, "_mapping") else row
        return Document(
            id=mapping["id"],
            data=cls.decode(mapping["data"]),
            created=str(mapping["created"]),
            updated=str(mapping["updated"]),
        )

    @staticmethod
    def build_item_envelope(
        document_id: str, data: dict[str, Any], created: str, updated: str
    ) -> dict[str, Any]:
        """Build the single document response body."""
        return {
            "id": document_id,
            "data": data,
            "created": created,
            "updated": updated,
        }

    @staticmethod
    def build_page_envelope(
        items: list[dict[str, Any]], total: int, limit: int, offset: int
    ) -> dict[str, Any]:
        """Build the list response body."""
        return {
            "items": items,
            "total_items": total,
            "limit": limit,
            "offset": offset,
            "has_more": (offset + limit) < total,
        }

    @classmethod
    def document_envelope(cls, document: Document) -> dict[str, Any]:
        return cls.build_item_envelope(
            document.id, document.data, document.created, document.updated
        )

    @classmethod
    def page_envelope(cls, page: PageResult) -> dict[str, Any]:
        return cls.build_page_envelope(
            [cls.document_envelope(doc) for doc in page.items],
            page.total,
            page.limit,
            page.offset,
        )
