"""Repository for document operations on collection tables.

Uses raw SQL since collection tables are created dynamically and not
mapped to SQLAlchemy ORM models. Every value is a bound parameter; only
the quoted collection name and allow-listed field names appear in the
statement text.
"""

from typing import Any, Sequence

from sqlalchemy import Row, text
from sqlalchemy.ext.asyncio import AsyncSession

from doclite.core.logging import get_logger
from doclite.core.query import CompiledFilter
from doclite.core.timestamps import utc_now
from doclite.domain.services import quote_identifier

logger = get_logger(__name__)

DOCUMENT_COLUMNS = '"id", "data", "created", "updated"'


class DocumentRepository:
    """Repository for document database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def count(self, collection_name: str, compiled: CompiledFilter) -> int:
        """Count documents matching the filter, ignoring the page window."""
        table = quote_identifier(collection_name)
        count_sql = f"SELECT COUNT(*) FROM {table}{compiled.where_sql}"
        result = await self.session.execute(text(count_sql), compiled.params)
        return result.scalar_one()

    async def list(self, collection_name: str, compiled: CompiledFilter) -> Sequence[Row[Any]]:
        """Fetch one page of matching documents, newest first.

        Rows created in the same instant keep insertion order, newest first,
        so consecutive windows never overlap.
        """
        table = quote_identifier(collection_name)
        select_sql = (
            f"SELECT {DOCUMENT_COLUMNS} FROM {table}{compiled.where_sql}"
            ' ORDER BY "created" DESC, rowid DESC'
            " LIMIT :limit OFFSET :offset"
        )
        params = {**compiled.params, "limit": compiled.limit, "offset": compiled.offset}

        logger.debug(
            "Listing documents",
            collection=collection_name,
            filters=len(compiled.clauses),
            limit=compiled.limit,
            offset=compiled.offset,
        )

        result = await self.session.execute(text(select_sql), params)
        return result.fetchall()

    async def get_one(self, collection_name: str, document_id: str) -> Row[Any] | None:
        """Get a document row by ID, or None if absent."""
        table = quote_identifier(collection_name)
        select_sql = f'SELECT {DOCUMENT_COLUMNS} FROM {table} WHERE "id" = :document_id'
        result = await self.session.execute(text(select_sql), {"document_id": document_id})
        return result.fetchone()

    async def insert(self, collection_name: str, document_id: str, payload: str) -> str:
        """Insert a new document.

        The payload goes through SQLite's ``json()`` so malformed JSON fails
        the write instead of being stored.

        Returns:
            The creation timestamp written to both ``created`` and ``updated``.
        """
        table = quote_identifier(collection_name)
        now = utc_now()
        insert_sql = (
            f'INSERT INTO {table} ("id", "data", "created", "updated") '
            "VALUES (:document_id, json(:data), :now, :now)"
        )
        await self.session.execute(
            text(insert_sql), {"document_id": document_id, "data": payload, "now": now}
        )
        logger.debug("Document inserted", collection=collection_name, document_id=document_id)
        return now

    async def update_one(self, collection_name: str, document_id: str, payload: str) -> int:
        """Replace a document's payload and refresh its update timestamp.

        Returns:
            Number of rows affected. Zero means the document does not exist.
        """
        table = quote_identifier(collection_name)
        update_sql = (
            f'UPDATE {table} SET "data" = json(:data), "updated" = :now '
            'WHERE "id" = :document_id'
        )
        result = await self.session.execute(
            text(update_sql),
            {"data": payload, "now": utc_now(), "document_id": document_id},
        )
        return result.rowcount

    async def delete_one(self, collection_name: str, document_id: str) -> int:
        """Hard-delete a document.

        Returns:
            Number of rows affected. Zero means the document does not exist.
        """
        table = quote_identifier(collection_name)
        delete_sql = f'DELETE FROM {table} WHERE "id" = :document_id'
        result = await self.session.execute(text(delete_sql), {"document_id": document_id})
        return result.rowcount
