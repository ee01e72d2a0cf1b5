"""Lazy provisioning of collection tables.

Every collection is a table with the same four columns. Tables are
created on first reference with ``CREATE TABLE IF NOT EXISTS`` so
concurrent first use from several requests is safe without any
application-level locking.
"""

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from doclite.core.logging import get_logger
from doclite.core.timestamps import SQL_NOW
from doclite.domain.services import quote_identifier

logger = get_logger(__name__)

# Fixed column shape of every collection table
COLLECTION_COLUMNS = [
    ("id", "TEXT PRIMARY KEY"),
    ("data", "JSON NOT NULL CHECK (json_valid(data))"),
    ("created", f"DATETIME NOT NULL DEFAULT {SQL_NOW}"),
    ("updated", f"DATETIME NOT NULL DEFAULT {SQL_NOW}"),
]


class CollectionProvisioner:
    """Creates collection tables on demand."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def build_create_table_ddl(collection_name: str) -> str:
        """Build the idempotent CREATE TABLE statement for a collection."""
        table = quote_identifier(collection_name)
        columns_sql = ",\n  ".join(f'"{col}" {col_type}' for col, col_type in COLLECTION_COLUMNS)
        return f"CREATE TABLE IF NOT EXISTS {table} (\n  {columns_sql}\n)"

    @staticmethod
    def build_index_ddl(collection_name: str) -> str:
        """Build the idempotent index on the creation timestamp used for list ordering."""
        table = quote_identifier(collection_name)
        # Indexes share the table namespace; ':' keeps this out of reach of strict collection names
        index = quote_identifier(f"idx:{collection_name}:created")
        return f'CREATE INDEX IF NOT EXISTS {index} ON {table}("created")'

    async def ensure(self, collection_name: str) -> None:
        """Make sure the table for a collection exists.

        A rejected creation statement is logged and swallowed. Later
        statements against the collection then fail in the engine, so the
        caller sees a storage error rather than an empty result.
        """
        try:
            await self.session.execute(text(self.build_create_table_ddl(collection_name)))
            await self.session.execute(text(self.build_index_ddl(collection_name)))
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.warning(
                "Collection provisioning failed",
                collection=collection_name,
                error=str(e),
            )

    async def exists(self, collection_name: str) -> bool:
        """Check if a table exists for the collection."""
        check_sql = """
            SELECT name FROM sqlite_master
            WHERE type='table' AND name=:table_name
        """
        result = await self.session.execute(text(check_sql), {"table_name": collection_name})
        return result.scalar_one_or_none() is not None

    async def columns(self, collection_name: str) -> list[str]:
        """List the column names of a collection table, in table order."""
        result = await self.session.execute(
            text("SELECT name FROM pragma_table_info(:table_name) ORDER BY cid"),
            {"table_name": collection_name},
        )
        return [row[0] for row in result.fetchall()]
