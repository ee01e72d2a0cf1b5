"""Database abstraction layer using SQLAlchemy 2.0 async.

This module provides the database session management and engine
configuration for SQLAlchemy with the aiosqlite driver. SQLite's JSON1
functions back the document filters, so SQLite is the only supported
engine.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from doclite.core.config import Settings, get_settings
from doclite.core.logging import get_logger

logger = get_logger(__name__)


def apply_sqlite_pragmas(engine: AsyncEngine, settings: Settings) -> None:
    """Run the configured PRAGMA statements on every new DBAPI connection."""
    pragmas = [
        f"PRAGMA journal_mode={settings.db_sqlite_journal_mode}",
        f"PRAGMA synchronous={settings.db_sqlite_synchronous}",
        f"PRAGMA busy_timeout={int(settings.db_sqlite_busy_timeout)}",
        f"PRAGMA foreign_keys={'ON' if settings.db_sqlite_foreign_keys else 'OFF'}",
    ]

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
        cursor = dbapi_connection.cursor()
        try:
            for pragma in pragmas:
                cursor.execute(pragma)
        finally:
            cursor.close()


class DatabaseManager:
    """Database connection and session manager.

    This class manages the async database engine and session factory.
    It provides context managers for database sessions and handles
    connection pooling.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        """Get or create the database engine."""
        if self._engine is None:
            if self.settings.is_memory_database:
                # One shared connection, otherwise each checkout sees an empty database
                pool_kwargs: dict[str, Any] = {"poolclass": StaticPool}
            else:
                pool_kwargs = {
                    "pool_size": self.settings.db_pool_size,
                    "max_overflow": self.settings.db_max_overflow,
                    "pool_timeout": self.settings.db_pool_timeout,
                    "pool_recycle": self.settings.db_pool_recycle,
                }

            self._engine = create_async_engine(
                self.settings.database_url,
                echo=self.settings.db_echo,
                connect_args={"check_same_thread": False},
                **pool_kwargs,
            )
            apply_sqlite_pragmas(self._engine, self.settings)

            logger.info(
                "Database engine created",
                database_url=self._engine.url.render_as_string(hide_password=True),
                pool_size=self.settings.db_pool_size,
            )
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get or create the session factory."""
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                bind=self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )
            logger.debug("Database session factory created")
        return self._session_factory

    async def disconnect(self) -> None:
        """Close the database engine and all connections.

        Should be called on application shutdown.
        """
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a session scope for database operations.

        Example:
            async with db.session() as session:
                result = await session.execute(text("SELECT 1"))
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def check_connection(self) -> bool:
        """Check if database connection is working.

        Returns:
            bool: True if connection is successful, False otherwise.
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
                logger.debug("Database connection check successful")
                return True
        except Exception as e:
            logger.error("Database connection check failed", error=str(e))
            return False


# Global database manager instance
_db_manager: DatabaseManager | None = None


def get_db_manager() -> DatabaseManager:
    """Get the global database manager instance."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for FastAPI to get a database session.

    Example:
        @router.get("/{collection}")
        async def list_documents(session: AsyncSession = Depends(get_db_session)):
            ...
    """
    db = get_db_manager()
    async with db.session() as session:
        yield session


def _sqlite_directory(database_url: str) -> Path | None:
    """Directory holding a file-backed SQLite database, if any."""
    if ":///" not in database_url or ":memory:" in database_url:
        return None
    db_path = database_url.split(":///", 1)[-1].split("?", 1)[0]
    return Path(db_path).parent


async def init_database() -> None:
    """Initialize the database on application startup.

    Collection tables are created lazily on first use, so startup only
    prepares the data directory and verifies connectivity.
    """
    db = get_db_manager()

    db_dir = _sqlite_directory(db.settings.database_url)
    if db_dir is not None:
        db_dir.mkdir(parents=True, exist_ok=True)
        logger.info("Database directory created", path=str(db_dir))

    if not await db.check_connection():
        logger.error("Database connection failed")
        raise RuntimeError("Failed to connect to database")


async def close_database() -> None:
    """Close the database connection on application shutdown."""
    db = get_db_manager()
    await db.disconnect()
