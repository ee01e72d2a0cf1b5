"""Document service running the per-request storage pipeline.

Each operation validates the collection name, provisions the collection
table, executes the repository statements and shapes the result. Engine
errors are wrapped in ``StorageFailureError``; missing documents raise
``DocumentNotFoundError``.
"""

import uuid
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from doclite.core.config import Settings, get_settings
from doclite.core.logging import get_logger
from doclite.core.query import compile_filters
from doclite.domain.entities import Document, PageResult
from doclite.domain.exceptions import (
    DocumentDecodeError,
    DocumentNotFoundError,
    StorageFailureError,
)
from doclite.domain.services import CollectionNameValidator, DocumentCodec
from doclite.infrastructure.persistence.collection_provisioner import CollectionProvisioner
from doclite.infrastructure.persistence.repositories import DocumentRepository

logger = get_logger(__name__)


class DocumentService:
    """CRUD and listing over dynamically provisioned collections."""

    def __init__(self, session: AsyncSession, settings: Settings | None = None) -> None:
        """Initialize the service.

        Args:
            session: Database session for the current request.
            settings: Optional settings instance. Defaults to the cached settings.
        """
        self.session = session
        self.settings = settings or get_settings()
        self.provisioner = CollectionProvisioner(session)
        self.repository = DocumentRepository(session)

    async def _prepare(self, collection: str) -> None:
        CollectionNameValidator.ensure_valid(
            collection, strict=self.settings.strict_collection_names
        )
        await self.provisioner.ensure(collection)

    async def _rollback_and_wrap(self, collection: str, action: str, error: Exception) -> StorageFailureError:
        await self.session.rollback()
        logger.error(
            f"Document {action} failed: storage error",
            collection=collection,
            error=str(error),
            exc_type=type(error).__name__,
        )
        return StorageFailureError(f"Failed to {action} document: {error}")

    async def list_documents(self, collection: str, query_params: Any) -> PageResult:
        """List one page of documents matching the query parameters."""
        await self._prepare(collection)
        compiled = compile_filters(
            query_params,
            default_limit=self.settings.default_page_limit,
            max_limit=self.settings.max_page_limit,
        )

        try:
            total = await self.repository.count(collection, compiled)
            rows = await self.repository.list(collection, compiled)
            items = [DocumentCodec.from_row(row) for row in rows]
        except (SQLAlchemyError, DocumentDecodeError) as e:
            raise await self._rollback_and_wrap(collection, "list", e) from e

        return PageResult(items=items, total=total, limit=compiled.limit, offset=compiled.offset)

    async def get_document(self, collection: str, document_id: str) -> Document:
        """Fetch a single document by ID."""
        await self._prepare(collection)

        try:
            row = await self.repository.get_one(collection, document_id)
            document = DocumentCodec.from_row(row) if row is not None else None
        except (SQLAlchemyError, DocumentDecodeError) as e:
            raise await self._rollback_and_wrap(collection, "read", e) from e

        if document is None:
            raise DocumentNotFoundError(collection, document_id)
        return document

    async def create_document(self, collection: str, data: dict[str, Any]) -> str:
        """Store a new document and return its generated ID."""
        await self._prepare(collection)
        document_id = str(uuid.uuid4())

        try:
            await self.repository.insert(collection, document_id, DocumentCodec.encode(data))
            await self.session.commit()
        except SQLAlchemyError as e:
            raise await self._rollback_and_wrap(collection, "create", e) from e

        logger.info("Document created", collection=collection, document_id=document_id)
        return document_id

    async def update_document(self, collection: str, document_id: str, data: dict[str, Any]) -> None:
        """Replace the payload of an existing document."""
        await self._prepare(collection)

        try:
            affected = await self.repository.update_one(
                collection, document_id, DocumentCodec.encode(data)
            )
            await self.session.commit()
        except SQLAlchemyError as e:
            raise await self._rollback_and_wrap(collection, "update", e) from e

        if affected == 0:
            raise DocumentNotFoundError(collection, document_id)
        logger.info("Document updated", collection=collection, document_id=document_id)

    async def delete_document(self, collection: str, document_id: str) -> None:
        """Permanently remove a document."""
        await self._prepare(collection)

        try:
            affected = await self.repository.delete_one(collection, document_id)
            await self.session.commit()
        except SQLAlchemyError as e:
            raise await self._rollback_and_wrap(collection, "delete", e) from e

        if affected == 0:
            raise DocumentNotFoundError(collection, document_id)
        logger.info("Document deleted", collection=collection, document_id=document_id)
