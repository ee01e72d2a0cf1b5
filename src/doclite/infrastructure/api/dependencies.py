"""FastAPI dependencies for document endpoints."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from doclite.application.services import DocumentService
from doclite.infrastructure.persistence.database import get_db_session


async def get_document_service(
    session: AsyncSession = Depends(get_db_session),
) -> DocumentService:
    """Build a document service bound to the request's session."""
    return DocumentService(session)


DocumentServiceDep = Annotated[DocumentService, Depends(get_document_service)]
