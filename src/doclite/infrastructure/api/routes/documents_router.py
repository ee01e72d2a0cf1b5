"""Documents API routes.

Provides dynamic endpoints for CRUD operations on documents in any
collection named in the path. Collections are created on first use.
"""

from typing import Any

from fastapi import APIRouter, Request, status

from doclite.core.logging import get_logger
from doclite.domain.services import DocumentCodec
from doclite.infrastructure.api.dependencies import DocumentServiceDep
from doclite.infrastructure.api.schemas import (
    DocumentCreatedResponse,
    DocumentListResponse,
    DocumentResponse,
    DocumentStatusResponse,
    ErrorResponse,
)

logger = get_logger(__name__)

router = APIRouter()

JSON_OBJECT_BODY = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": {"type": "object"}}},
    }
}


@router.get(
    "/{collection}",
    response_model=DocumentListResponse,
    responses={500: {"model": ErrorResponse, "description": "Storage failure"}},
)
async def list_documents(
    collection: str,
    request: Request,
    service: DocumentServiceDep,
) -> dict[str, Any]:
    """List documents in a collection, newest first.

    ``limit`` and ``offset`` select the page window. ``created_gt``,
    ``created_gte``, ``created_lt``, ``created_lte`` and the same four
    ``updated_*`` keys compare timestamps. Any other key filters on
    equality of the top level JSON field with that name.
    """
    page = await service.list_documents(collection, request.query_params)
    return DocumentCodec.page_envelope(page)


@router.get(
    "/{collection}/{document_id}",
    response_model=DocumentResponse,
    responses={404: {"model": ErrorResponse, "description": "Document not found"}},
)
async def get_document(
    collection: str,
    document_id: str,
    service: DocumentServiceDep,
) -> dict[str, Any]:
    """Get a single document by ID."""
    document = await service.get_document(collection, document_id)
    return DocumentCodec.document_envelope(document)


async def _create(collection: str, request: Request, service: DocumentServiceDep) -> dict[str, str]:
    data = DocumentCodec.parse_body(await request.body())
    document_id = await service.create_document(collection, data)
    return {"id": document_id}


@router.post(
    "/{collection}",
    status_code=status.HTTP_201_CREATED,
    response_model=DocumentCreatedResponse,
    responses={400: {"model": ErrorResponse, "description": "Malformed JSON body"}},
    openapi_extra=JSON_OBJECT_BODY,
)
async def create_document(
    collection: str,
    request: Request,
    service: DocumentServiceDep,
) -> dict[str, str]:
    """Create a document. The request body becomes the document data."""
    return await _create(collection, request, service)


@router.post(
    "/{collection}/{document_id}",
    status_code=status.HTTP_201_CREATED,
    response_model=DocumentCreatedResponse,
    responses={400: {"model": ErrorResponse, "description": "Malformed JSON body"}},
    openapi_extra=JSON_OBJECT_BODY,
    include_in_schema=False,
)
async def create_document_ignoring_id(
    collection: str,
    document_id: str,
    request: Request,
    service: DocumentServiceDep,
) -> dict[str, str]:
    """Create a document; the ID in the path is ignored and a new one is generated."""
    return await _create(collection, request, service)


@router.put(
    "/{collection}/{document_id}",
    response_model=DocumentStatusResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Malformed JSON body"},
        404: {"model": ErrorResponse, "description": "Document not found"},
    },
    openapi_extra=JSON_OBJECT_BODY,
)
async def update_document(
    collection: str,
    document_id: str,
    request: Request,
    service: DocumentServiceDep,
) -> dict[str, str]:
    """Replace a document's data wholesale."""
    data = DocumentCodec.parse_body(await request.body())
    await service.update_document(collection, document_id, data)
    return {"status": "updated"}


@router.delete(
    "/{collection}/{document_id}",
    response_model=DocumentStatusResponse,
    responses={404: {"model": ErrorResponse, "description": "Document not found"}},
)
async def delete_document(
    collection: str,
    document_id: str,
    service: DocumentServiceDep,
) -> dict[str, str]:
    """Delete a document by ID."""
    await service.delete_document(collection, document_id)
    return {"status": "deleted"}
