"""API schemas for DocLite."""

from .document_schemas import (
    DocumentCreatedResponse,
    DocumentListResponse,
    DocumentResponse,
    DocumentStatusResponse,
    ErrorResponse,
)

__all__ = [
    "DocumentCreatedResponse",
    "DocumentListResponse",
    "DocumentResponse",
    "DocumentStatusResponse",
    "ErrorResponse",
]
