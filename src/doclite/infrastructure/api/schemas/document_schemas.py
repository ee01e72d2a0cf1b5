"""Pydantic schemas for document endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class DocumentResponse(BaseModel):
    """Response for a retrieved document."""

    id: str = Field(..., description="Document ID (UUID)")
    data: dict[str, Any] = Field(..., description="The stored JSON object")
    created: str = Field(..., description="ISO 8601 UTC timestamp when the document was created")
    updated: str = Field(..., description="ISO 8601 UTC timestamp when the document was last updated")


class DocumentListResponse(BaseModel):
    """Response for listing documents."""

    items: list[DocumentResponse] = Field(..., description="Documents in this page, newest first")
    total_items: int = Field(..., description="Total number of documents matching the filters")
    limit: int = Field(..., description="Effective page size")
    offset: int = Field(..., description="Number of documents skipped")
    has_more: bool = Field(..., description="Whether documents exist past this page")


class DocumentCreatedResponse(BaseModel):
    """Response for a created document."""

    id: str = Field(..., description="Generated document ID (UUID)")


class DocumentStatusResponse(BaseModel):
    """Response for update and delete operations."""

    status: str = Field(..., description="Either 'updated' or 'deleted'")


class ErrorResponse(BaseModel):
    """Error response body."""

    error: str = Field(..., description="Error type")
    message: str | None = Field(None, description="Human-readable error message")
