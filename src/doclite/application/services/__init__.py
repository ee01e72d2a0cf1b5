"""Application services."""

from doclite.application.services.document_service import DocumentService

__all__ = ["DocumentService"]
