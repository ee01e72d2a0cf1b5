"""Persistence repositories for database operations."""

from doclite.infrastructure.persistence.repositories.document_repository import (
    DocumentRepository,
)

__all__ = ["DocumentRepository"]
