"""API Routes for DocLite."""

from .documents_router import router as documents_router

__all__ = ["documents_router"]
