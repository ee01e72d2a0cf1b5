"""Domain entities."""

from doclite.domain.entities.document import Document, PageResult

__all__ = ["Document", "PageResult"]
