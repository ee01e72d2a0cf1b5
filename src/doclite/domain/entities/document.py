"""Document entity and list page result.

A document is one JSON object stored in a collection, identified by an
opaque id assigned at creation.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Document:
    """A stored document.

    Attributes:
        id: Unique identifier (UUID string), immutable after creation.
        data: The JSON object payload. No fixed schema, may be empty.
        created: Timestamp set once at insertion.
        updated: Timestamp refreshed on every successful update.
    """

    id: str
    data: dict[str, Any] = field(default_factory=dict)
    created: str = ""
    updated: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Document ID is required")
        if not isinstance(self.data, dict):
            raise ValueError("Document data must be a dictionary")


@dataclass
class PageResult:
    """One window of a filtered, newest-first document listing.

    Attributes:
        items: Documents in the window.
        total: Count of all matching documents, ignoring the window.
        limit: Effective page size.
        offset: Effective number of documents skipped.
    """

    items: list[Document]
    total: int
    limit: int
    offset: int

    @property
    def has_more(self) -> bool:
        return (self.offset + self.limit) < self.total
