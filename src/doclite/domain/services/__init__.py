"""Domain services for DocLite.

Services contain logic that doesn't naturally fit within a single entity.
They have no dependencies on infrastructure or external frameworks.
"""

from doclite.domain.services.collection_name_validator import (
    CollectionNameError,
    CollectionNameValidator,
    quote_identifier,
)
from doclite.domain.services.document_codec import DocumentCodec

__all__ = [
    "CollectionNameError",
    "CollectionNameValidator",
    "DocumentCodec",
    "quote_identifier",
]
