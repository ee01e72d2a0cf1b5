"""Domain exceptions for DocLite.

Each exception maps to one response class at the HTTP boundary:
not found (404), malformed input (400) and storage failure (500).
"""


class DocLiteError(Exception):
    """Base class for all DocLite domain errors."""
    pass


class DocumentNotFoundError(DocLiteError):
    """Raised when an operation targets an id absent from its collection."""

    def __init__(self, collection: str, document_id: str):
        self.collection = collection
        self.document_id = document_id
        super().__init__(f"Document '{document_id}' not found in collection '{collection}'")


class MalformedInputError(DocLiteError):
    """Raised when a request body or collection name cannot be accepted."""
    pass


class StorageFailureError(DocLiteError):
    """Raised when the storage engine rejects a provisioning or query statement."""
    pass


class DocumentDecodeError(DocLiteError):
    """Raised when a stored payload is not a valid JSON object."""
    pass
