"""Exceptions for query compilation."""


class QueryCompileError(Exception):
    """Base class for query compilation errors."""
    pass


class InvalidFieldNameError(QueryCompileError):
    """Raised when an identifier outside the allow-list reaches the SQL renderer."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Invalid field name: {name!r}")
