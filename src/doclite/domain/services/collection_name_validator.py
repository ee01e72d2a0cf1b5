"""Collection name validation and identifier quoting.

Collection names come straight from the URL path and become table names.
In strict mode they must match the same shape of identifier that filter
field names do; in trusted mode any name is accepted. Both modes refuse
the path segments of the health and docs routes. Either way the name
only ever reaches SQL as a double-quoted identifier.
"""

import re
from dataclasses import dataclass

from doclite.domain.exceptions import MalformedInputError

# Pattern for valid collection names
NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Path segments served by the health and docs routes
RESERVED_NAMES = frozenset({"health", "ready", "live", "docs", "redoc"})


@dataclass
class CollectionNameError:
    """A single collection name validation error."""

    message: str
    code: str


class CollectionNameValidator:
    """Validator for caller supplied collection names."""

    MAX_NAME_LENGTH = 64

    @classmethod
    def validate(cls, name: str, strict: bool = True) -> list[CollectionNameError]:
        """Validate a collection name.

        Args:
            name: The collection name from the request path.
            strict: Whether to enforce the identifier pattern and length.

        Returns:
            List of validation errors (empty if valid).
        """
        if not name:
            return [CollectionNameError("Collection name is required", "name_required")]

        if "\x00" in name:
            return [CollectionNameError("Collection name contains a NUL character", "name_invalid_format")]

        if name in RESERVED_NAMES:
            return [CollectionNameError(f"Collection name '{name}' is reserved", "name_reserved")]

        if not strict:
            return []

        errors = []
        if len(name) > cls.MAX_NAME_LENGTH:
            errors.append(
                CollectionNameError(
                    f"Collection name must be at most {cls.MAX_NAME_LENGTH} characters",
                    "name_too_long",
                )
            )
        if not NAME_PATTERN.fullmatch(name):
            errors.append(
                CollectionNameError(
                    "Collection name must start with a letter or underscore and contain "
                    "only alphanumeric characters and underscores",
                    "name_invalid_format",
                )
            )
        return errors

    @classmethod
    def ensure_valid(cls, name: str, strict: bool = True) -> str:
        """Return the name unchanged or raise ``MalformedInputError``."""
        errors = cls.validate(name, strict=strict)
        if errors:
            raise MalformedInputError("; ".join(e.message for e in errors))
        return name


def quote_identifier(name: str) -> str:
    """Quote a name for use as a SQL identifier, doubling embedded quotes."""
    return '"' + name.replace('"', '""') + '"'
