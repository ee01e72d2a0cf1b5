"""Predicate types for document list filters.

A predicate is a single comparison against either a timestamp column or a
field extracted from the JSON payload. All predicates are rendered to SQL by
``to_sql`` so identifier handling lives in exactly one place.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .exceptions import InvalidFieldNameError

# Field names that may be embedded into a JSON path expression
FIELD_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")

# Columns a range predicate may target
TIMESTAMP_COLUMNS = frozenset({"created", "updated"})


class PredicateKind(str, Enum):
    """Comparison performed by a predicate."""

    EQUALITY = "eq"
    RANGE_GT = "gt"
    RANGE_GTE = "gte"
    RANGE_LT = "lt"
    RANGE_LTE = "lte"


SQL_OPERATORS = {
    PredicateKind.EQUALITY: "=",
    PredicateKind.RANGE_GT: ">",
    PredicateKind.RANGE_GTE: ">=",
    PredicateKind.RANGE_LT: "<",
    PredicateKind.RANGE_LTE: "<=",
}


@dataclass(frozen=True)
class Predicate:
    """A tagged comparison.

    Attributes:
        kind: The comparison operator.
        target: Timestamp column name for range predicates, JSON field
            name for equality predicates.
        value: The value to compare against. Always bound, never inlined.
    """

    kind: PredicateKind
    target: str
    value: Any

    @property
    def is_range(self) -> bool:
        return self.kind is not PredicateKind.EQUALITY


def is_valid_field_name(name: str) -> bool:
    """Check a JSON field name against the allow-list."""
    return bool(FIELD_NAME_PATTERN.fullmatch(name))


def to_sql(predicate: Predicate, param_name: str) -> str:
    """Render a predicate as a SQL fragment bound to ``:param_name``.

    Raises:
        InvalidFieldNameError: If the target is not an allowed column or
            field name.
    """
    operator = SQL_OPERATORS[predicate.kind]

    if predicate.is_range:
        if predicate.target not in TIMESTAMP_COLUMNS:
            raise InvalidFieldNameError(predicate.target)
        return f'"{predicate.target}" {operator} :{param_name}'

    if not is_valid_field_name(predicate.target):
        raise InvalidFieldNameError(predicate.target)

    # Both sides compared as text so numbers and booleans match their query string form
    return f"CAST(json_extract(data, '$.{predicate.target}') AS TEXT) {operator} :{param_name}"
