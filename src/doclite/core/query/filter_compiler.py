"""Compiles list query parameters into a parameterized WHERE clause.

Query parameters fall into three groups:

- ``limit`` / ``offset`` control the pagination window.
- Eight reserved keys (``created_gt`` ... ``updated_lte``) compare the
  timestamp columns.
- Every other key is an equality filter on a top level field of the JSON
  payload. Keys outside the field name allow-list are dropped.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from doclite.core.logging import get_logger
from doclite.core.timestamps import normalize_timestamp

from .predicates import Predicate, PredicateKind, is_valid_field_name, to_sql

logger = get_logger(__name__)

PAGINATION_PARAMS = ("limit", "offset")

# Reserved range keys in the order their clauses are emitted
RANGE_FILTERS: dict[str, tuple[str, PredicateKind]] = {
    "created_gt": ("created", PredicateKind.RANGE_GT),
    "created_gte": ("created", PredicateKind.RANGE_GTE),
    "created_lt": ("created", PredicateKind.RANGE_LT),
    "created_lte": ("created", PredicateKind.RANGE_LTE),
    "updated_gt": ("updated", PredicateKind.RANGE_GT),
    "updated_gte": ("updated", PredicateKind.RANGE_GTE),
    "updated_lt": ("updated", PredicateKind.RANGE_LT),
    "updated_lte": ("updated", PredicateKind.RANGE_LTE),
}

RESERVED_PARAMS = frozenset(PAGINATION_PARAMS) | frozenset(RANGE_FILTERS)

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


@dataclass
class CompiledFilter:
    """Result of compiling a query parameter set.

    Attributes:
        predicates: The predicates, in clause order.
        clauses: SQL fragments, one per predicate.
        params: Bound values keyed by placeholder name, in clause order.
        limit: Effective page size.
        offset: Effective number of rows skipped.
    """

    predicates: list[Predicate] = field(default_factory=list)
    clauses: list[str] = field(default_factory=list)
    params: dict[str, Any] = field(default_factory=dict)
    limit: int = DEFAULT_LIMIT
    offset: int = 0

    @property
    def where_sql(self) -> str:
        """The WHERE clause with a leading space, or an empty string."""
        if not self.clauses:
            return ""
        return " WHERE " + " AND ".join(self.clauses)


def _first_values(query_params: Any) -> dict[str, str]:
    """Collapse a multi-valued parameter set to the first value per key.

    Accepts Starlette ``QueryParams`` (anything with ``multi_items``), a
    mapping of key to string or list of strings, or an iterable of pairs.
    Key order follows first appearance.
    """
    if hasattr(query_params, "multi_items"):
        pairs: Iterable[tuple[str, str]] = query_params.multi_items()
    elif isinstance(query_params, Mapping):
        pairs = []
        for key, value in query_params.items():
            if isinstance(value, str):
                pairs.append((key, value))
            else:
                pairs.extend((key, item) for item in value)
    else:
        pairs = query_params

    first: dict[str, str] = {}
    for key, value in pairs:
        first.setdefault(key, value)
    return first


def _parse_count(raw: str | None) -> int | None:
    """Parse a plain run of ASCII digits, or return None.

    ``int()`` alone would also take signs, underscores and surrounding
    whitespace.
    """
    if not raw or not (raw.isascii() and raw.isdigit()):
        return None
    return int(raw)


def parse_limit(raw: str | None, default: int = DEFAULT_LIMIT, ceiling: int = MAX_LIMIT) -> int:
    """Parse the page size, falling back to the default on bad input."""
    value = _parse_count(raw)
    if value is None or value <= 0:
        return default
    return min(value, ceiling)


def parse_offset(raw: str | None) -> int:
    """Parse the window offset, falling back to zero on bad input."""
    value = _parse_count(raw)
    return value if value is not None else 0


class FilterCompiler:
    """Builds predicates and bound parameters from list query parameters."""

    def __init__(self, default_limit: int = DEFAULT_LIMIT, max_limit: int = MAX_LIMIT):
        self.default_limit = default_limit
        self.max_limit = max_limit

    def compile(self, query_params: Any) -> CompiledFilter:
        """Compile query parameters into a ``CompiledFilter``.

        Args:
            query_params: Multi-valued query parameters. Only the first
                value of a repeated key is used.

        Returns:
            The compiled predicates, bound values and pagination window.
        """
        params = _first_values(query_params)

        compiled = CompiledFilter(
            limit=parse_limit(params.get("limit"), self.default_limit, self.max_limit),
            offset=parse_offset(params.get("offset")),
        )

        for key, (column, kind) in RANGE_FILTERS.items():
            value = params.get(key)
            if value:
                self._add(compiled, Predicate(kind, column, normalize_timestamp(value)))

        for key, value in params.items():
            if key in RESERVED_PARAMS:
                continue
            if not is_valid_field_name(key):
                logger.debug("Ignoring filter with invalid field name", key=key)
                continue
            self._add(compiled, Predicate(PredicateKind.EQUALITY, key, value))

        return compiled

    @staticmethod
    def _add(compiled: CompiledFilter, predicate: Predicate) -> None:
        param_name = f"param_{len(compiled.params)}"
        compiled.predicates.append(predicate)
        compiled.clauses.append(to_sql(predicate, param_name))
        compiled.params[param_name] = predicate.value


def compile_filters(
    query_params: Any,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int = MAX_LIMIT,
) -> CompiledFilter:
    """Compile query parameters with the given pagination bounds.

    Examples:
        >>> compiled = compile_filters({"color": ["red"], "limit": ["5"]})
        >>> compiled.where_sql
        " WHERE CAST(json_extract(data, '$.color') AS TEXT) = :param_0"
        >>> compiled.params, compiled.limit
        ({'param_0': 'red'}, 5)
    """
    return FilterCompiler(default_limit, max_limit).compile(query_params)
