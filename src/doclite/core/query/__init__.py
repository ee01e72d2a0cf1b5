"""List query compilation API."""

from .exceptions import InvalidFieldNameError, QueryCompileError
from .filter_compiler import (
    RANGE_FILTERS,
    RESERVED_PARAMS,
    CompiledFilter,
    FilterCompiler,
    compile_filters,
)
from .predicates import Predicate, PredicateKind, is_valid_field_name, to_sql

__all__ = [
    "CompiledFilter",
    "FilterCompiler",
    "InvalidFieldNameError",
    "Predicate",
    "PredicateKind",
    "QueryCompileError",
    "RANGE_FILTERS",
    "RESERVED_PARAMS",
    "compile_filters",
    "is_valid_field_name",
    "to_sql",
]
