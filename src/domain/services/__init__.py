"""Domain services package."""

from .entities import EntityService
from .pager import MAX_LIMIT, Pager
from .predicates import PredicateCompiler
from .query import QueryEngine
from .sorting import SortComparatorBuilder, SortKey

__all__ = [
    "EntityService",
    "MAX_LIMIT",
    "Pager",
    "PredicateCompiler",
    "QueryEngine",
    "SortComparatorBuilder",
    "SortKey",
]
