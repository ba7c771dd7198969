"""Entity kind declarations: per-kind filter/sort allow-lists and visibility.

An EntityKind names a category of business record sharing one schema and
one visibility policy.  Filters and sort keys not declared here (or among
the built-ins every kind gets) are rejected, never silently ignored.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from .entities import ActorContext
from .enums import Constraint, Role

# Keys of a filter request that control paging rather than filtering.
RESERVED_REQUEST_KEYS = frozenset({"page", "limit", "sort", "deleted"})

DEFAULT_READERS = frozenset({Role.SELLER, Role.BUYER, Role.CUSTOMER})


class FilterField(BaseModel):
    """One filterable request key.

    field names the entity attribute the key targets; it defaults to the
    key itself so most declarations only need key and constraint.
    value_type is used to coerce incoming request values (e.g. ISO strings
    to datetimes) before comparison.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    key: str
    constraint: Constraint
    field: str | None = None
    value_type: Any = str

    @property
    def target(self) -> str:
        return self.field or self.key


BUILTIN_FILTERS: tuple[FilterField, ...] = (
    FilterField(key="owner_ref", constraint=Constraint.EXACT),
    FilterField(key="created_at", constraint=Constraint.RANGE, value_type=datetime),
)
BUILTIN_SORTABLE = frozenset({"id", "created_at", "updated_at"})


class EntityKind(BaseModel):
    """Schema and visibility policy for one kind of entity.

    readable_by lists the roles allowed to list the kind at all; admins
    are always allowed regardless of this set.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    filters: tuple[FilterField, ...] = ()
    sortable: frozenset[str] = frozenset()
    readable_by: frozenset[Role] = DEFAULT_READERS

    @model_validator(mode="after")
    def _filter_keys_are_unique(self) -> EntityKind:
        seen: set[str] = set()
        for spec in self.all_filters:
            if spec.key in RESERVED_REQUEST_KEYS:
                raise ValueError(f"Filter key '{spec.key}' is reserved")
            if spec.key in seen:
                raise ValueError(f"Duplicate filter key '{spec.key}' on kind '{self.name}'")
            seen.add(spec.key)
        return self

    @property
    def all_filters(self) -> tuple[FilterField, ...]:
        return BUILTIN_FILTERS + self.filters

    @property
    def sort_fields(self) -> frozenset[str]:
        return BUILTIN_SORTABLE | self.sortable

    def filter_for(self, key: str) -> FilterField | None:
        for spec in self.all_filters:
            if spec.key == key:
                return spec
        return None

    def is_readable_by(self, actor: ActorContext) -> bool:
        return actor.is_privileged or actor.role in self.readable_by


def filter_field(
    key: str,
    constraint: Constraint = Constraint.EXACT,
    value_type: Any = str,
    field: str | None = None,
) -> FilterField:
    """Shorthand used by kind declarations."""
    return FilterField(key=key, constraint=constraint, field=field, value_type=value_type)
