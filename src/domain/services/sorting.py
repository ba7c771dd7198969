"""Sort comparator builder.

Accepted specifications (direction is case-insensitive):

    "amount:asc"   "amount desc"   "amount"   "status:asc,amount:desc"

A bare field sorts ascending; comma-separated keys compose left to right.
When no sort is given the default is ``created_at:desc`` (newest first).
Every ordering ends with ``id`` ascending so that records sharing the same
sort values keep one stable order across calls and page boundaries.

Null values compare greater than any non-null value: they come last in
ascending order and first in descending order.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any

from src.domain.exceptions import ValidationError
from src.domain.models.entities import Entity
from src.domain.models.enums import SortDirection
from src.domain.models.kinds import EntityKind

Comparator = Callable[[Entity, Entity], int]


@dataclass(frozen=True)
class SortKey:
    field: str
    direction: SortDirection = SortDirection.ASC


DEFAULT_SORT: tuple[SortKey, ...] = (SortKey("created_at", SortDirection.DESC),)


def _compare_values(left: Any, right: Any) -> int:
    if left is None or right is None:
        return (left is None) - (right is None)
    try:
        return (left > right) - (left < right)
    except TypeError:
        # Mixed types: order by type name, then by text, so the result stays total.
        return _compare_values(
            (type(left).__name__, str(left)), (type(right).__name__, str(right))
        )


class SortComparatorBuilder:
    """Stateless builder of deterministic total orderings over entities."""

    def parse(self, kind: EntityKind, spec: str | None) -> tuple[SortKey, ...]:
        """Parse and validate a sort specification against the kind's allow-list."""
        if spec is None or not spec.strip():
            return DEFAULT_SORT
        return tuple(self._parse_key(kind, part) for part in spec.split(","))

    def build(self, kind: EntityKind, spec: str | None) -> Comparator:
        keys = self.parse(kind, spec)

        def compare(left: Entity, right: Entity) -> int:
            for key in keys:
                result = _compare_values(left.value_of(key.field), right.value_of(key.field))
                if result:
                    return -result if key.direction is SortDirection.DESC else result
            return _compare_values(left.id, right.id)

        return compare

    def sort(
        self, kind: EntityKind, records: Iterable[Entity], spec: str | None
    ) -> list[Entity]:
        return sorted(records, key=cmp_to_key(self.build(kind, spec)))

    @staticmethod
    def _parse_key(kind: EntityKind, part: str) -> SortKey:
        if ":" in part:
            field, _, direction = part.partition(":")
            tokens = [field.strip(), direction.strip()]
        else:
            tokens = part.split()

        if len(tokens) not in (1, 2) or not tokens[0]:
            raise ValidationError(f"Malformed sort '{part.strip()}'", field="sort")

        field = tokens[0]
        if field not in kind.sort_fields:
            raise ValidationError(
                f"Cannot sort {kind.name} by '{field}'", field="sort"
            )
        if len(tokens) == 1:
            return SortKey(field)
        try:
            direction = SortDirection(tokens[1].lower())
        except ValueError:
            raise ValidationError(
                f"Sort direction must be 'asc' or 'desc', got '{tokens[1]}'", field="sort"
            ) from None
        return SortKey(field, direction)
