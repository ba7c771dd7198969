"""Predicate compiler.

Turns a FilterRequest into one composable ``Entity -> bool`` predicate.

Every clause is ANDed; there is no OR across fields at this layer.  Two
clauses are injected regardless of the filters supplied:

  - soft-delete visibility: ``deleted_at IS NULL`` by default, or
    ``deleted_at IS NOT NULL`` when a privileged actor asks for deleted=True;
  - ownership scope: ``owner_ref == actor.id`` for non-privileged actors.

Request values are coerced to each filter's declared value_type with a
pydantic TypeAdapter; anything that does not fit is a ValidationError.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from src.domain.exceptions import ForbiddenError, ValidationError
from src.domain.models.entities import ActorContext, Entity
from src.domain.models.enums import Constraint
from src.domain.models.kinds import EntityKind, FilterField
from src.domain.models.query import FilterRequest

Predicate = Callable[[Entity], bool]

_RANGE_BOUNDS = frozenset({"from", "to"})
_NO_MATCH = object()


@lru_cache(maxsize=None)
def _adapter(value_type: Any) -> TypeAdapter:
    return TypeAdapter(value_type)


def _coerce(spec: FilterField, raw: Any) -> Any:
    try:
        value = _adapter(spec.value_type).validate_python(raw)
    except PydanticValidationError:
        raise ValidationError(
            f"Invalid value for filter '{spec.key}'", field=spec.key
        ) from None
    # Naive datetimes from a request body are read as UTC.
    if isinstance(value, datetime) and value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def _stored(spec: FilterField, entity: Entity) -> Any:
    """Read the filtered attribute as the filter's value_type.

    Persisted fields may come back as their JSON form (ISO strings for
    datetimes, strings for UUIDs).  Returns _NO_MATCH when the stored
    value is missing or cannot be read as value_type.
    """
    value = entity.value_of(spec.target)
    if value is None:
        return _NO_MATCH
    try:
        return _coerce(spec, value)
    except ValidationError:
        return _NO_MATCH


def _compares(left: Any, op: Callable[[Any, Any], bool], right: Any) -> bool:
    try:
        return op(left, right)
    except TypeError:
        return False


class PredicateCompiler:
    """Stateless compiler from (kind, actor, request) to a record predicate."""

    def compile(
        self, kind: EntityKind, actor: ActorContext, request: FilterRequest
    ) -> Predicate:
        """Build the predicate; fails before any record is read.

        Raises:
            ForbiddenError: a non-privileged actor asked for deleted=True.
            ValidationError: an unknown filter key or an ill-typed value.
        """
        clauses: list[Predicate] = [self._visibility(actor, request.deleted)]
        if not actor.is_privileged:
            clauses.append(self._owned_by(actor.id))

        for key, raw in sorted(request.filters.items()):
            spec = kind.filter_for(key)
            if spec is None:
                raise ValidationError(
                    f"Unknown filter '{key}' for {kind.name}", field=key
                )
            clauses.append(self.clause(spec, raw))

        return lambda entity: all(clause(entity) for clause in clauses)

    def clause(self, spec: FilterField, raw: Any) -> Predicate:
        """Compile a single filter key into its predicate."""
        builders = {
            Constraint.EXACT: self._exact,
            Constraint.CONTAINS: self._contains,
            Constraint.RANGE: self._range,
            Constraint.ONE_OF: self._one_of,
        }
        return builders[spec.constraint](spec, raw)

    # ------------------------------------------------------------------ #
    # Injected clauses                                                     #
    # ------------------------------------------------------------------ #

    @staticmethod
    def _visibility(actor: ActorContext, deleted: bool | None) -> Predicate:
        if deleted:
            if not actor.is_privileged:
                raise ForbiddenError("Only administrators may list deleted records")
            return lambda entity: entity.deleted_at is not None
        return lambda entity: entity.deleted_at is None

    @staticmethod
    def _owned_by(owner_ref: str) -> Predicate:
        return lambda entity: entity.owner_ref == owner_ref

    # ------------------------------------------------------------------ #
    # Constraint kinds                                                     #
    # ------------------------------------------------------------------ #

    @staticmethod
    def _exact(spec: FilterField, raw: Any) -> Predicate:
        expected = _coerce(spec, raw)
        return lambda entity: _stored(spec, entity) == expected

    @staticmethod
    def _contains(spec: FilterField, raw: Any) -> Predicate:
        if not isinstance(raw, str):
            raise ValidationError(
                f"Filter '{spec.key}' expects a string", field=spec.key
            )
        target = spec.target

        def matches(entity: Entity) -> bool:
            value = entity.value_of(target)
            return isinstance(value, str) and raw in value

        return matches

    @staticmethod
    def _range(spec: FilterField, raw: Any) -> Predicate:
        if not isinstance(raw, Mapping) or not set(raw) <= _RANGE_BOUNDS:
            raise ValidationError(
                f"Filter '{spec.key}' expects an object with 'from' and/or 'to'",
                field=spec.key,
            )
        low = _coerce(spec, raw["from"]) if raw.get("from") is not None else None
        high = _coerce(spec, raw["to"]) if raw.get("to") is not None else None
        if low is not None and high is not None and _compares(low, lambda a, b: a > b, high):
            raise ValidationError(
                f"Filter '{spec.key}' has 'from' after 'to'", field=spec.key
            )

        def matches(entity: Entity) -> bool:
            value = _stored(spec, entity)
            if value is _NO_MATCH:
                return False
            if low is not None and not _compares(value, lambda a, b: a >= b, low):
                return False
            if high is not None and not _compares(value, lambda a, b: a <= b, high):
                return False
            return True

        return matches

    @staticmethod
    def _one_of(spec: FilterField, raw: Any) -> Predicate:
        if isinstance(raw, (str, bytes, Mapping)) or not isinstance(raw, (list, tuple, set, frozenset)):
            raise ValidationError(
                f"Filter '{spec.key}' expects a list of values", field=spec.key
            )
        options = tuple(_coerce(spec, item) for item in raw)
        return lambda entity: _stored(spec, entity) in options
