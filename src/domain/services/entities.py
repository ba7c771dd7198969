"""Entity lifecycle service.

Layered over an EntityStore; this is where timestamps are managed:

  - create stamps created_at == updated_at and fixes owner_ref to the actor;
  - update merges business fields and bumps updated_at;
  - erase soft-deletes by setting deleted_at (terminal, no undelete).

id, owner_ref and the audit timestamps are never writable through fields.
Checks run in a fixed order: missing record (NotFoundError), then
lifecycle state (ConflictError), then ownership (ForbiddenError).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any
from uuid import UUID

from src.domain.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from src.domain.models.entities import AUDIT_FIELDS, ActorContext, Entity, utcnow
from src.domain.models.kinds import EntityKind
from src.domain.repositories.store import EntityStore

logger = logging.getLogger(__name__)


class EntityService:
    def __init__(self, store: EntityStore, clock: Callable[[], datetime] = utcnow) -> None:
        self._store = store
        self._clock = clock

    async def create(
        self, kind: EntityKind, actor: ActorContext, fields: Mapping[str, Any]
    ) -> Entity:
        self._authorize(kind, actor)
        _reject_audit_fields(fields)
        entity = Entity.create(kind.name, actor.id, dict(fields), at=self._clock())
        return await self._store.put(kind.name, entity, create=True)

    async def get(self, kind: EntityKind, actor: ActorContext, id: UUID) -> Entity:
        """Fetch one record.

        Soft-deleted records are visible to admins only; to anyone else
        they do not exist.
        """
        self._authorize(kind, actor)
        entity = await self._load(kind, id)
        if entity.is_deleted and not actor.is_privileged:
            raise NotFoundError(kind.name, id)
        self._check_owner(kind, actor, entity)
        return entity

    async def update(
        self,
        kind: EntityKind,
        actor: ActorContext,
        id: UUID,
        changes: Mapping[str, Any],
    ) -> Entity:
        self._authorize(kind, actor)
        _reject_audit_fields(changes)
        entity = await self._load_active(kind, id)
        self._check_owner(kind, actor, entity)

        stamp = self._stamp(entity)
        updated = Entity.model_validate(
            {
                **entity.model_dump(),
                "fields": {**entity.fields, **changes},
                "updated_at": stamp,
            }
        )
        return await self._store.put(kind.name, updated)

    async def erase(self, kind: EntityKind, actor: ActorContext, id: UUID) -> Entity:
        self._authorize(kind, actor)
        entity = await self._load_active(kind, id)
        self._check_owner(kind, actor, entity)

        stamp = self._stamp(entity)
        erased = Entity.model_validate(
            {**entity.model_dump(), "updated_at": stamp, "deleted_at": stamp}
        )
        logger.info("Soft-deleted %s %s by %s:%s", kind.name, id, actor.role.value, actor.id)
        return await self._store.put(kind.name, erased)

    # ------------------------------------------------------------------ #
    # Helpers                                                              #
    # ------------------------------------------------------------------ #

    def _stamp(self, entity: Entity) -> datetime:
        # updated_at never moves backwards, even if the clock does.
        return max(self._clock(), entity.updated_at)

    async def _load(self, kind: EntityKind, id: UUID) -> Entity:
        entity = await self._store.get(kind.name, id)
        if entity is None:
            raise NotFoundError(kind.name, id)
        return entity

    async def _load_active(self, kind: EntityKind, id: UUID) -> Entity:
        entity = await self._load(kind, id)
        if entity.is_deleted:
            raise ConflictError(f"{kind.name} '{id}' is deleted")
        return entity

    @staticmethod
    def _authorize(kind: EntityKind, actor: ActorContext) -> None:
        if not kind.is_readable_by(actor):
            raise ForbiddenError(f"Role '{actor.role.value}' may not access {kind.name}")

    @staticmethod
    def _check_owner(kind: EntityKind, actor: ActorContext, entity: Entity) -> None:
        if not actor.is_privileged and not actor.owns(entity):
            raise ForbiddenError(f"{kind.name} '{entity.id}' belongs to another owner")


def _reject_audit_fields(fields: Mapping[str, Any]) -> None:
    reserved = sorted(AUDIT_FIELDS.intersection(fields))
    if reserved:
        raise ValidationError(
            f"Fields {', '.join(reserved)} cannot be set directly", field=reserved[0]
        )
