"""SQLAlchemy implementation of EntityStore."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from pydantic import TypeAdapter
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.exceptions import DuplicateEntityError, NotFoundError
from src.domain.models.entities import Entity
from src.domain.repositories.store import EntityStore
from src.infrastructure.persistence.models.records import EntityRecord

# Business fields are stored as JSON; datetimes and UUIDs become strings.
_FIELDS = TypeAdapter(dict[str, Any])


class SqlEntityStore(EntityStore):
    """EntityStore over the entity_records table.

    Snapshot consistency of scan() is whatever the session's transaction
    gives; run listings inside one transaction (see get_session).
    IntegrityError on insert becomes DuplicateEntityError; every other
    SQLAlchemy error propagates unchanged.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @staticmethod
    def _to_domain(row: EntityRecord) -> Entity:
        return Entity(
            id=row.id,
            kind=row.kind,
            owner_ref=row.owner_ref,
            created_at=row.created_at,
            updated_at=row.updated_at,
            deleted_at=row.deleted_at,
            fields=dict(row.fields or {}),
        )

    async def _row(self, kind: str, id: UUID) -> EntityRecord | None:
        stmt = select(EntityRecord).where(EntityRecord.kind == kind, EntityRecord.id == id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get(self, kind: str, id: UUID) -> Entity | None:
        row = await self._row(kind, id)
        return self._to_domain(row) if row else None

    async def put(self, kind: str, record: Entity, *, create: bool = False) -> Entity:
        if record.kind != kind:
            raise ValueError(f"Record of kind '{record.kind}' stored under '{kind}'")
        fields = _FIELDS.dump_python(record.fields, mode="json")

        if create:
            if await self._row(kind, record.id) is not None:
                raise DuplicateEntityError(kind, record.id)
            self._session.add(
                EntityRecord(
                    kind=kind,
                    id=record.id,
                    owner_ref=record.owner_ref,
                    created_at=record.created_at,
                    updated_at=record.updated_at,
                    deleted_at=record.deleted_at,
                    fields=fields,
                )
            )
            try:
                await self._session.flush()
            except IntegrityError:
                # A concurrent insert won the race for this id.
                raise DuplicateEntityError(kind, record.id) from None
            return record

        row = await self._row(kind, record.id)
        if row is None:
            raise NotFoundError(kind, record.id)
        # owner_ref and created_at are immutable; only mutable columns are written.
        row.updated_at = record.updated_at
        row.deleted_at = record.deleted_at
        row.fields = fields
        return self._to_domain(row)

    async def scan(self, kind: str) -> tuple[Entity, ...]:
        stmt = select(EntityRecord).where(EntityRecord.kind == kind).order_by(EntityRecord.id)
        result = await self._session.execute(stmt)
        return tuple(self._to_domain(row) for row in result.scalars())
