"""In-memory EntityStore.

One dict per kind, guarded by a single asyncio.Lock: puts are serialized
and scan copies the kind's records under the lock, so a listing sees a
record either fully written or not at all.  Records are deep-copied on the
way in and out; mutating a returned entity's fields never reaches the store.
"""

from __future__ import annotations

import asyncio
from uuid import UUID

from src.domain.exceptions import DuplicateEntityError, NotFoundError
from src.domain.models.entities import Entity
from src.domain.repositories.store import EntityStore


class InMemoryEntityStore(EntityStore):
    def __init__(self) -> None:
        self._records: dict[str, dict[UUID, Entity]] = {}
        self._lock = asyncio.Lock()

    async def get(self, kind: str, id: UUID) -> Entity | None:
        async with self._lock:
            record = self._records.get(kind, {}).get(id)
            return record.model_copy(deep=True) if record is not None else None

    async def put(self, kind: str, record: Entity, *, create: bool = False) -> Entity:
        if record.kind != kind:
            raise ValueError(f"Record of kind '{record.kind}' stored under '{kind}'")
        async with self._lock:
            records = self._records.setdefault(kind, {})
            exists = record.id in records
            if create and exists:
                raise DuplicateEntityError(kind, record.id)
            if not create and not exists:
                raise NotFoundError(kind, record.id)
            records[record.id] = record.model_copy(deep=True)
        return record

    async def scan(self, kind: str) -> tuple[Entity, ...]:
        async with self._lock:
            return tuple(
                record.model_copy(deep=True)
                for record in self._records.get(kind, {}).values()
            )

    async def clear(self) -> None:
        async with self._lock:
            self._records.clear()
