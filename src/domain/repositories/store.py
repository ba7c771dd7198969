"""Entity store interface.

EntityStore is the root data-access abstraction for the listing engine.
Concrete implementations live in src/infrastructure/ and are wired at the
application boundary via dependency injection.

Design notes:
  - All methods are async to accommodate async database drivers (asyncpg / SQLAlchemy async).
  - Records are keyed by (kind, id); ids are unique per kind and never reused.
  - scan() returns every record of a kind, soft-deleted ones included;
    visibility filtering belongs to the query engine.
  - The store never manages timestamps; callers stamp created_at,
    updated_at and deleted_at explicitly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from uuid import UUID

from src.domain.models.entities import Entity


class EntityStore(ABC):
    """Abstract keyed storage for entity records of every kind."""

    @abstractmethod
    async def get(self, kind: str, id: UUID) -> Entity | None:
        """Return the record with the given id, or None if not found."""

    @abstractmethod
    async def put(self, kind: str, record: Entity, *, create: bool = False) -> Entity:
        """Insert (create=True) or replace a record and return it.

        Raises DuplicateEntityError when inserting an id that already exists,
        and NotFoundError when replacing an id that does not.
        """

    @abstractmethod
    async def scan(self, kind: str) -> tuple[Entity, ...]:
        """Return a consistent snapshot of every record of a kind."""
