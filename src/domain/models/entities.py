"""Entity and actor domain models.

These are pure domain objects with no ORM or persistence concerns.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .enums import Role

# Attributes that live on the entity envelope rather than in ``fields``.
AUDIT_FIELDS = frozenset({"id", "owner_ref", "created_at", "updated_at", "deleted_at"})


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Entity(BaseModel):
    """A soft-deletable, owned business record of a given kind.

    deleted_at is None for active records; once set the record is
    terminally soft-deleted.  fields holds the kind-specific business
    attributes (strings, numbers, enums, booleans, nullable references).
    """

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    kind: str
    owner_ref: str
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    deleted_at: datetime | None = None
    fields: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _default_updated_at(cls, data: Any) -> Any:
        # A fresh record is stamped once: updated_at starts equal to created_at.
        if isinstance(data, dict) and data.get("updated_at") is None:
            data = dict(data)
            if data.get("created_at") is None:
                data["created_at"] = utcnow()
            data["updated_at"] = data["created_at"]
        return data

    @field_validator("created_at", "updated_at", "deleted_at")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        # Naive timestamps are read as UTC so they compare with aware ones.
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @model_validator(mode="after")
    def _timestamps_are_ordered(self) -> Entity:
        if self.updated_at < self.created_at:
            raise ValueError(
                f"updated_at ({self.updated_at.isoformat()}) precedes "
                f"created_at ({self.created_at.isoformat()})"
            )
        if self.deleted_at is not None and self.deleted_at < self.created_at:
            raise ValueError(
                f"deleted_at ({self.deleted_at.isoformat()}) precedes "
                f"created_at ({self.created_at.isoformat()})"
            )
        return self

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def value_of(self, name: str) -> Any:
        """Return an envelope attribute or a business field (None if absent)."""
        if name in AUDIT_FIELDS:
            return getattr(self, name)
        return self.fields.get(name)

    @classmethod
    def create(
        cls,
        kind: str,
        owner_ref: str,
        fields: dict[str, Any] | None = None,
        at: datetime | None = None,
    ) -> Entity:
        """Named constructor: new active record stamped at ``at`` (default now)."""
        stamp = at or utcnow()
        return cls(
            kind=kind,
            owner_ref=owner_ref,
            created_at=stamp,
            updated_at=stamp,
            fields=dict(fields or {}),
        )


class ActorContext(BaseModel):
    """The caller on whose behalf an operation runs.

    Passed explicitly into every call; there is no ambient current actor.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    role: Role

    @property
    def is_privileged(self) -> bool:
        return self.role.is_privileged

    def owns(self, entity: Entity) -> bool:
        return entity.owner_ref == self.id
