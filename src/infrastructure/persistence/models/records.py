"""Entity record ORM model: one table for every kind, keyed by (kind, id)."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import CheckConstraint, DateTime, Index, Text, func
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database import Base


class EntityRecord(Base):
    """A soft-deletable, owned business record.

    deleted_at is null for active records.  fields holds the kind-specific
    business attributes as a JSON object; filtering on them happens in the
    query engine, not in SQL.
    """

    __tablename__ = "entity_records"
    __table_args__ = (
        CheckConstraint("updated_at >= created_at", name="ck_entity_records_updated_after_created"),
        CheckConstraint(
            "deleted_at IS NULL OR deleted_at >= created_at",
            name="ck_entity_records_deleted_after_created",
        ),
        Index("ix_entity_records_kind_owner", "kind", "owner_ref"),
        Index("ix_entity_records_kind_created_at", "kind", "created_at"),
    )

    kind: Mapped[str] = mapped_column(Text, primary_key=True)
    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True)
    owner_ref: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    fields: Mapped[dict[str, Any]] = mapped_column(JSONB, nullable=False, default=dict)
