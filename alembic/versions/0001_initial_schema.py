"""Initial schema: entity_records table shared by every entity kind.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "entity_records",
        sa.Column("kind", sa.Text, primary_key=True),
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("owner_ref", sa.Text, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "fields",
            postgresql.JSONB,
            server_default=sa.text("'{}'::jsonb"),
            nullable=False,
        ),
        # Soft delete is terminal and never precedes creation.
        sa.CheckConstraint("updated_at >= created_at", name="ck_entity_records_updated_after_created"),
        sa.CheckConstraint(
            "deleted_at IS NULL OR deleted_at >= created_at",
            name="ck_entity_records_deleted_after_created",
        ),
    )
    op.create_index("ix_entity_records_kind_owner", "entity_records", ["kind", "owner_ref"])
    op.create_index(
        "ix_entity_records_kind_created_at", "entity_records", ["kind", "created_at"]
    )


def downgrade() -> None:
    op.drop_index("ix_entity_records_kind_created_at", table_name="entity_records")
    op.drop_index("ix_entity_records_kind_owner", table_name="entity_records")
    op.drop_table("entity_records")
