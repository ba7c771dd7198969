"""ORM model registry: imports every mapper module so each class is
registered with Base.metadata before Alembic or SQLAlchemy runs.
"""

from src.infrastructure.persistence.models.records import EntityRecord

__all__ = ["EntityRecord"]
