"""Persistence package.

Importing this package registers every ORM mapper with Base.metadata
(required for Alembic autogenerate and SQLAlchemy mapper configuration)
and exports the store implementation and its DI factory.
"""

from src.infrastructure.persistence.models import *  # noqa: F401, F403
from src.infrastructure.persistence.models import __all__ as _orm_all
from src.infrastructure.persistence.repositories import SqlEntityStore, get_store

__all__ = _orm_all + ["SqlEntityStore", "get_store"]
