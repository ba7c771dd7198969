"""Concrete SQLAlchemy store implementation.

Exports SqlEntityStore and the get_store() factory function for wiring at
the application boundary (FastAPI dependency injection).
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from .entities import SqlEntityStore


def get_store(session: AsyncSession) -> SqlEntityStore:
    """Construct the entity store bound to the given session.

    Intended for use as a FastAPI dependency:

        async def handler(
            session: AsyncSession = Depends(get_session),
        ) -> ...:
            store = get_store(session)
            order = await store.get("order", order_id)
    """
    return SqlEntityStore(session)


__all__ = ["SqlEntityStore", "get_store"]
