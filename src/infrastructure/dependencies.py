"""Dependency wiring: binds stores and settings to the domain services.

Intended for use at the application boundary (FastAPI dependency injection):

    async def list_orders(
        body: dict,
        session: AsyncSession = Depends(get_session),
    ) -> ...:
        services = get_services(session)
        return await services.queries.query(ORDER, actor, body)
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.repositories.store import EntityStore
from src.domain.services import EntityService, Pager, QueryEngine
from src.infrastructure.database import Settings, settings as default_settings
from src.infrastructure.persistence.repositories import get_store


@dataclass
class Services:
    """Domain services sharing one EntityStore."""

    store: EntityStore
    queries: QueryEngine
    entities: EntityService


def build_services(store: EntityStore, settings: Settings | None = None) -> Services:
    """Wire the query engine and lifecycle service over ``store``."""
    settings = settings or default_settings
    pager = Pager(
        max_limit=settings.query_max_limit,
        default_limit=min(settings.query_default_limit, settings.query_max_limit),
    )
    return Services(
        store=store,
        queries=QueryEngine(store, pager=pager),
        entities=EntityService(store),
    )


def get_services(session: AsyncSession) -> Services:
    """Construct services backed by the SQL store bound to ``session``."""
    return build_services(get_store(session))
