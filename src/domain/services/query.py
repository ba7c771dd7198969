"""Resource query engine.

Orchestrates one listing call:

    query
        → authorize           (role may list the kind at all?)
        → validate            (filters, deleted flag, sort, page/limit)
        → store.scan          (one consistent snapshot)
        → filter → sort → page

Every rejection happens before the store is read, so a bad request is
never partially applied.  The engine keeps no state between calls: the
same snapshot, actor and request always yield the same page.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from src.domain.exceptions import ForbiddenError
from src.domain.models.entities import ActorContext, Entity
from src.domain.models.kinds import EntityKind
from src.domain.models.query import FilterRequest, PageResult
from src.domain.repositories.store import EntityStore

from .pager import Pager
from .predicates import PredicateCompiler
from .sorting import SortComparatorBuilder

logger = logging.getLogger(__name__)


class QueryEngine:
    """Filter/sort/paginate over soft-deletable, owner-scoped entities."""

    def __init__(
        self,
        store: EntityStore,
        pager: Pager | None = None,
        predicates: PredicateCompiler | None = None,
        sorter: SortComparatorBuilder | None = None,
    ) -> None:
        self._store = store
        self._pager = pager or Pager()
        self._predicates = predicates or PredicateCompiler()
        self._sorter = sorter or SortComparatorBuilder()

    @property
    def pager(self) -> Pager:
        return self._pager

    async def query(
        self,
        kind: EntityKind,
        actor: ActorContext,
        request: FilterRequest | Mapping[str, Any] | None = None,
    ) -> PageResult[Entity]:
        """Return one page of the records of ``kind`` visible to ``actor``.

        Args:
            kind: Schema and visibility policy of the listed kind.
            actor: The caller; non-admins only ever see their own records.
            request: A FilterRequest or an untyped request body.

        Raises:
            ForbiddenError: the actor's role may not list this kind, or a
                non-admin asked for deleted records.
            ValidationError: unknown filter key, bad value, bad sort,
                page < 1 or limit out of range.
        """
        if not kind.is_readable_by(actor):
            logger.info("Refused %s listing to role %s", kind.name, actor.role.value)
            raise ForbiddenError(f"Role '{actor.role.value}' may not list {kind.name}")

        if not isinstance(request, FilterRequest):
            request = FilterRequest.from_body(request)

        predicate = self._predicates.compile(kind, actor, request)
        self._sorter.parse(kind, request.sort)
        page, limit = self._pager.validate(request.page, request.limit)

        snapshot = await self._store.scan(kind.name)
        matched = self._sorter.sort(kind, filter(predicate, snapshot), request.sort)
        result = self._pager.paginate(matched, page, limit)

        logger.debug(
            "Listed %s for %s:%s page=%d limit=%d records=%d",
            kind.name,
            actor.role.value,
            actor.id,
            page,
            limit,
            result.pagination.records,
        )
        return result
