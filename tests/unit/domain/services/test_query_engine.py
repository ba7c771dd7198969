"""Tests for src/domain/services/query.py: end-to-end over the in-memory store."""

import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID

from src.domain.exceptions import ForbiddenError, ValidationError
from src.domain.models.entities import ActorContext, Entity
from src.domain.models.enums import Constraint, Role
from src.domain.models.kinds import EntityKind, filter_field
from src.domain.models.query import FilterRequest
from src.domain.services.pager import Pager
from src.domain.services.query import QueryEngine
from src.domain.services.sorting import SortComparatorBuilder
from src.infrastructure.memory import InMemoryEntityStore


T0 = datetime(2025, 6, 1, tzinfo=timezone.utc)

KIND = EntityKind(
    name="inquiry",
    filters=(
        filter_field("status"),
        filter_field("amount", Constraint.RANGE, float),
    ),
    sortable=frozenset({"amount", "status"}),
)

ADMIN = ActorContext(id="admin-1", role=Role.ADMIN)
CUSTOMER = ActorContext(id="cust-1", role=Role.CUSTOMER)


def _entity(n=0, owner_ref="cust-1", deleted=False, id=None, **fields):
    created_at = T0 + timedelta(minutes=n)
    kwargs = dict(
        kind=KIND.name,
        owner_ref=owner_ref,
        created_at=created_at,
        deleted_at=created_at + timedelta(days=1) if deleted else None,
        fields=fields,
    )
    if id is not None:
        kwargs["id"] = id
    return Entity(**kwargs)


async def _engine(*records, pager=None):
    store = InMemoryEntityStore()
    for record in records:
        await store.put(KIND.name, record, create=True)
    return QueryEngine(store, pager=pager)


# --- example scenarios ---

async def test_default_query_excludes_deleted_records():
    engine = await _engine(_entity(0), _entity(1), _entity(2, deleted=True))
    result = await engine.query(KIND, CUSTOMER, {})
    assert len(result.data) == 2
    assert result.pagination.records == 2


async def test_third_page_of_five_holds_the_fifth_record():
    records = [_entity(n) for n in range(5)]
    engine = await _engine(*records)
    result = await engine.query(KIND, CUSTOMER, {"page": 3, "limit": 2})
    assert len(result.data) == 1
    assert result.pagination.pages == 3
    # Newest first by default, so the fifth record is the oldest.
    assert result.data[0].id == records[0].id


async def test_sort_amount_ascending():
    engine = await _engine(_entity(0, amount=50), _entity(1, amount=10), _entity(2, amount=30))
    result = await engine.query(KIND, CUSTOMER, {"sort": "amount:asc"})
    assert [e.fields["amount"] for e in result.data] == [10, 30, 50]


async def test_status_filter_returns_only_matching_record():
    engine = await _engine(
        _entity(0, status="normal"), _entity(1, status="urgent"), _entity(2, status="low")
    )
    result = await engine.query(KIND, CUSTOMER, {"status": "urgent"})
    assert len(result.data) == 1
    assert result.data[0].fields["status"] == "urgent"


async def test_admin_lists_deleted_records_customer_is_forbidden():
    deleted = _entity(0, deleted=True)
    engine = await _engine(deleted, _entity(1))
    result = await engine.query(KIND, ADMIN, {"deleted": True})
    assert [e.id for e in result.data] == [deleted.id]
    with pytest.raises(ForbiddenError):
        await engine.query(KIND, CUSTOMER, {"deleted": True})


# --- ownership ---

async def test_customer_never_sees_other_owners_records():
    engine = await _engine(
        _entity(0, owner_ref="cust-1"), _entity(1, owner_ref="cust-2"), _entity(2, owner_ref="cust-3")
    )
    result = await engine.query(KIND, CUSTOMER, {"owner_ref": "cust-2"})
    assert result.data == []
    result = await engine.query(KIND, CUSTOMER, {})
    assert {e.owner_ref for e in result.data} == {"cust-1"}


async def test_admin_sees_all_owners():
    engine = await _engine(_entity(0, owner_ref="cust-1"), _entity(1, owner_ref="cust-2"))
    result = await engine.query(KIND, ADMIN, {})
    assert result.pagination.records == 2


# --- pagination coverage and stability ---

async def test_concatenated_pages_equal_full_result():
    records = [_entity(n % 3, amount=n % 4) for n in range(11)]
    engine = await _engine(*records)
    full = await engine.query(KIND, CUSTOMER, {"sort": "amount:desc", "limit": 100})

    collected = []
    page = 1
    while True:
        result = await engine.query(KIND, CUSTOMER, {"sort": "amount:desc", "limit": 3, "page": page})
        if not result.data:
            break
        collected.extend(result.data)
        page += 1

    assert [e.id for e in collected] == [e.id for e in full.data]
    assert len({e.id for e in collected}) == 11
    assert page - 1 == full.pagination.pages == 4


async def test_identical_sort_keys_never_skip_or_repeat_across_pages():
    records = [_entity(0, id=UUID(int=n), amount=7) for n in range(1, 8)]
    engine = await _engine(*records)
    ids = []
    for page in (1, 2, 3):
        result = await engine.query(KIND, CUSTOMER, {"sort": "amount", "limit": 3, "page": page})
        ids.extend(e.id for e in result.data)
    assert ids == [UUID(int=n) for n in range(1, 8)]


async def test_repeated_queries_are_identical():
    engine = await _engine(*[_entity(n % 2, status="a") for n in range(6)])
    request = {"status": "a", "limit": 4, "page": 1}
    first = await engine.query(KIND, CUSTOMER, request)
    second = await engine.query(KIND, CUSTOMER, request)
    assert first.model_dump_json() == second.model_dump_json()


async def test_page_beyond_last_is_empty_and_echoes_page():
    engine = await _engine(_entity(0), _entity(1))
    result = await engine.query(KIND, CUSTOMER, {"page": 5, "limit": 2})
    assert result.data == []
    assert result.pagination.current == 5
    assert result.pagination.pages == 1


# --- request forms ---

async def test_accepts_filter_request_instance():
    engine = await _engine(_entity(0))
    result = await engine.query(KIND, CUSTOMER, FilterRequest(limit=1))
    assert result.pagination.limit == 1


async def test_none_request_uses_defaults():
    engine = await _engine(_entity(0), pager=Pager(max_limit=50, default_limit=25))
    result = await engine.query(KIND, CUSTOMER)
    assert result.pagination.current == 1
    assert result.pagination.limit == 25


async def test_sees_records_written_after_previous_query():
    store = InMemoryEntityStore()
    engine = QueryEngine(store)
    assert (await engine.query(KIND, CUSTOMER, {})).pagination.records == 0
    await store.put(KIND.name, _entity(0), create=True)
    assert (await engine.query(KIND, CUSTOMER, {})).pagination.records == 1


# --- failures happen before the store is read ---

def _spy_engine():
    store = AsyncMock()
    store.scan.return_value = ()
    return QueryEngine(store), store


async def test_forbidden_role_fails_before_scan():
    engine, store = _spy_engine()
    kind = KIND.model_copy(update={"readable_by": frozenset({Role.BUYER})})
    with pytest.raises(ForbiddenError):
        await engine.query(kind, CUSTOMER, {})
    store.scan.assert_not_called()


async def test_anonymous_is_forbidden_by_default():
    engine, store = _spy_engine()
    with pytest.raises(ForbiddenError):
        await engine.query(KIND, ActorContext(id="anon", role=Role.ANONYMOUS), {})
    store.scan.assert_not_called()


@pytest.mark.parametrize(
    "body",
    [
        {"colour": "red"},
        {"page": 0},
        {"limit": 0},
        {"limit": 101},
        {"sort": "secret:asc"},
        {"sort": "amount:up"},
        {"amount": {"from": 5, "to": 1}},
        {"page": "1"},
    ],
)
async def test_invalid_request_fails_before_scan(body):
    engine, store = _spy_engine()
    with pytest.raises(ValidationError):
        await engine.query(KIND, CUSTOMER, body)
    store.scan.assert_not_called()


async def test_deleted_true_by_customer_fails_before_scan():
    engine, store = _spy_engine()
    with pytest.raises(ForbiddenError):
        await engine.query(KIND, CUSTOMER, {"deleted": True})
    store.scan.assert_not_called()


async def test_scans_only_the_requested_kind():
    engine, store = _spy_engine()
    await engine.query(KIND, CUSTOMER, {})
    store.scan.assert_awaited_once_with("inquiry")


async def test_naive_created_at_matches_builtin_range_filter():
    naive = Entity(kind=KIND.name, owner_ref="cust-1", created_at=datetime(2025, 6, 1))
    engine = await _engine(naive)
    window = {"from": "2025-01-01T00:00:00Z", "to": "2025-12-31T00:00:00Z"}
    result = await engine.query(KIND, CUSTOMER, {"created_at": window})
    assert [e.id for e in result.data] == [naive.id]


async def test_engine_sorts_through_the_sort_builder():
    sorter = SortComparatorBuilder()
    spy = MagicMock(wraps=sorter)
    store = InMemoryEntityStore()
    await store.put(KIND.name, _entity(0), create=True)
    await QueryEngine(store, sorter=spy).query(KIND, CUSTOMER, {"sort": "amount:desc"})
    spy.sort.assert_called_once()
    assert spy.sort.call_args.args[2] == "amount:desc"


# --- returned records are copies ---

async def test_mutating_a_result_does_not_change_the_store():
    record = _entity(0, status="paid")
    engine = await _engine(record)
    page = await engine.query(KIND, CUSTOMER, {})
    page.data[0].fields["status"] = "refunded"
    again = await engine.query(KIND, CUSTOMER, {"status": "paid"})
    assert [e.id for e in again.data] == [record.id]
