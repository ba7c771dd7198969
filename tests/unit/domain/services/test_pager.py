"""Tests for src/domain/services/pager.py."""

import pytest

from src.domain.exceptions import ValidationError
from src.domain.services.pager import DEFAULT_LIMIT, MAX_LIMIT, Pager


RECORDS = list(range(1, 6))  # five records


# --- slicing ---

def test_first_page():
    result = Pager().paginate(RECORDS, page=1, limit=2)
    assert result.data == [1, 2]


def test_last_partial_page():
    result = Pager().paginate(RECORDS, page=3, limit=2)
    assert result.data == [5]
    assert result.pagination.pages == 3


def test_page_beyond_last_is_empty_not_error():
    result = Pager().paginate(RECORDS, page=9, limit=2)
    assert result.data == []
    assert result.pagination.current == 9
    assert result.pagination.records == 5


def test_pages_cover_all_records_once():
    pager = Pager()
    pages = pager.paginate(RECORDS, page=1, limit=2).pagination.pages
    seen = [x for p in range(1, pages + 1) for x in pager.paginate(RECORDS, page=p, limit=2).data]
    assert seen == RECORDS


# --- metadata ---

def test_metadata_fields():
    pagination = Pager().paginate(RECORDS, page=2, limit=2).pagination
    assert (pagination.current, pagination.limit, pagination.records, pagination.pages) == (2, 2, 5, 3)


def test_empty_records_have_zero_pages():
    pagination = Pager().paginate([], page=1, limit=10).pagination
    assert pagination.records == 0
    assert pagination.pages == 0


def test_exact_multiple_has_no_extra_page():
    assert Pager().paginate(list(range(4)), page=1, limit=2).pagination.pages == 2


def test_default_limit_applied_when_none():
    assert Pager().paginate(RECORDS, page=1).pagination.limit == DEFAULT_LIMIT


def test_configured_default_limit():
    assert Pager(max_limit=50, default_limit=20).paginate(RECORDS, page=1).pagination.limit == 20


# --- validation ---

@pytest.mark.parametrize("page", [0, -1])
def test_page_below_one_raises(page):
    with pytest.raises(ValidationError):
        Pager().validate(page, 10)


@pytest.mark.parametrize("limit", [0, -5, MAX_LIMIT + 1])
def test_limit_out_of_range_raises(limit):
    with pytest.raises(ValidationError):
        Pager().validate(1, limit)


def test_limit_at_max_is_accepted():
    assert Pager().validate(1, MAX_LIMIT) == (1, MAX_LIMIT)


def test_bool_page_is_rejected():
    with pytest.raises(ValidationError):
        Pager().validate(True, 10)  # type: ignore[arg-type]


def test_invalid_configuration_raises():
    with pytest.raises(ValueError):
        Pager(max_limit=10, default_limit=20)
