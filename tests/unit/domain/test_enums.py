"""Tests for src/domain/models/enums.py."""

from src.domain.models.enums import Constraint, Role, SortDirection


# --- Role.is_privileged ---

def test_admin_is_privileged():
    assert Role.ADMIN.is_privileged is True


def test_customer_is_not_privileged():
    assert Role.CUSTOMER.is_privileged is False


def test_seller_is_not_privileged():
    assert Role.SELLER.is_privileged is False


def test_anonymous_is_not_privileged():
    assert Role.ANONYMOUS.is_privileged is False


# --- str mixin ---

def test_role_compares_equal_to_plain_string():
    assert Role.BUYER == "buyer"


def test_role_parses_from_value():
    assert Role("seller") is Role.SELLER


def test_constraint_values():
    assert {c.value for c in Constraint} == {"exact", "contains", "range", "one_of"}


def test_sort_direction_values():
    assert SortDirection("asc") is SortDirection.ASC
    assert SortDirection("desc") is SortDirection.DESC
