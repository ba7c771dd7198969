"""Domain enumerations for the resource query engine.

All string-valued enums use str mixin so they serialize cleanly to JSON
and remain comparable to plain strings (FastAPI / Pydantic default behaviour).
"""

from enum import Enum


class Role(str, Enum):
    ADMIN = "admin"
    SELLER = "seller"
    BUYER = "buyer"
    CUSTOMER = "customer"
    ANONYMOUS = "anonymous"

    @property
    def is_privileged(self) -> bool:
        """Admins see across owners and may list soft-deleted records."""
        return self is Role.ADMIN


class Constraint(str, Enum):
    """How a filter key is matched against an entity field."""

    EXACT = "exact"
    CONTAINS = "contains"
    RANGE = "range"
    ONE_OF = "one_of"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"
