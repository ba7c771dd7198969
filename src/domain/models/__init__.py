"""Domain model package.

All domain objects are pure Python / Pydantic models with no ORM or
infrastructure dependencies.  Import from this package to avoid coupling
application code to individual module paths.
"""

from .catalog import (
    ATTACHMENT,
    AUDIT_LOG,
    CART,
    CATALOG,
    COMMENT,
    FAVORITE_PRODUCT,
    INQUIRY,
    MILEAGE_TRANSACTION,
    ORDER,
    PAYMENT,
    REVIEW,
    get_kind,
)
from .entities import AUDIT_FIELDS, ActorContext, Entity
from .enums import Constraint, Role, SortDirection
from .kinds import EntityKind, FilterField, filter_field
from .query import FilterRequest, PageResult, Pagination

__all__ = [
    # enums
    "Constraint",
    "Role",
    "SortDirection",
    # entities
    "AUDIT_FIELDS",
    "ActorContext",
    "Entity",
    # kinds
    "EntityKind",
    "FilterField",
    "filter_field",
    # query
    "FilterRequest",
    "PageResult",
    "Pagination",
    # catalog
    "CATALOG",
    "get_kind",
    "CART",
    "ORDER",
    "PAYMENT",
    "FAVORITE_PRODUCT",
    "INQUIRY",
    "COMMENT",
    "REVIEW",
    "MILEAGE_TRANSACTION",
    "ATTACHMENT",
    "AUDIT_LOG",
]
