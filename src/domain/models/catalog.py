"""Commerce entity kinds served by the listing engine.

Each declaration lists the filter keys and sort fields the kind's search
endpoint accepts.  Ownership and soft-delete visibility are handled
uniformly by the query engine and are not repeated here.
"""

from __future__ import annotations

from datetime import datetime

from src.domain.exceptions import NotFoundError

from .enums import Constraint, Role
from .kinds import EntityKind, filter_field

CART = EntityKind(
    name="cart",
    filters=(
        filter_field("status"),
        filter_field("total_quantity", Constraint.RANGE, int),
    ),
    sortable=frozenset({"status", "total_quantity"}),
    readable_by=frozenset({Role.BUYER, Role.CUSTOMER}),
)

ORDER = EntityKind(
    name="order",
    filters=(
        filter_field("status", Constraint.ONE_OF),
        filter_field("order_type"),
        filter_field("currency"),
        filter_field("total_amount", Constraint.RANGE, float),
        filter_field("seller_id"),
    ),
    sortable=frozenset({"status", "total_amount"}),
)

PAYMENT = EntityKind(
    name="payment",
    filters=(
        filter_field("order_id"),
        filter_field("payment_method", Constraint.ONE_OF),
        filter_field("status"),
        filter_field("currency"),
        filter_field("amount", Constraint.RANGE, float),
        filter_field("paid_at", Constraint.RANGE, datetime),
        filter_field("transaction_id"),
    ),
    sortable=frozenset({"amount", "paid_at", "status"}),
    readable_by=frozenset({Role.BUYER, Role.CUSTOMER}),
)

FAVORITE_PRODUCT = EntityKind(
    name="favorite_product",
    filters=(
        filter_field("product_id"),
        filter_field("folder_id"),
        filter_field("label", Constraint.CONTAINS),
    ),
    sortable=frozenset({"label"}),
    readable_by=frozenset({Role.BUYER, Role.CUSTOMER}),
)

INQUIRY = EntityKind(
    name="inquiry",
    filters=(
        filter_field("product_id"),
        filter_field("status", Constraint.ONE_OF),
        filter_field("visibility"),
        filter_field("question", Constraint.CONTAINS),
    ),
    sortable=frozenset({"status"}),
)

COMMENT = EntityKind(
    name="comment",
    filters=(
        filter_field("bulletin_id"),
        filter_field("status"),
        filter_field("body", Constraint.CONTAINS),
    ),
    sortable=frozenset({"status"}),
)

REVIEW = EntityKind(
    name="review",
    filters=(
        filter_field("product_id"),
        filter_field("rating", Constraint.RANGE, int),
        filter_field("title", Constraint.CONTAINS),
    ),
    sortable=frozenset({"rating", "title"}),
    readable_by=frozenset({Role.SELLER, Role.BUYER, Role.CUSTOMER}),
)

MILEAGE_TRANSACTION = EntityKind(
    name="mileage_transaction",
    filters=(
        filter_field("type", Constraint.ONE_OF),
        filter_field("status"),
        filter_field("amount", Constraint.RANGE, float),
    ),
    sortable=frozenset({"amount", "type"}),
    readable_by=frozenset({Role.BUYER, Role.CUSTOMER}),
)

ATTACHMENT = EntityKind(
    name="attachment",
    filters=(
        filter_field("status"),
        filter_field("business_type"),
        filter_field("filename_like", Constraint.CONTAINS, field="filename"),
    ),
    sortable=frozenset({"filename"}),
    readable_by=frozenset({Role.SELLER, Role.BUYER}),
)

# Admin-only: readable_by is empty, so every non-admin is refused.
AUDIT_LOG = EntityKind(
    name="audit_log",
    filters=(
        filter_field("action", Constraint.ONE_OF),
        filter_field("entity_type"),
    ),
    sortable=frozenset({"action"}),
    readable_by=frozenset(),
)

CATALOG: dict[str, EntityKind] = {
    kind.name: kind
    for kind in (
        CART,
        ORDER,
        PAYMENT,
        FAVORITE_PRODUCT,
        INQUIRY,
        COMMENT,
        REVIEW,
        MILEAGE_TRANSACTION,
        ATTACHMENT,
        AUDIT_LOG,
    )
}


def get_kind(name: str) -> EntityKind:
    """Look up a registered kind by name."""
    try:
        return CATALOG[name]
    except KeyError:
        raise NotFoundError("entity kind", name) from None
