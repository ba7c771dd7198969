"""Domain-specific exceptions: framework-independent.

QueryError subclasses are terminal for the call and map to 4xx-equivalent
responses at the route layer.  Messages carry only caller-facing detail;
storage internals never appear in them.
"""

from __future__ import annotations


class QueryError(Exception):
    """Base class for business errors surfaced to callers."""


class ValidationError(QueryError):
    """Malformed request: unknown filter key, bad page/limit, bad sort."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class ForbiddenError(QueryError):
    """The actor's role or ownership does not permit the requested access."""


class NotFoundError(QueryError):
    """Raised when a requested entity does not exist (or is hidden)."""

    def __init__(self, kind: str, entity_id: object):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} with id '{entity_id}' not found")


class ConflictError(QueryError):
    """The entity's lifecycle state forbids the operation (e.g. already deleted)."""


class DuplicateEntityError(QueryError):
    """Raised when inserting a record whose id already exists for its kind."""

    def __init__(self, kind: str, entity_id: object):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} with id '{entity_id}' already exists")
