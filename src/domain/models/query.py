"""Listing request and page result models.

PageResult mirrors the IPage convention used by the commerce API:
``{data: [...], pagination: {current, limit, records, pages}}``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from src.domain.exceptions import ValidationError

T = TypeVar("T")


class FilterRequest(BaseModel):
    """A filter/sort/page request for one entity kind.

    page and limit are validated by the Pager, not here, so that bad values
    surface as the domain ValidationError.  Kind-specific filter keys are
    carried as extra fields and checked against the kind's allow-list by
    the predicate compiler.  A filter key whose value is None is treated
    as absent.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    page: int = Field(default=1, strict=True)
    limit: int | None = Field(default=None, strict=True)
    sort: str | None = None
    deleted: bool | None = Field(default=None, strict=True)

    @property
    def filters(self) -> dict[str, Any]:
        return {k: v for k, v in (self.model_extra or {}).items() if v is not None}

    @classmethod
    def from_body(cls, body: Mapping[str, Any] | None) -> FilterRequest:
        """Build a request from an untyped body, raising the domain ValidationError."""
        if body is not None and not isinstance(body, Mapping):
            raise ValidationError("Request body must be an object")
        try:
            return cls.model_validate(dict(body or {}))
        except PydanticValidationError as exc:
            loc = exc.errors()[0]["loc"]
            field = str(loc[0]) if loc else None
            raise ValidationError(f"Invalid value for '{field}'", field=field) from exc


class Pagination(BaseModel):
    model_config = ConfigDict(frozen=True)

    current: int
    limit: int
    records: int
    pages: int


class PageResult(BaseModel, Generic[T]):
    """One page of a listing; a fresh query re-reads the store."""

    data: list[T]
    pagination: Pagination
