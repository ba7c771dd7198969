"""Offset/limit paging with IPage-style metadata."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TypeVar

from src.domain.exceptions import ValidationError
from src.domain.models.query import PageResult, Pagination

T = TypeVar("T")

MAX_LIMIT = 100
DEFAULT_LIMIT = 100


class Pager:
    """Slices a filtered, sorted sequence into one page.

    page is 1-based.  A page past the last one is not an error: data is
    empty and current still echoes the requested page.
    """

    def __init__(self, max_limit: int = MAX_LIMIT, default_limit: int = DEFAULT_LIMIT) -> None:
        if max_limit < 1:
            raise ValueError(f"max_limit must be positive, got {max_limit}")
        if not 1 <= default_limit <= max_limit:
            raise ValueError(
                f"default_limit must be in [1, {max_limit}], got {default_limit}"
            )
        self.max_limit = max_limit
        self.default_limit = default_limit

    def validate(self, page: int, limit: int | None) -> tuple[int, int]:
        """Return (page, limit) with the default limit applied.

        Raises ValidationError when page < 1 or limit is outside [1, max_limit].
        """
        if limit is None:
            limit = self.default_limit
        if not _is_int(page) or page < 1:
            raise ValidationError(f"page must be an integer >= 1, got {page!r}", field="page")
        if not _is_int(limit) or not 1 <= limit <= self.max_limit:
            raise ValidationError(
                f"limit must be an integer in [1, {self.max_limit}], got {limit!r}",
                field="limit",
            )
        return page, limit

    def paginate(self, records: Sequence[T], page: int, limit: int | None = None) -> PageResult[T]:
        page, limit = self.validate(page, limit)
        total = len(records)
        offset = (page - 1) * limit
        return PageResult(
            data=list(records[offset : offset + limit]),
            pagination=Pagination(
                current=page,
                limit=limit,
                records=total,
                pages=math.ceil(total / limit),
            ),
        )


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
