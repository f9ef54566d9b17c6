"""Application pagination – PageBounds and Paginator."""
from __future__ import annotations

import dataclasses
from decimal import Decimal
from typing import Any


@dataclasses.dataclass(frozen=True)
class PageBounds:
    """Offset-based window of one page; ``offset == (page - 1) * limit``."""

    page: int
    limit: int

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if self.limit < 1:
            raise ValueError("limit must be >= 1")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class Paginator:
    """Clamp client page/limit input into :class:`PageBounds`.

    Out-of-range input is corrected, never rejected. There is no upper bound
    on ``page``: a page past the last one is a legal, empty page.
    """

    def __init__(self, default_limit: int = 20, max_limit: int = 100) -> None:
        if default_limit < 1 or max_limit < 1:
            raise ValueError("default_limit and max_limit must be >= 1")
        if default_limit > max_limit:
            raise ValueError("default_limit must not exceed max_limit")
        self.default_limit = default_limit
        self.max_limit = max_limit

    def compute_bounds(self, page: Any = None, limit: Any = None) -> PageBounds:
        requested_page = _as_int(page)
        if requested_page is None or requested_page < 1:
            requested_page = 1
        requested_limit = _as_int(limit)
        if requested_limit is None or requested_limit < 1:
            requested_limit = self.default_limit
        return PageBounds(page=requested_page, limit=min(requested_limit, self.max_limit))


def total_pages(records: int, limit: int) -> int:
    """``ceil(records / limit)``; 0 when there are no records."""
    if records <= 0 or limit <= 0:
        return 0
    return -(-records // limit)


def _as_int(value: Any) -> int | None:
    """Integral value of *value*, or ``None`` for anything non-integer."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, Decimal):
        if value.is_finite() and value == value.to_integral_value():
            return int(value)
        return None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


__all__ = ["PageBounds", "Paginator", "total_pages"]
