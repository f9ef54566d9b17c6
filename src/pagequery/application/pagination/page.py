"""Application pagination – Pagination and PageEnvelope."""
from __future__ import annotations

import dataclasses
from typing import Any, Callable, Generic, TypeVar

from pagequery.application.pagination.page_request import PageBounds, total_pages

T = TypeVar("T")


@dataclasses.dataclass(frozen=True)
class Pagination:
    """Page metadata.

    ``current`` echoes the requested (clamped) page and may exceed ``pages``.
    """

    current: int
    limit: int
    records: int
    pages: int

    @classmethod
    def of(cls, bounds: PageBounds, records: int) -> "Pagination":
        return cls(
            current=bounds.page,
            limit=bounds.limit,
            records=records,
            pages=total_pages(records, bounds.limit),
        )

    @property
    def has_next(self) -> bool:
        return self.current < self.pages

    @property
    def has_previous(self) -> bool:
        return self.current > 1

    def to_dict(self) -> dict[str, int]:
        return dataclasses.asdict(self)


@dataclasses.dataclass(frozen=True)
class PageEnvelope(Generic[T]):
    """The ``{pagination, data}`` result of a search."""

    pagination: Pagination
    data: list[T]

    def map(self, fn: Callable[[T], Any]) -> "PageEnvelope[Any]":
        """Return a new envelope with each item transformed by *fn*."""
        return PageEnvelope(pagination=self.pagination, data=[fn(item) for item in self.data])

    def to_dict(self) -> dict[str, Any]:
        return {"pagination": self.pagination.to_dict(), "data": list(self.data)}


__all__ = ["PageEnvelope", "Pagination"]
