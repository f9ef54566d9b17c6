"""Application search – SearchRequest value object."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from pagequery.application.whitelist import RESERVED_KEYS

__all__ = ["SearchRequest"]


@dataclass(frozen=True)
class SearchRequest:
    """A flat, declarative search: filters plus paging and sort preferences.

    Values are kept exactly as received; clamping and validation happen in the
    paginator, sort resolver and filter compiler.
    """

    filters: Mapping[str, Any] = field(default_factory=dict)
    page: Any = None
    limit: Any = None
    sort: Any = None
    order: Any = None
    search: Any = None

    @classmethod
    def from_mapping(cls, body: Mapping[str, Any]) -> "SearchRequest":
        """Split a wire body into reserved keys and filters.

        ``page_size`` is accepted as an alias of ``limit``; ``limit`` wins
        when both are set.
        """
        limit = body.get("limit")
        if limit is None:
            limit = body.get("page_size")
        filters = {key: value for key, value in body.items() if key not in RESERVED_KEYS}
        return cls(
            filters=MappingProxyType(filters),
            page=body.get("page"),
            limit=limit,
            sort=body.get("sort"),
            order=body.get("order"),
            search=body.get("search"),
        )
