"""Application search – EntityDefinition."""
from __future__ import annotations

import dataclasses

from pagequery.application.search.summary import SummaryMapper
from pagequery.application.sorting import SortDirection
from pagequery.application.whitelist import FieldWhitelist

__all__ = ["EntityDefinition"]


@dataclasses.dataclass(frozen=True)
class EntityDefinition:
    """Static, startup-time declarations of one searchable entity."""

    whitelist: FieldWhitelist
    summary: SummaryMapper
    default_sort: str
    default_direction: SortDirection = SortDirection.DESC

    @property
    def name(self) -> str:
        return self.whitelist.entity
