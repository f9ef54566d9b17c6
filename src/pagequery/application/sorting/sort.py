"""Application sorting – SortDirection and SortKey."""
from __future__ import annotations

import dataclasses
from enum import Enum


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: object) -> "SortDirection | None":
        """Return the direction for *value* (case-insensitive), or ``None``."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return None
        return None


@dataclasses.dataclass(frozen=True)
class SortKey:
    """The single active ordering of a search, on a storage column."""

    field: str
    direction: SortDirection = SortDirection.ASC

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESC


__all__ = ["SortDirection", "SortKey"]
