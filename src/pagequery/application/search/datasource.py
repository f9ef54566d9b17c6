"""Application search – DataSource port."""
from __future__ import annotations

from typing import Any, Protocol, Sequence, runtime_checkable

from pagequery.application.filtering import PredicateTree
from pagequery.application.sorting import SortKey

__all__ = ["DataSource"]


@runtime_checkable
class DataSource(Protocol):
    """Port: the two reads a search needs from storage.

    Implementations live in ``adapters/memory`` and ``adapters/sqlalchemy``.
    Both reads must apply the same predicate tree; they are not required to
    observe the same snapshot.
    """

    async def count(self, tree: PredicateTree) -> int: ...

    async def fetch(
        self,
        tree: PredicateTree,
        sort_key: SortKey,
        offset: int,
        limit: int,
    ) -> Sequence[Any]: ...
