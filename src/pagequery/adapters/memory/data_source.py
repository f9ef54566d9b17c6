"""In-memory adapter – InMemoryDataSource.

Evaluates a :class:`PredicateTree` over a list of rows (dicts or objects).
Useful for tests, fixtures and small static catalogues.
"""
from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Any, Callable, Generic, Iterable, Mapping, TypeVar

from pagequery.application.filtering import AnyOf, Node, Operator, Predicate, PredicateTree
from pagequery.application.sorting import SortKey
from pagequery.kernel.time import parse_datetime, to_utc

T = TypeVar("T")

__all__ = ["InMemoryDataSource"]


class InMemoryDataSource(Generic[T]):
    """Data source backed by a Python list.

    Rows keep their insertion order as the tiebreaker under the requested
    sort; ``None`` values sort last in ascending order and first in
    descending order.
    """

    def __init__(
        self,
        rows: Iterable[T] = (),
        key_fn: Callable[[T], Mapping[str, Any]] | None = None,
    ) -> None:
        self._rows: list[T] = list(rows)
        self._key_fn: Callable[[T], Mapping[str, Any]] = key_fn or _as_mapping

    @property
    def rows(self) -> list[T]:
        return self._rows

    def add(self, row: T) -> None:
        self._rows.append(row)

    async def count(self, tree: PredicateTree) -> int:
        return sum(1 for row in self._rows if self._matches(row, tree))

    async def fetch(self, tree: PredicateTree, sort_key: SortKey, offset: int, limit: int) -> list[T]:
        matched = [row for row in self._rows if self._matches(row, tree)]
        present = [row for row in matched if self._key_fn(row).get(sort_key.field) is not None]
        missing = [row for row in matched if self._key_fn(row).get(sort_key.field) is None]
        present.sort(
            key=lambda row: _sortable(self._key_fn(row)[sort_key.field]),
            reverse=sort_key.descending,
        )
        ordered = missing + present if sort_key.descending else present + missing
        return ordered[offset: offset + limit]

    def _matches(self, row: T, tree: PredicateTree) -> bool:
        values = self._key_fn(row)
        return all(_matches_node(values, node) for node in tree)


def _as_mapping(row: Any) -> Mapping[str, Any]:
    if isinstance(row, Mapping):
        return row
    return vars(row)


def _matches_node(values: Mapping[str, Any], node: Node) -> bool:
    if isinstance(node, AnyOf):
        return any(_matches_predicate(values, predicate) for predicate in node.predicates)
    return _matches_predicate(values, node)


def _matches_predicate(values: Mapping[str, Any], predicate: Predicate) -> bool:  # noqa: PLR0911
    val = values.get(predicate.field)
    match predicate.operator:
        case Operator.IS_NULL:
            return (val is None) is bool(predicate.value)
        case _ if val is None:
            return False
        case Operator.EQ:
            return _comparable(val, predicate.value) == predicate.value
        case Operator.IN:
            return any(_comparable(val, item) == item for item in predicate.value)
        case Operator.GTE:
            return _comparable(val, predicate.value) >= predicate.value
        case Operator.LTE:
            return _comparable(val, predicate.value) <= predicate.value
        case Operator.CONTAINS:
            return predicate.value in str(val)
        case Operator.ICONTAINS:
            return predicate.value.casefold() in str(val).casefold()
    return False


def _comparable(val: Any, like: Any) -> Any:
    """Coerce a stored value to the type of the predicate value it is compared with."""
    if isinstance(like, uuid.UUID) and not isinstance(val, uuid.UUID):
        return uuid.UUID(str(val))
    if isinstance(like, datetime):
        return parse_datetime(val)
    if isinstance(like, date):
        if isinstance(val, datetime):
            return to_utc(val).date()
        if isinstance(val, str):
            return parse_datetime(val).date()
    if isinstance(val, datetime):
        return to_utc(val)
    return val


def _sortable(val: Any) -> Any:
    if isinstance(val, datetime):
        return to_utc(val)
    return val
