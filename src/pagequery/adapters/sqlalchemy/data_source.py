"""SQLAlchemy adapter – SqlAlchemyDataSource.

Translates a :class:`PredicateTree` into ``WHERE`` clauses on a mapped model::

    eq         col = :v            (col IS NULL for None)
    in         col IN (...)
    gte / lte  col >= :v / col <= :v
    contains   col LIKE '%v%'      (autoescaped)
    icontains  lower(col) LIKE lower('%v%')
    is_null    col IS NULL / col IS NOT NULL
    AnyOf      (a OR b OR ...)

Ordering is the requested sort key followed by the primary key, so pages are
stable when the sort column has duplicates. Field names resolve only to mapped
column attributes. An offset past the signed 64-bit range SQL backends accept
is an empty page, not a query.
"""
from __future__ import annotations

from typing import Any, Callable, Generic, Sequence, TypeVar

from sqlalchemy import ColumnElement, func, inspect, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pagequery.application.filtering import AnyOf, Node, Operator, Predicate, PredicateTree
from pagequery.application.sorting import SortKey
from pagequery.kernel.errors import DataSourceError

TModel = TypeVar("TModel")

_MAX_SQL_INT = 2**63 - 1

__all__ = ["SqlAlchemyDataSource"]


class SqlAlchemyDataSource(Generic[TModel]):
    """Data source over one mapped model class."""

    def __init__(
        self,
        session_factory: Callable[[], AsyncSession],
        model: type[TModel],
        *,
        tiebreakers: Sequence[str] | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._model = model
        mapper = inspect(model)
        self._columns = frozenset(attr.key for attr in mapper.column_attrs)
        if tiebreakers is None:
            tiebreakers = [mapper.get_property_by_column(column).key for column in mapper.primary_key]
        self._tiebreakers = tuple(tiebreakers)

    async def count(self, tree: PredicateTree) -> int:
        stmt = select(func.count()).select_from(self._model).where(*self._where(tree))
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return int(result.scalar_one())
        except SQLAlchemyError as exc:
            raise DataSourceError(operation="count", cause=exc) from exc

    async def fetch(
        self,
        tree: PredicateTree,
        sort_key: SortKey,
        offset: int,
        limit: int,
    ) -> list[TModel]:
        stmt = (
            select(self._model)
            .where(*self._where(tree))
            .order_by(*self._order_by(sort_key))
        )
        if offset > _MAX_SQL_INT:
            return []
        stmt = stmt.offset(offset).limit(min(limit, _MAX_SQL_INT))
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return list(result.scalars().all())
        except SQLAlchemyError as exc:
            raise DataSourceError(operation="fetch", cause=exc) from exc

    # -- compilation ------------------------------------------------------

    def _column(self, name: str) -> Any:
        if name not in self._columns:
            raise DataSourceError(f"{self._model.__name__} has no column '{name}'")
        return getattr(self._model, name)

    def _where(self, tree: PredicateTree) -> list[ColumnElement[bool]]:
        return [self._node(node) for node in tree]

    def _node(self, node: Node) -> ColumnElement[bool]:
        if isinstance(node, AnyOf):
            return or_(*(self._predicate(predicate) for predicate in node.predicates))
        return self._predicate(node)

    def _predicate(self, predicate: Predicate) -> ColumnElement[bool]:  # noqa: PLR0911
        column = self._column(predicate.field)
        value = predicate.value
        match predicate.operator:
            case Operator.EQ:
                return column.is_(None) if value is None else column == value
            case Operator.IN:
                return column.in_(list(value))
            case Operator.GTE:
                return column >= value
            case Operator.LTE:
                return column <= value
            case Operator.CONTAINS:
                return column.contains(value, autoescape=True)
            case Operator.ICONTAINS:
                return column.icontains(value, autoescape=True)
            case Operator.IS_NULL:
                return column.is_(None) if value else column.is_not(None)
        raise DataSourceError(f"unsupported operator {predicate.operator!r}")

    def _order_by(self, sort_key: SortKey) -> list[Any]:
        primary = self._column(sort_key.field)
        clauses = [primary.desc() if sort_key.descending else primary.asc()]
        for name in self._tiebreakers:
            if name != sort_key.field:
                clauses.append(self._column(name).asc())
        return clauses
