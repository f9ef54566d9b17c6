"""Application filtering – FilterCompiler.

Turns the filter part of a :class:`~pagequery.application.search.request.SearchRequest`
into a :class:`PredicateTree` for one entity.

Rules
-----
* A value that is absent or ``None`` is never a constraint, whatever the kind.
* A non-null value for an undeclared (or non-filterable) field raises
  :class:`InvalidFilterField`; nothing is silently dropped.
* An empty enum selection, empty substring or empty range is no constraint.
* Output follows whitelist declaration order, not request order.
"""
from __future__ import annotations

import math
import uuid
from collections.abc import Mapping, Set
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any, Callable, Iterable

from pagequery.application.filtering.predicate import AnyOf, Node, Operator, Predicate, PredicateTree
from pagequery.application.whitelist import FieldSpec, FieldWhitelist, FilterKind
from pagequery.kernel.errors import InvalidFilterField, InvalidFilterValue
from pagequery.kernel.time import parse_date, parse_datetime

if TYPE_CHECKING:
    from pagequery.application.search.request import SearchRequest

_RANGE_KEYS = frozenset({"from", "to"})


class FilterCompiler:
    """Compile search filters against a whitelist.

    Args:
        whitelist: Declarations of the entity being searched.
        case_sensitive: Whether ``CONTAINS`` fields and the free-text search
            term match case-sensitively.
    """

    def __init__(self, whitelist: FieldWhitelist, *, case_sensitive: bool = False) -> None:
        self._whitelist = whitelist
        self._contains = Operator.CONTAINS if case_sensitive else Operator.ICONTAINS
        self._emitters: dict[FilterKind, Callable[[FieldSpec, Any], list[Predicate]]] = {
            FilterKind.EXACT: self._exact,
            FilterKind.CONTAINS: self._substring,
            FilterKind.ENUM: self._enum,
            FilterKind.UUID: self._uuid,
            FilterKind.BOOLEAN: self._boolean,
            FilterKind.DATE_RANGE: self._range,
            FilterKind.DATETIME_RANGE: self._range,
            FilterKind.NUMERIC_RANGE: self._range,
        }

    @property
    def whitelist(self) -> FieldWhitelist:
        return self._whitelist

    def compile(self, request: "SearchRequest", *, scope: Iterable[Node] = ()) -> PredicateTree:
        """Return the predicate tree for *request*.

        *scope* nodes are server-side constraints (tenant, soft delete, ...);
        they bypass the whitelist and come first in the tree.

        Raises:
            InvalidFilterField: a non-null value targets an undeclared field.
            InvalidFilterValue: a value does not fit its field's kind.
        """
        filters = request.filters
        for name, value in filters.items():
            if value is not None and not self._whitelist.is_filterable(name):
                raise InvalidFilterField(name, entity=self._whitelist.entity)

        nodes: list[Node] = list(scope)
        for spec in self._whitelist:
            value = filters.get(spec.name)
            if value is None or not spec.filterable:
                continue
            nodes.extend(self._emitters[spec.kind](spec, value))

        term = request.search
        if term is not None:
            search_node = self._search(term)
            if search_node is not None:
                nodes.append(search_node)
        return PredicateTree(tuple(nodes))

    # -- kinds ----------------------------------------------------------

    def _exact(self, spec: FieldSpec, value: Any) -> list[Predicate]:
        return [Predicate(spec.source, Operator.EQ, _require_str(spec, value))]

    def _substring(self, spec: FieldSpec, value: Any) -> list[Predicate]:
        text = _require_str(spec, value)
        if text == "":
            return []
        return [Predicate(spec.source, self._contains, text)]

    def _enum(self, spec: FieldSpec, value: Any) -> list[Predicate]:
        if isinstance(value, str):
            _check_choice(spec, value)
            return [Predicate(spec.source, Operator.EQ, value)]
        if isinstance(value, Mapping) or not isinstance(value, (list, tuple, Set)):
            raise InvalidFilterValue(spec.name, value, "expected a value or a list of values")
        if not all(isinstance(item, str) for item in value):
            raise InvalidFilterValue(spec.name, value, "selection values must be strings")
        items = sorted(value) if isinstance(value, Set) else list(value)
        selected: list[str] = []
        for item in items:
            _check_choice(spec, item)
            if item not in selected:
                selected.append(item)
        if not selected:
            return []
        return [Predicate(spec.source, Operator.IN, tuple(selected))]

    def _uuid(self, spec: FieldSpec, value: Any) -> list[Predicate]:
        if isinstance(value, uuid.UUID):
            return [Predicate(spec.source, Operator.EQ, value)]
        if not isinstance(value, str):
            raise InvalidFilterValue(spec.name, value, "expected a UUID string")
        try:
            parsed = uuid.UUID(value)
        except ValueError:
            raise InvalidFilterValue(spec.name, value, "not a valid UUID") from None
        return [Predicate(spec.source, Operator.EQ, parsed)]

    def _boolean(self, spec: FieldSpec, value: Any) -> list[Predicate]:
        if isinstance(value, str) and value.lower() in ("true", "false"):
            value = value.lower() == "true"
        if not isinstance(value, bool):
            raise InvalidFilterValue(spec.name, value, "expected true or false")
        return [Predicate(spec.source, Operator.EQ, value)]

    def _range(self, spec: FieldSpec, value: Any) -> list[Predicate]:
        if not isinstance(value, Mapping):
            raise InvalidFilterValue(spec.name, value, "expected an object with 'from' and/or 'to'")
        unknown = set(value) - _RANGE_KEYS
        if unknown:
            raise InvalidFilterValue(
                spec.name, value, f"unexpected range keys: {', '.join(sorted(map(str, unknown)))}"
            )
        out: list[Predicate] = []
        for key, operator in (("from", Operator.GTE), ("to", Operator.LTE)):
            bound = value.get(key)
            if bound is not None:
                out.append(Predicate(spec.source, operator, _parse_bound(spec, bound)))
        return out

    def _search(self, term: Any) -> AnyOf | None:
        if not isinstance(term, str):
            raise InvalidFilterValue("search", term, "expected a string")
        if term == "":
            return None
        fields = self._whitelist.search_fields
        if not fields:
            raise InvalidFilterField("search", entity=self._whitelist.entity)
        return AnyOf(tuple(Predicate(spec.source, self._contains, term) for spec in fields))


def _require_str(spec: FieldSpec, value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidFilterValue(spec.name, value, "expected a string")
    return value


def _check_choice(spec: FieldSpec, value: str) -> None:
    if spec.choices is not None and value not in spec.choices:
        raise InvalidFilterValue(
            spec.name, value, f"must be one of: {', '.join(spec.choices)}"
        )


def _parse_bound(spec: FieldSpec, bound: Any) -> Any:
    try:
        if spec.kind is FilterKind.DATE_RANGE:
            return parse_date(bound)
        if spec.kind is FilterKind.DATETIME_RANGE:
            return parse_datetime(bound)
        return _parse_number(bound)
    except (TypeError, ValueError, InvalidOperation):
        raise InvalidFilterValue(
            spec.name, bound, f"not a valid {spec.kind.value.replace('_range', '')}"
        ) from None


def _parse_number(bound: Any) -> int | float | Decimal:
    if isinstance(bound, bool):
        raise TypeError("booleans are not numbers")
    if isinstance(bound, (int, float, Decimal)):
        number = bound
    elif isinstance(bound, str):
        number = Decimal(bound.strip())
    else:
        raise TypeError(f"unsupported type {type(bound).__name__}")
    if isinstance(number, Decimal) and not number.is_finite():
        raise ValueError("number must be finite")
    if isinstance(number, float) and not math.isfinite(number):
        raise ValueError("number must be finite")
    return number


__all__ = ["FilterCompiler"]
