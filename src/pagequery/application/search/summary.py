"""Application search – summary row mapping.

A :class:`SummaryMapper` projects a storage row (mapping or ORM object) onto
the declared summary shape:

* only declared fields are emitted, so internal columns never leak;
* ``None`` values are omitted from the summary rather than sent as null;
* dates and date-times always go through the kernel normalizers.
"""
from __future__ import annotations

import dataclasses
import uuid
from enum import Enum
from typing import Any, Iterable, Mapping

from pagequery.application.whitelist import WhitelistDefinitionError
from pagequery.kernel.time import format_date, format_datetime


class ValueKind(str, Enum):
    VALUE = "value"
    DATE = "date"
    DATETIME = "datetime"


@dataclasses.dataclass(frozen=True)
class SummaryField:
    name: str
    kind: ValueKind = ValueKind.VALUE
    source: str | None = None

    @property
    def attribute(self) -> str:
        return self.source or self.name


class SummaryMapper:
    """Row → summary dict for one entity."""

    def __init__(self, fields: Iterable[SummaryField | str]) -> None:
        declared: list[SummaryField] = []
        names: set[str] = set()
        for item in fields:
            spec = SummaryField(item) if isinstance(item, str) else item
            if spec.name in names:
                raise WhitelistDefinitionError(f"summary field '{spec.name}' declared twice")
            names.add(spec.name)
            declared.append(spec)
        self._fields = tuple(declared)

    @property
    def fields(self) -> tuple[SummaryField, ...]:
        return self._fields

    def map_row(self, row: Any) -> dict[str, Any]:
        summary: dict[str, Any] = {}
        for spec in self._fields:
            value = _read(row, spec.attribute)
            if value is None:
                continue
            summary[spec.name] = _serialise(spec.kind, value)
        return summary

    __call__ = map_row


def _read(row: Any, attribute: str) -> Any:
    if isinstance(row, Mapping):
        return row.get(attribute)
    return getattr(row, attribute, None)


def _serialise(kind: ValueKind, value: Any) -> Any:
    if kind is ValueKind.DATETIME:
        return format_datetime(value)
    if kind is ValueKind.DATE:
        return format_date(value)
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    return value


__all__ = ["SummaryField", "SummaryMapper", "ValueKind"]
