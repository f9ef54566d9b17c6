"""Application whitelist – FieldWhitelist and WhitelistRegistry.

A whitelist is declared once per entity at startup and shared read-only by
every request. Anything it does not declare cannot be filtered or sorted.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Iterable, Iterator

from pagequery.application.whitelist.field_spec import FieldSpec, FilterKind

if TYPE_CHECKING:
    from pagequery.application.search.entity import EntityDefinition

RESERVED_KEYS: frozenset[str] = frozenset({"page", "limit", "page_size", "sort", "order", "search"})


class WhitelistDefinitionError(ValueError):
    """A static whitelist / entity declaration is inconsistent."""


class FieldWhitelist:
    """Closed, immutable set of fields a search request may reference."""

    __slots__ = ("_entity", "_fields", "_search_fields")

    def __init__(
        self,
        entity: str,
        fields: Iterable[FieldSpec],
        *,
        search_fields: Iterable[str] = (),
    ) -> None:
        declared: dict[str, FieldSpec] = {}
        for spec in fields:
            if spec.name in declared:
                raise WhitelistDefinitionError(f"{entity}: field '{spec.name}' declared twice")
            if spec.name in RESERVED_KEYS:
                raise WhitelistDefinitionError(
                    f"{entity}: '{spec.name}' is a reserved request key"
                )
            if spec.choices is not None and spec.kind is not FilterKind.ENUM:
                raise WhitelistDefinitionError(
                    f"{entity}: choices are only valid on enum fields ('{spec.name}')"
                )
            declared[spec.name] = spec

        searchable: list[FieldSpec] = []
        for name in search_fields:
            spec = declared.get(name)
            if spec is None or not spec.kind.is_text:
                raise WhitelistDefinitionError(
                    f"{entity}: search field '{name}' must be a declared text field"
                )
            searchable.append(spec)

        self._entity = entity
        self._fields = MappingProxyType(declared)
        self._search_fields = tuple(searchable)

    @property
    def entity(self) -> str:
        return self._entity

    @property
    def search_fields(self) -> tuple[FieldSpec, ...]:
        return self._search_fields

    def lookup(self, name: str) -> FieldSpec | None:
        """Return the declaration for *name*, or ``None`` when not allowed."""
        return self._fields.get(name)

    def is_filterable(self, name: str) -> bool:
        spec = self._fields.get(name)
        return spec is not None and spec.filterable

    def is_sortable(self, name: str) -> bool:
        spec = self._fields.get(name)
        return spec is not None and spec.sortable

    def sortable_fields(self) -> tuple[str, ...]:
        return tuple(name for name, spec in self._fields.items() if spec.sortable)

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __repr__(self) -> str:
        return f"FieldWhitelist({self._entity!r}, fields={list(self._fields)!r})"


class WhitelistRegistry:
    """Entity name → whitelist, populated at startup."""

    def __init__(self) -> None:
        self._whitelists: dict[str, FieldWhitelist] = {}

    def register(self, item: FieldWhitelist | "EntityDefinition") -> None:
        whitelist = item if isinstance(item, FieldWhitelist) else item.whitelist
        if whitelist.entity in self._whitelists:
            raise WhitelistDefinitionError(f"entity '{whitelist.entity}' is already registered")
        self._whitelists[whitelist.entity] = whitelist

    def get(self, entity: str) -> FieldWhitelist:
        try:
            return self._whitelists[entity]
        except KeyError:
            raise KeyError(f"no whitelist registered for entity '{entity}'") from None

    def lookup(self, entity: str, name: str) -> FieldSpec | None:
        """Return the field declaration, or ``None`` (NotAllowed) for unknown entities or fields."""
        whitelist = self._whitelists.get(entity)
        if whitelist is None:
            return None
        return whitelist.lookup(name)

    def entities(self) -> list[str]:
        return sorted(self._whitelists)


__all__ = ["RESERVED_KEYS", "FieldWhitelist", "WhitelistDefinitionError", "WhitelistRegistry"]
