"""Application sorting – SortResolver.

Sorting is a preference, not a constraint: any directive the whitelist does
not accept resolves to the configured default instead of failing.

Accepted directive forms::

    SortKey("created_at", SortDirection.DESC)
    {"field": "created_at", "direction": "desc"}
    "created_at:desc"
    "-created_at"            # descending shorthand
    "created_at"             # ascending, or the separate ``order`` value
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pagequery.application.sorting.sort import SortDirection, SortKey
from pagequery.application.whitelist import FieldWhitelist, WhitelistDefinitionError
from pagequery.observability.logging import get_logger

_log = get_logger(__name__)


class SortResolver:
    def __init__(
        self,
        whitelist: FieldWhitelist,
        default_field: str,
        default_direction: SortDirection | str = SortDirection.DESC,
    ) -> None:
        spec = whitelist.lookup(default_field)
        if spec is None or not spec.sortable:
            raise WhitelistDefinitionError(
                f"{whitelist.entity}: default sort field '{default_field}' is not sortable"
            )
        direction = SortDirection.parse(default_direction)
        if direction is None:
            raise WhitelistDefinitionError(
                f"{whitelist.entity}: invalid default sort direction {default_direction!r}"
            )
        self._whitelist = whitelist
        self._default = SortKey(spec.source, direction)

    @property
    def default(self) -> SortKey:
        return self._default

    def resolve(self, directive: Any = None, order: Any = None) -> SortKey:
        """Return the sort key for *directive*, falling back to the default."""
        if directive is None:
            return self._default
        field, direction = _split(directive, order)
        spec = self._whitelist.lookup(field) if isinstance(field, str) else None
        parsed = SortDirection.parse(direction)
        if spec is None or not spec.sortable or parsed is None:
            _log.debug(
                "sort.fallback",
                entity=self._whitelist.entity,
                directive=repr(directive),
                default=self._default.field,
            )
            return self._default
        return SortKey(spec.source, parsed)


def _split(directive: Any, order: Any) -> tuple[Any, Any]:
    implicit = order if order is not None else SortDirection.ASC
    if isinstance(directive, SortKey):
        return directive.field, directive.direction
    if isinstance(directive, Mapping):
        direction = directive.get("direction")
        return directive.get("field"), implicit if direction is None else direction
    if isinstance(directive, str):
        text = directive.strip()
        if ":" in text:
            field, _, direction = text.partition(":")
            return field.strip(), direction
        if text.startswith("-"):
            return text[1:], SortDirection.DESC
        if text.startswith("+"):
            return text[1:], SortDirection.ASC
        return text, implicit
    return None, None


__all__ = ["SortResolver"]
