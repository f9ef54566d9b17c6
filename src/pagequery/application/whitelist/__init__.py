"""Application whitelist – per-entity filterable / sortable field declarations."""
from pagequery.application.whitelist.field_spec import FieldSpec, FilterKind
from pagequery.application.whitelist.whitelist import (
    RESERVED_KEYS,
    FieldWhitelist,
    WhitelistDefinitionError,
    WhitelistRegistry,
)

__all__ = [
    "RESERVED_KEYS",
    "FieldSpec",
    "FieldWhitelist",
    "FilterKind",
    "WhitelistDefinitionError",
    "WhitelistRegistry",
]
