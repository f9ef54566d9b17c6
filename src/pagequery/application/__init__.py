"""Application – the request → filter → page pipeline (framework-agnostic)."""

from pagequery.application.filtering import AnyOf, FilterCompiler, Operator, Predicate, PredicateTree
from pagequery.application.pagination import PageBounds, PageEnvelope, Pagination, Paginator
from pagequery.application.search import (
    DataSource,
    EntityDefinition,
    PageAssembler,
    SearchRequest,
    SearchService,
    SummaryField,
    SummaryMapper,
    ValueKind,
)
from pagequery.application.sorting import SortDirection, SortKey, SortResolver
from pagequery.application.whitelist import FieldSpec, FieldWhitelist, FilterKind, WhitelistRegistry

__all__ = [
    "AnyOf",
    "DataSource",
    "EntityDefinition",
    "FieldSpec",
    "FieldWhitelist",
    "FilterCompiler",
    "FilterKind",
    "Operator",
    "PageAssembler",
    "PageBounds",
    "PageEnvelope",
    "Pagination",
    "Paginator",
    "Predicate",
    "PredicateTree",
    "SearchRequest",
    "SearchService",
    "SortDirection",
    "SortKey",
    "SortResolver",
    "SummaryField",
    "SummaryMapper",
    "ValueKind",
    "WhitelistRegistry",
]
