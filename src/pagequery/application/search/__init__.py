"""Application search – request, data-source port, row mapping and the search pipeline."""
from pagequery.application.search.request import SearchRequest
from pagequery.application.search.datasource import DataSource
from pagequery.application.search.summary import SummaryField, SummaryMapper, ValueKind
from pagequery.application.search.entity import EntityDefinition
from pagequery.application.search.assembler import PageAssembler
from pagequery.application.search.service import SearchService

__all__ = [
    "DataSource",
    "EntityDefinition",
    "PageAssembler",
    "SearchRequest",
    "SearchService",
    "SummaryField",
    "SummaryMapper",
    "ValueKind",
]
