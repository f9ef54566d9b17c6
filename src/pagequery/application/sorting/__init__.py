"""Application sorting – sort keys and the lenient directive resolver."""
from pagequery.application.sorting.sort import SortDirection, SortKey
from pagequery.application.sorting.resolver import SortResolver

__all__ = ["SortDirection", "SortKey", "SortResolver"]
