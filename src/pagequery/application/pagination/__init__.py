"""Application pagination – page bounds, clamping and the page envelope."""
from pagequery.application.pagination.page_request import PageBounds, Paginator, total_pages
from pagequery.application.pagination.page import PageEnvelope, Pagination

__all__ = ["PageBounds", "PageEnvelope", "Pagination", "Paginator", "total_pages"]
