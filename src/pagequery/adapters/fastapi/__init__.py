"""FastAPI adapter – error mapping and the search request body dependency."""
from pagequery.adapters.fastapi.deps import FastAPISearchRequestDep, search_request_body
from pagequery.adapters.fastapi.exception_mapper import FastAPIExceptionMapper

__all__ = ["FastAPIExceptionMapper", "FastAPISearchRequestDep", "search_request_body"]
