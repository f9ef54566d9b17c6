"""FastAPI adapter – SearchRequest body dependency.

Usage::

    @router.patch("/appointments")
    async def search_appointments(request: FastAPISearchRequestDep) -> dict:
        envelope = await service.search(request)
        return envelope.to_dict()
"""
from __future__ import annotations

from typing import Annotated, Any

from fastapi import Body, Depends

from pagequery.application.search import SearchRequest


async def search_request_body(
    body: Annotated[dict[str, Any] | None, Body()] = None,
) -> SearchRequest:
    """Parse the JSON object body into a :class:`SearchRequest` (empty when absent)."""
    return SearchRequest.from_mapping(body or {})


FastAPISearchRequestDep = Annotated[SearchRequest, Depends(search_request_body)]

__all__ = ["FastAPISearchRequestDep", "search_request_body"]
