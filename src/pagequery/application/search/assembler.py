"""Application search – PageAssembler.

Runs the count and the fetch for one page and builds the envelope. The two
reads are independent and may run concurrently; under concurrent writes
``pagination.records`` and ``len(data)`` can disagree, which callers must
tolerate.
"""
from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Sequence, TypeVar

from pagequery.application.filtering import PredicateTree
from pagequery.application.pagination import PageBounds, PageEnvelope, Pagination
from pagequery.application.search.datasource import DataSource
from pagequery.application.search.summary import SummaryMapper
from pagequery.application.sorting import SortKey
from pagequery.kernel.errors import DataSourceError, Operation

R = TypeVar("R")

__all__ = ["PageAssembler"]


class PageAssembler:
    def __init__(self, mapper: SummaryMapper, *, concurrent: bool = True) -> None:
        self._mapper = mapper
        self._concurrent = concurrent

    async def assemble(
        self,
        tree: PredicateTree,
        sort_key: SortKey,
        bounds: PageBounds,
        data_source: DataSource,
    ) -> PageEnvelope[dict[str, Any]]:
        """Count and fetch under *tree*, then map rows to summaries.

        Raises:
            DataSourceError: either read failed; ``operation`` says which.
        """
        def count() -> Awaitable[int]:
            return data_source.count(tree)

        def fetch() -> Awaitable[Sequence[Any]]:
            return data_source.fetch(tree, sort_key, bounds.offset, bounds.limit)

        if self._concurrent:
            outcome = await asyncio.gather(
                _read("count", count), _read("fetch", fetch), return_exceptions=True
            )
            for result in outcome:
                if isinstance(result, BaseException):
                    raise result
            records, rows = outcome
        else:
            records = await _read("count", count)
            rows = await _read("fetch", fetch)

        data = [self._mapper(row) for row in rows]
        return PageEnvelope(pagination=Pagination.of(bounds, int(records)), data=data)


async def _read(operation: Operation, call: Callable[[], Awaitable[R]]) -> R:
    try:
        return await call()
    except DataSourceError as exc:
        if exc.operation is None:
            exc.operation = operation
        raise
    except Exception as exc:  # noqa: BLE001
        raise DataSourceError(operation=operation, cause=exc) from exc
