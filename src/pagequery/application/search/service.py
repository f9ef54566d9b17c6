"""Application search – SearchService.

The single caller-facing operation::

    service = SearchService(appointments, data_source, settings)
    envelope = await service.search({"status": ["scheduled"], "page": 2})

Pipeline: compile filters → resolve sort → bound page → assemble. Validation
errors are raised before the data source is touched.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping

from pagequery.application.filtering import FilterCompiler, Node
from pagequery.application.pagination import PageEnvelope, Paginator
from pagequery.application.search.assembler import PageAssembler
from pagequery.application.search.datasource import DataSource
from pagequery.application.search.entity import EntityDefinition
from pagequery.application.search.request import SearchRequest
from pagequery.application.sorting import SortResolver
from pagequery.config import SearchSettings
from pagequery.kernel.errors import DataSourceError, QueryValidationError
from pagequery.observability.logging import get_logger

__all__ = ["SearchService"]


class SearchService:
    def __init__(
        self,
        entity: EntityDefinition,
        data_source: DataSource,
        settings: SearchSettings | None = None,
    ) -> None:
        settings = settings or SearchSettings()
        self._entity = entity
        self._data_source = data_source
        self._compiler = FilterCompiler(
            entity.whitelist, case_sensitive=settings.case_sensitive_contains
        )
        self._sorter = SortResolver(entity.whitelist, entity.default_sort, entity.default_direction)
        self._paginator = Paginator(settings.default_limit, settings.max_limit)
        self._assembler = PageAssembler(entity.summary, concurrent=settings.concurrent_reads)
        self._log = get_logger(__name__, entity=entity.name)

    @property
    def entity(self) -> EntityDefinition:
        return self._entity

    async def search(
        self,
        request: SearchRequest | Mapping[str, Any],
        *,
        scope: Iterable[Node] = (),
    ) -> PageEnvelope[dict[str, Any]]:
        """Run one search.

        Args:
            request: A :class:`SearchRequest` or the raw wire body.
            scope: Server-side constraints (tenant, soft delete, ...) applied
                in addition to the client's filters.

        Raises:
            InvalidFilterField: undeclared field in the request.
            InvalidFilterValue: a value does not fit its field's kind.
            DataSourceError: the count or fetch failed.
        """
        if not isinstance(request, SearchRequest):
            request = SearchRequest.from_mapping(request)

        try:
            tree = self._compiler.compile(request, scope=scope)
        except QueryValidationError as exc:
            self._log.info("search.rejected", code=exc.code, detail=exc.detail)
            raise

        sort_key = self._sorter.resolve(request.sort, request.order)
        bounds = self._paginator.compute_bounds(request.page, request.limit)

        try:
            envelope = await self._assembler.assemble(tree, sort_key, bounds, self._data_source)
        except DataSourceError as exc:
            self._log.warning("search.failed", operation=exc.operation, cause=repr(exc.cause))
            raise

        self._log.debug(
            "search.completed",
            records=envelope.pagination.records,
            returned=len(envelope.data),
            page=bounds.page,
            limit=bounds.limit,
            sort=f"{sort_key.field}:{sort_key.direction.value}",
        )
        return envelope
