"""Unit tests for the page assembler and the search service pipeline."""

from __future__ import annotations

import asyncio
from typing import Any, Callable

import pytest
from structlog.testing import capture_logs

from pagequery.adapters.memory import InMemoryDataSource
from pagequery.application.filtering import Operator, Predicate, PredicateTree
from pagequery.application.pagination import PageBounds
from pagequery.application.search import (
    DataSource,
    EntityDefinition,
    PageAssembler,
    SearchRequest,
    SearchService,
    SummaryMapper,
)
from pagequery.application.sorting import SortDirection, SortKey
from pagequery.config import SearchSettings
from pagequery.kernel.errors import DataSourceError, InvalidFilterField, InvalidFilterValue
from pagequery.testing import FailingDataSource, RecordingDataSource

Rows = list[dict[str, Any]]


def _ids(envelope: Any) -> list[str]:
    return [item["id"] for item in envelope.data]


# ---------------------------------------------------------------------------
# PageAssembler
# ---------------------------------------------------------------------------


class TestPageAssembler:
    def _assemble(self, source: DataSource, *, concurrent: bool = True, page: int = 1, limit: int = 10) -> Any:
        assembler = PageAssembler(SummaryMapper(["id"]), concurrent=concurrent)
        return asyncio.run(
            assembler.assemble(
                PredicateTree(),
                SortKey("fee", SortDirection.ASC),
                PageBounds(page=page, limit=limit),
                source,
            )
        )

    def test_count_and_fetch(self, data_source: InMemoryDataSource[dict[str, Any]]) -> None:
        envelope = self._assemble(data_source, page=2, limit=10)
        assert envelope.pagination.to_dict() == {"current": 2, "limit": 10, "records": 25, "pages": 3}
        assert _ids(envelope)[0] == "apt-011"

    def test_passes_offset_and_limit(self, data_source: InMemoryDataSource[dict[str, Any]]) -> None:
        recording = RecordingDataSource(data_source)
        self._assemble(recording, page=3, limit=4)
        fetch = recording.fetches[0]
        assert (fetch.offset, fetch.limit) == (8, 4)
        assert recording.call_count == 2

    def test_both_reads_see_the_same_tree(self, data_source: InMemoryDataSource[dict[str, Any]]) -> None:
        recording = RecordingDataSource(data_source)
        self._assemble(recording)
        assert recording.calls[0].tree is recording.calls[1].tree

    def test_count_failure_labelled(self) -> None:
        with pytest.raises(DataSourceError) as info:
            self._assemble(FailingDataSource(count_error=RuntimeError("db down")))
        assert info.value.operation == "count"
        assert isinstance(info.value.cause, RuntimeError)

    def test_fetch_failure_labelled(self) -> None:
        with pytest.raises(DataSourceError) as info:
            self._assemble(FailingDataSource(fetch_error=TimeoutError("slow"), records=3))
        assert info.value.operation == "fetch"

    def test_adapter_data_source_error_gets_operation(self) -> None:
        with pytest.raises(DataSourceError) as info:
            self._assemble(FailingDataSource(fetch_error=DataSourceError("pool exhausted")))
        assert info.value.operation == "fetch"
        assert info.value.message == "pool exhausted"

    def test_existing_operation_is_kept(self) -> None:
        with pytest.raises(DataSourceError) as info:
            self._assemble(FailingDataSource(fetch_error=DataSourceError(operation="count")))
        assert info.value.operation == "count"

    def test_count_failure_reported_first_when_both_fail(self) -> None:
        source = FailingDataSource(count_error=RuntimeError("a"), fetch_error=RuntimeError("b"))
        with pytest.raises(DataSourceError) as info:
            self._assemble(source)
        assert info.value.operation == "count"

    def test_sequential_mode_skips_fetch_after_count_failure(self) -> None:
        recording = RecordingDataSource(FailingDataSource(count_error=RuntimeError("down")))
        with pytest.raises(DataSourceError):
            self._assemble(recording, concurrent=False)
        assert [call.operation for call in recording.calls] == ["count"]

    def test_sequential_mode_success(self, data_source: InMemoryDataSource[dict[str, Any]]) -> None:
        envelope = self._assemble(data_source, concurrent=False, limit=5)
        assert envelope.pagination.records == 25
        assert len(envelope.data) == 5


# ---------------------------------------------------------------------------
# SearchService – end-to-end scenarios over the in-memory catalogue
# ---------------------------------------------------------------------------


class TestSearchScenarios:
    def test_status_filter_matches_only_selected_rows(
        self, entity: EntityDefinition, make_rows: Callable[..., Rows]
    ) -> None:
        rows = make_rows(10)
        for index, row in enumerate(rows):
            row["status"] = "scheduled" if index in (0, 3, 5, 9) else "planned"
        service = SearchService(entity, InMemoryDataSource(rows))
        envelope = asyncio.run(service.search({"status": ["scheduled"]}))
        assert len(envelope.data) == 4
        assert all(item["status"] == "scheduled" for item in envelope.data)
        assert envelope.pagination.records == 4

    def test_first_page_of_unfiltered_search(
        self, entity: EntityDefinition, data_source: InMemoryDataSource[dict[str, Any]]
    ) -> None:
        envelope = asyncio.run(SearchService(entity, data_source).search({"page": 1, "limit": 10}))
        assert envelope.pagination.to_dict() == {"current": 1, "limit": 10, "records": 25, "pages": 3}
        assert len(envelope.data) == 10

    def test_null_filter_equals_omitted_filter(
        self, entity: EntityDefinition, data_source: InMemoryDataSource[dict[str, Any]]
    ) -> None:
        service = SearchService(entity, data_source)
        with_null = asyncio.run(service.search({"title": None, "limit": 30}))
        omitted = asyncio.run(service.search({"limit": 30}))
        assert with_null == omitted

    def test_page_past_the_end_is_empty(
        self, entity: EntityDefinition, data_source: InMemoryDataSource[dict[str, Any]]
    ) -> None:
        envelope = asyncio.run(SearchService(entity, data_source).search({"page": 9999, "limit": 10}))
        assert envelope.data == []
        assert envelope.pagination.to_dict() == {"current": 9999, "limit": 10, "records": 25, "pages": 3}

    def test_unknown_sort_field_uses_default_ordering(
        self, entity: EntityDefinition, data_source: InMemoryDataSource[dict[str, Any]]
    ) -> None:
        service = SearchService(entity, data_source)
        fallback = asyncio.run(service.search({"sort": {"field": "nonexistent_field", "direction": "asc"}}))
        default = asyncio.run(service.search({}))
        assert _ids(fallback) == _ids(default)
        assert _ids(default)[0] == "apt-025"

    def test_undeclared_field_rejected_before_any_read(
        self, entity: EntityDefinition, data_source: InMemoryDataSource[dict[str, Any]]
    ) -> None:
        recording = RecordingDataSource(data_source)
        with pytest.raises(InvalidFilterField):
            asyncio.run(SearchService(entity, recording).search({"internal_secret": "x"}))
        assert recording.call_count == 0


class TestSearchService:
    def test_accepts_search_request(
        self, entity: EntityDefinition, data_source: InMemoryDataSource[dict[str, Any]]
    ) -> None:
        request = SearchRequest(filters={"status": "scheduled"}, limit=100)
        envelope = asyncio.run(SearchService(entity, data_source).search(request))
        assert envelope.pagination.records == 6

    def test_last_page_is_partial(
        self, entity: EntityDefinition, data_source: InMemoryDataSource[dict[str, Any]]
    ) -> None:
        envelope = asyncio.run(SearchService(entity, data_source).search({"page": 3, "limit": 10}))
        assert _ids(envelope) == [f"apt-{i:03d}" for i in range(5, 0, -1)]

    def test_explicit_sort(self, entity: EntityDefinition, data_source: InMemoryDataSource[dict[str, Any]]) -> None:
        envelope = asyncio.run(SearchService(entity, data_source).search({"sort": "fee:asc", "limit": 3}))
        assert _ids(envelope) == ["apt-001", "apt-002", "apt-003"]

    def test_order_key(self, entity: EntityDefinition, data_source: InMemoryDataSource[dict[str, Any]]) -> None:
        envelope = asyncio.run(SearchService(entity, data_source).search({"sort": "fee", "order": "desc", "limit": 2}))
        assert _ids(envelope) == ["apt-025", "apt-024"]

    def test_page_size_alias(self, entity: EntityDefinition, data_source: InMemoryDataSource[dict[str, Any]]) -> None:
        envelope = asyncio.run(SearchService(entity, data_source).search({"page_size": 7}))
        assert envelope.pagination.limit == 7

    def test_range_filter(self, entity: EntityDefinition, data_source: InMemoryDataSource[dict[str, Any]]) -> None:
        envelope = asyncio.run(SearchService(entity, data_source).search({"fee": {"from": 100, "to": 150}}))
        assert envelope.pagination.records == 6

    def test_free_text_search(self, entity: EntityDefinition, data_source: InMemoryDataSource[dict[str, Any]]) -> None:
        envelope = asyncio.run(SearchService(entity, data_source).search({"search": "checkup 2"}))
        assert sorted(_ids(envelope)) == ["apt-021", "apt-023", "apt-025"]

    def test_scope_applied(self, entity: EntityDefinition, data_source: InMemoryDataSource[dict[str, Any]]) -> None:
        service = SearchService(entity, data_source)
        envelope = asyncio.run(service.search({}, scope=[Predicate("room", Operator.EQ, "R1")]))
        assert envelope.pagination.records == 5

    def test_soft_delete_scope(
        self, entity: EntityDefinition, rows: Rows, data_source: InMemoryDataSource[dict[str, Any]]
    ) -> None:
        rows[0]["deleted_at"] = "2024-06-01T00:00:00Z"
        service = SearchService(entity, data_source)
        envelope = asyncio.run(service.search({}, scope=[Predicate.is_null("deleted_at")]))
        assert envelope.pagination.records == 24

    def test_summary_omits_nulls_and_internal_columns(
        self, entity: EntityDefinition, data_source: InMemoryDataSource[dict[str, Any]]
    ) -> None:
        envelope = asyncio.run(SearchService(entity, data_source).search({"limit": 1}))
        first = envelope.data[0]
        assert first["id"] == "apt-025"
        assert "notes" not in first
        assert "cancelled_at" not in first
        assert "password_hash" not in first
        assert first["created_at"] == "2024-01-02T10:00:00.000Z"

    def test_settings_default_limit(
        self, entity: EntityDefinition, data_source: InMemoryDataSource[dict[str, Any]]
    ) -> None:
        service = SearchService(entity, data_source, SearchSettings(default_limit=5, max_limit=8))
        assert len(asyncio.run(service.search({})).data) == 5
        assert asyncio.run(service.search({"limit": 50})).pagination.limit == 8

    def test_case_sensitive_setting(
        self, entity: EntityDefinition, data_source: InMemoryDataSource[dict[str, Any]]
    ) -> None:
        insensitive = SearchService(entity, data_source)
        sensitive = SearchService(entity, data_source, SearchSettings(case_sensitive_contains=True))
        assert asyncio.run(insensitive.search({"title": "checkup"})).pagination.records == 13
        assert asyncio.run(sensitive.search({"title": "checkup"})).pagination.records == 0

    def test_invalid_value_rejected(
        self, entity: EntityDefinition, data_source: InMemoryDataSource[dict[str, Any]]
    ) -> None:
        with pytest.raises(InvalidFilterValue):
            asyncio.run(SearchService(entity, data_source).search({"created_at": {"from": "soon"}}))

    def test_data_source_failure_propagates(self, entity: EntityDefinition) -> None:
        service = SearchService(entity, FailingDataSource(count_error=ConnectionError("refused")))
        with pytest.raises(DataSourceError) as info:
            asyncio.run(service.search({}))
        assert info.value.operation == "count"


# ---------------------------------------------------------------------------
# Structured log events
# ---------------------------------------------------------------------------


class TestSearchLogging:
    def test_rejection_logged(self, entity: EntityDefinition, data_source: InMemoryDataSource[dict[str, Any]]) -> None:
        with capture_logs() as logs:
            with pytest.raises(InvalidFilterField):
                asyncio.run(SearchService(entity, data_source).search({"internal_secret": "x"}))
        rejected = [entry for entry in logs if entry["event"] == "search.rejected"]
        assert rejected[0]["code"] == "invalid_filter_field"
        assert rejected[0]["entity"] == "appointments"

    def test_failure_logged_with_operation(self, entity: EntityDefinition) -> None:
        service = SearchService(entity, FailingDataSource(fetch_error=RuntimeError("boom")))
        with capture_logs() as logs:
            with pytest.raises(DataSourceError):
                asyncio.run(service.search({}))
        failed = [entry for entry in logs if entry["event"] == "search.failed"]
        assert failed[0]["operation"] == "fetch"
        assert failed[0]["log_level"] == "warning"

    def test_completion_logged(self, entity: EntityDefinition, data_source: InMemoryDataSource[dict[str, Any]]) -> None:
        with capture_logs() as logs:
            asyncio.run(SearchService(entity, data_source).search({"limit": 4}))
        completed = [entry for entry in logs if entry["event"] == "search.completed"]
        assert completed[0]["records"] == 25
        assert completed[0]["returned"] == 4
        assert completed[0]["sort"] == "created_at:desc"

    def test_sort_fallback_logged(self, entity: EntityDefinition, data_source: InMemoryDataSource[dict[str, Any]]) -> None:
        with capture_logs() as logs:
            asyncio.run(SearchService(entity, data_source).search({"sort": "password_hash"}))
        assert any(entry["event"] == "sort.fallback" for entry in logs)
