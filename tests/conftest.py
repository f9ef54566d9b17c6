"""Shared fixtures: an ``appointments`` entity and a 25-row in-memory catalogue."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
from typing import Any, Callable

import pytest

from pagequery.adapters.memory import InMemoryDataSource
from pagequery.application.search import EntityDefinition, SummaryField, SummaryMapper, ValueKind
from pagequery.application.sorting import SortDirection
from pagequery.application.whitelist import FieldSpec, FieldWhitelist, FilterKind

STATUSES = ("planned", "scheduled", "completed", "cancelled")


def appointment_whitelist() -> FieldWhitelist:
    return FieldWhitelist(
        "appointments",
        [
            FieldSpec("patient_id", FilterKind.UUID),
            FieldSpec("status", FilterKind.ENUM, sortable=True, choices=STATUSES),
            FieldSpec("title", FilterKind.CONTAINS, sortable=True),
            FieldSpec("room", FilterKind.EXACT),
            FieldSpec("is_virtual", FilterKind.BOOLEAN),
            FieldSpec("scheduled_on", FilterKind.DATE_RANGE, sortable=True),
            FieldSpec("created_at", FilterKind.DATETIME_RANGE, sortable=True),
            FieldSpec("fee", FilterKind.NUMERIC_RANGE, sortable=True),
            FieldSpec("id", FilterKind.EXACT, filterable=False, sortable=True),
        ],
        search_fields=["title", "room"],
    )


def appointment_entity() -> EntityDefinition:
    return EntityDefinition(
        whitelist=appointment_whitelist(),
        summary=SummaryMapper(
            [
                "id",
                "status",
                "title",
                "room",
                "is_virtual",
                "fee",
                "notes",
                SummaryField("scheduled_on", ValueKind.DATE),
                SummaryField("created_at", ValueKind.DATETIME),
                SummaryField("cancelled_at", ValueKind.DATETIME),
            ]
        ),
        default_sort="created_at",
        default_direction=SortDirection.DESC,
    )


def appointment_rows(n: int = 25) -> list[dict[str, Any]]:
    """*n* rows; every fourth row (4, 8, ...) scheduled, the rest spread over other statuses."""
    base = datetime(2024, 1, 1, 9, 0, tzinfo=UTC)
    others = ("planned", "completed", "cancelled")
    rows: list[dict[str, Any]] = []
    for i in range(1, n + 1):
        status = "scheduled" if i % 4 == 0 else others[i % 3]
        rows.append(
            {
                "id": f"apt-{i:03d}",
                "patient_id": f"00000000-0000-0000-0000-{i % 3:012d}",
                "status": status,
                "title": f"Checkup {i}" if i % 2 else f"Follow-up {i}",
                "room": f"R{i % 5}",
                "is_virtual": i % 2 == 0,
                "scheduled_on": date(2024, 2, 1) + timedelta(days=i),
                "created_at": base + timedelta(hours=i),
                "fee": i * 10,
                "notes": None if i % 2 else f"note {i}",
                "cancelled_at": base + timedelta(days=i) if status == "cancelled" else None,
                "password_hash": "secret",
                "deleted_at": None,
            }
        )
    return rows


@pytest.fixture(scope="session")
def whitelist() -> FieldWhitelist:
    return appointment_whitelist()


@pytest.fixture(scope="session")
def entity() -> EntityDefinition:
    return appointment_entity()


@pytest.fixture(scope="session")
def catalogue() -> tuple[dict[str, Any], ...]:
    """Read-only rows, safe to share with Hypothesis-driven tests."""
    return tuple(appointment_rows())


@pytest.fixture(scope="session")
def make_rows() -> Callable[..., list[dict[str, Any]]]:
    return appointment_rows


@pytest.fixture
def rows() -> list[dict[str, Any]]:
    return appointment_rows()


@pytest.fixture
def data_source(rows: list[dict[str, Any]]) -> InMemoryDataSource[dict[str, Any]]:
    return InMemoryDataSource(rows)
