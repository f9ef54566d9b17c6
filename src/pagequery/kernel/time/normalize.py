"""Kernel time – date / date-time parsing and wire normalization.

Every temporal value leaving the core goes through :func:`format_datetime` or
:func:`format_date`. Naive datetimes are treated as UTC.

Wire formats::

    datetime  2024-03-01T09:30:00.000Z
    date      2024-03-01
"""
from __future__ import annotations

from datetime import UTC, date, datetime, time


def to_utc(value: datetime) -> datetime:
    """Return *value* as an aware UTC datetime."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def parse_datetime(value: datetime | date | str) -> datetime:
    """Parse an ISO-8601 value into an aware UTC datetime.

    A plain date is interpreted as midnight UTC.

    Raises:
        ValueError: when *value* is not a recognisable date-time.
    """
    if isinstance(value, datetime):
        return to_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=UTC)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        return to_utc(datetime.fromisoformat(text))
    raise ValueError(f"expected an ISO-8601 date-time, got {type(value).__name__}")


def parse_date(value: datetime | date | str) -> date:
    """Parse an ISO-8601 value into a calendar date (UTC for date-times)."""
    if isinstance(value, datetime):
        return to_utc(value).date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if len(text) == 10:
            return date.fromisoformat(text)
        return parse_datetime(text).date()
    raise ValueError(f"expected an ISO-8601 date, got {type(value).__name__}")


def format_datetime(value: datetime | date | str) -> str:
    """Serialise *value* as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    dt = parse_datetime(value)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def format_date(value: datetime | date | str) -> str:
    """Serialise *value* as ``YYYY-MM-DD``."""
    return parse_date(value).isoformat()


__all__ = ["format_date", "format_datetime", "parse_date", "parse_datetime", "to_utc"]
