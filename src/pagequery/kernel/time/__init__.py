"""Kernel time – date / date-time normalization."""
from pagequery.kernel.time.normalize import (
    format_date,
    format_datetime,
    parse_date,
    parse_datetime,
    to_utc,
)

__all__ = ["format_date", "format_datetime", "parse_date", "parse_datetime", "to_utc"]
