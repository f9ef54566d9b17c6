"""Kernel – framework-agnostic error taxonomy and time normalization."""

from pagequery.kernel.errors import (
    BaseError,
    DataSourceError,
    InvalidFilterField,
    InvalidFilterValue,
    QueryValidationError,
)

__all__ = [
    "BaseError",
    "DataSourceError",
    "InvalidFilterField",
    "InvalidFilterValue",
    "QueryValidationError",
]
