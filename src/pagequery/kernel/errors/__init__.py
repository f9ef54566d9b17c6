"""Kernel error hierarchy: public re-export surface.

Hierarchy::

    BaseError
    ├── QueryValidationError     (query.py)
    │   ├── InvalidFilterField
    │   └── InvalidFilterValue
    ├── DataSourceError          (infrastructure.py)
    └── ConfigError              (pagequery.config.validation)
"""

from pagequery.kernel.errors.base import BaseError
from pagequery.kernel.errors.infrastructure import DataSourceError, Operation
from pagequery.kernel.errors.query import (
    InvalidFilterField,
    InvalidFilterValue,
    QueryValidationError,
)

__all__ = [
    "BaseError",
    "DataSourceError",
    "InvalidFilterField",
    "InvalidFilterValue",
    "Operation",
    "QueryValidationError",
]
