"""Query validation errors: the client sent a search the core refuses to run."""

from __future__ import annotations

from typing import Any

from pagequery.kernel.errors.base import BaseError


class QueryValidationError(BaseError):
    """A search request is malformed. Never retried; maps to HTTP 400."""

    default_code = "query_validation_error"


class InvalidFilterField(QueryValidationError):
    """The request references a field that is not filterable for the entity."""

    default_code = "invalid_filter_field"

    def __init__(self, field: str, *, entity: str | None = None, **kwargs: Any) -> None:
        msg = f"Field '{field}' is not filterable"
        if entity is not None:
            msg = f"Field '{field}' is not filterable on '{entity}'"
        detail = {"field": field}
        if entity is not None:
            detail["entity"] = entity
        super().__init__(msg, detail=detail, **kwargs)
        self.field = field
        self.entity = entity


class InvalidFilterValue(QueryValidationError):
    """A filter value does not match the shape of its declared filter kind."""

    default_code = "invalid_filter_value"

    def __init__(self, field: str, value: Any, reason: str, **kwargs: Any) -> None:
        super().__init__(
            f"Invalid value for filter '{field}': {reason}",
            detail={"field": field, "value": value, "reason": reason},
            **kwargs,
        )
        self.field = field
        self.value = value
        self.reason = reason


__all__ = ["InvalidFilterField", "InvalidFilterValue", "QueryValidationError"]
