"""Infrastructure errors: failures of the data-source collaborator."""

from __future__ import annotations

from typing import Any, Literal

from pagequery.kernel.errors.base import BaseError

Operation = Literal["count", "fetch"]


class DataSourceError(BaseError):
    """The count or fetch read failed.

    ``operation`` names the logical read that failed; it is ``None`` until the
    page assembler fills it in for errors raised by an adapter directly.
    """

    default_code = "data_source_error"

    def __init__(
        self,
        message: str | None = None,
        *,
        operation: Operation | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or _default_message(operation), **kwargs)
        self.operation: Operation | None = operation

    def to_dict(self, *, include_cause: bool = True) -> dict[str, Any]:
        base = super().to_dict(include_cause=include_cause)
        base["operation"] = self.operation
        return base


def _default_message(operation: Operation | None) -> str:
    if operation is None:
        return "Data source read failed"
    return f"Data source {operation} failed"


__all__ = ["DataSourceError", "Operation"]
