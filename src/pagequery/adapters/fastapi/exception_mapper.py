"""FastAPI adapter – FastAPIExceptionMapper."""
from __future__ import annotations

from typing import Any, Callable

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from pagequery.config.validation import ConfigError
from pagequery.kernel.errors import BaseError, DataSourceError, QueryValidationError


class FastAPIExceptionMapper:
    """Register pagequery error → HTTP status-code mappings on a FastAPI app.

    Error body schema::

        {"code": "invalid_filter_field", "message": "...", "detail": {...}}

    Mappings
    --------
    ``QueryValidationError`` → 400
    ``DataSourceError``      → 503
    ``ConfigError``          → 500

    The original exception behind a ``cause`` is logged by the search service
    and never echoed to the client.
    """

    def __init__(self) -> None:
        self._map: list[tuple[type[BaseError], int]] = [
            (QueryValidationError, 400),
            (DataSourceError, 503),
            (ConfigError, 500),
        ]

    def status_for(self, exc: BaseException) -> int | None:
        for exc_type, status in self._map:
            if isinstance(exc, exc_type):
                return status
        return None

    def register(self, app: FastAPI) -> None:
        """Register all error handlers on a ``FastAPI`` or ``Starlette`` app."""
        for exc_type, status in self._map:
            app.add_exception_handler(exc_type, _make_handler(status))


def _make_handler(status: int) -> Callable[[Request, Any], JSONResponse]:
    def handler(request: Request, exc: BaseError) -> JSONResponse:  # noqa: ARG001
        return JSONResponse(status_code=status, content=exc.to_dict(include_cause=False))

    return handler


__all__ = ["FastAPIExceptionMapper"]
