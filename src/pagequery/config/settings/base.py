"""Config settings – Settings base class and SearchSettings."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from pagequery.config.validation import InvalidSettingValueError


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class SearchSettings(Settings):
    """Tunables shared by every search endpoint.

    ``PAGEQUERY_DEFAULT_LIMIT``, ``PAGEQUERY_MAX_LIMIT``,
    ``PAGEQUERY_CASE_SENSITIVE_CONTAINS`` and ``PAGEQUERY_CONCURRENT_READS``
    when loaded from the environment.
    """

    _prefix: ClassVar[str] = "PAGEQUERY"

    default_limit: int = 20
    max_limit: int = 100
    case_sensitive_contains: bool = False
    concurrent_reads: bool = True

    def _validate(self) -> None:
        if self.default_limit < 1:
            raise InvalidSettingValueError("default_limit", self.default_limit, "must be >= 1")
        if self.max_limit < 1:
            raise InvalidSettingValueError("max_limit", self.max_limit, "must be >= 1")
        if self.default_limit > self.max_limit:
            raise InvalidSettingValueError(
                "default_limit", self.default_limit, f"must not exceed max_limit ({self.max_limit})"
            )


__all__ = ["SearchSettings", "Settings"]
