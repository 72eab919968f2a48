"""Backoff configuration model."""

from datetime import timedelta
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from retrykit.domain.policies.exponential_backoff import (
    DEFAULT_DELTA_BACKOFF,
    DEFAULT_FIRST_FAST_RETRY,
    DEFAULT_MAX_BACKOFF,
    DEFAULT_MAX_RETRY_COUNT,
    DEFAULT_MIN_BACKOFF,
)


class BackoffConfig(BaseModel):
    """Configuration for exponential backoff with jitter.

    Durations accept anything pydantic parses as a timedelta
    (seconds as int/float, ISO 8601 strings such as ``PT0.1S``).

    Attributes:
        max_retry_count: Highest retry count that may still be retried
        min_backoff: Floor on the wait time
        max_backoff: Ceiling on the wait time
        delta_backoff: Scale of the exponential term
        first_fast_retry: Retry immediately after the first failure
    """

    max_retry_count: int = Field(DEFAULT_MAX_RETRY_COUNT, gt=0)
    min_backoff: timedelta = DEFAULT_MIN_BACKOFF
    max_backoff: timedelta = DEFAULT_MAX_BACKOFF
    delta_backoff: timedelta = DEFAULT_DELTA_BACKOFF
    first_fast_retry: bool = DEFAULT_FIRST_FAST_RETRY

    @field_validator("min_backoff", "max_backoff", "delta_backoff", mode="before")
    @classmethod
    def _numeric_string_as_seconds(cls, value: Any) -> Any:
        # Environment overrides arrive as strings; "0.5" means seconds, like in YAML
        if isinstance(value, str):
            try:
                return float(value)
            except ValueError:
                return value
        return value

    @model_validator(mode="after")
    def _check_bounds(self) -> "BackoffConfig":
        for name in ("min_backoff", "max_backoff", "delta_backoff"):
            if getattr(self, name) < timedelta(0):
                raise ValueError(f"{name} must be non-negative")
        if self.min_backoff > self.max_backoff:
            raise ValueError("min_backoff must not exceed max_backoff")
        return self
