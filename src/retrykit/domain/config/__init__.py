"""Configuration models with Pydantic validation."""

from retrykit.domain.config.backoff import BackoffConfig
from retrykit.domain.config.settings import RetrySettings

__all__ = [
    "BackoffConfig",
    "RetrySettings",
]
