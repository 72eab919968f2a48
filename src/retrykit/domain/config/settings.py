"""Root retry settings model."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from retrykit.domain.config.backoff import BackoffConfig


class RetrySettings(BaseModel):
    """Retry settings as loaded from .retrykit.yml.

    Validation is performed at load time to fail fast on configuration errors.

    Attributes:
        policy: Retry policy name (case-insensitive)
        backoff: Exponential backoff parameters (ignored by no_retry)
    """

    policy: Literal["exponential_backoff", "no_retry"] = "exponential_backoff"
    backoff: BackoffConfig = Field(default_factory=BackoffConfig)

    @field_validator("policy", mode="before")
    @classmethod
    def _lowercase_policy(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
        json_schema_extra={
            "example": {
                "policy": "exponential_backoff",
                "backoff": {
                    "max_retry_count": 10,
                    "min_backoff": 0.1,
                    "max_backoff": 10,
                    "delta_backoff": 0.1,
                    "first_fast_retry": True,
                },
            }
        },
    )
