"""retrykit - retry decision policies for transport layers.

A policy answers one question after each failed attempt: retry or give up,
and how long to wait before retrying.
"""

from retrykit.domain.config import BackoffConfig, RetrySettings
from retrykit.domain.models.retry_decision import RetryDecision
from retrykit.domain.policies import (
    ExponentialBackoffWithJitter,
    NoRetry,
    RetryPolicy,
    default_policy,
)
from retrykit.domain.policies.factory import RetryPolicyFactory

__all__ = [
    "BackoffConfig",
    "ExponentialBackoffWithJitter",
    "NoRetry",
    "RetryDecision",
    "RetryPolicy",
    "RetryPolicyFactory",
    "RetrySettings",
    "default_policy",
]
