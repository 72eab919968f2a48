"""Retry policies"""

from retrykit.domain.policies.base import RetryPolicy
from retrykit.domain.policies.exponential_backoff import ExponentialBackoffWithJitter, default_policy
from retrykit.domain.policies.no_retry import NoRetry

__all__ = ["RetryPolicy", "ExponentialBackoffWithJitter", "NoRetry", "default_policy"]
