"""Tenacity integration for retry policies.

Exposes a RetryPolicy as tenacity wait/stop strategies so that
tenacity's retry loop does the sleeping while the policy decides.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from tenacity import (
    RetryCallState,
    before_sleep_log,
    retry,
    retry_if_exception,
)
from tenacity.stop import stop_base
from tenacity.wait import wait_base

from retrykit.domain.models.retry_decision import RetryDecision
from retrykit.domain.policies.base import RetryPolicy

logger = logging.getLogger(__name__)


_DECISION_ATTR = "_retrykit_decision"


def _decision_for(policy: RetryPolicy, retry_state: RetryCallState) -> RetryDecision:
    """Ask the policy about the attempt tenacity just finished.

    The decision is cached on the retry state so the wait and stop
    strategies see the same jitter draw for one attempt.
    """
    cached = getattr(retry_state, _DECISION_ATTR, None)
    if cached is not None:
        cached_policy, attempt_number, decision = cached
        if cached_policy is policy and attempt_number == retry_state.attempt_number:
            return decision

    last_error: Optional[BaseException] = None
    if retry_state.outcome is not None and retry_state.outcome.failed:
        last_error = retry_state.outcome.exception()
    # tenacity counts attempts from 1; the policy counts retries from 0
    decision = policy.get_retry_decision(retry_state.attempt_number - 1, last_error)
    setattr(retry_state, _DECISION_ATTR, (policy, retry_state.attempt_number, decision))
    return decision


class wait_retry_policy(wait_base):
    """Wait strategy that sleeps for the policy's wait time."""

    def __init__(self, policy: RetryPolicy) -> None:
        self.policy = policy

    def __call__(self, retry_state: RetryCallState) -> float:
        decision = _decision_for(self.policy, retry_state)
        if not decision.should_retry:
            return 0.0
        return decision.wait_seconds


class stop_retry_policy(stop_base):
    """Stop strategy that stops once the policy gives up."""

    def __init__(self, policy: RetryPolicy) -> None:
        self.policy = policy

    def __call__(self, retry_state: RetryCallState) -> bool:
        return not _decision_for(self.policy, retry_state).should_retry


def create_retry_decorator(
    policy: RetryPolicy,
    retry_condition: Callable[[BaseException], bool],
    before_sleep: Callable[[RetryCallState], None] | None = None,
) -> Callable[[Callable], Callable]:
    """Create a retry decorator with tenacity driven by a retry policy.

    Args:
        policy: Policy deciding whether and how long to wait
        retry_condition: Function that returns True if exception should be retried
        before_sleep: Optional callback before sleep (defaults to logging)

    Returns:
        Retry decorator
    """
    if before_sleep is None:
        before_sleep = before_sleep_log(logger, logging.WARNING)

    def decorator(func: Callable) -> Callable:
        return retry(
            stop=stop_retry_policy(policy),
            wait=wait_retry_policy(policy),
            retry=retry_if_exception(retry_condition),
            reraise=True,
            before_sleep=before_sleep,
        )(func)

    return decorator
