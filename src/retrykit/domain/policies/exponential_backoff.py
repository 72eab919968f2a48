"""Exponential backoff with jitter.

Wait time for the Nth retry::

    min(min_backoff + (2^N - 1) * delta_backoff * U(0.8, 1.2), max_backoff)

The first retry may bypass the formula entirely (``first_fast_retry``).
"""

from __future__ import annotations

import logging
import random
import sys
from datetime import timedelta
from typing import TYPE_CHECKING, Optional

from retrykit.domain.models.retry_decision import RetryDecision
from retrykit.domain.policies.base import RetryPolicy

if TYPE_CHECKING:
    from retrykit.domain.config.backoff import BackoffConfig

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRY_COUNT = sys.maxsize
DEFAULT_MIN_BACKOFF = timedelta(milliseconds=100)
DEFAULT_MAX_BACKOFF = timedelta(seconds=10)
DEFAULT_DELTA_BACKOFF = timedelta(milliseconds=100)
DEFAULT_FIRST_FAST_RETRY = True

# Jitter band applied to delta_backoff (+/-20%)
JITTER_LOW = 0.8
JITTER_HIGH = 1.2

# Past this exponent even a 1us delta exceeds timedelta.max, so the result is max_backoff.
_MAX_EXPONENT = 62

_ONE_MICROSECOND = timedelta(microseconds=1)


def _to_micros(value: timedelta) -> int:
    return value // _ONE_MICROSECOND


class ExponentialBackoffWithJitter(RetryPolicy):
    """Retry policy with exponential growth, a jittered delta and a hard ceiling"""

    def __init__(
        self,
        max_retry_count: int = DEFAULT_MAX_RETRY_COUNT,
        min_backoff: timedelta = DEFAULT_MIN_BACKOFF,
        max_backoff: timedelta = DEFAULT_MAX_BACKOFF,
        delta_backoff: timedelta = DEFAULT_DELTA_BACKOFF,
        first_fast_retry: bool = DEFAULT_FIRST_FAST_RETRY,
        *,
        rng: Optional[random.Random] = None,
    ):
        """Initialize policy

        Args:
            max_retry_count: Highest retry count that may still be retried (must be > 0)
            min_backoff: Floor on the returned wait time
            max_backoff: Ceiling on the returned wait time
            delta_backoff: Scale of the exponential term
            first_fast_retry: Retry immediately after the first failure
            rng: Random generator used for jitter (a private one is created if None)

        Raises:
            ValueError: If configuration is invalid
        """
        if max_retry_count <= 0:
            raise ValueError(f"max_retry_count must be > 0, got {max_retry_count}")
        for name, value in (
            ("min_backoff", min_backoff),
            ("max_backoff", max_backoff),
            ("delta_backoff", delta_backoff),
        ):
            if value < timedelta(0):
                raise ValueError(f"{name} must be non-negative, got {value}")
        if min_backoff > max_backoff:
            raise ValueError(
                f"min_backoff ({min_backoff}) must not exceed max_backoff ({max_backoff})"
            )

        self._max_retry_count = max_retry_count
        self._min_backoff = min_backoff
        self._max_backoff = max_backoff
        self._delta_backoff = delta_backoff
        self._first_fast_retry = first_fast_retry
        self._rng = rng if rng is not None else random.Random()

    @classmethod
    def from_config(
        cls, config: "BackoffConfig", rng: Optional[random.Random] = None
    ) -> "ExponentialBackoffWithJitter":
        """Create policy from a validated BackoffConfig"""
        return cls(
            config.max_retry_count,
            config.min_backoff,
            config.max_backoff,
            config.delta_backoff,
            config.first_fast_retry,
            rng=rng,
        )

    @property
    def max_retry_count(self) -> int:
        return self._max_retry_count

    @property
    def min_backoff(self) -> timedelta:
        return self._min_backoff

    @property
    def max_backoff(self) -> timedelta:
        return self._max_backoff

    @property
    def delta_backoff(self) -> timedelta:
        return self._delta_backoff

    @property
    def first_fast_retry(self) -> bool:
        return self._first_fast_retry

    def is_exhausted(self, current_retry_count: int) -> bool:
        """Check if the retry budget has been used up"""
        return current_retry_count > self._max_retry_count

    def get_retry_decision(
        self, current_retry_count: int, last_error: Optional[BaseException] = None
    ) -> RetryDecision:
        """Compute the decision for the given retry count

        Args:
            current_retry_count: Retries already made (0 after the first failure)
            last_error: Ignored by this policy

        Returns:
            RetryDecision with 0 <= wait_time <= max_backoff

        Raises:
            ValueError: If current_retry_count is negative
        """
        if current_retry_count < 0:
            raise ValueError(f"current_retry_count must be >= 0, got {current_retry_count}")

        if self.is_exhausted(current_retry_count):
            logger.info(
                f"Retry budget exhausted ({current_retry_count} > {self._max_retry_count})"
            )
            return RetryDecision.give_up()

        if self._first_fast_retry and current_retry_count == 0:
            logger.debug("First retry: retrying immediately")
            return RetryDecision.retry_after(timedelta(0))

        wait_time = self._compute_wait_time(current_retry_count)
        logger.debug(f"Retry {current_retry_count}: waiting {wait_time}")
        return RetryDecision.retry_after(wait_time)

    def _compute_wait_time(self, current_retry_count: int) -> timedelta:
        jittered_delta = _to_micros(self._delta_backoff) * self._rng.uniform(
            JITTER_LOW, JITTER_HIGH
        )
        min_us = _to_micros(self._min_backoff)
        max_us = _to_micros(self._max_backoff)

        if jittered_delta <= 0:
            return self._min_backoff
        if current_retry_count > _MAX_EXPONENT:
            return self._max_backoff

        growth_term = ((1 << current_retry_count) - 1) * jittered_delta
        if growth_term >= max_us - min_us:
            return self._max_backoff
        return timedelta(microseconds=min(min_us + round(growth_term), max_us))


def default_policy(rng: Optional[random.Random] = None) -> ExponentialBackoffWithJitter:
    """Exponential backoff policy with default configuration"""
    return ExponentialBackoffWithJitter(rng=rng)
