"""Policy that disables retries"""

from typing import Optional

from retrykit.domain.models.retry_decision import RetryDecision
from retrykit.domain.policies.base import RetryPolicy


class NoRetry(RetryPolicy):
    """Never retries; every failure is surfaced to the caller"""

    def get_retry_decision(
        self, current_retry_count: int, last_error: Optional[BaseException] = None
    ) -> RetryDecision:
        return RetryDecision.give_up()
