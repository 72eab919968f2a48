"""Base retry policy interface"""

from abc import ABC, abstractmethod
from typing import Optional

from retrykit.domain.models.retry_decision import RetryDecision


class RetryPolicy(ABC):
    """Abstract base class for retry policies"""

    @abstractmethod
    def get_retry_decision(
        self, current_retry_count: int, last_error: Optional[BaseException] = None
    ) -> RetryDecision:
        """Decide whether a failed operation should be attempted again

        Args:
            current_retry_count: Number of retries already made (0 after the first failure)
            last_error: Most recent error, for policies that branch on error type

        Returns:
            RetryDecision for the next attempt
        """
        pass
