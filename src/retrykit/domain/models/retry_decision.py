"""RetryDecision model - outcome of a retry policy query"""

from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True)
class RetryDecision:
    """Whether to retry a failed operation and how long to wait first"""

    should_retry: bool
    wait_time: timedelta = timedelta(0)

    def __post_init__(self):
        """Validate decision data"""
        if self.wait_time < timedelta(0):
            raise ValueError("wait_time must be non-negative")

    @classmethod
    def give_up(cls) -> "RetryDecision":
        """Terminal decision: surface the error to the caller"""
        return cls(False, timedelta(0))

    @classmethod
    def retry_after(cls, wait_time: timedelta) -> "RetryDecision":
        """Retry once wait_time has elapsed (zero means retry now)"""
        return cls(True, wait_time)

    @property
    def wait_seconds(self) -> float:
        """Wait time in seconds, for callers that sleep on floats"""
        return self.wait_time.total_seconds()
