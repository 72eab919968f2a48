"""Factory for creating retry policies"""

import logging
import random
from typing import Optional

from retrykit.domain.config.backoff import BackoffConfig
from retrykit.domain.policies.base import RetryPolicy
from retrykit.domain.policies.exponential_backoff import ExponentialBackoffWithJitter
from retrykit.domain.policies.no_retry import NoRetry

logger = logging.getLogger(__name__)


class RetryPolicyFactory:
    """Factory for creating retry policy instances"""

    POLICIES = {
        "exponential_backoff": ExponentialBackoffWithJitter,
        "no_retry": NoRetry,
    }

    @classmethod
    def create(
        cls,
        policy_type: str,
        config: Optional[BackoffConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> RetryPolicy:
        """Create retry policy instance

        Args:
            policy_type: Type of policy (exponential_backoff, no_retry)
            config: Backoff configuration (defaults if None)
            rng: Random generator for jitter

        Returns:
            RetryPolicy instance

        Raises:
            ValueError: If policy type is not supported
        """
        policy_type_lower = policy_type.lower()

        if policy_type_lower not in cls.POLICIES:
            available = ", ".join(cls.POLICIES.keys())
            raise ValueError(
                f"Unknown retry policy: {policy_type}. "
                f"Available policies: {available}"
            )

        logger.info(f"Creating {policy_type_lower} retry policy")
        policy_class = cls.POLICIES[policy_type_lower]
        if policy_class is NoRetry:
            return NoRetry()
        return policy_class.from_config(config or BackoffConfig(), rng=rng)
