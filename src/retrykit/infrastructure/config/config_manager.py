"""Configuration manager for loading and validating .retrykit.yml"""

import copy
import logging
import os
import random
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from retrykit.domain.config import BackoffConfig, RetrySettings
from retrykit.domain.policies.base import RetryPolicy
from retrykit.domain.policies.factory import RetryPolicyFactory

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".retrykit.yml"

# Environment variable -> backoff field
_BACKOFF_ENV_VARS = {
    "RETRYKIT_MAX_RETRY_COUNT": "max_retry_count",
    "RETRYKIT_MIN_BACKOFF": "min_backoff",
    "RETRYKIT_MAX_BACKOFF": "max_backoff",
    "RETRYKIT_DELTA_BACKOFF": "delta_backoff",
    "RETRYKIT_FIRST_FAST_RETRY": "first_fast_retry",
}


class ConfigurationError(Exception):
    """Configuration validation error."""

    pass


class ConfigManager:
    """Manages retry configuration from .retrykit.yml and environment variables

    Configuration priority:
    1. Default values (defined in Pydantic models)
    2. .retrykit.yml file (searched from current directory)
    3. Environment variables (RETRYKIT_*)
    4. CLI arguments (handled by CLI layer)
    """

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize config manager

        Args:
            config_path: Path to .retrykit.yml (searches from current dir if None)

        Raises:
            ConfigurationError: If configuration validation fails
        """
        if isinstance(config_path, str):
            config_path = Path(config_path)
        self.config_path = config_path or self._find_config_file()
        try:
            self.settings: RetrySettings = self._load_config()
        except ValidationError as e:
            errors = []
            for error in e.errors():
                field = ".".join(str(x) for x in error["loc"]) or "<root>"
                msg = error["msg"]
                errors.append(f"  - {field}: {msg}")
            raise ConfigurationError(
                "Configuration validation failed:\n" + "\n".join(errors)
            ) from e

    def _find_config_file(self) -> Optional[Path]:
        """Find .retrykit.yml starting from current directory

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        for parent in [current] + list(current.parents):
            config_file = parent / CONFIG_FILE_NAME
            if config_file.exists():
                logger.info(f"Found config file: {config_file}")
                return config_file
        logger.debug(f"No {CONFIG_FILE_NAME} found, using defaults")
        return None

    def _load_config(self) -> RetrySettings:
        """Load configuration from file and validate with Pydantic

        Raises:
            ValidationError: If configuration is invalid
        """
        config_dict: Dict[str, Any] = {"backoff": {}}

        if self.config_path and self.config_path.exists():
            try:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    file_config = yaml.safe_load(f) or {}
                if not isinstance(file_config, dict):
                    raise yaml.YAMLError("top-level value must be a mapping")
                config_dict = self._merge_config(config_dict, file_config)
                logger.info(f"Loaded configuration from {self.config_path}")
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load config from {self.config_path}: {e}")
                logger.info("Using default configuration")

        config_dict = self._apply_env_overrides(config_dict)

        return RetrySettings(**config_dict)

    def _merge_config(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge configuration dictionaries"""
        result = copy.deepcopy(base)
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_config(result[key], value)
            else:
                result[key] = value
        return result

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides

        Values are passed through as strings; pydantic coerces them.
        """
        if os.getenv("RETRYKIT_POLICY"):
            config["policy"] = os.getenv("RETRYKIT_POLICY")

        backoff = config.get("backoff")
        if not isinstance(backoff, dict):
            return config
        for env_var, field in _BACKOFF_ENV_VARS.items():
            value = os.getenv(env_var)
            if value:
                logger.debug(f"Overriding backoff.{field} from {env_var}")
                backoff[field] = value
        return config

    def get_settings(self) -> RetrySettings:
        """Get full retry settings"""
        return self.settings

    def get_backoff_config(self) -> BackoffConfig:
        """Get backoff configuration

        Returns:
            Backoff configuration model
        """
        return self.settings.backoff

    def create_policy(
        self, policy_override: Optional[str] = None, rng: Optional[random.Random] = None
    ) -> RetryPolicy:
        """Create the configured retry policy

        Args:
            policy_override: Policy name overriding the configured one
            rng: Random generator for jitter

        Returns:
            RetryPolicy instance

        Raises:
            ValueError: If the policy name is unknown
        """
        policy_type = policy_override or self.settings.policy
        return RetryPolicyFactory.create(policy_type, self.settings.backoff, rng=rng)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key (supports dot notation)

        Args:
            key: Configuration key (e.g., "backoff.max_backoff" or "policy")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key.split(".")
        value = self.settings.model_dump()
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value
