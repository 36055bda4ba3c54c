"""
Configuration management with YAML and environment variable support.

Environment variables take precedence over YAML configuration.
Sensitive values are automatically masked in logs.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from agecompute.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Patterns for sensitive keys that should be masked in logs
SENSITIVE_PATTERNS = [
    re.compile(r".*api[_-]?key.*", re.IGNORECASE),
    re.compile(r".*token.*", re.IGNORECASE),
    re.compile(r".*secret.*", re.IGNORECASE),
    re.compile(r".*password.*", re.IGNORECASE),
]

# Default configuration paths
DEFAULT_CONFIG_PATHS = [
    Path("agecompute.yaml"),
    Path("agecompute.yml"),
    Path("config/agecompute.yaml"),
    Path.home() / ".agecompute" / "config.yaml",
]

ENV_PREFIX = "AGECOMPUTE_"

DEFAULT_INSIGHT_MODEL = "claude-sonnet-4-20250514"
DEFAULT_INSIGHT_TIMEOUT = 20.0
DEFAULT_INSIGHT_MAX_TOKENS = 1024


def _is_sensitive_key(key: str) -> bool:
    """Check if a key contains sensitive information."""
    return any(pattern.match(key) for pattern in SENSITIVE_PATTERNS)


def _mask_value(value: Any) -> str:
    """Mask sensitive values for logging."""
    if value is None:
        return "None"
    str_value = str(value)
    if len(str_value) <= 8:
        return "***"
    return f"{str_value[:4]}...{str_value[-4:]}"


class Config:
    """
    YAML + environment variable integrated configuration management.

    Environment variables take precedence over YAML values.
    Supports nested key access with dot notation (e.g., "insight.timeout").

    Usage:
        config = Config()
        api_key = config.anthropic_api_key
        timeout = config.get("insight.timeout", default=20.0)
    """

    def __init__(self, config_path: Path | str | None = None, env_file: Path | str | None = None):
        """
        Initialize configuration.

        Args:
            config_path: Path to YAML config file. If None, searches default locations.
            env_file: Path to .env file. If None, searches current directory.
        """
        env_path = Path(env_file) if env_file else None
        load_dotenv(dotenv_path=env_path, override=False)

        self._config: dict[str, Any] = {}
        self._config_path: Path | None = None

        self._load_yaml(config_path)

        logger.debug("Configuration initialized from: %s", self._config_path or "defaults only")

    def _load_yaml(self, config_path: Path | str | None = None) -> None:
        """Load YAML configuration file."""
        if config_path:
            path = Path(config_path)
            if not path.exists():
                raise ConfigurationError(f"Configuration file not found: {path}")
            self._config_path = path
        else:
            for default_path in DEFAULT_CONFIG_PATHS:
                if default_path.exists():
                    self._config_path = default_path
                    break

        if self._config_path:
            try:
                with self._config_path.open("r", encoding="utf-8") as f:
                    loaded = yaml.safe_load(f)
                    if loaded:
                        if not isinstance(loaded, dict):
                            raise ConfigurationError(
                                f"Top level of {self._config_path} must be a mapping"
                            )
                        self._config = loaded
                logger.info("Loaded configuration from: %s", self._config_path)
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {self._config_path}: {e}") from e
            except OSError as e:
                raise ConfigurationError(f"Failed to read {self._config_path}: {e}") from e

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value.

        Environment variable mapping:
            "insight.timeout" -> AGECOMPUTE_INSIGHT_TIMEOUT

        Args:
            key: Configuration key (dot notation supported)
            default: Default value if key not found

        Returns:
            Configuration value
        """
        env_key = f"{ENV_PREFIX}{key.upper().replace('.', '_')}"
        env_value = os.getenv(env_key)

        if env_value is not None:
            value = self._parse_env_value(env_value)
            if _is_sensitive_key(key):
                logger.debug("Config %s from env: %s", key, _mask_value(value))
            else:
                logger.debug("Config %s from env: %s", key, value)
            return value

        value = self._get_nested(key)
        if value is not None:
            if _is_sensitive_key(key):
                logger.debug("Config %s from yaml: %s", key, _mask_value(value))
            else:
                logger.debug("Config %s from yaml: %s", key, value)
            return value

        return default

    def _get_nested(self, key: str) -> Any:
        """Get nested value from config dict using dot notation."""
        value: Any = self._config

        for part in key.split("."):
            if isinstance(value, dict):
                value = value.get(part)
            else:
                return None
            if value is None:
                return None

        return value

    @staticmethod
    def _parse_env_value(value: str) -> Any:
        """Parse environment variable string to appropriate type."""
        if value.lower() in ("true", "yes", "on"):
            return True
        if value.lower() in ("false", "no", "off"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value

    @property
    def anthropic_api_key(self) -> str | None:
        """Get Anthropic API key from environment."""
        key = os.getenv("ANTHROPIC_API_KEY")
        if key:
            logger.debug("Anthropic API key found: %s", _mask_value(key))
        return key

    @property
    def insight_enabled(self) -> bool:
        """Whether the CLI requests a cultural insight by default."""
        value = self.get("insight.enabled", default=True)
        # Quoted YAML values arrive as strings, e.g. enabled: "false"
        if isinstance(value, str):
            value = self._parse_env_value(value)
        return bool(value)

    @property
    def insight_model(self) -> str:
        return str(self.get("insight.model", default=DEFAULT_INSIGHT_MODEL))

    @property
    def insight_timeout(self) -> float:
        """Request timeout in seconds for the insight call."""
        return float(self.get("insight.timeout", default=DEFAULT_INSIGHT_TIMEOUT))

    @property
    def insight_max_tokens(self) -> int:
        return int(self.get("insight.max_tokens", default=DEFAULT_INSIGHT_MAX_TOKENS))

    def __repr__(self) -> str:
        return f"Config(path={self._config_path})"
