"""Configuration manager for loading and validating .fetch-retry.yml"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from fetch_retry.domain.config import AppConfig, LoggingConfig, RetryConfig

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".fetch-retry.yml"

_TRUE_VALUES = {"1", "true", "yes", "on"}


class ConfigurationError(Exception):
    """Configuration validation error."""

    pass


class ConfigManager:
    """Manages configuration from .fetch-retry.yml and environment variables

    Configuration priority:
    1. Default values (defined in Pydantic models)
    2. .fetch-retry.yml file (searched from current directory upwards)
    3. Environment variables (FETCH_RETRY_*)
    """

    DEFAULT_CONFIG = {
        "retry": {
            "max_retries": 3,
        },
        "logging": {
            "verbose": False,
        },
    }

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """Initialize config manager

        Args:
            config_path: Path to .fetch-retry.yml (searches from current dir if None)

        Raises:
            ConfigurationError: If configuration validation fails
        """
        if isinstance(config_path, str):
            config_path = Path(config_path)
        self.config_path = config_path or self._find_config_file()
        try:
            self.config: AppConfig = self._load_config()
        except ValidationError as e:
            errors = []
            for error in e.errors():
                field = ".".join(str(x) for x in error["loc"])
                errors.append(f"  - {field}: {error['msg']}")
            raise ConfigurationError("Configuration validation failed:\n" + "\n".join(errors)) from e

    def _find_config_file(self) -> Optional[Path]:
        current = Path.cwd()
        for parent in [current] + list(current.parents):
            config_file = parent / CONFIG_FILE_NAME
            if config_file.exists():
                logger.info(f"Found config file: {config_file}")
                return config_file
        logger.debug(f"No {CONFIG_FILE_NAME} found, using defaults")
        return None

    def _load_config(self) -> AppConfig:
        """Load configuration from file and environment, then validate

        Raises:
            ValidationError: If configuration is invalid
        """
        config_dict = copy.deepcopy(self.DEFAULT_CONFIG)

        if self.config_path and self.config_path.exists():
            try:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    file_config = yaml.safe_load(f) or {}
                if not isinstance(file_config, dict):
                    raise ConfigurationError(f"{self.config_path} must contain a mapping at the top level")
                config_dict = self._merge_config(config_dict, file_config)
                logger.info(f"Loaded configuration from {self.config_path}")
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load config from {self.config_path}: {e}")
                logger.info("Using default configuration")

        config_dict = self._apply_env_overrides(config_dict)
        return AppConfig(**config_dict)

    def _merge_config(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_config(result[key], value)
            else:
                result[key] = value
        return result

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        if os.getenv("FETCH_RETRY_MAX_RETRIES"):
            config["retry"]["max_retries"] = os.getenv("FETCH_RETRY_MAX_RETRIES")

        if os.getenv("FETCH_RETRY_VERBOSE"):
            config["logging"]["verbose"] = os.getenv("FETCH_RETRY_VERBOSE", "").lower() in _TRUE_VALUES

        return config

    def get_retry_config(self) -> RetryConfig:
        return self.config.retry

    def get_logging_config(self) -> LoggingConfig:
        return self.config.logging

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key (supports dot notation)

        Args:
            key: Configuration key (e.g., "retry.max_retries" or "retry")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value = self.config.model_dump()
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value
