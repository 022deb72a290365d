#!/usr/bin/env python3
"""
utils/config.py

Simple configuration management utilities.

Settings are read from an optional YAML file and can be overridden by
environment variables. Explicit command line values always win over both.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ami_cleaner.core.constants import DEFAULT_LOG_FILE, DEFAULT_RETENTION_DAYS
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Simple configuration manager.

    Features:
    - YAML configuration loading
    - Environment variable override support
    """

    def __init__(self, settings_file: Optional[Union[str, Path]] = None):
        """
        Initialize ConfigManager.

        Args:
            settings_file: Path to a settings.yaml file. When omitted, no file is
                read and only environment variables and defaults apply.
        """
        self.settings_file = Path(settings_file) if settings_file else None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Load a YAML file safely.
        """
        if not file_path.exists():
            logger.warning(f"Config file not found: {file_path}")
            return {}

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Error loading {file_path}: {e}") from e

        if content is None:
            return {}
        if not isinstance(content, dict):
            raise ConfigurationError(
                f"Settings file {file_path} must contain a mapping at the top level"
            )
        return content

    def load_settings(self) -> Dict[str, Any]:
        """
        Load application settings.
        """
        if self.settings_file is None:
            return {}
        return self._load_yaml_file(self.settings_file)

    def get_value(
        self, key_path: str, default: Any = None, env_var: Optional[str] = None
    ) -> Any:
        """
        Get configuration value with dot notation support and environment variable override.
        """
        if env_var and env_var in os.environ:
            return os.environ[env_var]

        keys = key_path.split(".")
        current = self.config

        try:
            for key in keys:
                current = current[key]
            return current
        except (KeyError, TypeError):
            return default

    def get_aws_region(self) -> Optional[str]:
        return self.get_value("aws.region")

    def get_aws_profile(self) -> Optional[str]:
        return self.get_value("aws.profile")

    def get_retention_days(self) -> int:
        """Get default retention period in days."""
        value = self.get_value("cleaner.days", DEFAULT_RETENTION_DAYS)
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid cleaner.days setting: {value!r}") from e

    def get_logging_level(self) -> str:
        """Get logging level."""
        return str(self.get_value("logging.level", "INFO", env_var="LOG_LEVEL"))

    def get_log_file(self) -> Optional[str]:
        """Get log file name; an empty value disables file logging."""
        return self.get_value("logging.file", DEFAULT_LOG_FILE, env_var="LOG_FILE") or None

    @property
    def config(self) -> Dict[str, Any]:
        """Get the full configuration as a cached property."""
        if not hasattr(self, "_cached_config"):
            self._cached_config = self.load_settings()
        return self._cached_config

