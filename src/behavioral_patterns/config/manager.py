"""Unified configuration management for the application."""
from __future__ import annotations

import copy
import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError as PydanticValidationError

from behavioral_patterns._package import ENV_PREFIX
from behavioral_patterns.config.schemas import AppConfig
from behavioral_patterns.config.utils.env_expansion import expand_config_env_vars
from behavioral_patterns.domain.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILE_ENV = f"{ENV_PREFIX}CONFIG_FILE"

# Environment variable -> (section, key); a None section means top level
ENV_OVERRIDES = {
    f"{ENV_PREFIX}LOG_LEVEL": ("logging", "level"),
    f"{ENV_PREFIX}LOG_DESTINATION": ("logging", "destination"),
    f"{ENV_PREFIX}LOG_FORMAT": ("logging", "format"),
    f"{ENV_PREFIX}ENVIRONMENT": (None, "environment"),
    f"{ENV_PREFIX}CATALOG_PATH": ("catalog", "source_path"),
    f"{ENV_PREFIX}SERVER_HOST": ("server", "host"),
    f"{ENV_PREFIX}SERVER_PORT": ("server", "port"),
}


class ConfigurationManager:
    """
    Single source of truth for application configuration.

    Sources, in increasing precedence:
    - built-in defaults from the schemas
    - a JSON or YAML file (``config_file`` argument, else ``BP_CONFIG_FILE``)
    - ``BP_*`` environment variable overrides

    ``$VAR`` references inside string values are expanded. Loading is lazy
    and the result is cached until ``reload()``.
    """

    def __init__(self, config_file: Optional[str] = None):
        self._config_file = config_file
        self._lock = threading.RLock()
        self._app_config: Optional[AppConfig] = None
        self._raw_config: Dict[str, Any] = {}

    @property
    def config_file(self) -> Optional[str]:
        """The file configuration is read from, if any."""
        return self._config_file or os.environ.get(CONFIG_FILE_ENV) or None

    @property
    def app_config(self) -> AppConfig:
        """Lazy load application configuration."""
        if self._app_config is None:
            with self._lock:
                if self._app_config is None:
                    self._app_config = self._load_app_config()
        return self._app_config

    def _load_app_config(self) -> AppConfig:
        config_data: Dict[str, Any] = {}
        config_file = self.config_file
        if config_file:
            config_data = self.load_from_file(config_file)

        config_data = expand_config_env_vars(config_data)
        config_data = self.apply_environment_overrides(config_data)
        self._raw_config = config_data

        try:
            app_config = AppConfig.from_dict(config_data)
        except PydanticValidationError as e:
            missing = [
                ".".join(str(part) for part in error["loc"])
                for error in e.errors()
                if error["type"] == "missing"
            ]
            raise ConfigurationError(f"Invalid configuration: {e}", missing_fields=missing)

        logger.debug(f"Configuration loaded ({app_config.environment}) from {config_file or 'defaults'}")
        return app_config

    @staticmethod
    def load_from_file(path: str) -> Dict[str, Any]:
        """
        Read a JSON or YAML configuration file.

        Raises:
            ConfigurationError: If the file is missing, unreadable or not a mapping
        """
        file_path = Path(path)
        if not file_path.is_file():
            raise ConfigurationError(f"Configuration file not found: {file_path}")

        text = file_path.read_text(encoding="utf-8")
        try:
            if file_path.suffix.lower() == ".json":
                data = json.loads(text)
            else:
                data = yaml.safe_load(text)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to parse configuration file {file_path}: {e}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {file_path} must contain a mapping")
        return data

    @staticmethod
    def apply_environment_overrides(config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Return a copy of ``config_data`` with ``BP_*`` variables applied."""
        result = copy.deepcopy(config_data)
        for env_name, (section, key) in ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value is None or value == "":
                continue
            if section is None:
                result[key] = value
            else:
                if result.get(section) is None:
                    result[section] = {}
                target = result[section]
                if not isinstance(target, dict):
                    raise ConfigurationError(f"Configuration section '{section}' must be a mapping")
                target[key] = value
            logger.debug(f"Configuration override from {env_name}")
        return result

    def get_raw_config(self) -> Dict[str, Any]:
        """The merged configuration data before validation."""
        with self._lock:
            if self._app_config is None:
                self._app_config = self._load_app_config()
            return copy.deepcopy(self._raw_config)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by dot-separated key, e.g. ``server.port``.
        """
        value: Any = self.app_config.model_dump()
        for part in key.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default
        return value

    def reload(self) -> None:
        """Reload configuration from sources on next access."""
        with self._lock:
            self._app_config = None
            self._raw_config = {}


_config_manager: Optional[ConfigurationManager] = None
_config_manager_lock = threading.Lock()


def get_config_manager(config_file: Optional[str] = None) -> ConfigurationManager:
    """
    Get the shared configuration manager.

    Passing a different ``config_file`` than the current one replaces it.
    """
    global _config_manager
    with _config_manager_lock:
        if _config_manager is None or (config_file and config_file != _config_manager._config_file):
            _config_manager = ConfigurationManager(config_file)
        return _config_manager
