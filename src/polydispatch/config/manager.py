"""Configuration management for the registry and its logging."""
from __future__ import annotations
import copy
import json
import os
import re
import threading
from typing import Any, Dict, Optional

from pydantic import ValidationError

from polydispatch.config.defaults import DEFAULT_CONFIG
from polydispatch.config.schemas import AppConfig, LoggingConfig, RegistryConfig
from polydispatch.domain.core.exceptions import ConfigurationError

_PLACEHOLDER = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::([^}]*))?\}")


def interpolate_values(config: Any) -> Any:
    """
    Replace ``${VAR}`` and ``${VAR:default}`` placeholders from the environment.

    Unset variables without a default are left untouched. Dicts and lists are
    walked recursively; other values are returned unchanged.
    """
    if isinstance(config, str):
        def replace(match: "re.Match[str]") -> str:
            name, default = match.group(1), match.group(2)
            if name in os.environ:
                return os.environ[name]
            return default if default is not None else match.group(0)
        return _PLACEHOLDER.sub(replace, config)
    elif isinstance(config, dict):
        return {k: interpolate_values(v) for k, v in config.items()}
    elif isinstance(config, list):
        return [interpolate_values(v) for v in config]
    return config


def deep_update(target: Dict[str, Any], source: Dict[str, Any]) -> None:
    for key, value in source.items():
        if key in target and isinstance(target[key], dict) and isinstance(value, dict):
            deep_update(target[key], value)
        else:
            target[key] = value


class ConfigurationManager:
    """
    Manages configuration with defaults and overrides.

    This class handles:
    - Loading default configuration
    - Merging an optional JSON configuration file
    - Merging explicit overrides (highest priority)
    - Environment variable interpolation
    - Validation into typed pydantic models
    """

    def __init__(self,
                 config_file: Optional[str] = None,
                 overrides: Optional[Dict[str, Any]] = None):
        """
        Initialize configuration manager with defaults.

        Args:
            config_file: Optional path to a JSON configuration file
            overrides: Optional configuration dictionary merged last
        """
        self._lock = threading.RLock()
        self._config: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
        self._app_config: Optional[AppConfig] = None

        if config_file:
            self._load_config_file(config_file)
        if overrides:
            deep_update(self._config, overrides)

    def _load_config_file(self, config_path: str) -> None:
        """Load configuration from file."""
        try:
            with open(config_path, 'r') as f:
                user_config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Failed to load configuration: {str(e)}") from e
        if not isinstance(user_config, dict):
            raise ConfigurationError(
                f"Configuration file {config_path} must contain a JSON object"
            )
        deep_update(self._config, user_config)

    def update_config(self, user_config: Dict[str, Any]) -> None:
        """Merge ``user_config`` and drop the cached typed view."""
        with self._lock:
            deep_update(self._config, user_config)
            self._app_config = None

    def get_config(self) -> Dict[str, Any]:
        """Get the complete configuration with all interpolations applied."""
        with self._lock:
            return interpolate_values(self._config)

    @property
    def app_config(self) -> AppConfig:
        """Lazy load and validate application configuration."""
        if self._app_config is None:
            with self._lock:
                if self._app_config is None:
                    self._app_config = self._build_app_config()
        return self._app_config

    def _build_app_config(self) -> AppConfig:
        try:
            return AppConfig.model_validate(self.get_config())
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    @property
    def logging(self) -> LoggingConfig:
        return self.app_config.logging

    @property
    def registry(self) -> RegistryConfig:
        return self.app_config.registry


def get_config(config_file: Optional[str] = None, **overrides: Any) -> AppConfig:
    """Build a validated AppConfig from defaults, an optional file and overrides."""
    return ConfigurationManager(config_file=config_file, overrides=overrides or None).app_config
