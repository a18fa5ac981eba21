"""Configuration package - pydantic schemas and the configuration manager."""

from polydispatch.config.schemas import (
    AppConfig,
    LogDestination,
    LoggingConfig,
    LogLevel,
    RegistryConfig,
)
from polydispatch.config.manager import ConfigurationManager, get_config

__all__ = [
    "AppConfig",
    "ConfigurationManager",
    "LogDestination",
    "LogLevel",
    "LoggingConfig",
    "RegistryConfig",
    "get_config",
]
