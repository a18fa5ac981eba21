"""Configuration schemas."""

from .app_schema import AppConfig
from .logging_schema import LogDestination, LoggingConfig, LogLevel
from .registry_schema import RegistryConfig

__all__ = [
    "AppConfig",
    "LogDestination",
    "LogLevel",
    "LoggingConfig",
    "RegistryConfig",
]
