"""Logging configuration schema."""
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class LogLevel(str, Enum):
    """Log level enumeration."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogDestination(str, Enum):
    """Log destination enumeration."""
    FILE = "file"
    STDOUT = "stdout"
    BOTH = "both"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.WARNING, description="Minimum level emitted")
    destination: LogDestination = Field(LogDestination.STDOUT, description="Where records go")
    file_path: str = Field("logs/polydispatch.log", description="Log file for file destinations")
    max_size_mb: int = Field(10, description="Rotate the log file after this many megabytes")
    backup_count: int = Field(5, description="Number of rotated files kept")
    format: str = Field(
        "%(asctime)s - %(levelname)s - %(name)s [%(caller_info)s] - %(message)s",
        description="stdlib logging format string",
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("destination", mode="before")
    @classmethod
    def normalize_destination(cls, v):
        if isinstance(v, str):
            return v.lower()
        return v

    @field_validator("max_size_mb", "backup_count")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Value must not be negative")
        return v
