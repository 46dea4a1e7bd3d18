"""Typed configuration sections validated with pydantic."""

from enum import Enum
from typing import Optional

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

    level: str = Field("INFO", description="Root log level")
    destination: str = Field("stdout", description="Where log records go: file, stdout or both")
    file_path: str = Field(
        "logs/iaas-provisioner.log", description="Log file path when logging to a file"
    )
    max_size_mb: int = Field(10, description="Rotate the log file after this size")
    backup_count: int = Field(5, description="Rotated log files to keep")
    format: str = Field(
        "%(asctime)s - %(levelname)s - %(name)s [%(caller_info)s] - %(message)s",
        description="stdlib logging format string",
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        level = v.upper()
        valid_levels = [lvl.value for lvl in LogLevel]
        if level not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return level

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        """Validate log destination."""
        valid_destinations = [dest.value for dest in LogDestination]
        if v not in valid_destinations:
            raise ValueError(f"Log destination must be one of {valid_destinations}")
        return v

    @field_validator("max_size_mb", "backup_count")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Log rotation settings must be positive")
        return v


class DriverRuntimeConfig(BaseModel):
    """Settings for the docker-machine binary used by the CLI driver."""

    binary: str = Field("docker-machine", description="docker-machine executable")
    storage_path: Optional[str] = Field(
        None, description="Machine storage directory, a temporary one per call when unset"
    )


class AppConfig(BaseModel):
    """Application configuration."""

    version: str = Field("1.0", description="Configuration version")
    logging: LoggingConfig = Field(default_factory=lambda: LoggingConfig())
    docker_machine: DriverRuntimeConfig = Field(default_factory=lambda: DriverRuntimeConfig())
