"""Base domain layer - shared kernel for the provisioning domain."""

from .exceptions import (
    ConfigKeyNotFoundError,
    ConfigTypeError,
    ConfigurationError,
    DomainException,
    NotFoundError,
    ValidationError,
)

__all__ = [
    "DomainException",
    "ValidationError",
    "NotFoundError",
    "ConfigurationError",
    "ConfigKeyNotFoundError",
    "ConfigTypeError",
]
