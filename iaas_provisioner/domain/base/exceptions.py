"""Base domain exceptions."""

from typing import Any, Dict, Optional


class DomainException(Exception):
    """Base exception for all provisioning domain errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging and CLI output."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(DomainException):
    """Raised when a domain object fails validation."""


class NotFoundError(DomainException):
    """Raised when a named entity does not exist."""

    def __init__(self, entity_type: str, entity_id: str, message: Optional[str] = None):
        super().__init__(
            message or f"{entity_type} not found: {entity_id}",
            "NOT_FOUND",
            {"entity_type": entity_type, "entity_id": entity_id},
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class ConfigurationError(DomainException):
    """Raised when a mandatory configuration key is missing or invalid."""

    def __init__(self, key: str, message: Optional[str] = None):
        super().__init__(
            message or f"{key} is mandatory",
            "CONFIGURATION_ERROR",
            {"key": key},
        )
        self.key = key


class ConfigKeyNotFoundError(ConfigurationError):
    """Raised when a key is absent from the configuration source."""

    def __init__(self, key: str):
        super().__init__(key, f"key {key!r} not found")


class ConfigTypeError(ConfigurationError):
    """Raised when a configuration value does not have the requested type."""

    def __init__(self, key: str, expected: str, actual: str):
        super().__init__(
            key,
            f"configuration value {key!r} is a {actual}, expected {expected}",
        )
        self.expected = expected
        self.actual = actual
