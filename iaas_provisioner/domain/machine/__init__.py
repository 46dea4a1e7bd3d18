"""Machine bounded context."""

from .exceptions import (
    MachineCleanupError,
    MachineCreationError,
    MachineException,
    MachineNotFoundError,
    MachineValidationError,
    UserDataError,
)
from .machine_aggregate import Machine

__all__ = [
    "Machine",
    "MachineException",
    "MachineNotFoundError",
    "MachineValidationError",
    "MachineCreationError",
    "MachineCleanupError",
    "UserDataError",
]
