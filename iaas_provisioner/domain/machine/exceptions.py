"""Machine domain exceptions."""

from typing import TYPE_CHECKING, Optional

from iaas_provisioner.domain.base.exceptions import (
    DomainException,
    NotFoundError,
    ValidationError,
)

if TYPE_CHECKING:
    from iaas_provisioner.domain.machine.machine_aggregate import Machine


class MachineException(DomainException):
    """Base exception for machine domain errors."""


class MachineNotFoundError(NotFoundError):
    """Raised when the backend does not know a machine."""

    def __init__(self, machine_id: str):
        super().__init__("Machine", machine_id)


class MachineValidationError(ValidationError):
    """Raised when machine validation fails."""


class MachineCreationError(MachineException):
    """Raised when a driver fails to create a machine.

    ``machine`` holds whatever the driver managed to create before failing,
    or ``None`` when nothing was left behind. A non-None machine triggers
    the rollback path of the provisioning workflow.
    """

    def __init__(self, message: str, machine: Optional["Machine"] = None):
        details = {"machine_id": machine.id} if machine is not None else {}
        super().__init__(message, "MACHINE_CREATION_FAILED", details)
        self.machine = machine


class UserDataError(MachineCreationError):
    """Raised when the local user-data file cannot be prepared."""

    def __init__(self, step: str, cause: BaseException):
        super().__init__(f"{step}: {cause}")
        self.step = step
        self.details["step"] = step


class MachineCleanupError(MachineException):
    """Raised when removing a partially created machine fails."""

    def __init__(self, machine_id: str, cause: BaseException):
        super().__init__(
            f"failed to remove machine after error: {cause}",
            "MACHINE_CLEANUP_FAILED",
            {"machine_id": machine_id},
        )
        self.machine_id = machine_id
        self.cause = cause
        self.__cause__ = cause
