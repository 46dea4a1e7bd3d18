"""Domain port for machine drivers.

A machine driver performs the actual create and delete calls against a
virtualization backend. Drivers are scoped to one operation: callers build a
driver, use it, and close it on every exit path.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Mapping, Optional, TextIO, Union

from iaas_provisioner.domain.machine.machine_aggregate import Machine

OptionValue = Union[str, int, float, bool]


@dataclass
class DriverConfig:
    """Settings for one driver session.

    Diagnostic output produced during the session is written to
    ``out_writer`` and ``err_writer`` so the caller can log it afterwards.
    ``timeout`` bounds each backend call in seconds; None waits forever.
    """

    out_writer: TextIO
    err_writer: TextIO
    ca_path: str = ""
    timeout: Optional[float] = None
    binary: str = "docker-machine"
    storage_path: Optional[str] = None


@dataclass
class CreateMachineOpts:
    """Everything a driver needs to create one machine."""

    name: str
    driver_name: str
    params: Mapping[str, OptionValue] = field(default_factory=dict)
    insecure_registry: str = ""
    docker_engine_install_url: str = ""


class MachineDriver(ABC):
    """Port implemented by machine drivers."""

    @abstractmethod
    def create_machine(self, opts: CreateMachineOpts) -> Machine:
        """
        Create a machine.

        Raises:
            MachineCreationError: On failure. Its ``machine`` attribute holds
                the partially created machine when the backend left one.
        """

    @abstractmethod
    def delete_machine(self, machine: Machine) -> None:
        """
        Destroy a machine.

        Raises:
            MachineNotFoundError: If the backend does not know the machine
        """

    @abstractmethod
    def close(self) -> None:
        """Release the backend session."""

    def __enter__(self) -> "MachineDriver":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
