"""Domain port for IaaS provider operations."""

from abc import ABC, abstractmethod
from typing import Dict

from iaas_provisioner.domain.machine.machine_aggregate import Machine


class IaaSProvider(ABC):
    """Domain port for IaaS provider operations."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Name the provider was resolved under."""

    @abstractmethod
    def create_machine(self, params: Dict[str, str]) -> Machine:
        """Create a machine from call parameters."""

    @abstractmethod
    def delete_machine(self, machine: Machine) -> None:
        """Destroy a machine previously created by this provider."""

    @abstractmethod
    def describe(self) -> str:
        """Static usage text describing the accepted parameters."""
