"""Domain ports - interfaces implemented by providers and machine drivers."""

from .machine_driver_port import CreateMachineOpts, DriverConfig, MachineDriver
from .provider_port import IaaSProvider

__all__ = [
    "IaaSProvider",
    "MachineDriver",
    "DriverConfig",
    "CreateMachineOpts",
]
