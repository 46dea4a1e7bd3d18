"""docker-machine IaaS provider."""

from .cli_driver import DockerMachineCLI, new_docker_machine
from .driver_options import DRIVER_DEFAULTS, build_driver_options, default_params_for_driver
from .provider import PROVIDER_TYPE, DockerMachineProvider, generate_random_id
from .registration import register_dockermachine_provider

__all__ = [
    "PROVIDER_TYPE",
    "DockerMachineProvider",
    "DockerMachineCLI",
    "new_docker_machine",
    "DRIVER_DEFAULTS",
    "build_driver_options",
    "default_params_for_driver",
    "generate_random_id",
    "register_dockermachine_provider",
]
