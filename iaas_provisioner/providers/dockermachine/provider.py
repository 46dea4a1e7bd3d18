"""docker-machine IaaS provider.

Creates machines through a docker-machine driver. A creation call goes
through these steps:

1. resolve the driver, the machine name and engine settings from the call
   parameters and the provider configuration;
2. merge the driver options (see ``driver_options``);
3. when the driver takes user-data from a file, write it to a temporary
   file that is removed once the call is over;
4. create the machine with a driver session that is closed on every exit
   path, removing whatever a failed creation left behind.
"""

from contextlib import ExitStack, contextmanager
from typing import Callable, Dict, Iterator, Optional
import io
import secrets

from iaas_provisioner.config.defaults import ConfigurationManager
from iaas_provisioner.config.node import ConfigNode
from iaas_provisioner.domain.base.exceptions import ConfigKeyNotFoundError, ConfigurationError
from iaas_provisioner.domain.base.ports.machine_driver_port import (
    CreateMachineOpts,
    DriverConfig,
    MachineDriver,
)
from iaas_provisioner.domain.machine.exceptions import MachineCleanupError, MachineCreationError
from iaas_provisioner.domain.machine.machine_aggregate import Machine
from iaas_provisioner.infrastructure.error.multi_error import ErrorAggregator
from iaas_provisioner.infrastructure.logging.logger import get_logger
from iaas_provisioner.providers.base.user_data import UserDataProvider, pending_user_data
from iaas_provisioner.providers.dockermachine.cli_driver import new_docker_machine
from iaas_provisioner.providers.dockermachine.driver_options import build_driver_options

logger = get_logger(__name__)

PROVIDER_TYPE = "dockermachine"

DriverFactory = Callable[[DriverConfig], MachineDriver]


def generate_random_id() -> str:
    """32 hex characters from 16 cryptographically random bytes."""
    try:
        return secrets.token_hex(16)
    except (OSError, NotImplementedError) as e:
        raise MachineCreationError(f"failed to generate random id: {e}") from e


class DockerMachineProvider(UserDataProvider):
    """IaaS provider delegating to docker-machine drivers."""

    base_name = PROVIDER_TYPE

    def __init__(
        self,
        name: str,
        config: ConfigurationManager,
        driver_factory: DriverFactory = new_docker_machine,
    ):
        super().__init__(name, config)
        self.driver_factory = driver_factory

    def _optional_config(self, key: str) -> Optional[ConfigNode]:
        try:
            return self.get_config(key)
        except ConfigKeyNotFoundError:
            return None

    def _optional_config_string(self, key: str) -> str:
        node = self._optional_config(key)
        return node.as_string() if node is not None else ""

    def _driver_timeout(self) -> Optional[float]:
        node = self._optional_config("driver:timeout")
        return node.as_float() if node is not None else None

    @contextmanager
    def _driver_session(self, ca_path: str = "") -> Iterator[MachineDriver]:
        """Open a driver for one operation; close it and log its output on exit."""
        output = io.StringIO()
        runtime = self._config.get_app_config().docker_machine
        driver = self.driver_factory(
            DriverConfig(
                out_writer=output,
                err_writer=output,
                ca_path=ca_path,
                timeout=self._driver_timeout(),
                binary=runtime.binary,
                storage_path=runtime.storage_path,
            )
        )
        try:
            yield driver
        finally:
            try:
                driver.close()
            except Exception as e:
                logger.error(f"Failed to close machine driver: {e}", provider=self.name)
            finally:
                logger.debug("docker-machine output", provider=self.name, output=output.getvalue())

    def create_machine(self, params: Dict[str, str]) -> Machine:
        """
        Create a machine.

        Args:
            params: Call parameters. ``driver`` and ``name`` are optional,
                every other key is handed to the driver as an option.

        Returns:
            The created machine, with ``creation_params`` set

        Raises:
            ConfigurationError: If no driver is set in params or configuration
            MachineCreationError: If preparing user-data or creating fails
            MultiError: If creation failed and removing the partial machine
                failed too
        """
        params = dict(params)
        ca_path = self._optional_config_string("ca-path")
        driver_name = params.get("driver")
        if driver_name is None:
            try:
                driver_name = self.get_config_string("driver:name")
            except ConfigKeyNotFoundError:
                raise ConfigurationError("driver", "driver is mandatory") from None
            params["driver"] = driver_name
        install_url, _ = self.resolve("docker-install-url", params)
        insecure_registry, _ = self.resolve("insecure-registry", params)
        machine_name = params.pop("name", None)
        if machine_name is None:
            machine_name = f"{params.get('pool', '')}-{generate_random_id()}"
        user_data_param = self._optional_config_string("driver:user-data-file-param")

        with ExitStack() as stack:
            option_params = params
            if user_data_param:
                user_data_path = stack.enter_context(pending_user_data(self))
                option_params = {**params, user_data_param: user_data_path}
                params.pop(user_data_param, None)
            driver_opts = build_driver_options(
                driver_name, option_params, self._optional_config("driver:options")
            )
            driver = stack.enter_context(self._driver_session(ca_path))
            logger.info(f"Creating machine {machine_name}", provider=self.name, driver=driver_name)
            try:
                machine = driver.create_machine(
                    CreateMachineOpts(
                        name=machine_name,
                        driver_name=driver_name,
                        params=driver_opts,
                        insecure_registry=insecure_registry,
                        docker_engine_install_url=install_url,
                    )
                )
            except MachineCreationError as e:
                if e.machine is not None:
                    self._remove_partial_machine(driver, e)
                raise
        machine.creation_params = params
        machine.iaas = self.name
        logger.info(f"Machine {machine.id} created", provider=self.name, address=machine.address)
        return machine

    def _remove_partial_machine(self, driver: MachineDriver, error: MachineCreationError) -> None:
        machine = error.machine
        logger.warning(
            f"Removing machine {machine.id} left by failed creation",
            provider=self.name,
            error=str(error),
        )
        errors = ErrorAggregator(error)
        try:
            driver.delete_machine(machine)
        except Exception as cleanup_error:
            errors.add(MachineCleanupError(machine.id, cleanup_error))
        if len(errors) > 1:
            raise errors.to_error() from error

    def delete_machine(self, machine: Machine) -> None:
        """
        Destroy a machine. Driver errors are raised unchanged.
        """
        with self._driver_session() as driver:
            logger.info(f"Deleting machine {machine.id}", provider=self.name)
            driver.delete_machine(machine)

    def describe(self) -> str:
        return """DockerMachine IaaS required params:
  driver=<driver>                         Driver to be used by docker machine. Can be set on the IaaS configuration.

Optional params:
  name=<name>                             Hostname for the created machine
  docker-install-url=<docker-install-url> Remote script to be used for docker installation. Defaults to: http://get.docker.com. Can be set on the IaaS configuration.
  insecure-registry=<insecure-registry>   Registry to be added as insecure-registry to the docker engine. Can be set on the IaaS configuration.
"""


def new_dockermachine_provider(name: str, config: ConfigurationManager) -> DockerMachineProvider:
    """Provider constructor registered with the provider registry."""
    return DockerMachineProvider(name, config)
