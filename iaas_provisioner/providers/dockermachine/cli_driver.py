"""Machine driver backed by the docker-machine command line tool.

Each driver instance works in its own machine storage directory. Unless a
storage path is configured, that directory is temporary and removed by
``close()``, so machine state never outlives the operation that created it:
the host description needed to remove a machine later travels in
``Machine.custom_data``.
"""

from typing import List, Mapping, Optional
import json
import os
import shutil
import subprocess
import tempfile

from iaas_provisioner.domain.base.ports.machine_driver_port import (
    CreateMachineOpts,
    DriverConfig,
    MachineDriver,
    OptionValue,
)
from iaas_provisioner.domain.machine.exceptions import MachineCreationError, MachineNotFoundError
from iaas_provisioner.domain.machine.machine_aggregate import Machine
from iaas_provisioner.infrastructure.exceptions import DriverCommandError
from iaas_provisioner.infrastructure.logging.logger import get_logger
from iaas_provisioner.providers.dockermachine.driver_options import default_params_for_driver

logger = get_logger(__name__)

ENGINE_PORT = 2376
ENGINE_PROTOCOL = "https"
CA_FILES = ("ca.pem", "ca-key.pem")
TRUE_VALUES = ("1", "true", "yes", "on")
# returncode reported when the binary could not be started
COMMAND_NOT_RUN = 127


class DockerMachineCLI(MachineDriver):
    """MachineDriver running ``docker-machine`` in a private storage directory."""

    def __init__(self, config: DriverConfig):
        self._config = config
        self._owns_storage = config.storage_path is None
        self.storage_path = config.storage_path or tempfile.mkdtemp(prefix="docker-machine-")
        self._closed = False
        if config.ca_path:
            try:
                self._install_ca(config.ca_path)
            except OSError:
                self.close()
                raise

    def _install_ca(self, ca_path: str) -> None:
        certs_dir = os.path.join(self.storage_path, "certs")
        os.makedirs(certs_dir, exist_ok=True)
        for name in CA_FILES:
            shutil.copy2(os.path.join(ca_path, name), os.path.join(certs_dir, name))

    def _host_dir(self, name: str) -> str:
        return os.path.join(self.storage_path, "machines", name)

    def _run(self, args: List[str]) -> str:
        command = [self._config.binary, "--storage-path", self.storage_path, *args]
        logger.debug(f"Running {' '.join(command)}")
        try:
            result = subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                timeout=self._config.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            output = e.stdout or ""
            if isinstance(output, bytes):
                output = output.decode("utf-8", errors="replace")
            self._config.out_writer.write(output)
            raise DriverCommandError(command, output) from e
        except OSError as e:
            self._config.err_writer.write(f"{e}\n")
            raise DriverCommandError(command, str(e), COMMAND_NOT_RUN) from e
        self._config.out_writer.write(result.stdout)
        self._config.err_writer.write(result.stderr)
        if result.returncode != 0:
            raise DriverCommandError(command, result.stderr or result.stdout, result.returncode)
        return result.stdout

    def _option_flags(self, driver_name: str, params: Mapping[str, OptionValue]) -> List[str]:
        """Turn driver options into command line flags.

        Only options of the selected driver and ``engine-`` options are
        passed on; docker-machine rejects unknown flags.
        """
        defaults = default_params_for_driver(driver_name)
        prefixes = (f"{driver_name}-", "engine-")
        flags: List[str] = []
        for key, value in params.items():
            if not key.startswith(prefixes):
                continue
            if isinstance(defaults.get(key), bool) and isinstance(value, str):
                value = value.lower() in TRUE_VALUES
            if isinstance(value, bool):
                if value:
                    flags.append(f"--{key}")
                continue
            if value == "":
                continue
            flags.extend([f"--{key}", str(value)])
        return flags

    def _partial_machine(self, opts: CreateMachineOpts) -> Optional[Machine]:
        if not os.path.isdir(self._host_dir(opts.name)):
            return None
        custom_data = {"Name": opts.name, "DriverName": opts.driver_name}
        config_file = os.path.join(self._host_dir(opts.name), "config.json")
        try:
            with open(config_file, "r") as f:
                custom_data = json.load(f)
        except FileNotFoundError:
            pass
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable host description {config_file}: {e}")
        return Machine(id=opts.name, name=opts.name, custom_data=custom_data)

    def _read_host_file(self, name: str, filename: str) -> bytes:
        path = os.path.join(self._host_dir(name), filename)
        if not os.path.isfile(path):
            return b""
        with open(path, "rb") as f:
            return f.read()

    def create_machine(self, opts: CreateMachineOpts) -> Machine:
        args = ["create", "--driver", opts.driver_name]
        if opts.docker_engine_install_url:
            args.extend(["--engine-install-url", opts.docker_engine_install_url])
        if opts.insecure_registry:
            args.extend(["--engine-insecure-registry", opts.insecure_registry])
        args.extend(self._option_flags(opts.driver_name, opts.params))
        args.append(opts.name)
        try:
            self._run(args)
            address = self._run(["ip", opts.name]).strip()
            host = json.loads(self._run(["inspect", opts.name]))
        except (DriverCommandError, ValueError) as e:
            raise MachineCreationError(
                f"failed to create machine {opts.name}: {e}",
                machine=self._partial_machine(opts),
            ) from e
        return Machine(
            id=opts.name,
            name=opts.name,
            address=address,
            port=ENGINE_PORT,
            protocol=ENGINE_PROTOCOL,
            custom_data=host,
            ca_cert=self._read_host_file(opts.name, "ca.pem"),
            client_cert=self._read_host_file(opts.name, "cert.pem"),
            client_key=self._read_host_file(opts.name, "key.pem"),
        )

    def _restore_host(self, machine: Machine) -> None:
        """Recreate the host description of a machine created by another session."""
        host_dir = self._host_dir(machine.id)
        config_file = os.path.join(host_dir, "config.json")
        if os.path.isfile(config_file) or not machine.custom_data:
            return
        os.makedirs(host_dir, exist_ok=True)
        with open(config_file, "w") as f:
            json.dump(machine.custom_data, f)

    def delete_machine(self, machine: Machine) -> None:
        self._restore_host(machine)
        try:
            self._run(["rm", "-y", machine.id])
        except DriverCommandError as e:
            if "does not exist" in e.output:
                raise MachineNotFoundError(machine.id) from e
            raise

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_storage:
            shutil.rmtree(self.storage_path)


def new_docker_machine(config: DriverConfig) -> MachineDriver:
    """Default driver factory used by the docker-machine provider."""
    return DockerMachineCLI(config)
