"""Domain service for machine operations across IaaS providers."""

from typing import Any, Dict, List, Optional

from iaas_provisioner.config.defaults import ConfigurationManager
from iaas_provisioner.config.node import NodeKind
from iaas_provisioner.domain.base.exceptions import ConfigKeyNotFoundError
from iaas_provisioner.domain.machine.machine_aggregate import Machine
from iaas_provisioner.infrastructure.logging.logger import get_logger
from iaas_provisioner.infrastructure.registry.provider_registry import ProviderRegistry

IAAS_PARAM = "iaas"


class MachineProvisioningService:
    """Creates and deletes machines through the provider registry.

    The ``iaas`` call parameter selects the provider; without it the
    configured default provider is used.
    """

    def __init__(self, registry: ProviderRegistry, config: ConfigurationManager):
        self._registry = registry
        self._config = config
        self._logger = get_logger(__name__)

    def _provider_name(self, name: Optional[str]) -> str:
        return name or self._registry.get_default_provider_name(self._config)

    def create_machine(self, params: Dict[str, str]) -> Machine:
        params = dict(params)
        iaas_name = self._provider_name(params.pop(IAAS_PARAM, ""))
        provider = self._registry.get(iaas_name, self._config)
        machine = provider.create_machine(params)
        machine.iaas = iaas_name
        machine.creation_params[IAAS_PARAM] = iaas_name
        self._logger.info(f"Machine {machine.id} created", iaas=iaas_name)
        return machine

    def delete_machine(self, machine: Machine) -> None:
        iaas_name = self._provider_name(machine.iaas)
        provider = self._registry.get(iaas_name, self._config)
        provider.delete_machine(machine)
        self._logger.info(f"Machine {machine.id} deleted", iaas=iaas_name)

    def describe(self, iaas_name: Optional[str] = None) -> str:
        return self._registry.get(self._provider_name(iaas_name), self._config).describe()

    def list_providers(self) -> List[Dict[str, Any]]:
        """Registered provider types and configured custom instances."""
        providers = [
            {"name": provider_type, "type": provider_type}
            for provider_type in self._registry.get_registered_providers()
        ]
        try:
            custom = self._config.get("iaas:custom")
        except ConfigKeyNotFoundError:
            return providers
        if custom.kind == NodeKind.MAPPING:
            for name, _ in custom.string_items():
                provider_type = self._registry.resolve_provider_type(name, self._config)
                if self._registry.is_provider_registered(provider_type):
                    providers.append({"name": name, "type": provider_type})
        return providers
