"""Application bootstrap."""

from __future__ import annotations

from typing import Any, Dict, Optional

from iaas_provisioner.config.defaults import ConfigurationManager
from iaas_provisioner.domain.machine.machine_service import MachineProvisioningService
from iaas_provisioner.infrastructure.logging.logger import get_logger, setup_logging
from iaas_provisioner.infrastructure.registry.provider_registry import (
    ProviderRegistry,
    get_provider_registry,
)
from iaas_provisioner.providers.dockermachine.registration import register_dockermachine_provider


class Application:
    """Application context: configuration, logging and provider registry.

    Providers are registered by ``initialize()``, before any machine
    operation is issued.
    """

    def __init__(
        self,
        config_path: Optional[str] = None,
        config: Optional[Dict[str, Any]] = None,
        registry: Optional[ProviderRegistry] = None,
    ) -> None:
        """Initialize the instance."""
        self.config_path = config_path
        self.config_manager = ConfigurationManager(config_path, config)
        self.registry = registry or get_provider_registry()
        self.machine_service: Optional[MachineProvisioningService] = None
        self._initialized = False
        self.logger = get_logger(__name__)

    def initialize(self) -> Application:
        """Set up logging and register the built-in providers."""
        if self._initialized:
            return self
        app_config = self.config_manager.get_app_config()
        setup_logging(app_config.logging)

        register_dockermachine_provider(self.registry)
        self.machine_service = MachineProvisioningService(self.registry, self.config_manager)
        self._initialized = True
        self.logger.info(
            "Application initialized",
            providers=self.registry.get_registered_providers(),
        )
        return self


def create_application(config_path: Optional[str] = None) -> Application:
    """Create and initialize the application."""
    return Application(config_path).initialize()
