"""docker-machine provider registration."""

from typing import TYPE_CHECKING, Optional

from iaas_provisioner.infrastructure.logging.logger import get_logger
from iaas_provisioner.providers.dockermachine.provider import (
    PROVIDER_TYPE,
    new_dockermachine_provider,
)

if TYPE_CHECKING:
    from iaas_provisioner.infrastructure.registry.provider_registry import ProviderRegistry


def register_dockermachine_provider(registry: Optional['ProviderRegistry'] = None) -> None:
    """Register the docker-machine provider with the provider registry.

    Args:
        registry: Provider registry instance (optional, defaults to the
                  process-wide registry)
    """
    if registry is None:
        # Import here to avoid circular dependencies
        from iaas_provisioner.infrastructure.registry.provider_registry import get_provider_registry
        registry = get_provider_registry()

    if registry.is_provider_registered(PROVIDER_TYPE):
        get_logger(__name__).debug(f"Provider {PROVIDER_TYPE} already registered")
        return
    registry.register(PROVIDER_TYPE, new_dockermachine_provider)
