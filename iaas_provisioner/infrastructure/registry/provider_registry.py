"""Provider Registry - Registry pattern for IaaS provider constructors.

Providers are registered by type name once, at process start, and looked
up on every provisioning call. Custom provider instances declared in the
configuration (``iaas:custom:<name>:provider``) resolve to the constructor
of their base provider type.
"""

from typing import Callable, Dict, List, Optional
import threading

from iaas_provisioner.config.defaults import ConfigurationManager
from iaas_provisioner.config.node import NodeKind
from iaas_provisioner.domain.base.exceptions import (
    ConfigKeyNotFoundError,
    ConfigurationError,
    NotFoundError,
)
from iaas_provisioner.domain.base.ports.provider_port import IaaSProvider
from iaas_provisioner.infrastructure.logging.logger import get_logger

ProviderConstructor = Callable[[str, ConfigurationManager], IaaSProvider]

DEFAULT_PROVIDER_KEY = "iaas:default"
CUSTOM_PROVIDER_KEY = "iaas:custom:{name}:provider"


class ProviderNotFoundError(NotFoundError):
    """Raised when no provider is registered under the requested name."""

    def __init__(self, name: str, provider_type: str):
        if name == provider_type:
            message = f"IaaS provider {name!r} not registered"
        else:
            message = f"IaaS provider {name!r} based on {provider_type!r} not registered"
        super().__init__("IaaS provider", name, message)
        self.provider_type = provider_type


class ProviderRegistry:
    """
    Registry for IaaS provider constructors.

    Registration is expected during startup only; lookups may happen from
    any thread afterwards. Providers are never unregistered.

    Thread-safe singleton implementation.
    """

    _instance: Optional['ProviderRegistry'] = None
    _lock = threading.RLock()

    def __init__(self):
        """Initialize provider registry."""
        self._registrations: Dict[str, ProviderConstructor] = {}
        self._logger = get_logger(__name__)
        self._registration_lock = threading.RLock()

    @classmethod
    def get_instance(cls) -> 'ProviderRegistry':
        """Get singleton instance of provider registry."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def register(self, provider_type: str, constructor: ProviderConstructor) -> None:
        """
        Register a provider constructor.

        Args:
            provider_type: Type identifier for the provider (e.g., 'dockermachine')
            constructor: Callable building a provider from an instance name and
                         the configuration manager

        Raises:
            ValueError: If provider_type is already registered
        """
        with self._registration_lock:
            if provider_type in self._registrations:
                raise ValueError(f"Provider type '{provider_type}' is already registered")
            # copy-on-write keeps lookups lock free
            registrations = dict(self._registrations)
            registrations[provider_type] = constructor
            self._registrations = registrations
        self._logger.info(f"Registered provider: {provider_type}")

    def is_provider_registered(self, provider_type: str) -> bool:
        """
        Check if a provider type is registered.

        Args:
            provider_type: Type identifier for the provider

        Returns:
            True if provider is registered, False otherwise
        """
        return provider_type in self._registrations

    def get_registered_providers(self) -> List[str]:
        """
        Get list of all registered provider types.

        Returns:
            List of registered provider type identifiers
        """
        return sorted(self._registrations)

    def resolve_provider_type(self, name: str, config: ConfigurationManager) -> str:
        """Return the provider type a provider instance name is based on."""
        try:
            return config.get_string(CUSTOM_PROVIDER_KEY.format(name=name))
        except ConfigKeyNotFoundError:
            return name

    def get(self, name: str, config: ConfigurationManager) -> IaaSProvider:
        """
        Build the provider registered for a name.

        Args:
            name: Provider type, or name of a custom provider instance
            config: Configuration the provider reads its settings from

        Returns:
            Provider instance bound to ``name``

        Raises:
            ProviderNotFoundError: If no constructor matches the name
        """
        provider_type = self.resolve_provider_type(name, config)
        constructor = self._registrations.get(provider_type)
        if constructor is None:
            raise ProviderNotFoundError(name, provider_type)
        self._logger.debug(f"Creating provider {name} of type {provider_type}")
        return constructor(name, config)

    def get_default_provider_name(self, config: ConfigurationManager) -> str:
        """
        Name of the provider used when the caller does not choose one.

        ``iaas:default`` wins; otherwise, when exactly one provider is
        configured, that one is used.

        Raises:
            ConfigurationError: If no default can be determined
        """
        try:
            return config.get_string(DEFAULT_PROVIDER_KEY)
        except ConfigKeyNotFoundError:
            pass
        configured = []
        try:
            iaas_config = config.get("iaas")
        except ConfigKeyNotFoundError:
            iaas_config = None
        if iaas_config is not None and iaas_config.kind == NodeKind.MAPPING:
            for key, node in iaas_config.string_items():
                if key == "custom" and node.kind == NodeKind.MAPPING:
                    configured.extend(name for name, _ in node.string_items())
                elif key not in ("custom", "default"):
                    configured.append(key)
        if len(configured) == 1:
            return configured[0]
        raise ConfigurationError(DEFAULT_PROVIDER_KEY)


# Convenience function for global access
def get_provider_registry() -> ProviderRegistry:
    """Get the global provider registry instance."""
    return ProviderRegistry.get_instance()
