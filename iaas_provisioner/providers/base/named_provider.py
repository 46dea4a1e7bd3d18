"""Configuration scoping for named IaaS provider instances.

A provider type (``dockermachine``) can be configured once under
``iaas:<type>`` and several times under ``iaas:custom:<name>``. Settings of
a custom instance take precedence over the settings of its type.
"""

from typing import Dict, Tuple

from iaas_provisioner.config.defaults import ConfigurationManager
from iaas_provisioner.config.node import ConfigNode
from iaas_provisioner.domain.base.exceptions import ConfigKeyNotFoundError, ConfigurationError
from iaas_provisioner.domain.base.ports.provider_port import IaaSProvider


class NamedProvider(IaaSProvider):
    """Provider bound to an instance name and a base provider type."""

    base_name = ""

    def __init__(self, name: str, config: ConfigurationManager):
        self._name = name
        self._config = config

    @property
    def name(self) -> str:
        return self._name

    def get_config(self, key: str) -> ConfigNode:
        """
        Look up a provider setting.

        Args:
            key: Setting name relative to the provider, e.g. ``driver:name``

        Raises:
            ConfigKeyNotFoundError: If neither the instance nor the provider
                type defines the key
        """
        try:
            return self._config.get(f"iaas:custom:{self._name}:{key}")
        except ConfigKeyNotFoundError:
            pass
        try:
            return self._config.get(f"iaas:{self.base_name}:{key}")
        except ConfigKeyNotFoundError:
            raise ConfigKeyNotFoundError(key) from None

    def get_config_string(self, key: str) -> str:
        return self.get_config(key).as_string()

    def resolve(self, key: str, params: Dict[str, str], mandatory: bool = False) -> Tuple[str, bool]:
        """
        Resolve a setting from the call parameters, then the configuration.

        Returns:
            ``(value, True)`` when found, ``("", False)`` when an optional
            setting is absent

        Raises:
            ConfigurationError: If a mandatory setting is absent
        """
        if key in params:
            return params[key], True
        try:
            return self.get_config_string(key), True
        except ConfigKeyNotFoundError:
            if mandatory:
                raise ConfigurationError(key) from None
            return "", False
