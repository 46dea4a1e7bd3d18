# iaas_provisioner/config/defaults.py
from typing import Dict, Any, Optional
import copy
import json
import os

import yaml
from pydantic import ValidationError

from iaas_provisioner.config.node import ConfigNode
from iaas_provisioner.config.schemas import AppConfig
from iaas_provisioner.domain.base.exceptions import ConfigKeyNotFoundError, ConfigurationError

CONFIG_FILE_ENV_VAR = "IAAS_PROVISIONER_CONFIG"

KEY_SEPARATOR = ":"

DEFAULT_CONFIG = {
    # Logging configuration
    "logging": {
        "level": "${LOG_LEVEL:INFO}",
        "destination": "${LOG_DESTINATION:stdout}",
        "file_path": "${IAAS_PROVISIONER_LOGDIR:logs}/iaas-provisioner.log",
        "max_size_mb": 10,
        "backup_count": 5,
    },

    # docker-machine binary used by the CLI driver
    "docker_machine": {
        "binary": "${DOCKER_MACHINE_BINARY:docker-machine}",
    },

    # IaaS providers, keyed by provider type; named instances live under
    # iaas:custom:<name> and point at their type through a "provider" key.
    "iaas": {},
}


class ConfigurationManager:
    """
    Manages application configuration with defaults and overrides.

    This class handles:
    - Loading default configuration
    - Applying a YAML or JSON configuration file
    - Variable interpolation (``${VAR}`` and ``${VAR:default}``)
    - Colon separated key lookups returning typed ``ConfigNode`` values
    """

    def __init__(self, config_file: Optional[str] = None, config: Optional[Dict[str, Any]] = None):
        """
        Initialize configuration manager with defaults.

        Args:
            config_file: Optional path to configuration file. If not provided,
                        IAAS_PROVISIONER_CONFIG is used when set.
            config: Optional configuration dictionary merged over the defaults,
                    after the file.
        """
        self._config = copy.deepcopy(DEFAULT_CONFIG)

        config_file = config_file or os.environ.get(CONFIG_FILE_ENV_VAR)
        if config_file:
            self._load_config_file(config_file)

        if config:
            self.update_config(config)

    def _load_config_file(self, config_path: str) -> None:
        """Load configuration from file."""
        try:
            with open(config_path, 'r') as f:
                if config_path.endswith(".json"):
                    user_config = json.load(f)
                else:
                    user_config = yaml.safe_load(f) or {}
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(
                config_path, f"Failed to load configuration: {str(e)}"
            ) from e
        if not isinstance(user_config, dict):
            raise ConfigurationError(
                config_path, "Failed to load configuration: top level must be a mapping"
            )
        self.update_config(user_config)

    def update_config(self, user_config: Dict[str, Any]) -> None:
        """
        Update configuration with user-provided values.

        Args:
            user_config: Configuration dictionary merged recursively over the
                         current configuration
        """
        def deep_update(target: Dict[str, Any], source: Dict[str, Any]) -> None:
            for key, value in source.items():
                if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                    deep_update(target[key], value)
                else:
                    target[key] = copy.deepcopy(value)

        deep_update(self._config, user_config)

    def _interpolate_values(self, config: Any) -> Any:
        """Interpolate variables in configuration values."""
        if isinstance(config, str):
            if config.startswith("${") and "}" in config:
                end = config.index("}")
                var_name, suffix = config[2:end], config[end + 1:]
                if ":" in var_name:
                    var_name, default = var_name.split(":", 1)
                    return os.environ.get(var_name, default) + suffix
                if var_name in os.environ:
                    return os.environ[var_name] + suffix
            return config
        elif isinstance(config, dict):
            return {k: self._interpolate_values(v) for k, v in config.items()}
        elif isinstance(config, list):
            return [self._interpolate_values(v) for v in config]
        return config

    def get_config(self) -> Dict[str, Any]:
        """
        Get the complete configuration with all interpolations applied.

        Returns:
            Dict containing the complete configuration
        """
        return self._interpolate_values(self._config)

    def get(self, key: str) -> ConfigNode:
        """
        Look up a colon separated key, e.g. ``iaas:dockermachine:driver:name``.

        Args:
            key: Configuration key

        Returns:
            ConfigNode wrapping the interpolated value

        Raises:
            ConfigKeyNotFoundError: If any segment of the key is missing
        """
        current: Any = self._config
        for segment in key.split(KEY_SEPARATOR):
            if not isinstance(current, dict) or segment not in current:
                raise ConfigKeyNotFoundError(key)
            current = current[segment]
        return ConfigNode(key, self._interpolate_values(current))

    def get_string(self, key: str) -> str:
        """Look up a key whose value must be a string."""
        return self.get(key).as_string()

    def has(self, key: str) -> bool:
        try:
            self.get(key)
        except ConfigKeyNotFoundError:
            return False
        return True

    def get_app_config(self) -> AppConfig:
        """
        Validate the typed sections of the configuration.

        Raises:
            ConfigurationError: If a section does not match its schema
        """
        config = self.get_config()
        try:
            return AppConfig(
                logging=config.get("logging", {}),
                docker_machine=config.get("docker_machine", {}),
            )
        except ValidationError as e:
            raise ConfigurationError("config", f"Invalid configuration: {e}") from e
