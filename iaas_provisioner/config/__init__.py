"""Configuration package with clean public API."""

from .defaults import DEFAULT_CONFIG, ConfigurationManager
from .node import ConfigNode, NodeKind
from .schemas import AppConfig, DriverRuntimeConfig, LoggingConfig

__all__ = [
    'AppConfig',
    'LoggingConfig',
    'DriverRuntimeConfig',
    'ConfigNode',
    'NodeKind',
    'ConfigurationManager',
    'DEFAULT_CONFIG',
]
