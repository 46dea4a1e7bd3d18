"""Provider registry."""

from .provider_registry import (
    ProviderNotFoundError,
    ProviderRegistry,
    get_provider_registry,
)

__all__ = ["ProviderRegistry", "ProviderNotFoundError", "get_provider_registry"]
