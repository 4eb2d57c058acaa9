"""Provider registry keyed by provider name."""

from __future__ import annotations

import logging
from typing import Callable

from .config import Settings, get_settings
from .errors import InvalidConfigError, ProviderAlreadyRegisteredError, ProviderNotFoundError
from .providers.base import TranscodingProvider

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[Settings], TranscodingProvider]

# Global registry
_registry: dict[str, ProviderFactory] = {}


def register(name: str, factory: ProviderFactory) -> None:
    """Register a provider factory under a unique name."""
    if name in _registry:
        raise ProviderAlreadyRegisteredError(name)
    _registry[name] = factory
    logger.debug(f"Registered transcoding provider: {name}")


def unregister(name: str) -> None:
    _registry.pop(name, None)


def get_provider_factory(name: str) -> ProviderFactory:
    factory = _registry.get(name)
    if factory is None:
        raise ProviderNotFoundError(name)
    return factory


def build_provider(name: str, settings: Settings | None = None) -> TranscodingProvider:
    """Build a provider from its registered factory."""
    factory = get_provider_factory(name)
    return factory(settings or get_settings())


def list_providers(settings: Settings | None = None) -> list[str]:
    """
    List registered providers that can be built from the given settings.

    Providers whose factory rejects the settings with ``InvalidConfigError``
    are left out.
    """
    settings = settings or get_settings()
    names = []
    for name, factory in _registry.items():
        try:
            provider = factory(settings)
        except InvalidConfigError:
            logger.debug(f"Provider {name} is not configured")
            continue
        provider.close()
        names.append(name)
    return sorted(names)
