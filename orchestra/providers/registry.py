"""Provider registry for construction, lookup, and removal."""

import logging
from typing import Any, Callable

from orchestra.config import ProviderConfig, build_provider_config
from orchestra.core.enums import ProviderKind
from orchestra.core.exceptions import ProviderNotFoundError
from orchestra.providers.anthropic import AnthropicProvider
from orchestra.providers.base import Provider
from orchestra.providers.simulated import SimulatedProvider

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[str, ProviderConfig], Provider]


class ProviderRegistry:
    """
    Central registry mapping provider names to live Provider instances.

    Handles:
    - Building providers from configuration via per-kind factories
    - Registering prebuilt providers (custom adapters, tests)
    - Lookup and removal by name
    - Listing names in insertion order (the default provider set)

    Mutation is administrative and never happens during a fan-out, so the
    registry does no locking of its own.
    """

    DEFAULT_FACTORIES: dict[ProviderKind, ProviderFactory] = {
        ProviderKind.ANTHROPIC: AnthropicProvider,
        ProviderKind.SIMULATED: SimulatedProvider,
    }

    def __init__(
        self,
        factories: dict[ProviderKind, ProviderFactory] | None = None,
    ) -> None:
        self._factories = {**self.DEFAULT_FACTORIES, **(factories or {})}
        self._providers: dict[str, Provider] = {}

    def register(self, name: str, config: ProviderConfig | dict[str, Any]) -> Provider:
        """Build and store a provider for name. Replaces any existing entry."""
        config = build_provider_config(config)
        provider = self._factories[config.kind](name, config)
        self._store(name, provider)
        return provider

    def add(self, provider: Provider) -> None:
        """Store an already-built provider under its own name."""
        self._store(provider.name, provider)

    def _store(self, name: str, provider: Provider) -> None:
        # Re-registering keeps the original insertion position.
        if name in self._providers:
            logger.debug("Replacing provider %s", name)
        self._providers[name] = provider

    def get(self, name: str) -> Provider | None:
        """Get a provider by name."""
        return self._providers.get(name)

    def require(self, name: str) -> Provider:
        """Get a provider by name or raise ProviderNotFoundError."""
        provider = self._providers.get(name)
        if provider is None:
            raise ProviderNotFoundError(name)
        return provider

    def remove(self, name: str) -> None:
        """Remove a provider; no-op if absent."""
        self._providers.pop(name, None)

    def list(self) -> list[str]:
        """List registered provider names in insertion order."""
        return list(self._providers)

    def __contains__(self, name: object) -> bool:
        return name in self._providers

    def __len__(self) -> int:
        return len(self._providers)
