"""Orchestra facade coordinating queries, consensus, and debates."""

import asyncio
import logging
from pathlib import Path
from typing import Any, AsyncIterator, Awaitable, TypeVar

from orchestra.analysis.consensus import ConsensusEngine
from orchestra.analysis.debate import DebateCoordinator
from orchestra.analysis.fanout import stream_chunks, timed_complete
from orchestra.config import OrchestraSettings, ProviderConfig, load_settings
from orchestra.core.enums import OrchestraEvent
from orchestra.core.exceptions import OrchestraTimeoutError
from orchestra.core.models import (
    ConsensusOptions,
    ConsensusResult,
    DebateOptions,
    DebateResult,
    DebateRound,
    QueryOptions,
    Response,
)
from orchestra.events import EventEmitter, EventHandler
from orchestra.providers.base import Provider
from orchestra.providers.registry import ProviderRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")

FALLBACK_PROVIDER = "openai"


class Orchestra(EventEmitter):
    """
    Entry point for multi-provider orchestration.

    Owns a read-only settings snapshot and the provider registry, delegates
    consensus and debate to their engines, and emits lifecycle events after
    each state change:

    - initialized {providers}
    - consensus:start {prompt, options} / consensus:complete ConsensusResult
    - debate:start {prompt, options} / debate:round {round, agreement} /
      debate:complete DebateResult
    - provider:added {name} / provider:removed {name}
    """

    def __init__(
        self,
        settings: OrchestraSettings | None = None,
        registry: ProviderRegistry | None = None,
        listeners: dict[OrchestraEvent, EventHandler] | None = None,
    ) -> None:
        super().__init__()
        for event, handler in (listeners or {}).items():
            self.on(event, handler)

        self._settings = settings or OrchestraSettings()
        self._registry = registry or ProviderRegistry()
        self._consensus = ConsensusEngine(self._registry)
        self._debate = DebateCoordinator(self._registry, self._settings)

        for name, config in self._settings.providers.items():
            self._registry.register(name, config)

        self.emit(
            OrchestraEvent.INITIALIZED,
            {"providers": list(self._settings.providers)},
        )

    @classmethod
    def from_config(cls, path: Path | str) -> "Orchestra":
        """Build an Orchestra from a YAML config file."""
        return cls(load_settings(path))

    @property
    def settings(self) -> OrchestraSettings:
        return self._settings

    @property
    def registry(self) -> ProviderRegistry:
        return self._registry

    async def _with_timeout(self, operation: str, awaitable: Awaitable[T]) -> T:
        """Race an operation against the configured caller-level timeout."""
        timeout_ms = self._settings.timeout
        if timeout_ms is None:
            return await awaitable

        try:
            return await asyncio.wait_for(awaitable, timeout=timeout_ms / 1000)
        except asyncio.TimeoutError as e:
            raise OrchestraTimeoutError(operation, timeout_ms) from e

    def _resolve_query_provider(self, options: QueryOptions) -> Provider:
        name = options.provider or self._settings.default_provider or FALLBACK_PROVIDER
        return self._registry.require(name)

    async def query(
        self,
        prompt: str,
        options: QueryOptions | None = None,
    ) -> Response:
        """
        Send a prompt to a single provider.

        The provider is options.provider, else the configured default, else
        "openai". The returned response carries the measured latency.
        """
        options = options or QueryOptions()
        provider = self._resolve_query_provider(options)
        return await self._with_timeout(
            "query", timed_complete(provider, prompt, options)
        )

    async def stream(
        self,
        prompt: str,
        options: QueryOptions | None = None,
    ) -> AsyncIterator[str]:
        """
        Stream a single provider's completion chunk by chunk.

        Provider failures surface as ProviderCallError. The caller-level
        timeout bounds the whole stream, not each chunk.
        """
        options = options or QueryOptions()
        provider = self._resolve_query_provider(options)
        chunks = stream_chunks(provider, prompt, options)

        timeout_ms = self._settings.timeout
        loop = asyncio.get_running_loop()
        deadline = None if timeout_ms is None else loop.time() + timeout_ms / 1000

        try:
            while True:
                try:
                    if deadline is None:
                        chunk = await chunks.__anext__()
                    else:
                        chunk = await asyncio.wait_for(
                            chunks.__anext__(),
                            timeout=max(deadline - loop.time(), 0),
                        )
                except StopAsyncIteration:
                    return
                except asyncio.TimeoutError as e:
                    raise OrchestraTimeoutError("stream", timeout_ms) from e
                yield chunk
        finally:
            await chunks.aclose()

    async def consensus(
        self,
        prompt: str,
        options: ConsensusOptions | None = None,
    ) -> ConsensusResult:
        """Get a majority answer from one parallel round."""
        self.emit(OrchestraEvent.CONSENSUS_START, {"prompt": prompt, "options": options})

        result = await self._with_timeout(
            "consensus", self._consensus.build_consensus(prompt, options)
        )

        self.emit(OrchestraEvent.CONSENSUS_COMPLETE, result)
        return result

    async def debate(
        self,
        prompt: str,
        options: DebateOptions | None = None,
    ) -> DebateResult:
        """Run a structured multi-round debate between providers."""
        self.emit(OrchestraEvent.DEBATE_START, {"prompt": prompt, "options": options})

        def on_round(debate_round: DebateRound) -> None:
            self.emit(
                OrchestraEvent.DEBATE_ROUND,
                {"round": debate_round.round, "agreement": debate_round.agreement},
            )

        result = await self._with_timeout(
            "debate", self._debate.debate(prompt, options, on_round=on_round)
        )

        self.emit(OrchestraEvent.DEBATE_COMPLETE, result)
        return result

    def add_provider(self, name: str, config: ProviderConfig | dict[str, Any]) -> None:
        """Register a provider from configuration. Replaces any existing entry."""
        self._registry.register(name, config)
        self.emit(OrchestraEvent.PROVIDER_ADDED, {"name": name})

    def add_provider_instance(self, provider: Provider) -> None:
        """Register an already-built provider under its own name."""
        self._registry.add(provider)
        self.emit(OrchestraEvent.PROVIDER_ADDED, {"name": provider.name})

    def remove_provider(self, name: str) -> None:
        """Remove a provider; responses it already produced are unaffected."""
        self._registry.remove(name)
        self.emit(OrchestraEvent.PROVIDER_REMOVED, {"name": name})

    def get_providers(self) -> list[str]:
        """Get list of available providers."""
        return self._registry.list()

    async def health_check(self) -> dict[str, bool]:
        """
        Probe every registered provider.

        A probe that raises marks only that provider unhealthy; this call
        never fails because of a single provider.
        """
        health: dict[str, bool] = {}

        for name in self._registry.list():
            provider = self._registry.get(name)
            probe = getattr(provider, "health_check", None)
            if probe is None:
                health[name] = True
                continue
            try:
                health[name] = bool(await probe())
            except Exception as e:
                logger.warning("Health probe for %s raised: %s", name, e)
                health[name] = False

        return health
