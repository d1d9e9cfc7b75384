"""Offline provider that returns canned completions."""

import asyncio

from orchestra.config import ProviderConfig
from orchestra.core.models import QueryOptions, Response, TokenUsage
from orchestra.providers.base import Provider


class SimulatedProvider(Provider):
    """
    Provider that answers without any network access.

    Used when a provider is configured without a concrete adapter, and in
    demos. The reply echoes the prompt so that different prompts produce
    different answers while identical prompts agree across providers.
    """

    OUTPUT_TOKENS = 50
    COST_PER_CALL = 0.001

    def __init__(
        self,
        name: str,
        config: ProviderConfig | None = None,
        delay: float = 0.1,
    ) -> None:
        super().__init__(name)
        self.config = config
        self.delay = delay

    async def complete(
        self,
        prompt: str,
        options: QueryOptions | None = None,
    ) -> Response:
        if self.delay:
            await asyncio.sleep(self.delay)

        return Response(
            content=f'Response from {self.name}: This is a simulated response to "{prompt}"',
            provider=self.name,
            model=self.config.model if self.config else None,
            tokens=TokenUsage(
                input=len(prompt),
                output=self.OUTPUT_TOKENS,
                total=len(prompt) + self.OUTPUT_TOKENS,
            ),
            cost=self.COST_PER_CALL,
        )

    async def health_check(self) -> bool:
        return True
