"""Async Anthropic provider with retry logic."""

import logging
from typing import AsyncIterator

from anthropic import AsyncAnthropic
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from orchestra.config import ProviderConfig
from orchestra.core.exceptions import ProviderAPIError
from orchestra.core.models import QueryOptions, Response, TokenUsage
from orchestra.providers.base import Provider
from orchestra.providers.pricing import estimate_cost

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-20250514"
DEFAULT_MAX_TOKENS = 4096
DEFAULT_TEMPERATURE = 0.7


class AnthropicProvider(Provider):
    """Provider backed by the Anthropic Messages API."""

    def __init__(
        self,
        name: str,
        config: ProviderConfig,
        client: AsyncAnthropic | None = None,
    ) -> None:
        super().__init__(name)
        self.config = config
        self._client = client or AsyncAnthropic(
            api_key=config.api_key,
            base_url=config.endpoint,
        )
        self._model = config.model or DEFAULT_MODEL

    @property
    def model(self) -> str:
        """Get the current model name."""
        return self._model

    def _request_params(self, options: QueryOptions | None) -> dict:
        options = options or QueryOptions()
        max_tokens = options.max_tokens or self.config.max_tokens or DEFAULT_MAX_TOKENS
        temperature = options.temperature
        if temperature is None:
            temperature = (
                self.config.temperature
                if self.config.temperature is not None
                else DEFAULT_TEMPERATURE
            )
        return {
            "model": self._model,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type((ProviderAPIError,)),
        reraise=True,
    )
    async def complete(
        self,
        prompt: str,
        options: QueryOptions | None = None,
    ) -> Response:
        """
        Send a completion request to Anthropic.

        Args:
            prompt: The user message
            options: Optional max_tokens / temperature overrides

        Returns:
            Response with token usage and estimated cost
        """
        try:
            message = await self._client.messages.create(
                messages=[{"role": "user", "content": prompt}],
                **self._request_params(options),
            )
        except Exception as e:
            raise ProviderAPIError(
                f"Anthropic API error: {e}",
                provider=self.name,
                model=self._model,
                status_code=getattr(e, "status_code", None),
            ) from e

        content = "".join(
            block.text for block in message.content if getattr(block, "type", None) == "text"
        )
        tokens = TokenUsage(
            input=message.usage.input_tokens,
            output=message.usage.output_tokens,
            total=message.usage.input_tokens + message.usage.output_tokens,
        )

        return Response(
            content=content,
            provider=self.name,
            model=message.model,
            tokens=tokens,
            cost=estimate_cost(self._model, tokens),
        )

    async def stream(
        self,
        prompt: str,
        options: QueryOptions | None = None,
    ) -> AsyncIterator[str]:
        """Yield text deltas as they arrive."""
        try:
            async with self._client.messages.stream(
                messages=[{"role": "user", "content": prompt}],
                **self._request_params(options),
            ) as stream:
                async for text in stream.text_stream:
                    yield text
        except Exception as e:
            raise ProviderAPIError(
                f"Anthropic streaming error: {e}",
                provider=self.name,
                model=self._model,
                status_code=getattr(e, "status_code", None),
            ) from e

    async def health_check(self) -> bool:
        """Check API connectivity."""
        try:
            message = await self._client.messages.create(
                model=self._model,
                max_tokens=10,
                messages=[{"role": "user", "content": "Say 'ok'"}],
            )
            return len(message.content) > 0
        except Exception as e:
            logger.warning("Health check for %s failed: %s", self.name, e)
            return False
