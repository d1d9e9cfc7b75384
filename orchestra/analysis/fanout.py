"""Concurrent provider fan-out with all-or-nothing join semantics."""

import asyncio
import logging
import time
from typing import AsyncIterator

from orchestra.core.exceptions import ProviderCallError
from orchestra.core.models import QueryOptions, Response
from orchestra.providers.base import Provider
from orchestra.providers.registry import ProviderRegistry

logger = logging.getLogger(__name__)


async def timed_complete(
    provider: Provider,
    prompt: str,
    options: QueryOptions | None = None,
) -> Response:
    """
    Call a provider and stamp the response with its name and latency.

    Any failure is re-raised as ProviderCallError naming the provider.
    """
    started = time.perf_counter()
    try:
        response = await provider.complete(prompt, options)
    except Exception as e:
        logger.debug("Provider %s failed: %s", provider.name, e)
        raise ProviderCallError(provider.name, e) from e

    latency_ms = (time.perf_counter() - started) * 1000
    logger.debug("Provider %s answered in %.1fms", provider.name, latency_ms)

    return response.model_copy(
        update={"provider": provider.name, "latency_ms": latency_ms}
    )


async def stream_chunks(
    provider: Provider,
    prompt: str,
    options: QueryOptions | None = None,
) -> AsyncIterator[str]:
    """Relay a provider's stream, re-raising failures as ProviderCallError."""
    try:
        async for chunk in provider.stream(prompt, options):
            yield chunk
    except Exception as e:
        logger.debug("Provider %s stream failed: %s", provider.name, e)
        raise ProviderCallError(provider.name, e) from e


async def gather_responses(
    registry: ProviderRegistry,
    provider_names: list[str],
    prompt: str,
    options: QueryOptions | None = None,
) -> list[Response]:
    """
    Query every named provider concurrently and wait for all of them.

    Results follow the order of provider_names, not arrival order. Every
    name is resolved before any call is dispatched, so an unknown name
    fails fast without side effects. The first provider failure cancels
    the calls still in flight and propagates as ProviderCallError.
    """
    providers = [registry.require(name) for name in provider_names]

    tasks = [
        asyncio.ensure_future(timed_complete(provider, prompt, options))
        for provider in providers
    ]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
