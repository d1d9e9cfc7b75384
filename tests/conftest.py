"""Pytest fixtures for Orchestra tests."""

import asyncio

import pytest

from orchestra.config import OrchestraSettings
from orchestra.core.models import QueryOptions, Response, TokenUsage
from orchestra.providers.base import Provider
from orchestra.providers.registry import ProviderRegistry


class ScriptedProvider(Provider):
    """Provider that returns a fixed sequence of replies, one per call."""

    def __init__(
        self,
        name: str,
        replies: str | list[str],
        cost: float | None = None,
        delay: float = 0.0,
    ) -> None:
        super().__init__(name)
        self.replies = [replies] if isinstance(replies, str) else list(replies)
        self.cost = cost
        self.delay = delay
        self.prompts: list[str] = []
        self.completed = 0

    async def complete(
        self,
        prompt: str,
        options: QueryOptions | None = None,
    ) -> Response:
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)

        self.completed += 1
        index = min(len(self.prompts) - 1, len(self.replies) - 1)
        return Response(
            content=self.replies[index],
            provider=self.name,
            tokens=TokenUsage(input=len(prompt), output=10, total=len(prompt) + 10),
            cost=self.cost,
        )


class FailingProvider(Provider):
    """Provider whose completions always raise."""

    def __init__(self, name: str, error: Exception | None = None) -> None:
        super().__init__(name)
        self.error = error or RuntimeError("upstream unavailable")
        self.calls = 0

    async def complete(
        self,
        prompt: str,
        options: QueryOptions | None = None,
    ) -> Response:
        self.calls += 1
        raise self.error


class ExplodingProbeProvider(ScriptedProvider):
    """Provider that answers normally but whose health probe raises."""

    async def health_check(self) -> bool:
        raise ConnectionError("probe exploded")


def make_response(content: str, provider: str = "p", cost: float | None = None) -> Response:
    """Build a response without any provider call."""
    return Response(content=content, provider=provider, cost=cost)


@pytest.fixture
def registry() -> ProviderRegistry:
    """Empty provider registry."""
    return ProviderRegistry()


@pytest.fixture
def settings() -> OrchestraSettings:
    """Settings with no configured providers."""
    return OrchestraSettings(providers={})


@pytest.fixture
def database_responses() -> list[Response]:
    """Two providers agree on Postgres, one prefers MongoDB."""
    return [
        make_response("Use Postgres", provider="alpha", cost=0.01),
        make_response("Use Postgres", provider="beta", cost=0.02),
        make_response("Use MongoDB", provider="gamma"),
    ]


@pytest.fixture
def database_registry(registry: ProviderRegistry) -> ProviderRegistry:
    """Registry whose providers reproduce database_responses."""
    registry.add(ScriptedProvider("alpha", "Use Postgres", cost=0.01))
    registry.add(ScriptedProvider("beta", "Use Postgres", cost=0.02))
    registry.add(ScriptedProvider("gamma", "Use MongoDB"))
    return registry


@pytest.fixture
def config_file(tmp_path):
    """YAML config with three simulated providers."""
    path = tmp_path / "orchestra.yaml"
    path.write_text(
        "providers:\n"
        "  openai:\n"
        "    api_key: sk-test-openai\n"
        "  anthropic:\n"
        "    api_key: sk-test-anthropic\n"
        "    model: claude-sonnet-4-20250514\n"
        "  google:\n"
        "    api_key: sk-test-google\n"
        "default_provider: openai\n"
        "consensus_threshold: 0.8\n"
        "max_debate_rounds: 2\n"
        "timeout: 5000\n",
        encoding="utf-8",
    )
    return path
