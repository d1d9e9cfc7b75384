"""Tests for provider adapters."""

from types import SimpleNamespace

import pytest
from tenacity import wait_none

from conftest import FailingProvider, ScriptedProvider
from orchestra.config import ProviderConfig
from orchestra.core.enums import ProviderKind
from orchestra.core.exceptions import ProviderAPIError
from orchestra.core.models import QueryOptions, TokenUsage
from orchestra.providers.anthropic import DEFAULT_MODEL, AnthropicProvider
from orchestra.providers.pricing import estimate_cost
from orchestra.providers.simulated import SimulatedProvider


class FakeStream:
    """Async context manager mimicking the Anthropic message stream."""

    def __init__(self, chunks):
        self.chunks = chunks

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False

    @property
    def text_stream(self):
        async def generate():
            for chunk in self.chunks:
                yield chunk

        return generate()


class FakeMessages:
    """Stand-in for client.messages that records requests."""

    def __init__(self, text="Hello there", error=None, chunks=None):
        self.text = text
        self.error = error
        self.chunks = chunks or []
        self.calls: list[dict] = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return SimpleNamespace(
            content=[SimpleNamespace(type="text", text=self.text)],
            model=kwargs["model"],
            usage=SimpleNamespace(input_tokens=1000, output_tokens=2000),
        )

    def stream(self, **kwargs):
        self.calls.append(kwargs)
        return FakeStream(self.chunks)


def make_anthropic(messages: FakeMessages, **config) -> AnthropicProvider:
    config.setdefault("api_key", "sk-ant-test")
    return AnthropicProvider(
        "claude",
        ProviderConfig(kind=ProviderKind.ANTHROPIC, **config),
        client=SimpleNamespace(messages=messages),
    )


class TestBaseProvider:
    """Test suite for the default stream and health probe."""

    @pytest.mark.asyncio
    async def test_default_stream(self):
        """Test that the default stream yields the whole completion."""
        provider = ScriptedProvider("alpha", "whole answer")

        assert [chunk async for chunk in provider.stream("q")] == ["whole answer"]

    @pytest.mark.asyncio
    async def test_default_health_check_succeeds(self):
        """Test the default probe on a working provider."""
        provider = ScriptedProvider("alpha", "ok")

        assert await provider.health_check() is True
        assert provider.prompts == ["test"]

    @pytest.mark.asyncio
    async def test_default_health_check_maps_failure_to_false(self):
        """Test the default probe on a failing provider."""
        provider = FailingProvider("down")

        assert await provider.health_check() is False
        assert provider.calls == 1

    def test_repr(self):
        """Test the provider repr."""
        assert repr(ScriptedProvider("alpha", "x")) == "ScriptedProvider(name='alpha')"


class TestSimulatedProvider:
    """Test suite for the offline provider."""

    @pytest.mark.asyncio
    async def test_echoes_prompt(self):
        """Test the canned reply text and accounting."""
        provider = SimulatedProvider("openai", delay=0)

        response = await provider.complete("Hello")

        assert response.content == (
            'Response from openai: This is a simulated response to "Hello"'
        )
        assert response.provider == "openai"
        assert response.cost == SimulatedProvider.COST_PER_CALL
        assert response.tokens.total == len("Hello") + SimulatedProvider.OUTPUT_TOKENS

    @pytest.mark.asyncio
    async def test_uses_configured_model(self):
        """Test that the configured model is reported."""
        provider = SimulatedProvider(
            "openai", ProviderConfig(api_key="k", model="gpt-x"), delay=0
        )

        assert (await provider.complete("q")).model == "gpt-x"

    @pytest.mark.asyncio
    async def test_health_check(self):
        """Test that the offline provider is always healthy."""
        assert await SimulatedProvider("openai", delay=0).health_check() is True


class TestPricing:
    """Test suite for cost estimation."""

    def test_known_model(self):
        """Test cost for a priced model."""
        tokens = TokenUsage(input=1_000_000, output=1_000_000, total=2_000_000)

        assert estimate_cost("claude-sonnet-4-20250514", tokens) == pytest.approx(18.0)

    def test_unknown_model(self):
        """Test that unknown models have no cost."""
        assert estimate_cost("mystery", TokenUsage(input=1, output=1, total=2)) is None

    def test_missing_inputs(self):
        """Test cost without a model or token usage."""
        assert estimate_cost(None, TokenUsage()) is None
        assert estimate_cost(DEFAULT_MODEL, None) is None


class TestAnthropicProvider:
    """Test suite for the Anthropic adapter."""

    @pytest.mark.asyncio
    async def test_complete(self):
        """Test a completion with token usage and cost."""
        messages = FakeMessages(text="Use Postgres")
        provider = make_anthropic(messages)

        response = await provider.complete("Which database?")

        assert response.content == "Use Postgres"
        assert response.provider == "claude"
        assert response.model == DEFAULT_MODEL
        assert response.tokens.total == 3000
        assert response.cost == pytest.approx(0.003 + 0.03)
        assert messages.calls[0]["messages"] == [
            {"role": "user", "content": "Which database?"}
        ]

    @pytest.mark.asyncio
    async def test_request_parameters(self):
        """Test that configured model and limits reach the API."""
        messages = FakeMessages()
        provider = make_anthropic(messages, model="claude-3-5-haiku-20241022", max_tokens=300)

        await provider.complete("q", QueryOptions(temperature=0.0))

        call = messages.calls[0]
        assert call["model"] == "claude-3-5-haiku-20241022"
        assert call["max_tokens"] == 300
        assert call["temperature"] == 0.0

    @pytest.mark.asyncio
    async def test_option_overrides_config(self):
        """Test that per-call options win over provider config."""
        messages = FakeMessages()
        provider = make_anthropic(messages, max_tokens=300, temperature=0.3)

        await provider.complete("q", QueryOptions(max_tokens=5))

        assert messages.calls[0]["max_tokens"] == 5
        assert messages.calls[0]["temperature"] == 0.3

    @pytest.mark.asyncio
    async def test_errors_are_retried_then_raised(self):
        """Test three attempts before ProviderAPIError propagates."""
        messages = FakeMessages(error=RuntimeError("overloaded"))
        provider = make_anthropic(messages)
        complete = AnthropicProvider.complete.retry_with(wait=wait_none())

        with pytest.raises(ProviderAPIError) as exc_info:
            await complete(provider, "q")

        assert len(messages.calls) == 3
        assert exc_info.value.provider == "claude"
        assert "overloaded" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_stream(self):
        """Test relaying streamed text deltas."""
        provider = make_anthropic(FakeMessages(chunks=["Use ", "Post", "gres"]))

        chunks = [chunk async for chunk in provider.stream("q")]

        assert chunks == ["Use ", "Post", "gres"]

    @pytest.mark.asyncio
    async def test_health_check(self):
        """Test a healthy API probe."""
        assert await make_anthropic(FakeMessages()).health_check() is True

    @pytest.mark.asyncio
    async def test_health_check_failure(self):
        """Test a failing API probe."""
        provider = make_anthropic(FakeMessages(error=RuntimeError("down")))

        assert await provider.health_check() is False
