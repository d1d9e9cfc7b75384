"""Provider contract, adapters, and registry."""

from orchestra.providers.base import Provider
from orchestra.providers.anthropic import AnthropicProvider
from orchestra.providers.simulated import SimulatedProvider
from orchestra.providers.registry import ProviderRegistry

__all__ = ["Provider", "AnthropicProvider", "SimulatedProvider", "ProviderRegistry"]
