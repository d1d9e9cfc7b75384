"""Token pricing used to report per-response cost."""

from dataclasses import dataclass
from decimal import Decimal

from orchestra.core.models import TokenUsage


@dataclass(frozen=True)
class ModelPricing:
    """Pricing per million tokens (USD)."""

    input_per_mtok: Decimal
    output_per_mtok: Decimal


# Anthropic model pricing (USD per million tokens)
PRICING: dict[str, ModelPricing] = {
    "claude-opus-4-5-20251101": ModelPricing(
        input_per_mtok=Decimal("15.00"),
        output_per_mtok=Decimal("75.00"),
    ),
    "claude-sonnet-4-20250514": ModelPricing(
        input_per_mtok=Decimal("3.00"),
        output_per_mtok=Decimal("15.00"),
    ),
    "claude-3-5-haiku-20241022": ModelPricing(
        input_per_mtok=Decimal("0.25"),
        output_per_mtok=Decimal("1.25"),
    ),
}


def estimate_cost(model: str | None, tokens: TokenUsage | None) -> float | None:
    """Return USD cost for a call, or None when the model has no known price."""
    if model is None or tokens is None:
        return None

    pricing = PRICING.get(model)
    if pricing is None:
        return None

    million = Decimal("1000000")
    cost = (
        Decimal(tokens.input) * pricing.input_per_mtok / million
        + Decimal(tokens.output) * pricing.output_per_mtok / million
    )
    return float(cost)
