"""Cost computation from per-million-token pricing."""
from __future__ import annotations

from typing import Optional

from ..models_parts.model_info import ModelInfo
from ..models_parts.usage import Cost, Usage
from ...config.defaults import OPENAI_SERVICE_TIER_MULTIPLIERS

_PER_TOKEN = 1_000_000


def service_tier_multiplier(model: ModelInfo, service_tier: Optional[str]) -> float:
    """Return the price multiplier for a tier; only OpenAI defines tiers."""
    if model.provider != "openai" or service_tier is None:
        return 1.0
    return OPENAI_SERVICE_TIER_MULTIPLIERS.get(service_tier, 1.0)


def calculate_cost(model: ModelInfo, usage: Usage, service_tier: Optional[str] = None) -> Cost:
    """Compute a fresh cost breakdown for ``usage`` (never accumulated)."""
    multiplier = service_tier_multiplier(model, service_tier)
    pricing = model.pricing
    cost = Cost(
        input=pricing.input_per_1m / _PER_TOKEN * usage.input_tokens * multiplier,
        output=pricing.output_per_1m / _PER_TOKEN * usage.output_tokens * multiplier,
        cache_read=pricing.cache_read_per_1m / _PER_TOKEN * usage.cache_read_tokens * multiplier,
        cache_write=pricing.cache_write_per_1m / _PER_TOKEN * usage.cache_write_tokens * multiplier,
    )
    cost.total = cost.input + cost.output + cost.cache_read + cost.cache_write
    return cost


__all__ = ["calculate_cost", "service_tier_multiplier"]
