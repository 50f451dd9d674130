"""Static model registry, pricing and reasoning capability helpers."""

from .catalog import ANTHROPIC_MODELS, GEMINI_MODELS, OPENAI_MODELS, get_model, list_models
from .pricing import calculate_cost, service_tier_multiplier
from .reasoning import clamp_reasoning, clamp_reasoning_for_model, supports_xhigh

__all__ = [
    "OPENAI_MODELS",
    "ANTHROPIC_MODELS",
    "GEMINI_MODELS",
    "get_model",
    "list_models",
    "calculate_cost",
    "service_tier_multiplier",
    "clamp_reasoning",
    "clamp_reasoning_for_model",
    "supports_xhigh",
]
