"""Reasoning effort clamping per model capability."""
from __future__ import annotations

from ..models_parts.model_info import ModelInfo


def supports_xhigh(model: ModelInfo) -> bool:
    return model.provider == "openai" and model.id.startswith("gpt-5.2")


def clamp_reasoning(effort: str) -> str:
    """Map ``xhigh`` to ``high``; other efforts pass through."""
    return "high" if effort == "xhigh" else effort


def clamp_reasoning_for_model(model: ModelInfo, effort: str) -> str:
    """Return the effort actually sent to ``model``.

    Models without reasoning always get ``none``; ``xhigh`` survives only on
    models that accept it.
    """
    if not model.supports.reasoning:
        return "none"
    if effort == "xhigh" and supports_xhigh(model):
        return effort
    return clamp_reasoning(effort)


__all__ = ["supports_xhigh", "clamp_reasoning", "clamp_reasoning_for_model"]
