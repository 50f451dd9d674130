"""
Static model catalog.

Models are keyed by backend and by the id callers use; several ids may alias
the same descriptor (``gpt-5.2`` and ``gpt-5.2-chat-latest``).
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Dict, List, Mapping

from ..errors_parts.configuration_error import ModelNotFoundError
from ..errors_parts.error_code import ErrorCode
from ..models_parts.model_info import ModelCapabilities, ModelInfo, Pricing
from ...config.defaults import (
    ANTHROPIC_DEFAULT_BASE_URL,
    GEMINI_API_VERSION,
    GEMINI_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_BASE_URL,
)

_REASONING_AND_TOOLS = ModelCapabilities(reasoning=True, tools=True)

_GPT_5_2_CHAT = ModelInfo(
    provider="openai",
    id="gpt-5.2-chat-latest",
    name="GPT-5.2 Chat",
    base_url=OPENAI_DEFAULT_BASE_URL,
    context_window=128000,
    max_output_tokens=16384,
    supports=_REASONING_AND_TOOLS,
    pricing=Pricing(input_per_1m=1.75, output_per_1m=14, cache_read_per_1m=0.175, cache_write_per_1m=0),
)

OPENAI_MODELS: Mapping[str, ModelInfo] = MappingProxyType(
    {
        "gpt-5.2": _GPT_5_2_CHAT,
        "gpt-5.2-chat-latest": _GPT_5_2_CHAT,
    }
)

ANTHROPIC_MODELS: Mapping[str, ModelInfo] = MappingProxyType(
    {
        "opus-4.5": ModelInfo(
            provider="anthropic",
            id="claude-opus-4-5",
            name="Claude Opus 4.5 (latest)",
            base_url=ANTHROPIC_DEFAULT_BASE_URL,
            context_window=200000,
            max_output_tokens=64000,
            supports=_REASONING_AND_TOOLS,
            pricing=Pricing(input_per_1m=5, output_per_1m=25, cache_read_per_1m=0.5, cache_write_per_1m=6.25),
        ),
        "haiku-4.5": ModelInfo(
            provider="anthropic",
            id="claude-haiku-4-5",
            name="Claude Haiku 4.5 (latest)",
            base_url=ANTHROPIC_DEFAULT_BASE_URL,
            context_window=200000,
            max_output_tokens=64000,
            supports=_REASONING_AND_TOOLS,
            pricing=Pricing(input_per_1m=1, output_per_1m=5, cache_read_per_1m=0.1, cache_write_per_1m=1.25),
        ),
    }
)

GEMINI_MODELS: Mapping[str, ModelInfo] = MappingProxyType(
    {
        "gemini-3-pro-preview": ModelInfo(
            provider="gemini",
            id="gemini-3-pro-preview",
            name="Gemini 3 Pro Preview",
            base_url=f"{GEMINI_DEFAULT_BASE_URL}/{GEMINI_API_VERSION}",
            context_window=1000000,
            max_output_tokens=64000,
            supports=_REASONING_AND_TOOLS,
            pricing=Pricing(input_per_1m=2, output_per_1m=12, cache_read_per_1m=0.2, cache_write_per_1m=0),
        ),
        "gemini-3-flash-preview": ModelInfo(
            provider="gemini",
            id="gemini-3-flash-preview",
            name="Gemini 3 Flash Preview",
            base_url=f"{GEMINI_DEFAULT_BASE_URL}/{GEMINI_API_VERSION}",
            context_window=1048576,
            max_output_tokens=65536,
            supports=_REASONING_AND_TOOLS,
            pricing=Pricing(input_per_1m=0.5, output_per_1m=3, cache_read_per_1m=0.05, cache_write_per_1m=0),
        ),
    }
)

_CATALOG: Dict[str, Mapping[str, ModelInfo]] = {
    "openai": OPENAI_MODELS,
    "anthropic": ANTHROPIC_MODELS,
    "gemini": GEMINI_MODELS,
}

_DISPLAY_NAMES = {"openai": "OpenAI", "anthropic": "Anthropic", "gemini": "Gemini"}


def get_model(provider: str, model_id: str) -> ModelInfo:
    """Return the descriptor for ``model_id`` on ``provider``.

    Raises:
        ModelNotFoundError: For unknown providers or ids.
    """
    models = _CATALOG.get(provider)
    if models is None:
        raise ModelNotFoundError(ErrorCode.NOT_FOUND, f"Unknown provider: {provider}", provider=provider)
    model = models.get(model_id)
    if model is None:
        raise ModelNotFoundError(
            ErrorCode.NOT_FOUND,
            f"Unknown {_DISPLAY_NAMES[provider]} model: {model_id}",
            provider=provider,
            model=model_id,
        )
    return model


def list_models(provider: str) -> List[str]:
    """Return the ids (aliases included) accepted by :func:`get_model`."""
    return sorted(_CATALOG.get(provider, {}))


__all__ = [
    "OPENAI_MODELS",
    "ANTHROPIC_MODELS",
    "GEMINI_MODELS",
    "get_model",
    "list_models",
]
