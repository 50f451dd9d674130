"""
Round-trip metadata attached to assistant content parts.

Each variant is private to one backend: it is what that backend needs to
accept the part again in a later turn (an encrypted reasoning item, a thinking
signature, an output item id). Other backends must drop it, never interpret it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Union


@dataclass(frozen=True)
class OpenAIReasoningItemMeta:
    """The full Responses API reasoning item (including encrypted content)."""

    item: Any
    provider: Literal["openai"] = field(default="openai", init=False)
    type: Literal["reasoning_item"] = field(default="reasoning_item", init=False)


@dataclass(frozen=True)
class OpenAIMessageIdMeta:
    """Output message item id of a Responses API text part."""

    id: str
    provider: Literal["openai"] = field(default="openai", init=False)
    type: Literal["message_id"] = field(default="message_id", init=False)


@dataclass(frozen=True)
class OpenAIFunctionCallItemIdMeta:
    """Output item id of a Responses API function call (distinct from ``call_id``)."""

    id: str
    provider: Literal["openai"] = field(default="openai", init=False)
    type: Literal["function_call_item_id"] = field(default="function_call_item_id", init=False)


@dataclass(frozen=True)
class AnthropicThinkingSignatureMeta:
    """Cryptographic signature Anthropic requires to replay a thinking block."""

    signature: str
    provider: Literal["anthropic"] = field(default="anthropic", init=False)
    type: Literal["thinking_signature"] = field(default="thinking_signature", init=False)


@dataclass(frozen=True)
class GeminiThoughtSignatureMeta:
    """Opaque Gemini thought signature for thought or function-call parts."""

    signature: str
    provider: Literal["gemini"] = field(default="gemini", init=False)
    type: Literal["thought_signature"] = field(default="thought_signature", init=False)


PartMeta = Union[
    OpenAIReasoningItemMeta,
    OpenAIMessageIdMeta,
    OpenAIFunctionCallItemIdMeta,
    AnthropicThinkingSignatureMeta,
    GeminiThoughtSignatureMeta,
]


__all__ = [
    "OpenAIReasoningItemMeta",
    "OpenAIMessageIdMeta",
    "OpenAIFunctionCallItemIdMeta",
    "AnthropicThinkingSignatureMeta",
    "GeminiThoughtSignatureMeta",
    "PartMeta",
]
