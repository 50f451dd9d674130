"""Cross-backend conversation normalization.

``normalize_context_for_target`` rewrites a caller :class:`Context` so that it
is valid for one target model:

* system text (top-level plus every system-role entry) is merged into a single
  string joined by blank lines;
* assistant entries produced by the target ``(provider, model)`` are kept with
  their round-trip metadata; entries from anywhere else lose their thinking
  parts and their provider/model tag;
* tool results are kept as structured entries with ``is_error`` defaulting to
  ``False``, even when the matching call came from another backend;
* empty assistant entries and blank user entries are dropped.

Running the function on its own output for the same target is a no-op.
"""
from __future__ import annotations

import copy
from typing import List, Optional, Union

from ..models_parts.content_part import AssistantPart, TextPart, ThinkingPart, ToolCallPart
from ..models_parts.context import Context, NormalizedContext
from ..models_parts.message import (
    AssistantMessage,
    AssistantMessageInput,
    NormalizedMessage,
    SystemMessage,
    ToolMessage,
    UserMessage,
)
from ..models_parts.model_info import ModelInfo
from ..utils.exhaustive import exhaustive


def normalize_context_for_target(
    target: ModelInfo, context: Union[Context, NormalizedContext]
) -> NormalizedContext:
    """Return ``context`` rewritten for ``target``; the input is not mutated."""
    system_parts: List[str] = []
    if context.system and context.system.strip():
        system_parts.append(context.system.strip())
    for msg in context.messages:
        if isinstance(msg, SystemMessage) and msg.content.strip():
            system_parts.append(msg.content.strip())

    messages: List[NormalizedMessage] = []
    for msg in context.messages:
        if isinstance(msg, SystemMessage):
            continue
        if isinstance(msg, UserMessage):
            if msg.content.strip():
                messages.append(msg)
        elif isinstance(msg, (AssistantMessage, AssistantMessageInput)):
            normalized = _normalize_assistant(target, msg)
            if normalized.content:
                messages.append(normalized)
        elif isinstance(msg, ToolMessage):
            messages.append(
                ToolMessage(
                    tool_call_id=msg.tool_call_id,
                    tool_name=msg.tool_name,
                    content=msg.content,
                    is_error=bool(msg.is_error),
                )
            )
        else:
            exhaustive(msg)

    return NormalizedContext(
        messages=messages,
        system="\n\n".join(system_parts) if system_parts else None,
        tools=list(context.tools) if context.tools is not None else None,
    )


def context_uses_tools(context: NormalizedContext) -> bool:
    """Whether the context declares tools or carries tool calls/results."""
    if context.tools:
        return True
    for msg in context.messages:
        if isinstance(msg, ToolMessage):
            return True
        if isinstance(msg, AssistantMessageInput) and any(
            isinstance(p, ToolCallPart) for p in _coerce_content(msg.content)
        ):
            return True
    return False


def target_matches(target: ModelInfo, provider: Optional[str], model: Optional[str]) -> bool:
    """Whether an assistant entry tagged ``provider``/``model`` came from ``target``."""
    return provider == target.provider and model == target.id


def _coerce_content(content: Union[str, List[AssistantPart]]) -> List[AssistantPart]:
    if isinstance(content, str):
        return [TextPart(text=content)] if content.strip() else []
    return list(content)


def _normalize_assistant(
    target: ModelInfo, msg: Union[AssistantMessage, AssistantMessageInput]
) -> AssistantMessageInput:
    parts = _coerce_content(msg.content)
    if target_matches(target, msg.provider, msg.model):
        return AssistantMessageInput(
            content=[copy.copy(p) for p in parts],
            provider=msg.provider,
            model=msg.model,
            stop_reason=msg.stop_reason,
            usage=msg.usage,
            error_message=msg.error_message,
        )
    content: List[AssistantPart] = []
    for part in parts:
        if isinstance(part, ThinkingPart):
            continue
        if isinstance(part, (TextPart, ToolCallPart)):
            content.append(copy.copy(part))
        else:
            exhaustive(part)
    return AssistantMessageInput(content=content)


__all__ = ["normalize_context_for_target", "context_uses_tools", "target_matches"]
