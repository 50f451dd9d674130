"""Anthropic helpers module.

Purpose:
- Build ``messages.create`` parameters from a normalized context, map Anthropic
  stop reasons and usage into the unified model. Everything here is free of
  I/O so it can be tested without the SDK client.

Notes:
- The system prompt and the last block of the last user turn carry
  ``cache_control: ephemeral`` so repeated calls hit the prompt cache.
- Consecutive tool results are grouped into one user turn, which is the only
  shape the Messages API accepts for parallel tool calls.
"""

from __future__ import annotations

import math
import re
from typing import Any, Dict, List, Optional

from ..base.dto.stream_options import ResolvedStreamOptions
from ..base.models import (
    AnthropicThinkingSignatureMeta,
    AssistantMessageInput,
    NormalizedContext,
    StopReason,
    TextPart,
    ThinkingPart,
    Tool,
    ToolCallPart,
    ToolMessage,
    UserMessage,
    ModelInfo,
    Usage,
)
from ..base.utils import exhaustive, sanitize_surrogates
from ..config.defaults import (
    ANTHROPIC_BETA_FINE_GRAINED_TOOL_STREAMING,
    ANTHROPIC_BETA_INTERLEAVED_THINKING,
    ANTHROPIC_MIN_THINKING_BUDGET,
    ANTHROPIC_THINKING_BUDGETS,
    THINKING_BUDGET_MAX_FRACTION,
)

_UNSAFE_TOOL_ID = re.compile(r"[^a-zA-Z0-9_-]")
_EPHEMERAL = {"type": "ephemeral"}


def beta_headers(reasoning: str) -> Dict[str, str]:
    """Return the default headers enabling fine-grained tool streaming (and interleaved thinking)."""
    features = [ANTHROPIC_BETA_FINE_GRAINED_TOOL_STREAMING]
    if reasoning != "none":
        features.append(ANTHROPIC_BETA_INTERLEAVED_THINKING)
    return {"accept": "application/json", "anthropic-beta": ",".join(features)}


def sanitize_tool_call_id(call_id: str) -> str:
    return _UNSAFE_TOOL_ID.sub("_", call_id)


def thinking_budget(effort: str, max_tokens: int) -> int:
    """Desired budget for ``effort`` capped at a fraction of ``max_tokens``."""
    desired = ANTHROPIC_THINKING_BUDGETS.get(effort)
    if desired is None:
        exhaustive(effort)
    upper = max(0, math.floor(max_tokens * THINKING_BUDGET_MAX_FRACTION))
    return min(desired, upper)


def build_params(model: ModelInfo, context: NormalizedContext, options: ResolvedStreamOptions) -> Dict[str, Any]:
    """Build keyword arguments for ``client.messages.create(stream=True)``.

    Thinking is enabled only for reasoning models with an effort other than
    ``none``, and dropped when the capped budget falls below the API minimum.
    """
    params: Dict[str, Any] = {
        "model": model.id,
        "max_tokens": options.max_tokens,
        "messages": convert_messages(context),
        "stream": True,
    }
    if context.system and context.system.strip():
        params["system"] = [
            {"type": "text", "text": sanitize_surrogates(context.system), "cache_control": dict(_EPHEMERAL)}
        ]
    if options.temperature is not None:
        params["temperature"] = options.temperature
    if context.tools:
        params["tools"] = convert_tools(context.tools)
    if model.supports.reasoning and options.reasoning != "none":
        budget = thinking_budget(options.reasoning, options.max_tokens)
        if budget >= ANTHROPIC_MIN_THINKING_BUDGET:
            params["thinking"] = {"type": "enabled", "budget_tokens": budget}
    return params


def convert_tools(tools: List[Tool]) -> List[Dict[str, Any]]:
    out = []
    for tool in tools:
        entry: Dict[str, Any] = {"name": tool.name, "input_schema": tool.parameters}
        if tool.description is not None:
            entry["description"] = tool.description
        out.append(entry)
    return out


def _assistant_blocks(msg: AssistantMessageInput) -> List[Dict[str, Any]]:
    content = [TextPart(text=msg.content)] if isinstance(msg.content, str) else msg.content
    blocks: List[Dict[str, Any]] = []
    for part in content:
        if isinstance(part, TextPart):
            if part.text.strip():
                blocks.append({"type": "text", "text": sanitize_surrogates(part.text)})
        elif isinstance(part, ThinkingPart):
            meta = part.meta
            if not part.text.strip() or not isinstance(meta, AnthropicThinkingSignatureMeta):
                continue
            if not meta.signature.strip():
                continue
            blocks.append(
                {"type": "thinking", "thinking": sanitize_surrogates(part.text), "signature": meta.signature}
            )
        elif isinstance(part, ToolCallPart):
            blocks.append(
                {
                    "type": "tool_use",
                    "id": sanitize_tool_call_id(part.id),
                    "name": part.name,
                    "input": part.args_dict(),
                }
            )
        else:
            exhaustive(part)
    return blocks


def convert_messages(context: NormalizedContext) -> List[Dict[str, Any]]:
    """Convert normalized entries into Messages API turns."""
    out: List[Dict[str, Any]] = []
    pending_results: List[Dict[str, Any]] = []

    def flush_results() -> None:
        if pending_results:
            out.append({"role": "user", "content": list(pending_results)})
            pending_results.clear()

    for msg in context.messages:
        if isinstance(msg, ToolMessage):
            pending_results.append(
                {
                    "type": "tool_result",
                    "tool_use_id": sanitize_tool_call_id(msg.tool_call_id),
                    "content": sanitize_surrogates(msg.content),
                    "is_error": bool(msg.is_error),
                }
            )
            continue
        flush_results()
        if isinstance(msg, UserMessage):
            if msg.content.strip():
                out.append({"role": "user", "content": sanitize_surrogates(msg.content)})
        elif isinstance(msg, AssistantMessageInput):
            blocks = _assistant_blocks(msg)
            if blocks:
                out.append({"role": "assistant", "content": blocks})
        else:
            exhaustive(msg)
    flush_results()
    _mark_last_user_cacheable(out)
    return out


def _mark_last_user_cacheable(out: List[Dict[str, Any]]) -> None:
    for turn in reversed(out):
        if turn["role"] != "user":
            continue
        content = turn["content"]
        if isinstance(content, str):
            turn["content"] = [{"type": "text", "text": content, "cache_control": dict(_EPHEMERAL)}]
        elif content:
            content[-1]["cache_control"] = dict(_EPHEMERAL)
        return


def map_stop_reason(reason: str) -> StopReason:
    if reason in ("end_turn", "stop_sequence", "pause_turn", "refusal"):
        return "stop"
    if reason == "max_tokens":
        return "length"
    if reason == "tool_use":
        return "tool_use"
    return exhaustive(reason, f"Unhandled Anthropic stop reason: {reason}")


def usage_from_anthropic(raw: Any, previous: Optional[Usage] = None) -> Usage:
    """Map an Anthropic usage object; fields the event leaves unset keep ``previous`` values."""
    base = previous or Usage.empty()

    def pick(attr: str, fallback: int) -> int:
        value = getattr(raw, attr, None)
        return fallback if value is None else int(value)

    input_tokens = pick("input_tokens", base.input_tokens)
    output_tokens = pick("output_tokens", base.output_tokens)
    cache_read = pick("cache_read_input_tokens", base.cache_read_tokens)
    cache_write = pick("cache_creation_input_tokens", base.cache_write_tokens)
    return Usage(
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        cache_read_tokens=cache_read,
        cache_write_tokens=cache_write,
        total_tokens=input_tokens + output_tokens + cache_read + cache_write,
    )


__all__ = [
    "beta_headers",
    "build_params",
    "convert_messages",
    "convert_tools",
    "map_stop_reason",
    "sanitize_tool_call_id",
    "thinking_budget",
    "usage_from_anthropic",
]
