"""Gemini helpers module.

Purpose:
- Build ``generate_content_stream`` arguments (contents plus config dict) from
  a normalized context and map Gemini finish reasons and usage metadata into
  the unified model. Free of I/O.

Notes:
- Thought signatures are bytes in the SDK; parts carry them base64-encoded in
  :class:`GeminiThoughtSignatureMeta` and they are decoded again on replay.
- Tool results become ``function_response`` parts; consecutive results are
  merged into the user turn that already holds function responses.
"""

from __future__ import annotations

import base64
import binascii
import secrets
import time
from typing import Any, Dict, Iterable, List, Optional, Union

from ..base.dto.stream_options import ResolvedStreamOptions
from ..base.models import (
    AssistantMessageInput,
    GeminiThoughtSignatureMeta,
    ModelInfo,
    NormalizedContext,
    StopReason,
    TextPart,
    ThinkingPart,
    Tool,
    ToolCallPart,
    ToolMessage,
    Usage,
    UserMessage,
)
from ..base.utils import exhaustive, sanitize_surrogates

# Thinking levels per effort; 3-pro models only accept LOW and HIGH.
_PRO_LEVELS = {"minimal": "LOW", "low": "LOW", "medium": "HIGH", "high": "HIGH", "xhigh": "HIGH"}
_LEVELS = {"minimal": "MINIMAL", "low": "LOW", "medium": "MEDIUM", "high": "HIGH", "xhigh": "HIGH"}


def encode_signature(raw: Union[bytes, str]) -> str:
    if isinstance(raw, str):
        return raw
    return base64.b64encode(raw).decode("ascii")


def decode_signature(signature: str) -> bytes:
    try:
        return base64.b64decode(signature, validate=True)
    except (binascii.Error, ValueError):
        return signature.encode("utf-8")


def as_record(value: Any) -> Dict[str, Any]:
    """Return ``value`` when it is a JSON object, otherwise ``{}``."""
    return dict(value) if isinstance(value, dict) else {}


def thinking_config(model: ModelInfo, reasoning: str) -> Dict[str, Any]:
    """Thinking settings for ``model``; ``none`` disables thoughts as far as the model allows."""
    is_pro = "3-pro" in model.id
    if reasoning == "none":
        if is_pro:
            return {"include_thoughts": False, "thinking_level": "LOW"}
        return {"include_thoughts": False, "thinking_budget": 0}
    levels = _PRO_LEVELS if is_pro else _LEVELS
    level = levels.get(reasoning)
    if level is None:
        exhaustive(reasoning)
    return {"include_thoughts": True, "thinking_level": level}


def build_params(model: ModelInfo, context: NormalizedContext, options: ResolvedStreamOptions) -> Dict[str, Any]:
    """Build keyword arguments for ``client.aio.models.generate_content_stream``."""
    config: Dict[str, Any] = {"max_output_tokens": options.max_tokens}
    if options.temperature is not None:
        config["temperature"] = options.temperature
    if context.system and context.system.strip():
        config["system_instruction"] = sanitize_surrogates(context.system)
    if context.tools:
        config["tools"] = convert_tools(context.tools)
    if model.supports.reasoning:
        config["thinking_config"] = thinking_config(model, options.reasoning)
    return {"model": model.id, "contents": convert_messages(context), "config": config}


def convert_tools(tools: List[Tool]) -> List[Dict[str, Any]]:
    declarations = []
    for tool in tools:
        entry: Dict[str, Any] = {"name": tool.name, "parameters_json_schema": tool.parameters}
        if tool.description is not None:
            entry["description"] = tool.description
        declarations.append(entry)
    return [{"function_declarations": declarations}]


def _model_parts(msg: AssistantMessageInput) -> List[Dict[str, Any]]:
    content = [TextPart(text=msg.content)] if isinstance(msg.content, str) else msg.content
    parts: List[Dict[str, Any]] = []
    for part in content:
        if isinstance(part, TextPart):
            if part.text.strip():
                parts.append({"text": sanitize_surrogates(part.text)})
        elif isinstance(part, ThinkingPart):
            if not part.text.strip() or not isinstance(part.meta, GeminiThoughtSignatureMeta):
                continue
            parts.append(
                {
                    "thought": True,
                    "text": sanitize_surrogates(part.text),
                    "thought_signature": decode_signature(part.meta.signature),
                }
            )
        elif isinstance(part, ToolCallPart):
            entry: Dict[str, Any] = {
                "function_call": {"id": part.id, "name": part.name, "args": as_record(part.args)}
            }
            if isinstance(part.meta, GeminiThoughtSignatureMeta):
                entry["thought_signature"] = decode_signature(part.meta.signature)
            parts.append(entry)
        else:
            exhaustive(part)
    return parts


def convert_messages(context: NormalizedContext) -> List[Dict[str, Any]]:
    """Convert normalized entries into Gemini ``contents``."""
    contents: List[Dict[str, Any]] = []
    for msg in context.messages:
        if isinstance(msg, UserMessage):
            if msg.content.strip():
                contents.append({"role": "user", "parts": [{"text": sanitize_surrogates(msg.content)}]})
        elif isinstance(msg, AssistantMessageInput):
            parts = _model_parts(msg)
            if parts:
                contents.append({"role": "model", "parts": parts})
        elif isinstance(msg, ToolMessage):
            key = "error" if msg.is_error else "output"
            part = {
                "function_response": {
                    "id": msg.tool_call_id,
                    "name": msg.tool_name,
                    "response": {key: sanitize_surrogates(msg.content)},
                }
            }
            last = contents[-1] if contents else None
            if last and last["role"] == "user" and any("function_response" in p for p in last["parts"]):
                last["parts"].append(part)
            else:
                contents.append({"role": "user", "parts": [part]})
        else:
            exhaustive(msg)
    return contents


def resolve_tool_call_id(provided: Optional[str], name: Optional[str], existing: Iterable[str]) -> str:
    """Keep the vendor id when unique, otherwise generate ``<name>_<ms>_<hex>``."""
    taken = set(existing)
    if provided and provided not in taken:
        return provided
    base = name if name and name.strip() else "tool"
    while True:
        candidate = f"{base}_{int(time.time() * 1000)}_{secrets.token_hex(6)}"
        if candidate not in taken:
            return candidate


# ``google.genai.types.FinishReason`` members that end the turn as a failure.
ERROR_FINISH_REASONS = frozenset(
    {
        "FINISH_REASON_UNSPECIFIED",
        "SAFETY",
        "RECITATION",
        "LANGUAGE",
        "OTHER",
        "BLOCKLIST",
        "PROHIBITED_CONTENT",
        "SPII",
        "MALFORMED_FUNCTION_CALL",
        "IMAGE_SAFETY",
        "IMAGE_PROHIBITED_CONTENT",
        "IMAGE_RECITATION",
        "IMAGE_OTHER",
        "NO_IMAGE",
        "UNEXPECTED_TOOL_CALL",
        "TOO_MANY_TOOL_CALLS",
        "MISSING_THOUGHT_SIGNATURE",
        "MALFORMED_RESPONSE",
    }
)


def finish_reason_name(reason: Any) -> str:
    """Enum member or raw string, as the plain ``FinishReason`` name."""
    return str(getattr(reason, "value", reason))


def map_finish_reason(reason: Any) -> StopReason:
    value = finish_reason_name(reason)
    if value == "STOP":
        return "stop"
    if value == "MAX_TOKENS":
        return "length"
    if value in ERROR_FINISH_REASONS:
        return "error"
    return exhaustive(value, f"Unhandled Gemini finish reason: {value}")


def usage_from_gemini(meta: Any) -> Usage:
    cached = int(getattr(meta, "cached_content_token_count", None) or 0)
    tool_prompt = int(getattr(meta, "tool_use_prompt_token_count", None) or 0)
    prompt = int(getattr(meta, "prompt_token_count", None) or 0)
    input_tokens = max(0, prompt - cached) + tool_prompt
    output_tokens = int(getattr(meta, "candidates_token_count", None) or 0) + int(
        getattr(meta, "thoughts_token_count", None) or 0
    )
    total = int(getattr(meta, "total_token_count", None) or 0) or input_tokens + output_tokens + cached
    return Usage(
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        cache_read_tokens=cached,
        cache_write_tokens=0,
        total_tokens=total,
    )


__all__ = [
    "ERROR_FINISH_REASONS",
    "as_record",
    "build_params",
    "convert_messages",
    "convert_tools",
    "decode_signature",
    "encode_signature",
    "finish_reason_name",
    "map_finish_reason",
    "resolve_tool_call_id",
    "thinking_config",
    "usage_from_gemini",
]
