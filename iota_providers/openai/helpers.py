"""OpenAI helpers module.

Purpose:
- Build Responses API parameters from a normalized context and map response
  status/usage into the unified model. Free of I/O.

Replay notes:
- Reasoning items are re-sent verbatim (they carry the encrypted content
  requested through ``include``).
- Assistant text becomes ``message`` items and tool calls ``function_call``
  items; both keep their original output item id when the part carries one,
  otherwise a positional ``msg_<n>``/``fc_<n>`` id is generated.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from ..base.dto.stream_options import ResolvedStreamOptions
from ..base.models import (
    AssistantMessageInput,
    ModelInfo,
    NormalizedContext,
    OpenAIFunctionCallItemIdMeta,
    OpenAIMessageIdMeta,
    OpenAIReasoningItemMeta,
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

_SERVICE_TIERS = {"flex": "flex", "standard": "default", "priority": "priority"}


def map_service_tier(tier: str) -> str:
    mapped = _SERVICE_TIERS.get(tier)
    if mapped is None:
        exhaustive(tier, f"Unhandled service tier: {tier}")
    return mapped


def map_reasoning_effort(effort: str) -> str:
    """Effort sent to the API; ``xhigh`` is only reached for models that accept it."""
    return "minimal" if effort == "none" else effort


def build_params(model: ModelInfo, context: NormalizedContext, options: ResolvedStreamOptions) -> Dict[str, Any]:
    """Build keyword arguments for ``client.responses.create(stream=True)``."""
    params: Dict[str, Any] = {
        "model": model.id,
        "input": convert_messages(context),
        "stream": True,
        "max_output_tokens": options.max_tokens,
    }
    if options.temperature is not None:
        params["temperature"] = options.temperature
    if options.service_tier is not None:
        params["service_tier"] = map_service_tier(options.service_tier)
    if context.tools:
        params["tools"] = convert_tools(context.tools)
    if model.supports.reasoning and options.reasoning != "none":
        params["reasoning"] = {"effort": map_reasoning_effort(options.reasoning), "summary": "auto"}
        params["include"] = ["reasoning.encrypted_content"]
    return params


def convert_tools(tools: List[Tool]) -> List[Dict[str, Any]]:
    out = []
    for tool in tools:
        entry: Dict[str, Any] = {"type": "function", "name": tool.name, "parameters": tool.parameters, "strict": None}
        if tool.description is not None:
            entry["description"] = tool.description
        out.append(entry)
    return out


def convert_messages(context: NormalizedContext) -> List[Dict[str, Any]]:
    """Convert normalized entries into a Responses API ``input`` list."""
    items: List[Dict[str, Any]] = []
    if context.system and context.system.strip():
        items.append({"role": "system", "content": sanitize_surrogates(context.system)})

    counter = 0
    for msg in context.messages:
        if isinstance(msg, UserMessage):
            if msg.content.strip():
                items.append(
                    {"role": "user", "content": [{"type": "input_text", "text": sanitize_surrogates(msg.content)}]}
                )
        elif isinstance(msg, AssistantMessageInput):
            content = [TextPart(text=msg.content)] if isinstance(msg.content, str) else msg.content
            for part in content:
                if isinstance(part, ThinkingPart):
                    if isinstance(part.meta, OpenAIReasoningItemMeta):
                        items.append(part.meta.item)
                elif isinstance(part, TextPart):
                    if not part.text.strip():
                        continue
                    if isinstance(part.meta, OpenAIMessageIdMeta):
                        item_id = part.meta.id
                    else:
                        item_id = f"msg_{counter}"
                        counter += 1
                    items.append(
                        {
                            "type": "message",
                            "role": "assistant",
                            "content": [
                                {"type": "output_text", "text": sanitize_surrogates(part.text), "annotations": []}
                            ],
                            "status": "completed",
                            "id": item_id,
                        }
                    )
                elif isinstance(part, ToolCallPart):
                    if isinstance(part.meta, OpenAIFunctionCallItemIdMeta):
                        item_id = part.meta.id
                    else:
                        item_id = f"fc_{counter}"
                        counter += 1
                    items.append(
                        {
                            "type": "function_call",
                            "id": item_id,
                            "call_id": part.id,
                            "name": part.name,
                            "arguments": json.dumps(part.args),
                        }
                    )
                else:
                    exhaustive(part)
        elif isinstance(msg, ToolMessage):
            items.append(
                {
                    "type": "function_call_output",
                    "call_id": msg.tool_call_id,
                    "output": sanitize_surrogates(msg.content),
                }
            )
        else:
            exhaustive(msg)
    return items


def map_status(status: Optional[str]) -> StopReason:
    """Map a Responses API status onto a stop reason."""
    if not status:
        return "stop"
    if status == "completed":
        return "stop"
    if status == "incomplete":
        return "length"
    if status == "cancelled":
        return "aborted"
    if status == "failed":
        return "error"
    if status in ("in_progress", "queued"):
        return "stop"
    return exhaustive(status, f"Unhandled OpenAI response status: {status}")


def usage_from_openai(raw: Any) -> Usage:
    """Move cached prompt tokens out of ``input`` into ``cache_read``."""
    details = getattr(raw, "input_tokens_details", None)
    cached = int(getattr(details, "cached_tokens", 0) or 0)
    return Usage(
        input_tokens=int(raw.input_tokens or 0) - cached,
        output_tokens=int(raw.output_tokens or 0),
        cache_read_tokens=cached,
        cache_write_tokens=0,
        total_tokens=int(raw.total_tokens or 0),
    )


__all__ = [
    "build_params",
    "convert_messages",
    "convert_tools",
    "map_reasoning_effort",
    "map_service_tier",
    "map_status",
    "usage_from_openai",
]
