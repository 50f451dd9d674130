"""OpenAI streaming helpers.

Purpose:
- Fold Responses API stream events into the parts of a
  :class:`StreamController` draft. Output items are addressed by item id
  (``output_<index>`` when the item has none).
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Set

from ..base.errors import ErrorCode, ProviderError
from ..base.logging import get_logger
from ..base.models import (
    OpenAIFunctionCallItemIdMeta,
    OpenAIMessageIdMeta,
    OpenAIReasoningItemMeta,
    TextPart,
    ThinkingPart,
    ToolCallPart,
)
from ..base.streaming import StreamController
from ..base.utils import exhaustive, parse_json_strict, parse_partial_json, sanitize_surrogates
from ..base.utils.debug_log import to_jsonable
from .helpers import map_status, usage_from_openai

_logger = get_logger("iota.openai")

# Output item types produced by hosted tools; they never become parts.
IGNORED_ITEM_TYPES = frozenset(
    {
        "apply_patch_call",
        "apply_patch_call_output",
        "code_interpreter_call",
        "compaction",
        "computer_call",
        "custom_tool_call",
        "file_search_call",
        "image_generation_call",
        "local_shell_call",
        "mcp_approval_request",
        "mcp_call",
        "mcp_list_tools",
        "shell_call",
        "shell_call_output",
        "web_search_call",
    }
)


def _item_id(item: Any, output_index: int) -> str:
    return getattr(item, "id", None) or f"output_{output_index}"


class OpenAIStreamState:
    """Per-call mapping from Responses API item ids to draft part indices."""

    def __init__(self, ctrl: StreamController, *, reasoning: str, model: Optional[str] = None) -> None:
        self.ctrl = ctrl
        self.reasoning = reasoning
        self.model = model
        self.part_by_item: Dict[str, int] = {}
        self.ignored_items: Set[str] = set()
        self.args_json: Dict[int, str] = {}

    def handle(self, event: Any) -> None:  # noqa: C901 - flat event switch
        kind = event.type
        if kind == "response.output_item.added":
            self._on_item_added(event.item, event.output_index)
        elif kind == "response.reasoning_summary_text.delta":
            self._append(event.item_id, ThinkingPart, event.delta)
        elif kind == "response.reasoning_summary_part.done":
            self._append(event.item_id, ThinkingPart, "\n\n")
        elif kind in ("response.output_text.delta", "response.refusal.delta"):
            self._append(event.item_id, TextPart, event.delta)
        elif kind == "response.function_call_arguments.delta":
            self._on_arguments_delta(event.item_id, event.delta)
        elif kind == "response.output_item.done":
            self._on_item_done(event.item, event.output_index)
        elif kind in ("response.completed", "response.incomplete"):
            response = event.response
            if getattr(response, "usage", None) is not None:
                self.ctrl.set_usage(usage_from_openai(response.usage))
            self.ctrl.set_stop_reason(map_status(getattr(response, "status", None)))
        elif kind == "error":
            raise ProviderError(
                ErrorCode.SERVER_ERROR,
                getattr(event, "message", None) or "OpenAI error",
                provider="openai",
                model=self.model,
            )
        elif kind == "response.failed":
            error = getattr(event.response, "error", None)
            raise ProviderError(
                ErrorCode.SERVER_ERROR,
                getattr(error, "message", None) or "OpenAI request failed",
                provider="openai",
                model=self.model,
            )
        else:
            _logger.debug("ignoring openai stream event: %s", kind)

    def _on_item_added(self, item: Any, output_index: int) -> None:
        item_id = _item_id(item, output_index)
        kind = item.type
        if kind == "reasoning":
            if self.reasoning == "none":
                self.ignored_items.add(item_id)
                return
            self.part_by_item[item_id] = self.ctrl.add_part(ThinkingPart())
        elif kind == "message":
            self.part_by_item[item_id] = self.ctrl.add_part(TextPart())
        elif kind == "function_call":
            meta = OpenAIFunctionCallItemIdMeta(id=item.id) if getattr(item, "id", None) else None
            idx = self.ctrl.add_part(ToolCallPart(id=item.call_id, name=item.name, args={}, meta=meta))
            self.part_by_item[item_id] = idx
            self.args_json[idx] = getattr(item, "arguments", None) or ""
        elif kind in IGNORED_ITEM_TYPES:
            return
        else:
            exhaustive(kind, f"Unhandled OpenAI output item: {kind}")

    def _lookup(self, item_id: str) -> Optional[int]:
        if item_id in self.ignored_items:
            return None
        return self.part_by_item.get(item_id)

    def _append(self, item_id: str, part_type: type, delta: str) -> None:
        idx = self._lookup(item_id)
        part = self.ctrl.part(idx) if idx is not None else None
        if not isinstance(part, part_type):
            return
        text = sanitize_surrogates(delta)
        part.text += text
        self.ctrl.delta(idx, text)

    def _on_arguments_delta(self, item_id: str, delta: str) -> None:
        idx = self._lookup(item_id)
        part = self.ctrl.part(idx) if idx is not None else None
        if not isinstance(part, ToolCallPart):
            return
        raw = self.args_json.get(idx, "") + delta
        self.args_json[idx] = raw
        part.args = parse_partial_json(raw)
        self.ctrl.delta(idx, delta)

    def _on_item_done(self, item: Any, output_index: int) -> None:
        item_id = _item_id(item, output_index)
        idx = self._lookup(item_id)
        part = self.ctrl.part(idx) if idx is not None else None
        if part is None:
            return
        kind = item.type
        if kind == "reasoning":
            if isinstance(part, ThinkingPart):
                part.meta = OpenAIReasoningItemMeta(item=to_jsonable(item))
        elif kind == "message":
            if isinstance(part, TextPart) and getattr(item, "id", None):
                part.meta = OpenAIMessageIdMeta(id=item.id)
        elif kind == "function_call":
            if isinstance(part, ToolCallPart):
                if getattr(item, "id", None):
                    part.meta = OpenAIFunctionCallItemIdMeta(id=item.id)
                raw = getattr(item, "arguments", None) or self.args_json.get(idx, "")
                part.args = parse_json_strict(raw)
                self.args_json.pop(idx, None)
        elif kind not in IGNORED_ITEM_TYPES:
            exhaustive(kind, f"Unhandled OpenAI output item: {kind}")
        self.ctrl.end_part(idx)


__all__ = ["OpenAIStreamState", "IGNORED_ITEM_TYPES"]
