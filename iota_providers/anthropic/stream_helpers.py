"""Anthropic streaming helpers.

Purpose:
- Fold raw Messages API stream events (``message_start``,
  ``content_block_*``, ``message_delta``, ``message_stop``) into the parts of a
  :class:`StreamController` draft.
"""

from __future__ import annotations

from typing import Any, Dict

from ..base.logging import get_logger
from ..base.models import AnthropicThinkingSignatureMeta, TextPart, ThinkingPart, ToolCallPart
from ..base.streaming import StreamController
from ..base.utils import exhaustive, parse_json_strict, parse_partial_json, sanitize_surrogates
from .helpers import map_stop_reason, usage_from_anthropic

_logger = get_logger("iota.anthropic")

# Block and delta kinds the unified model has no part for.
_IGNORED_BLOCKS = frozenset({"redacted_thinking", "server_tool_use", "web_search_tool_result"})
_IGNORED_DELTAS = frozenset({"citations_delta"})


class AnthropicStreamState:
    """Per-call mapping from Anthropic block indices to draft part indices."""

    def __init__(self, ctrl: StreamController, *, reasoning: str) -> None:
        self.ctrl = ctrl
        self.reasoning = reasoning
        self.part_by_block: Dict[int, int] = {}
        self.partial_json: Dict[int, str] = {}
        self.signatures: Dict[int, str] = {}

    def handle(self, event: Any) -> None:
        kind = event.type
        if kind == "message_start":
            self.ctrl.set_usage(usage_from_anthropic(event.message.usage))
        elif kind == "content_block_start":
            self._on_block_start(event.index, event.content_block)
        elif kind == "content_block_delta":
            self._on_block_delta(event.index, event.delta)
        elif kind == "content_block_stop":
            self._on_block_stop(event.index)
        elif kind == "message_delta":
            stop_reason = getattr(event.delta, "stop_reason", None)
            if stop_reason:
                self.ctrl.set_stop_reason(map_stop_reason(stop_reason))
            if getattr(event, "usage", None) is not None:
                self.ctrl.set_usage(usage_from_anthropic(event.usage, self.ctrl.output.usage))
        elif kind == "message_stop":
            return
        else:
            # Event kinds added by newer API versions carry nothing we map.
            _logger.debug("ignoring anthropic stream event: %s", kind)

    def _on_block_start(self, block_index: int, block: Any) -> None:
        kind = block.type
        if kind == "text":
            self.part_by_block[block_index] = self.ctrl.add_part(TextPart())
        elif kind == "thinking":
            if self.reasoning != "none":
                self.part_by_block[block_index] = self.ctrl.add_part(ThinkingPart())
        elif kind == "tool_use":
            idx = self.ctrl.add_part(ToolCallPart(id=block.id, name=block.name, args={}))
            self.part_by_block[block_index] = idx
            self.partial_json[idx] = ""
        elif kind in _IGNORED_BLOCKS:
            return
        else:
            exhaustive(kind, f"Unhandled Anthropic content block: {kind}")

    def _on_block_delta(self, block_index: int, delta: Any) -> None:
        idx = self.part_by_block.get(block_index)
        part = self.ctrl.part(idx) if idx is not None else None
        if part is None:
            return
        kind = delta.type
        if kind == "text_delta":
            if isinstance(part, TextPart):
                text = sanitize_surrogates(delta.text)
                part.text += text
                self.ctrl.delta(idx, text)
        elif kind == "thinking_delta":
            if isinstance(part, ThinkingPart):
                text = sanitize_surrogates(delta.thinking)
                part.text += text
                self.ctrl.delta(idx, text)
        elif kind == "input_json_delta":
            if isinstance(part, ToolCallPart):
                raw = self.partial_json.get(idx, "") + delta.partial_json
                self.partial_json[idx] = raw
                part.args = parse_partial_json(raw)
                self.ctrl.delta(idx, delta.partial_json)
        elif kind == "signature_delta":
            if isinstance(part, ThinkingPart):
                signature = self.signatures.get(idx, "") + delta.signature
                self.signatures[idx] = signature
                part.meta = AnthropicThinkingSignatureMeta(signature=signature)
        elif kind in _IGNORED_DELTAS:
            return
        else:
            exhaustive(kind, f"Unhandled Anthropic content delta: {kind}")

    def _on_block_stop(self, block_index: int) -> None:
        idx = self.part_by_block.get(block_index)
        part = self.ctrl.part(idx) if idx is not None else None
        if part is None:
            return
        if isinstance(part, ToolCallPart) and idx in self.partial_json:
            part.args = parse_json_strict(self.partial_json.pop(idx))
        self.ctrl.end_part(idx)


__all__ = ["AnthropicStreamState"]
