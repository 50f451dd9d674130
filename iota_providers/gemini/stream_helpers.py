"""Gemini streaming helpers.

Purpose:
- Fold ``GenerateContentResponse`` chunks into the parts of a
  :class:`StreamController` draft. Gemini has no part ids: consecutive text
  (or thought) fragments extend the current open part until the kind
  switches or a function call arrives.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from ..base.models import GeminiThoughtSignatureMeta, TextPart, ThinkingPart, ToolCallPart
from ..base.streaming import StreamController
from ..base.utils import sanitize_surrogates
from .helpers import (
    as_record,
    encode_signature,
    finish_reason_name,
    map_finish_reason,
    resolve_tool_call_id,
    usage_from_gemini,
)


class GeminiStreamState:
    """Tracks the currently open text/thinking part of one call."""

    def __init__(self, ctrl: StreamController, *, reasoning: str) -> None:
        self.ctrl = ctrl
        self.reasoning = reasoning
        self.current_index: Optional[int] = None
        self.current_kind: Optional[str] = None

    def handle(self, chunk: Any) -> None:
        candidates = getattr(chunk, "candidates", None) or []
        candidate = candidates[0] if candidates else None
        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or []:
            if getattr(part, "text", None) is not None:
                self._on_text(part)
            if getattr(part, "function_call", None) is not None:
                self._on_function_call(part)
        finish_reason = getattr(candidate, "finish_reason", None)
        if finish_reason:
            stop_reason = map_finish_reason(finish_reason)
            self.ctrl.set_stop_reason(stop_reason)
            if stop_reason == "error":
                self.ctrl.output.error_message = f"Gemini finish reason: {finish_reason_name(finish_reason)}"
        usage = getattr(chunk, "usage_metadata", None)
        if usage is not None:
            self.ctrl.set_usage(usage_from_gemini(usage))

    def close(self) -> None:
        """End the open text/thinking part, if any."""
        if self.current_index is None:
            return
        self.ctrl.end_part(self.current_index)
        self.current_index = None
        self.current_kind = None

    def _start(self, kind: str) -> int:
        self.current_index = self.ctrl.add_part(ThinkingPart() if kind == "thinking" else TextPart())
        self.current_kind = kind
        return self.current_index

    def _on_text(self, part: Any) -> None:
        is_thought = getattr(part, "thought", None) is True
        if is_thought and self.reasoning == "none":
            return
        kind = "thinking" if is_thought else "text"
        if self.current_index is None or self.current_kind != kind:
            self.close()
        index = self.current_index if self.current_index is not None else self._start(kind)
        draft = self.ctrl.part(index)
        signature = getattr(part, "thought_signature", None)
        if isinstance(draft, ThinkingPart) and signature:
            draft.meta = GeminiThoughtSignatureMeta(signature=encode_signature(signature))
        delta = sanitize_surrogates(part.text or "")
        if not delta:
            return
        draft.text += delta
        self.ctrl.delta(index, delta)

    def _on_function_call(self, part: Any) -> None:
        self.close()
        call = part.function_call
        existing = [p.id for p in self.ctrl.output.content if isinstance(p, ToolCallPart)]
        signature = getattr(part, "thought_signature", None)
        tool_call = ToolCallPart(
            id=resolve_tool_call_id(getattr(call, "id", None), getattr(call, "name", None), existing),
            name=getattr(call, "name", None) or "",
            args=as_record(getattr(call, "args", None)),
            meta=GeminiThoughtSignatureMeta(signature=encode_signature(signature)) if signature else None,
        )
        index = self.ctrl.add_part(tool_call)
        self.ctrl.delta(index, json.dumps(tool_call.args))
        self.ctrl.end_part(index)


__all__ = ["GeminiStreamState"]
