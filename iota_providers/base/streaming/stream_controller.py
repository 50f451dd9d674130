"""Incremental message builder shared by every backend adapter.

The controller owns the draft :class:`AssistantMessage` of exactly one call.
Adapters append parts and grow their text/args in place, and report each
change through ``delta``/``end_part`` so the controller can emit events. Every
emitted lifecycle event carries a snapshot of the draft. ``finish`` and
``fail`` freeze the draft and emit the single terminal event.
"""
from __future__ import annotations

import uuid
from typing import List, Optional, Set

from ..cancellation import CancellationToken
from ..errors_parts.classification import classify_exception
from ..errors_parts.error_code import ErrorCode
from ..logging import LogContext, get_logger
from ..models_parts.content_part import AssistantPart, ThinkingPart, ToolCallPart
from ..models_parts.events import (
    DoneEvent,
    ErrorEvent,
    PartDeltaEvent,
    PartEndEvent,
    PartStartEvent,
    StartEvent,
)
from ..models_parts.literals import FAILED_STOP_REASONS, StopReason
from ..models_parts.message import AssistantMessage
from ..models_parts.model_info import ModelInfo
from ..models_parts.usage import Usage
from ..registry.pricing import calculate_cost
from .assistant_stream import AssistantStream
from .streaming_finalize import log_stream_end, log_stream_start
from .streaming_metrics import StreamMetrics

ABORTED_MESSAGE = "Request was aborted"
FAILED_MESSAGE = "Request failed"


class StreamController:
    """Owns the draft message and the :class:`AssistantStream` of one call.

    Args:
        model: Target model; provides provider/id and pricing.
        signal: Optional cancellation token; a cancelled token turns the
            terminal stop reason into ``aborted``.
        service_tier: Optional tier used for cost computation.
        reasoning: Resolved reasoning effort (logged only).
    """

    def __init__(
        self,
        model: ModelInfo,
        *,
        signal: Optional[CancellationToken] = None,
        service_tier: Optional[str] = None,
        reasoning: Optional[str] = None,
    ) -> None:
        self.model = model
        self.stream = AssistantStream()
        self.output = AssistantMessage(provider=model.provider, model=model.id)
        self.metrics = StreamMetrics()
        self._signal = signal
        self._service_tier = service_tier
        self._reasoning = reasoning
        self._open_parts: Set[int] = set()
        self._frozen = False
        self._logger = get_logger(f"iota.{model.provider}")
        self._ctx = LogContext(provider=model.provider, model=model.id, request_id=uuid.uuid4().hex[:12])

    @property
    def cancelled(self) -> bool:
        return self._signal is not None and self._signal.cancelled

    @property
    def frozen(self) -> bool:
        return self._frozen

    def start(self) -> None:
        log_stream_start(self._logger, self._ctx, reasoning=self._reasoning)
        self.stream.push(StartEvent(partial=self.output.snapshot()))

    def add_part(self, part: AssistantPart) -> int:
        """Append ``part`` and return its stable index."""
        self.output.content.append(part)
        index = len(self.output.content) - 1
        self._open_parts.add(index)
        self.stream.push(PartStartEvent(index=index, partial=self.output.snapshot()))
        return index

    def delta(self, index: int, delta: str) -> None:
        """Report text appended to part ``index`` (the adapter already applied it)."""
        self.metrics.record_delta()
        self.stream.push(PartDeltaEvent(index=index, delta=delta, partial=self.output.snapshot()))

    def end_part(self, index: int) -> None:
        if index not in self._open_parts:
            return
        self._open_parts.discard(index)
        self.stream.push(PartEndEvent(index=index, partial=self.output.snapshot()))

    def part(self, index: int) -> Optional[AssistantPart]:
        if 0 <= index < len(self.output.content):
            return self.output.content[index]
        return None

    def set_usage(self, usage: Usage) -> None:
        """Replace the usage snapshot, recomputing cost from the counts."""
        usage.cost = calculate_cost(self.model, usage, self._service_tier)
        self.output.usage = usage

    def set_stop_reason(self, stop_reason: StopReason) -> None:
        self.output.stop_reason = stop_reason

    def finish(self) -> None:
        """Freeze the draft and emit ``done`` (or ``error`` for error/aborted)."""
        if self._frozen:
            return
        out = self.output
        if self.cancelled:
            out.stop_reason = "aborted"
            out.error_message = out.error_message or ABORTED_MESSAGE
        out.usage.cost = calculate_cost(self.model, out.usage, self._service_tier)
        if out.stop_reason == "stop" and any(isinstance(p, ToolCallPart) for p in out.content):
            out.stop_reason = "tool_use"
        if out.stop_reason in FAILED_STOP_REASONS:
            aborted = out.stop_reason == "aborted"
            out.error_message = out.error_message or (ABORTED_MESSAGE if aborted else FAILED_MESSAGE)
            code = ErrorCode.CANCELLED if aborted else ErrorCode.UNKNOWN
            self._terminate(ErrorEvent(error=out), code)
        else:
            self._terminate(DoneEvent(message=out), None)

    def fail(self, error: BaseException) -> None:
        """Freeze the draft after the adapter loop raised and emit ``error``."""
        if self._frozen:
            return
        out = self.output
        out.stop_reason = "aborted" if self.cancelled else "error"
        out.error_message = str(error) or (
            ABORTED_MESSAGE if out.stop_reason == "aborted" else FAILED_MESSAGE
        )
        code = ErrorCode.CANCELLED if out.stop_reason == "aborted" else classify_exception(error)
        self._terminate(ErrorEvent(error=out), code)

    def _terminate(self, event, code: Optional[ErrorCode]) -> None:
        for index in sorted(self._open_parts):
            self.end_part(index)
        self.output.content[:] = _portable_parts(self.output.content)
        self._frozen = True
        self.stream.error_code = code
        self.metrics.finish()
        log_stream_end(
            self._logger,
            self._ctx,
            self.output,
            self.metrics,
            error_code=code.value if code is not None else None,
        )
        self.stream.push(event)
        self.stream.end()


def _portable_parts(parts: List[AssistantPart]) -> List[AssistantPart]:
    """Drop thinking parts that carry no round-trip metadata."""
    return [p for p in parts if not (isinstance(p, ThinkingPart) and p.meta is None)]


__all__ = ["StreamController", "ABORTED_MESSAGE", "FAILED_MESSAGE"]
