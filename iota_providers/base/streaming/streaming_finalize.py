"""Consolidated logging for the start and end of a streaming call."""
from __future__ import annotations

import logging
from typing import Optional

from ..logging import LogContext, normalized_log_event
from ..models_parts.message import AssistantMessage
from .streaming_metrics import StreamMetrics


def log_stream_start(logger: logging.Logger, ctx: LogContext, *, reasoning: Optional[str]) -> None:
    normalized_log_event(
        logger,
        "stream.start",
        ctx,
        phase="start",
        emitted=False,
        reasoning=reasoning,
    )


def log_stream_end(
    logger: logging.Logger,
    ctx: LogContext,
    message: AssistantMessage,
    metrics: StreamMetrics,
    *,
    error_code: Optional[str] = None,
) -> None:
    """Emit the terminal ``stream.end``/``stream.error`` line for a call."""
    failed = message.stop_reason in ("error", "aborted")
    normalized_log_event(
        logger,
        "stream.error" if failed else "stream.end",
        ctx,
        phase="error" if failed else "finalize",
        error_code=error_code,
        emitted=metrics.emitted > 0,
        tokens=message.usage.token_counts(),
        level=logging.WARNING if message.stop_reason == "error" else logging.INFO,
        stop_reason=message.stop_reason,
        parts=len(message.content),
        cost_total=round(message.usage.cost.total, 8),
        emitted_count=metrics.emitted,
        time_to_first_token_ms=metrics.time_to_first_token_ms,
        total_duration_ms=metrics.total_duration_ms,
        error=message.error_message,
    )


__all__ = ["log_stream_start", "log_stream_end"]
