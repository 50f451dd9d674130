"""Streaming metrics for one call, reported in the final log line."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class StreamMetrics:
    """Timing and delta counters collected by the stream controller.

    Attributes:
        emitted: Number of ``part_delta`` events pushed.
        time_to_first_token_ms: Milliseconds from ``start`` to the first delta.
        total_duration_ms: Milliseconds from ``start`` to the terminal event.
    """

    emitted: int = 0
    time_to_first_token_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    started_at: float = field(default_factory=time.perf_counter, repr=False)

    def _elapsed_ms(self) -> float:
        return round((time.perf_counter() - self.started_at) * 1000, 3)

    def record_delta(self) -> None:
        if self.time_to_first_token_ms is None:
            self.time_to_first_token_ms = self._elapsed_ms()
        self.emitted += 1

    def finish(self) -> None:
        self.total_duration_ms = self._elapsed_ms()


__all__ = ["StreamMetrics"]
