"""Errors raised by the throwing result accessors of message and agent streams.

Both carry the partial terminal result so callers can inspect what was
produced before the failure.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .provider_error import ProviderError


@dataclass(eq=False)
class StreamFailedError(ProviderError):
    """Raised by ``AssistantStream.result_or_throw`` on ``error``/``aborted``.

    Attributes:
        partial: The frozen :class:`AssistantMessage` at the time of failure.
    """

    partial: Optional[Any] = None

    @property
    def stop_reason(self) -> Optional[str]:
        return getattr(self.partial, "stop_reason", None)


@dataclass(eq=False)
class AgentFailedError(ProviderError):
    """Raised by ``AgentStream.result_or_throw`` on ``error``/``aborted``.

    Attributes:
        agent_result: The :class:`AgentResult` including accumulated history.
    """

    agent_result: Optional[Any] = None


__all__ = ["StreamFailedError", "AgentFailedError"]
