"""Agent loop events and result."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional, Union

from .events import AssistantStreamEvent
from .literals import StopReason
from .message import Message, ToolMessage


@dataclass
class AgentResult:
    """Outcome of an agent run.

    Attributes:
        messages: History appended by the loop (assistant turns and tool
            results), in order. Does not repeat the caller's context.
        stop_reason: Stop reason of the last assistant turn, or ``error`` for
            loop-level failures.
        error_message: Set for ``error``/``aborted`` results.
    """

    messages: List[Message] = field(default_factory=list)
    stop_reason: StopReason = "stop"
    error_message: Optional[str] = None


@dataclass(frozen=True)
class TurnStartEvent:
    turn: int
    type: Literal["turn_start"] = field(default="turn_start", init=False)


@dataclass(frozen=True)
class AssistantEvent:
    event: AssistantStreamEvent
    type: Literal["assistant_event"] = field(default="assistant_event", init=False)


@dataclass(frozen=True)
class ToolResultEvent:
    message: ToolMessage
    type: Literal["tool_result"] = field(default="tool_result", init=False)


@dataclass(frozen=True)
class AgentDoneEvent:
    result: AgentResult
    type: Literal["done"] = field(default="done", init=False)


@dataclass(frozen=True)
class AgentErrorEvent:
    error: AgentResult
    type: Literal["error"] = field(default="error", init=False)


AgentStreamEvent = Union[
    TurnStartEvent, AssistantEvent, ToolResultEvent, AgentDoneEvent, AgentErrorEvent
]


__all__ = [
    "AgentResult",
    "TurnStartEvent",
    "AssistantEvent",
    "ToolResultEvent",
    "AgentDoneEvent",
    "AgentErrorEvent",
    "AgentStreamEvent",
]
