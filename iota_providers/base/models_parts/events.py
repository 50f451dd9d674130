"""
Message stream events.

Lifecycle events carry ``partial``, a snapshot of the draft message taken when
the event was emitted. The two terminal events carry the final message.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union

from .message import AssistantMessage


@dataclass(frozen=True)
class StartEvent:
    partial: AssistantMessage
    type: Literal["start"] = field(default="start", init=False)


@dataclass(frozen=True)
class PartStartEvent:
    index: int
    partial: AssistantMessage
    type: Literal["part_start"] = field(default="part_start", init=False)


@dataclass(frozen=True)
class PartDeltaEvent:
    index: int
    delta: str
    partial: AssistantMessage
    type: Literal["part_delta"] = field(default="part_delta", init=False)


@dataclass(frozen=True)
class PartEndEvent:
    index: int
    partial: AssistantMessage
    type: Literal["part_end"] = field(default="part_end", init=False)


@dataclass(frozen=True)
class DoneEvent:
    message: AssistantMessage
    type: Literal["done"] = field(default="done", init=False)


@dataclass(frozen=True)
class ErrorEvent:
    error: AssistantMessage
    type: Literal["error"] = field(default="error", init=False)


AssistantStreamEvent = Union[
    StartEvent, PartStartEvent, PartDeltaEvent, PartEndEvent, DoneEvent, ErrorEvent
]


__all__ = [
    "StartEvent",
    "PartStartEvent",
    "PartDeltaEvent",
    "PartEndEvent",
    "DoneEvent",
    "ErrorEvent",
    "AssistantStreamEvent",
]
