"""
Conversation entries.

``Message`` is what callers put into a :class:`Context`. ``NormalizedMessage``
is what the context normalizer hands to a backend adapter: system text is
already extracted, assistant content is always a part list and tool results
always carry an explicit ``is_error``.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import List, Literal, Optional, Union

from .content_part import AssistantPart, ToolCallPart
from .literals import Provider, StopReason
from .usage import Usage


@dataclass
class SystemMessage:
    content: str
    role: Literal["system"] = field(default="system", init=False)


@dataclass
class UserMessage:
    content: str
    role: Literal["user"] = field(default="user", init=False)


@dataclass
class ToolMessage:
    """Result of one tool call, addressed by the originating call id."""

    tool_call_id: str
    tool_name: str
    content: str
    is_error: Optional[bool] = None
    role: Literal["tool"] = field(default="tool", init=False)


@dataclass
class AssistantMessageInput:
    """An assistant turn supplied by the caller ("bring your own history").

    ``provider``/``model`` identify the backend that produced the turn; only
    when both match the call target are thinking parts and round-trip metadata
    replayed.
    """

    content: Union[str, List[AssistantPart]]
    provider: Optional[Provider] = None
    model: Optional[str] = None
    stop_reason: Optional[StopReason] = None
    usage: Optional[Usage] = None
    error_message: Optional[str] = None
    role: Literal["assistant"] = field(default="assistant", init=False)


@dataclass
class AssistantMessage:
    """An assistant turn produced by a streaming call.

    While a call is running the stream controller owns one instance as the
    draft; after the terminal event it is never mutated again. It can be put
    straight back into a :class:`Context` as history.
    """

    provider: Provider
    model: str
    content: List[AssistantPart] = field(default_factory=list)
    stop_reason: StopReason = "stop"
    usage: Usage = field(default_factory=Usage)
    error_message: Optional[str] = None
    role: Literal["assistant"] = field(default="assistant", init=False)

    def snapshot(self) -> "AssistantMessage":
        """Return a copy safe to hand to consumers while the draft keeps growing.

        Parts are copied one level deep; adapters replace ``args`` and ``meta``
        wholesale instead of mutating them, so sharing those values is safe.
        """
        return AssistantMessage(
            provider=self.provider,
            model=self.model,
            content=[copy.copy(p) for p in self.content],
            stop_reason=self.stop_reason,
            usage=copy.deepcopy(self.usage),
            error_message=self.error_message,
        )

    def tool_calls(self) -> List[ToolCallPart]:
        return [p for p in self.content if isinstance(p, ToolCallPart)]

    def text(self) -> str:
        """Concatenated visible text of all text parts."""
        return "".join(p.text for p in self.content if p.type == "text")


Message = Union[SystemMessage, UserMessage, AssistantMessageInput, AssistantMessage, ToolMessage]
NormalizedMessage = Union[UserMessage, AssistantMessageInput, ToolMessage]


__all__ = [
    "SystemMessage",
    "UserMessage",
    "ToolMessage",
    "AssistantMessageInput",
    "AssistantMessage",
    "Message",
    "NormalizedMessage",
]
