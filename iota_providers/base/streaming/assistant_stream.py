"""Message stream: an event stream whose result is the final assistant message."""
from __future__ import annotations

from typing import Optional

from ..errors_parts.classification import RETRYABLE_CODES
from ..errors_parts.error_code import ErrorCode
from ..errors_parts.stream_failed_error import StreamFailedError
from ..models_parts.events import AssistantStreamEvent, DoneEvent, ErrorEvent
from ..models_parts.literals import FAILED_STOP_REASONS
from ..models_parts.message import AssistantMessage
from .event_stream import EventStream


def _is_terminal(event: AssistantStreamEvent) -> bool:
    return isinstance(event, (DoneEvent, ErrorEvent))


def _extract_message(event: AssistantStreamEvent) -> AssistantMessage:
    if isinstance(event, DoneEvent):
        return event.message
    if isinstance(event, ErrorEvent):
        return event.error
    raise TypeError(f"not a terminal event: {event.type}")


class AssistantStream(EventStream[AssistantStreamEvent, AssistantMessage]):
    """Stream returned by ``stream()``; ``result()`` never raises."""

    def __init__(self) -> None:
        super().__init__(_is_terminal, _extract_message)
        self.error_code: Optional[ErrorCode] = None

    async def result_or_throw(self) -> AssistantMessage:
        """Return the final message, raising for ``error``/``aborted`` stop reasons.

        Raises:
            StreamFailedError: carrying the partial message in ``partial``.
        """
        message = await self.result()
        if message.stop_reason not in FAILED_STOP_REASONS:
            return message
        if message.stop_reason == "aborted":
            code = ErrorCode.CANCELLED
        else:
            code = self.error_code or ErrorCode.UNKNOWN
        raise StreamFailedError(
            code,
            message.error_message or "Request failed",
            provider=message.provider,
            model=message.model,
            retryable=code in RETRYABLE_CODES,
            partial=message,
        )


__all__ = ["AssistantStream"]
