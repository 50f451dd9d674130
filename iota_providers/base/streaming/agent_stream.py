"""Agent stream: an event stream whose result is the :class:`AgentResult`."""
from __future__ import annotations

from ..errors_parts.error_code import ErrorCode
from ..errors_parts.stream_failed_error import AgentFailedError
from ..models_parts.agent_events import AgentDoneEvent, AgentErrorEvent, AgentResult, AgentStreamEvent
from ..models_parts.literals import FAILED_STOP_REASONS
from .event_stream import EventStream


def _is_terminal(event: AgentStreamEvent) -> bool:
    return isinstance(event, (AgentDoneEvent, AgentErrorEvent))


def _extract_result(event: AgentStreamEvent) -> AgentResult:
    if isinstance(event, AgentDoneEvent):
        return event.result
    if isinstance(event, AgentErrorEvent):
        return event.error
    raise TypeError(f"not a terminal event: {event.type}")


class AgentStream(EventStream[AgentStreamEvent, AgentResult]):
    """Stream returned by ``agent()``; ``result()`` never raises."""

    def __init__(self) -> None:
        super().__init__(_is_terminal, _extract_result)

    async def result_or_throw(self) -> AgentResult:
        """Return the result, raising :class:`AgentFailedError` for ``error``/``aborted``."""
        result = await self.result()
        if result.stop_reason not in FAILED_STOP_REASONS:
            return result
        code = ErrorCode.CANCELLED if result.stop_reason == "aborted" else ErrorCode.UNKNOWN
        raise AgentFailedError(code, result.error_message or "Request failed", agent_result=result)


__all__ = ["AgentStream"]
