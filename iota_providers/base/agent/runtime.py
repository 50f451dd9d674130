"""Multi-turn tool execution loop.

``agent()`` repeatedly streams a turn, proxies its events, and runs the
caller's tool handlers for every tool call the turn produced, feeding their
results into the next turn. The loop stops when a turn has no tool calls
(``done``), a turn fails or is aborted, a tool has no handler, or the turn
budget is spent (``error``).
"""

from __future__ import annotations

import asyncio
import inspect
import json
from typing import Any, Awaitable, Callable, List, Mapping, Optional, Set, Union

from ..dto.stream_options import AgentOptions, StreamOptions
from ..logging import LogContext, get_logger, log_event
from ..models_parts.agent_events import (
    AgentDoneEvent,
    AgentErrorEvent,
    AgentResult,
    AssistantEvent,
    ToolResultEvent,
    TurnStartEvent,
)
from ..models_parts.context import Context
from ..models_parts.content_part import ToolCallPart
from ..models_parts.literals import FAILED_STOP_REASONS, StopReason
from ..models_parts.message import Message, ToolMessage
from ..models_parts.model_info import ModelInfo
from ..streaming.agent_stream import AgentStream
from ..streaming.stream_controller import ABORTED_MESSAGE
from .. import api

ToolHandler = Callable[[Any], Union[Any, Awaitable[Any]]]

_logger = get_logger("iota.agent")
_RUNNING: Set[asyncio.Task] = set()


def stringify_tool_output(value: Any) -> str:
    """Strings pass through; anything else is JSON-encoded when possible, else ``str()``."""
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return str(value)


class AgentRuntime:
    """State of one agent run: the accumulated history and the output stream.

    Attributes:
        messages: Assistant turns and tool results appended by the loop.
        out: The :class:`AgentStream` handed to the caller.
    """

    def __init__(
        self,
        model: ModelInfo,
        context: Context,
        handlers: Mapping[str, ToolHandler],
        options: Optional[StreamOptions] = None,
        agent_options: Optional[AgentOptions] = None,
    ) -> None:
        self.model = model
        self.context = context
        self.handlers = dict(handlers)
        self.options = options or StreamOptions()
        self.max_turns = (agent_options or AgentOptions()).max_turns
        self.messages: List[Message] = []
        self.out = AgentStream()
        self._ctx = LogContext(provider=model.provider, model=model.id)

    def _turn_context(self) -> Context:
        return Context(
            messages=list(self.context.messages) + list(self.messages),
            system=self.context.system,
            tools=self.context.tools,
        )

    def _finish(self, stop_reason: StopReason, error_message: Optional[str] = None) -> None:
        result = AgentResult(messages=list(self.messages), stop_reason=stop_reason, error_message=error_message)
        log_event(
            _logger,
            "agent.end",
            self._ctx,
            stop_reason=stop_reason,
            messages=len(self.messages),
            error=error_message,
        )
        if stop_reason in FAILED_STOP_REASONS:
            self.out.push(AgentErrorEvent(error=result))
        else:
            self.out.push(AgentDoneEvent(result=result))
        self.out.end()

    async def _call_handler(self, call: ToolCallPart) -> ToolMessage:
        handler = self.handlers[call.name]
        try:
            value = handler(call.args)
            if inspect.isawaitable(value):
                value = await value
            return ToolMessage(
                tool_call_id=call.id, tool_name=call.name, content=stringify_tool_output(value), is_error=False
            )
        except Exception as exc:
            log_event(_logger, "agent.tool_error", self._ctx, tool=call.name, error=str(exc))
            return ToolMessage(tool_call_id=call.id, tool_name=call.name, content=str(exc), is_error=True)

    async def run(self) -> None:
        """Drive turns until a terminal condition; always ends ``out``."""
        try:
            await self._loop()
        except asyncio.CancelledError:
            self._finish("aborted", ABORTED_MESSAGE)
            raise
        except Exception as exc:
            self._finish("error", str(exc) or "Request failed")

    async def _loop(self) -> None:
        signal = self.options.signal
        for turn in range(1, self.max_turns + 1):
            self.out.push(TurnStartEvent(turn=turn))
            turn_stream = api.stream(self.model, self._turn_context(), self.options)
            async for event in turn_stream:
                self.out.push(AssistantEvent(event=event))
            message = await turn_stream.result()
            self.messages.append(message)

            if message.stop_reason in FAILED_STOP_REASONS:
                self._finish(message.stop_reason, message.error_message)
                return

            calls = message.tool_calls()
            if not calls:
                self._finish(message.stop_reason)
                return

            for call in calls:
                if call.name not in self.handlers:
                    self._finish("error", f"unknown tool: {call.name}")
                    return
                result = await self._call_handler(call)
                self.messages.append(result)
                self.out.push(ToolResultEvent(message=result))

            if signal is not None and signal.cancelled:
                self._finish("aborted", ABORTED_MESSAGE)
                return

        self._finish("error", "turn limit exceeded")


def agent(
    model: ModelInfo,
    context: Context,
    handlers: Mapping[str, ToolHandler],
    options: Optional[StreamOptions] = None,
    agent_options: Optional[AgentOptions] = None,
) -> AgentStream:
    """Start the tool loop in a background task and return its event stream.

    Pre-flight checks of the first turn run synchronously and raise like
    :func:`stream`. Must be called from a running asyncio event loop.
    """
    api.preflight(model, context, options)
    runtime = AgentRuntime(model, context, handlers, options, agent_options)
    task = asyncio.get_running_loop().create_task(runtime.run())
    _RUNNING.add(task)
    task.add_done_callback(_RUNNING.discard)
    return runtime.out


__all__ = ["AgentRuntime", "ToolHandler", "agent", "stringify_tool_output"]
