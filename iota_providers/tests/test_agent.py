"""Agent loop: tool execution, termination conditions and history."""

from __future__ import annotations

import asyncio

import pytest

from iota_providers.base import api
from iota_providers.base.agent import agent
from iota_providers.base.agent.runtime import stringify_tool_output
from iota_providers.base.cancellation import CancellationToken
from iota_providers.base.dto import AgentOptions, StreamOptions
from iota_providers.base.errors import AgentFailedError, ConfigurationError, ErrorCode
from iota_providers.base.models import (
    AgentDoneEvent,
    AgentErrorEvent,
    AssistantEvent,
    Context,
    TextPart,
    Tool,
    ToolCallPart,
    ToolMessage,
    ToolResultEvent,
    TurnStartEvent,
    UserMessage,
)
from iota_providers.base.streaming import StreamController

_TOOLS = [Tool(name="add", parameters={"type": "object", "properties": {"a": {"type": "number"}, "b": {"type": "number"}}})]


def _turn(model, parts, stop_reason="stop"):
    ctrl = StreamController(model)
    ctrl.start()
    for part in parts:
        idx = ctrl.add_part(part)
        ctrl.end_part(idx)
    ctrl.set_stop_reason(stop_reason)
    ctrl.finish()
    return ctrl.stream


@pytest.fixture()
def scripted_turns(monkeypatch):
    """Replace ``api.stream`` with a script of turns; records each turn's context."""
    seen_contexts = []

    def install(*turn_builders):
        builders = list(turn_builders)

        def fake_stream(model, context, options=None):
            seen_contexts.append(context)
            return builders.pop(0)(model)

        monkeypatch.setattr(api, "stream", fake_stream)
        monkeypatch.setattr(api, "preflight", lambda model, context, options=None: (None, None))
        return seen_contexts

    return install


def _call_add(call_id="c1", a=2, b=3):
    return lambda model: _turn(model, [ToolCallPart(id=call_id, name="add", args={"a": a, "b": b})])


def _answer(text="The sum is 5."):
    return lambda model: _turn(model, [TextPart(text=text)])


@pytest.mark.asyncio
async def test_tool_round_trip_then_done(openai_model, scripted_turns):
    contexts = scripted_turns(_call_add(), _answer())

    stream = agent(openai_model, Context(messages=[UserMessage("2+3?")], tools=_TOOLS), {"add": lambda args: args["a"] + args["b"]})
    events = [e async for e in stream]
    result = await stream.result_or_throw()

    assert isinstance(events[0], TurnStartEvent) and events[0].turn == 1  # nosec B101 - pytest assert in tests
    assert isinstance(events[-1], AgentDoneEvent)  # nosec B101 - pytest assert in tests
    assert any(isinstance(e, AssistantEvent) for e in events)  # nosec B101 - pytest assert in tests
    tool_results = [e.message for e in events if isinstance(e, ToolResultEvent)]
    assert tool_results == [ToolMessage(tool_call_id="c1", tool_name="add", content="5", is_error=False)]  # nosec B101 - pytest assert in tests
    assert result.stop_reason == "stop"  # nosec B101 - pytest assert in tests
    assert [m.role for m in result.messages] == ["assistant", "tool", "assistant"]  # nosec B101 - pytest assert in tests
    assert result.messages[-1].text() == "The sum is 5."  # nosec B101 - pytest assert in tests
    second_turn = contexts[1]
    assert [m.role for m in second_turn.messages] == ["user", "assistant", "tool"]  # nosec B101 - pytest assert in tests
    assert second_turn.tools == _TOOLS  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_no_tools_finishes_after_one_turn(openai_model, scripted_turns):
    contexts = scripted_turns(_answer("Hi there."))

    stream = agent(openai_model, Context(messages=[UserMessage("hello")]), {})
    events = [e async for e in stream]
    result = await stream.result_or_throw()

    assert len(contexts) == 1  # nosec B101 - pytest assert in tests
    assert [e.turn for e in events if isinstance(e, TurnStartEvent)] == [1]  # nosec B101 - pytest assert in tests
    assert isinstance(events[-1], AgentDoneEvent)  # nosec B101 - pytest assert in tests
    assert result.stop_reason == "stop"  # nosec B101 - pytest assert in tests
    assert [m.role for m in result.messages] == ["assistant"]  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_async_handlers_are_awaited(openai_model, scripted_turns):
    scripted_turns(_call_add(), _answer())

    async def add(args):
        await asyncio.sleep(0)
        return {"sum": args["a"] + args["b"]}

    result = await agent(openai_model, Context(messages=[UserMessage("q")], tools=_TOOLS), {"add": add}).result()

    assert result.messages[1].content == '{"sum": 5}'  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_handler_exception_becomes_error_result(openai_model, scripted_turns):
    scripted_turns(_call_add(), _answer("sorry"))

    def broken(_args):
        raise ValueError("division by zero")

    result = await agent(openai_model, Context(messages=[UserMessage("q")], tools=_TOOLS), {"add": broken}).result()

    tool_message = result.messages[1]
    assert tool_message.is_error is True  # nosec B101 - pytest assert in tests
    assert tool_message.content == "division by zero"  # nosec B101 - pytest assert in tests
    assert result.stop_reason == "stop"  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_unknown_tool_ends_with_error(openai_model, scripted_turns):
    scripted_turns(_call_add())

    stream = agent(openai_model, Context(messages=[UserMessage("q")], tools=_TOOLS), {})
    events = [e async for e in stream]
    result = await stream.result()

    assert isinstance(events[-1], AgentErrorEvent)  # nosec B101 - pytest assert in tests
    assert result.stop_reason == "error"  # nosec B101 - pytest assert in tests
    assert result.error_message == "unknown tool: add"  # nosec B101 - pytest assert in tests
    with pytest.raises(AgentFailedError) as info:
        await stream.result_or_throw()
    assert info.value.agent_result is result  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_turn_limit(openai_model, scripted_turns):
    scripted_turns(_call_add("c1"), _call_add("c2"))

    result = await agent(
        openai_model,
        Context(messages=[UserMessage("q")], tools=_TOOLS),
        {"add": lambda args: 0},
        agent_options=AgentOptions(max_turns=2),
    ).result()

    assert result.stop_reason == "error"  # nosec B101 - pytest assert in tests
    assert result.error_message == "turn limit exceeded"  # nosec B101 - pytest assert in tests
    assert len(result.messages) == 4  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_failed_turn_stops_the_loop(openai_model, scripted_turns):
    scripted_turns(lambda model: _turn(model, [TextPart(text="par")], stop_reason="error"))

    result = await agent(openai_model, Context(messages=[UserMessage("q")]), {}).result()

    assert result.stop_reason == "error"  # nosec B101 - pytest assert in tests
    assert result.error_message == "Request failed"  # nosec B101 - pytest assert in tests
    assert len(result.messages) == 1  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_cancellation_after_tools_aborts(openai_model, scripted_turns):
    scripted_turns(_call_add(), _answer())
    token = CancellationToken()

    def add_and_cancel(args):
        token.cancel("enough")
        return 5

    stream = agent(
        openai_model,
        Context(messages=[UserMessage("q")], tools=_TOOLS),
        {"add": add_and_cancel},
        options=StreamOptions(api_key="k", signal=token),
    )
    result = await stream.result()

    assert result.stop_reason == "aborted"  # nosec B101 - pytest assert in tests
    with pytest.raises(AgentFailedError) as info:
        await stream.result_or_throw()
    assert info.value.code is ErrorCode.CANCELLED  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_preflight_errors_raise_synchronously(openai_model):
    with pytest.raises(ConfigurationError):
        agent(openai_model, Context(messages=[UserMessage("q")]), {})


def test_stringify_tool_output():
    assert stringify_tool_output("plain") == "plain"  # nosec B101 - pytest assert in tests
    assert stringify_tool_output({"a": [1, 2]}) == '{"a": [1, 2]}'  # nosec B101 - pytest assert in tests
    assert stringify_tool_output(None) == "null"  # nosec B101 - pytest assert in tests
    assert stringify_tool_output({1, 2}).startswith("{")  # nosec B101 - pytest assert in tests
