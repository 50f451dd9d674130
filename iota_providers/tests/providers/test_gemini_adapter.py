"""Gemini adapter: config building, chunk folding and full streamed calls."""

from __future__ import annotations

import base64
import re
from types import SimpleNamespace as NS

import pytest

from iota_providers.base.errors import ErrorCode, UnhandledCaseError
from iota_providers.base.models import (
    AssistantMessageInput,
    GeminiThoughtSignatureMeta,
    NormalizedContext,
    PartDeltaEvent,
    PartEndEvent,
    PartStartEvent,
    TextPart,
    ThinkingPart,
    Tool,
    ToolCallPart,
    ToolMessage,
    UserMessage,
)
from iota_providers.base.registry import get_model
from iota_providers.gemini import GeminiProvider
from iota_providers.gemini.helpers import (
    build_params,
    convert_messages,
    decode_signature,
    encode_signature,
    map_finish_reason,
    resolve_tool_call_id,
    thinking_config,
    usage_from_gemini,
)


def _chunk(parts=None, finish_reason=None, usage=None):
    candidate = NS(content=NS(parts=parts or []), finish_reason=finish_reason)
    return NS(candidates=[candidate], usage_metadata=usage)


def _usage_meta(**kw):
    base = dict(
        prompt_token_count=None,
        cached_content_token_count=None,
        tool_use_prompt_token_count=None,
        candidates_token_count=None,
        thoughts_token_count=None,
        total_token_count=None,
    )
    base.update(kw)
    return NS(**base)


def _text(text, thought=None, signature=None):
    return NS(text=text, thought=thought, thought_signature=signature, function_call=None)


def _call(name, args, call_id=None, signature=None):
    return NS(text=None, thought=None, thought_signature=signature, function_call=NS(id=call_id, name=name, args=args))


class _AsyncChunks:
    def __init__(self, chunks, fail_with=None):
        self._chunks = list(chunks)
        self._fail_with = fail_with

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for chunk in self._chunks:
            yield chunk
        if self._fail_with is not None:
            raise self._fail_with


@pytest.fixture()
def fake_genai(monkeypatch):
    """Install a fake ``genai`` module whose client replays scripted chunks."""
    calls = {}

    def install(chunks, *, fail_with=None):
        class _Models:
            async def generate_content_stream(self, **params):
                calls["params"] = params
                return _AsyncChunks(chunks, fail_with)

        class _Client:
            def __init__(self, **kwargs):
                calls["client"] = kwargs
                self.aio = NS(models=_Models())

        monkeypatch.setattr("iota_providers.gemini.client.genai", NS(Client=_Client))
        return calls

    return install


def test_thinking_config_levels():
    pro = get_model("gemini", "gemini-3-pro-preview")
    flash = get_model("gemini", "gemini-3-flash-preview")

    assert thinking_config(pro, "none") == {"include_thoughts": False, "thinking_level": "LOW"}  # nosec B101 - pytest assert in tests
    assert thinking_config(flash, "none") == {"include_thoughts": False, "thinking_budget": 0}  # nosec B101 - pytest assert in tests
    assert thinking_config(pro, "medium") == {"include_thoughts": True, "thinking_level": "HIGH"}  # nosec B101 - pytest assert in tests
    assert thinking_config(flash, "minimal") == {"include_thoughts": True, "thinking_level": "MINIMAL"}  # nosec B101 - pytest assert in tests
    assert thinking_config(flash, "medium")["thinking_level"] == "MEDIUM"  # nosec B101 - pytest assert in tests


def test_build_params_shapes_config(gemini_model, resolved_options):
    ctx = NormalizedContext(
        system="sys",
        messages=[UserMessage("hi")],
        tools=[Tool(name="lookup", description="find", parameters={"type": "object", "properties": {}})],
    )

    params = build_params(gemini_model, ctx, resolved_options(temperature=0.5))
    config = params["config"]

    assert params["model"] == "gemini-3-flash-preview"  # nosec B101 - pytest assert in tests
    assert params["contents"] == [{"role": "user", "parts": [{"text": "hi"}]}]  # nosec B101 - pytest assert in tests
    assert config["system_instruction"] == "sys"  # nosec B101 - pytest assert in tests
    assert config["max_output_tokens"] == 4096  # nosec B101 - pytest assert in tests
    assert config["temperature"] == 0.5  # nosec B101 - pytest assert in tests
    assert config["tools"] == [  # nosec B101 - pytest assert in tests
        {
            "function_declarations": [
                {"name": "lookup", "parameters_json_schema": {"type": "object", "properties": {}}, "description": "find"}
            ]
        }
    ]
    assert config["thinking_config"]["include_thoughts"] is False  # nosec B101 - pytest assert in tests


def test_convert_messages_replays_signatures_and_merges_results():
    signature = base64.b64encode(b"\x01\x02sig").decode("ascii")
    ctx = NormalizedContext(
        messages=[
            UserMessage("q"),
            AssistantMessageInput(
                content=[
                    ThinkingPart(text="plan", meta=GeminiThoughtSignatureMeta(signature=signature)),
                    ThinkingPart(text="unsigned"),
                    ToolCallPart(id="a_1", name="a", args={"x": 1}, meta=GeminiThoughtSignatureMeta(signature=signature)),
                    ToolCallPart(id="b_1", name="b", args=["not", "a", "record"]),
                ]
            ),
            ToolMessage("a_1", "a", "ok", is_error=False),
            ToolMessage("b_1", "b", "bad", is_error=True),
        ]
    )

    contents = convert_messages(ctx)

    assert [c["role"] for c in contents] == ["user", "model", "user"]  # nosec B101 - pytest assert in tests
    model_parts = contents[1]["parts"]
    assert model_parts[0] == {"thought": True, "text": "plan", "thought_signature": b"\x01\x02sig"}  # nosec B101 - pytest assert in tests
    assert model_parts[1]["thought_signature"] == b"\x01\x02sig"  # nosec B101 - pytest assert in tests
    assert model_parts[2] == {"function_call": {"id": "b_1", "name": "b", "args": {}}}  # nosec B101 - pytest assert in tests
    responses = [p["function_response"] for p in contents[2]["parts"]]
    assert responses[0]["response"] == {"output": "ok"}  # nosec B101 - pytest assert in tests
    assert responses[1]["response"] == {"error": "bad"}  # nosec B101 - pytest assert in tests


def test_signature_round_trip():
    encoded = encode_signature(b"\xff\x00raw")
    assert decode_signature(encoded) == b"\xff\x00raw"  # nosec B101 - pytest assert in tests
    assert encode_signature("already-text") == "already-text"  # nosec B101 - pytest assert in tests
    assert decode_signature("not base64!") == b"not base64!"  # nosec B101 - pytest assert in tests


def test_resolve_tool_call_id():
    assert resolve_tool_call_id("vendor-id", "lookup", []) == "vendor-id"  # nosec B101 - pytest assert in tests
    generated = resolve_tool_call_id("vendor-id", "lookup", ["vendor-id"])
    assert re.fullmatch(r"lookup_\d+_[0-9a-f]{12}", generated)  # nosec B101 - pytest assert in tests
    assert resolve_tool_call_id(None, None, []).startswith("tool_")  # nosec B101 - pytest assert in tests


@pytest.mark.parametrize(
    "reason, expected",
    [
        ("STOP", "stop"),
        ("MAX_TOKENS", "length"),
        ("SAFETY", "error"),
        (NS(value="STOP"), "stop"),
        ("MALFORMED_FUNCTION_CALL", "error"),
        ("FINISH_REASON_UNSPECIFIED", "error"),
        ("OTHER", "error"),
    ],
)
def test_map_finish_reason(reason, expected):
    assert map_finish_reason(reason) == expected  # nosec B101 - pytest assert in tests


def test_unknown_finish_reason_is_unhandled():
    with pytest.raises(UnhandledCaseError, match="SOMETHING_NEW"):
        map_finish_reason("SOMETHING_NEW")


def test_usage_from_gemini_splits_cache_and_thoughts():
    usage = usage_from_gemini(
        _usage_meta(
            prompt_token_count=100,
            cached_content_token_count=30,
            tool_use_prompt_token_count=5,
            candidates_token_count=20,
            thoughts_token_count=10,
            total_token_count=135,
        )
    )

    assert usage.input_tokens == 75  # nosec B101 - pytest assert in tests
    assert usage.output_tokens == 30  # nosec B101 - pytest assert in tests
    assert usage.cache_read_tokens == 30  # nosec B101 - pytest assert in tests
    assert usage.total_tokens == 135  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_stream_thoughts_then_text(gemini_model, resolved_options, fake_genai):
    calls = fake_genai(
        [
            _chunk([_text("Plan", thought=True, signature=b"\x01sig")]),
            _chunk([_text("Answer: ")]),
            _chunk([_text("42")], finish_reason=NS(value="STOP"), usage=_usage_meta(prompt_token_count=10, candidates_token_count=3)),
        ]
    )

    stream = GeminiProvider(base_url="https://gemini.test").stream(
        gemini_model, NormalizedContext(messages=[UserMessage("q")]), resolved_options(reasoning="low")
    )
    events = [e async for e in stream]
    message = await stream.result()

    kinds = [(type(e).__name__, getattr(e, "index", None)) for e in events if isinstance(e, (PartStartEvent, PartEndEvent))]
    assert kinds == [("PartStartEvent", 0), ("PartEndEvent", 0), ("PartStartEvent", 1), ("PartEndEvent", 1)]  # nosec B101 - pytest assert in tests
    assert [e.delta for e in events if isinstance(e, PartDeltaEvent)] == ["Plan", "Answer: ", "42"]  # nosec B101 - pytest assert in tests
    thinking, text = message.content
    assert thinking.meta == GeminiThoughtSignatureMeta(signature=base64.b64encode(b"\x01sig").decode("ascii"))  # nosec B101 - pytest assert in tests
    assert text.text == "Answer: 42"  # nosec B101 - pytest assert in tests
    assert message.stop_reason == "stop"  # nosec B101 - pytest assert in tests
    assert message.usage.input_tokens == 10  # nosec B101 - pytest assert in tests
    assert calls["client"]["http_options"] == {"base_url": "https://gemini.test", "api_version": "v1beta"}  # nosec B101 - pytest assert in tests
    assert calls["params"]["config"]["thinking_config"] == {"include_thoughts": True, "thinking_level": "LOW"}  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_stream_function_calls_get_unique_ids(gemini_model, resolved_options, fake_genai):
    fake_genai(
        [
            _chunk([_text("Checking.")]),
            _chunk([_call("lookup", {"q": "a"}), _call("lookup", {"q": "b"}, signature=b"s")], finish_reason="STOP"),
        ]
    )

    stream = GeminiProvider().stream(gemini_model, NormalizedContext(messages=[UserMessage("q")]), resolved_options())
    events = [e async for e in stream]
    message = await stream.result()

    text, first, second = message.content
    assert text.text == "Checking."  # nosec B101 - pytest assert in tests
    assert first.args == {"q": "a"} and second.args == {"q": "b"}  # nosec B101 - pytest assert in tests
    assert first.id != second.id  # nosec B101 - pytest assert in tests
    assert first.id.startswith("lookup_")  # nosec B101 - pytest assert in tests
    assert second.meta == GeminiThoughtSignatureMeta(signature=base64.b64encode(b"s").decode("ascii"))  # nosec B101 - pytest assert in tests
    assert message.stop_reason == "tool_use"  # nosec B101 - pytest assert in tests
    call_deltas = [e.delta for e in events if isinstance(e, PartDeltaEvent) and e.index > 0]
    assert call_deltas == ['{"q": "a"}', '{"q": "b"}']  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_thoughts_suppressed_when_reasoning_none(gemini_model, resolved_options, fake_genai):
    fake_genai([_chunk([_text("hidden", thought=True), _text("visible")], finish_reason="STOP")])

    message = await GeminiProvider().stream(gemini_model, NormalizedContext(messages=[UserMessage("q")]), resolved_options()).result()

    assert [p.type for p in message.content] == ["text"]  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_safety_finish_reason_is_an_error(gemini_model, resolved_options, fake_genai):
    fake_genai([_chunk([_text("partial")], finish_reason="SAFETY")])

    stream = GeminiProvider().stream(gemini_model, NormalizedContext(messages=[UserMessage("q")]), resolved_options())
    events = [e async for e in stream]
    message = await stream.result()

    assert events[-1].type == "error"  # nosec B101 - pytest assert in tests
    assert message.stop_reason == "error"  # nosec B101 - pytest assert in tests
    assert message.error_message == "Gemini finish reason: SAFETY"  # nosec B101 - pytest assert in tests
    assert message.content[0].text == "partial"  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_http_failure_is_classified(gemini_model, resolved_options, fake_genai):
    class _ApiError(Exception):
        code = 429

    fake_genai([_chunk([_text("a")])], fail_with=_ApiError("quota exhausted"))

    stream = GeminiProvider().stream(gemini_model, NormalizedContext(messages=[UserMessage("q")]), resolved_options())
    message = await stream.result()

    assert message.stop_reason == "error"  # nosec B101 - pytest assert in tests
    assert stream.error_code.value == "rate_limit"  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_unknown_finish_reason_fails_the_call(gemini_model, resolved_options, fake_genai):
    fake_genai([_chunk([_text("partial")], finish_reason="SOMETHING_NEW")])

    stream = GeminiProvider().stream(gemini_model, NormalizedContext(messages=[UserMessage("q")]), resolved_options())
    message = await stream.result()

    assert message.stop_reason == "error"  # nosec B101 - pytest assert in tests
    assert message.error_message == "Unhandled Gemini finish reason: SOMETHING_NEW"  # nosec B101 - pytest assert in tests
    assert stream.error_code is ErrorCode.INTERNAL  # nosec B101 - pytest assert in tests
