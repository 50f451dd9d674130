"""Public entry points: pre-flight checks, adapter dispatch and completion helpers."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from iota_providers.base import api
from iota_providers.base.errors import (
    ConfigurationError,
    ErrorCode,
    StreamFailedError,
    ToolValidationError,
)
from iota_providers.base.factory import ProviderFactory, UnknownProviderError, create_provider
from iota_providers.base.models import (
    AssistantMessage,
    Context,
    ModelCapabilities,
    TextPart,
    Tool,
    UserMessage,
)
from iota_providers.base.dto import StreamOptions
from iota_providers.base.streaming import AssistantStream, StreamController


class _ScriptedAdapter:
    """Adapter stand-in that completes immediately with a canned text part."""

    def __init__(self, stop_reason="stop", text="done"):
        self.stop_reason = stop_reason
        self.text = text
        self.seen = None

    def stream(self, model, context, options):
        self.seen = (model, context, options)
        ctrl = StreamController(model, signal=options.signal)
        ctrl.start()
        ctrl.add_part(TextPart(text=self.text))
        ctrl.set_stop_reason(self.stop_reason)
        ctrl.finish()
        return ctrl.stream


def _ctx(**kwargs):
    return Context(messages=[UserMessage("hello")], **kwargs)


def test_missing_api_key_raises(openai_model):
    with pytest.raises(ConfigurationError) as info:
        api.preflight(openai_model, _ctx())
    assert info.value.code is ErrorCode.CONFIGURATION  # nosec B101 - pytest assert in tests
    assert str(info.value) == "Missing API key for provider: openai"  # nosec B101 - pytest assert in tests


def test_api_key_from_environment(monkeypatch, gemini_model):
    monkeypatch.setenv("GOOGLE_API_KEY", "from-alias")

    _, resolved = api.preflight(gemini_model, _ctx())

    assert resolved.api_key == "from-alias"  # nosec B101 - pytest assert in tests
    assert api.get_api_key("gemini") == "from-alias"  # nosec B101 - pytest assert in tests


def test_preflight_resolves_defaults(anthropic_model):
    normalized, resolved = api.preflight(
        anthropic_model, _ctx(system="s"), StreamOptions(api_key="k", reasoning="xhigh")
    )

    assert resolved.max_tokens == anthropic_model.max_output_tokens  # nosec B101 - pytest assert in tests
    assert resolved.reasoning == "high"  # nosec B101 - pytest assert in tests
    assert normalized.system == "s"  # nosec B101 - pytest assert in tests


def test_preflight_validates_tools(openai_model):
    bad = Tool(name="bad name", parameters={"type": "object", "properties": {}})
    with pytest.raises(ToolValidationError):
        api.preflight(openai_model, _ctx(tools=[bad]), StreamOptions(api_key="k"))


def test_tools_on_model_without_tool_support_rejected(openai_model):
    import dataclasses

    no_tools = dataclasses.replace(openai_model, supports=ModelCapabilities(reasoning=False, tools=False))
    tool = Tool(name="t", parameters={"type": "object", "properties": {}})

    with pytest.raises(ConfigurationError) as info:
        api.preflight(no_tools, _ctx(tools=[tool]), StreamOptions(api_key="k"))
    assert info.value.code is ErrorCode.UNSUPPORTED  # nosec B101 - pytest assert in tests


def test_reasoning_forced_to_none_without_capability(openai_model):
    import dataclasses

    plain = dataclasses.replace(openai_model, supports=ModelCapabilities(reasoning=False, tools=True))

    _, resolved = api.preflight(plain, _ctx(), StreamOptions(api_key="k", reasoning="high"))

    assert resolved.reasoning == "none"  # nosec B101 - pytest assert in tests


def test_stream_options_bounds_are_validated():
    with pytest.raises(ValidationError):
        StreamOptions(max_tokens=0)
    with pytest.raises(ValidationError):
        StreamOptions(temperature=5)
    with pytest.raises(ValidationError):
        StreamOptions(reasoning="maximum")


@pytest.mark.asyncio
async def test_stream_dispatches_to_factory_adapter(monkeypatch, openai_model):
    adapter = _ScriptedAdapter()
    monkeypatch.setattr(ProviderFactory, "create", classmethod(lambda cls, provider, **kw: adapter))

    stream = api.stream(openai_model, _ctx(), StreamOptions(api_key="k", max_tokens=10))

    assert isinstance(stream, AssistantStream)  # nosec B101 - pytest assert in tests
    message = await stream.result()
    assert message.text() == "done"  # nosec B101 - pytest assert in tests
    _, _, options = adapter.seen
    assert options.max_tokens == 10  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_complete_and_complete_or_throw(monkeypatch, openai_model):
    monkeypatch.setattr(ProviderFactory, "create", classmethod(lambda cls, provider, **kw: _ScriptedAdapter("error")))

    message = await api.complete(openai_model, _ctx(), StreamOptions(api_key="k"))
    assert isinstance(message, AssistantMessage)  # nosec B101 - pytest assert in tests
    assert message.stop_reason == "error"  # nosec B101 - pytest assert in tests

    with pytest.raises(StreamFailedError) as info:
        await api.complete_or_throw(openai_model, _ctx(), StreamOptions(api_key="k"))
    assert info.value.partial.text() == "done"  # nosec B101 - pytest assert in tests
    assert info.value.stop_reason == "error"  # nosec B101 - pytest assert in tests


def test_factory_creates_known_adapters(monkeypatch):
    monkeypatch.setenv("OPENAI_BASE_URL", "https://proxy.example/v1")

    adapter = ProviderFactory.create("openai")

    assert type(adapter).__name__ == "OpenAIProvider"  # nosec B101 - pytest assert in tests
    assert adapter.base_url == "https://proxy.example/v1"  # nosec B101 - pytest assert in tests
    assert create_provider("anthropic", base_url="http://x").base_url == "http://x"  # nosec B101 - pytest assert in tests
    assert ProviderFactory.supported() == ("openai", "anthropic", "gemini")  # nosec B101 - pytest assert in tests


def test_factory_unknown_provider():
    with pytest.raises(UnknownProviderError) as info:
        ProviderFactory.create("mistral")
    assert isinstance(info.value, ConfigurationError)  # nosec B101 - pytest assert in tests
    assert str(info.value) == "Unknown provider 'mistral' (supported: openai, anthropic, gemini)"  # nosec B101 - pytest assert in tests
