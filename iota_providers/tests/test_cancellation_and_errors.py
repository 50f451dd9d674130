from __future__ import annotations

import asyncio
import types

import pytest

from iota_providers.base.cancellation import CancellationToken, CancelledError
from iota_providers.base.errors import (
    ConfigurationError,
    ErrorCode,
    ProviderError,
    classify_exception,
)


def test_cancel_runs_callbacks_once_with_reason():
    token = CancellationToken()
    seen = []
    token.on_cancel(seen.append)

    token.cancel("user stop")
    token.cancel("again")

    assert seen == ["user stop"]  # nosec B101 - pytest assert in tests
    assert token.cancelled and token.reason == "user stop"  # nosec B101 - pytest assert in tests


def test_on_cancel_after_cancellation_runs_immediately():
    token = CancellationToken()
    token.cancel()
    seen = []

    token.on_cancel(lambda reason: seen.append(reason))

    assert seen == [None]  # nosec B101 - pytest assert in tests


def test_unregistered_callback_is_not_called():
    token = CancellationToken()
    seen = []
    unregister = token.on_cancel(seen.append)
    unregister()

    token.cancel("x")

    assert seen == []  # nosec B101 - pytest assert in tests


def test_children_inherit_cancellation():
    parent = CancellationToken()
    child = parent.child()
    parent.cancel("shutdown")

    assert child.cancelled and child.reason == "shutdown"  # nosec B101 - pytest assert in tests
    with pytest.raises(CancelledError, match="shutdown"):
        child.raise_if_cancelled()


def test_failing_callback_does_not_block_others():
    token = CancellationToken()
    seen = []

    def broken(_reason):
        raise RuntimeError("listener bug")

    token.on_cancel(broken)
    token.on_cancel(seen.append)
    token.cancel("go")

    assert seen == ["go"]  # nosec B101 - pytest assert in tests


def test_provider_error_str_and_describe():
    err = ConfigurationError(ErrorCode.CONFIGURATION, "Missing API key for provider: openai", provider="openai")

    assert str(err) == "Missing API key for provider: openai"  # nosec B101 - pytest assert in tests
    assert err.describe() == "openai:- configuration: Missing API key for provider: openai"  # nosec B101 - pytest assert in tests
    assert isinstance(err, ProviderError)  # nosec B101 - pytest assert in tests


def test_classify_provider_error_passthrough():
    err = ProviderError(code=ErrorCode.AUTH, message="nope", provider="x")
    assert classify_exception(err) is ErrorCode.AUTH  # nosec B101 - pytest assert in tests


def test_classify_cancellation_and_timeouts():
    assert classify_exception(CancelledError("x")) is ErrorCode.CANCELLED  # nosec B101 - pytest assert in tests
    assert classify_exception(asyncio.CancelledError()) is ErrorCode.CANCELLED  # nosec B101 - pytest assert in tests
    assert classify_exception(asyncio.TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101 - pytest assert in tests


def test_classify_http_status_mapping():
    class _StatusError(Exception):
        def __init__(self, **attrs):
            super().__init__("http")
            self.__dict__.update(attrs)

    assert classify_exception(_StatusError(status_code=404)) is ErrorCode.NOT_FOUND  # nosec B101 - pytest assert in tests
    assert classify_exception(_StatusError(response=types.SimpleNamespace(status_code=503))) is ErrorCode.UNAVAILABLE  # nosec B101 - pytest assert in tests
    assert classify_exception(_StatusError(code=529)) is ErrorCode.UNAVAILABLE  # nosec B101 - pytest assert in tests


def test_classify_sdk_class_names():
    RateLimitError = type("RateLimitError", (Exception,), {})
    APIConnectionError = type("APIConnectionError", (Exception,), {})

    assert classify_exception(RateLimitError("slow down")) is ErrorCode.RATE_LIMIT  # nosec B101 - pytest assert in tests
    assert classify_exception(APIConnectionError("reset")) is ErrorCode.TRANSIENT  # nosec B101 - pytest assert in tests


def test_classify_heuristics():
    assert classify_exception(Exception("rate limit exceeded")) is ErrorCode.RATE_LIMIT  # nosec B101 - pytest assert in tests
    assert classify_exception(Exception("timed out waiting")) is ErrorCode.TIMEOUT  # nosec B101 - pytest assert in tests
    assert classify_exception(Exception("unsupported parameter")) is ErrorCode.UNSUPPORTED  # nosec B101 - pytest assert in tests
    assert classify_exception(Exception("random")) is ErrorCode.UNKNOWN  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_cancel_mid_stream_interrupts_stalled_read(anthropic_model, resolved_options, monkeypatch):
    """A token cancelled while the vendor read is blocked still ends the stream as aborted."""
    from iota_providers.anthropic import AnthropicProvider
    from iota_providers.base.models import NormalizedContext, UserMessage

    started = asyncio.Event()

    class _Stalled:
        async def __aenter__(self):
            return self

        async def __aexit__(self, *exc):
            return None

        def __aiter__(self):
            return self

        async def __anext__(self):
            started.set()
            await asyncio.sleep(3600)
            raise StopAsyncIteration

    class _Messages:
        async def create(self, **params):
            return _Stalled()

    class _Client:
        def __init__(self, **kwargs):
            self.messages = _Messages()

    monkeypatch.setattr("iota_providers.anthropic.client.anthropic", types.SimpleNamespace(AsyncAnthropic=_Client))
    token = CancellationToken()

    stream = AnthropicProvider().stream(
        anthropic_model, NormalizedContext(messages=[UserMessage("q")]), resolved_options(signal=token)
    )
    await asyncio.wait_for(started.wait(), timeout=1)
    token.cancel("user")
    message = await asyncio.wait_for(stream.result(), timeout=1)

    assert message.stop_reason == "aborted"  # nosec B101 - pytest assert in tests
    assert message.error_message == "Request was aborted"  # nosec B101 - pytest assert in tests
