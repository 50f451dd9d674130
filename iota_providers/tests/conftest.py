"""Shared fixtures for the iota_providers test suite.

Every test starts with a clean configuration: no vendor credentials from the
developer's shell, no config file and no debug capture directory. Fake vendor
SDK clients live here so adapter tests can replay scripted event sequences.
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Iterable, List

import pytest

from iota_providers.base.dto.stream_options import ResolvedStreamOptions
from iota_providers.base.registry import get_model
from iota_providers.config import reset_config_cache
from iota_providers.config.defaults import CONFIG_FILE_ENV, DEBUG_LOG_DIR_ENV

_ENV_VARS = (
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "OPENAI_BASE_URL",
    "ANTHROPIC_BASE_URL",
    "GEMINI_BASE_URL",
    CONFIG_FILE_ENV,
    DEBUG_LOG_DIR_ENV,
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch):
    """Remove credentials and config pointers for the duration of a test."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture()
def openai_model():
    return get_model("openai", "gpt-5.2")


@pytest.fixture()
def anthropic_model():
    return get_model("anthropic", "opus-4.5")


@pytest.fixture()
def gemini_model():
    return get_model("gemini", "gemini-3-flash-preview")


@pytest.fixture()
def resolved_options():
    """Factory for adapter-level options with a dummy key."""

    def _make(**overrides: Any) -> ResolvedStreamOptions:
        values = {"api_key": "sk-test", "max_tokens": 4096}
        values.update(overrides)
        return ResolvedStreamOptions(**values)

    return _make


class FakeEventStream:
    """Async context manager + async iterator over scripted vendor events.

    Mirrors the ``AsyncStream`` objects returned by the openai/anthropic SDKs
    when ``stream=True`` is passed.
    """

    def __init__(self, events: Iterable[Any], *, fail_with: BaseException | None = None) -> None:
        self._events: List[Any] = list(events)
        self._fail_with = fail_with
        self.closed = False

    async def __aenter__(self) -> "FakeEventStream":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.closed = True

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for event in self._events:
            yield event
        if self._fail_with is not None:
            raise self._fail_with


@pytest.fixture()
def fake_event_stream():
    return FakeEventStream


def ns(**kwargs: Any) -> SimpleNamespace:
    return SimpleNamespace(**kwargs)


@pytest.fixture()
def make_ns():
    """Shorthand for building SDK-shaped event objects."""
    return ns
