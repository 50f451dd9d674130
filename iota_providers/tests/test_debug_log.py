from __future__ import annotations

import json
from dataclasses import dataclass
from types import SimpleNamespace

import pytest

from iota_providers.base.utils.debug_log import DebugLogger, to_jsonable
from iota_providers.config.defaults import DEBUG_LOG_DIR_ENV


@dataclass
class _Point:
    x: int
    y: int


def test_to_jsonable_handles_sdk_shapes():
    class _Model:
        def model_dump(self, **kwargs):
            return {"type": "message_start", "raw": b"\xff"}

    ns = SimpleNamespace(kind="delta", _private=1)

    assert to_jsonable(_Model()) == {"type": "message_start", "raw": "\ufffd"}  # nosec B101 - pytest assert in tests
    assert to_jsonable(_Point(1, 2)) == {"x": 1, "y": 2}  # nosec B101 - pytest assert in tests
    assert to_jsonable(ns) == {"kind": "delta"}  # nosec B101 - pytest assert in tests
    assert to_jsonable((1, "a", None)) == [1, "a", None]  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_disabled_logger_writes_nothing(tmp_path):
    debug = DebugLogger("openai", "gpt-5.2")
    debug.log_request({"model": "gpt-5.2"})
    debug.log_response_event({"type": "x"})

    assert debug.enabled is False  # nosec B101 - pytest assert in tests
    assert await debug.flush() is None  # nosec B101 - pytest assert in tests
    assert list(tmp_path.iterdir()) == []  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_env_directory_enables_capture(monkeypatch, tmp_path):
    monkeypatch.setenv(DEBUG_LOG_DIR_ENV, str(tmp_path / "captures"))
    debug = DebugLogger("gemini", "models/gemini-3-flash-preview")
    debug.log_request({"contents": [{"role": "user"}]})
    debug.log_response_event(SimpleNamespace(text="hi"))
    debug.log_response_event(SimpleNamespace(text="there"))

    path = await debug.flush()

    assert path is not None and path.parent == tmp_path / "captures"  # nosec B101 - pytest assert in tests
    assert path.name.endswith(".json")  # nosec B101 - pytest assert in tests
    assert "_gemini_models_gemini-3-flash-preview_" in path.name  # nosec B101 - pytest assert in tests
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["request"] == {"contents": [{"role": "user"}]}  # nosec B101 - pytest assert in tests
    assert payload["response"] == [{"text": "hi"}, {"text": "there"}]  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_write_failures_are_swallowed(tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x", encoding="utf-8")
    debug = DebugLogger("anthropic", "opus-4.5", directory=str(blocker))
    debug.log_request({"a": 1})

    assert await debug.flush() is None  # nosec B101 - pytest assert in tests
