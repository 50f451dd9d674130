"""
Optional on-disk capture of raw vendor traffic.

When ``IOTA_DEBUG_LOG_DIR`` is set, each adapter call records the outgoing
request payload and every raw vendor event, then writes them to one JSON file
per call. Capture failures are logged at debug level and never reach the
streaming path.
"""
from __future__ import annotations

import asyncio
import dataclasses
import json
import os
import re
import secrets
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Optional

from ...config.defaults import DEBUG_LOG_DIR_ENV
from ..logging import get_logger

_logger = get_logger("iota.debug_log")
_UNSAFE_FILENAME = re.compile(r"[^a-zA-Z0-9_.-]")


def to_jsonable(value: Any) -> Any:
    """Convert SDK objects (pydantic models, dataclasses) into JSON-friendly data."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, bytes):
        return value.decode("utf-8", "replace")
    dump = getattr(value, "model_dump", None)
    if callable(dump):
        return to_jsonable(dump(mode="json", exclude_none=True))
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return to_jsonable(dataclasses.asdict(value))
    if hasattr(value, "__dict__"):
        return {k: to_jsonable(v) for k, v in vars(value).items() if not k.startswith("_")}
    return str(value)


class DebugLogger:
    """Per-call recorder; a no-op unless a debug directory is configured."""

    def __init__(self, provider: str, model: str, directory: Optional[str] = None) -> None:
        raw_dir = directory if directory is not None else os.getenv(DEBUG_LOG_DIR_ENV, "")
        self.directory = raw_dir.strip() or None
        self.provider = provider
        self.model = model
        self._request: Any = None
        self._events: List[Any] = []

    @property
    def enabled(self) -> bool:
        return self.directory is not None

    def log_request(self, payload: Any) -> None:
        if self.enabled:
            self._request = payload

    def log_response_event(self, event: Any) -> None:
        if self.enabled:
            self._events.append(event)

    def _target_path(self) -> Path:
        ts = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        model = _UNSAFE_FILENAME.sub("_", self.model)
        name = f"{ts}_{self.provider}_{model}_{secrets.token_hex(4)}.json"
        return Path(self.directory or ".") / name

    def _write(self) -> Optional[Path]:
        path = self._target_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "provider": self.provider,
            "model": self.model,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "request": to_jsonable(self._request),
            "response": [to_jsonable(e) for e in self._events],
        }
        path.write_text(json.dumps(payload, indent=2, ensure_ascii=False, default=str), encoding="utf-8")
        return path

    async def flush(self) -> Optional[Path]:
        """Write the capture file; returns its path, or ``None`` when disabled or failed."""
        if not self.enabled:
            return None
        try:
            return await asyncio.to_thread(self._write)
        except Exception:
            _logger.debug("debug log write failed", exc_info=True)
            return None


__all__ = ["DebugLogger", "to_jsonable"]
