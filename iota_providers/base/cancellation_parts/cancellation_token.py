"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` class passed as ``StreamOptions.signal``.
Adapters poll it between vendor events and register a callback that cancels
the in-flight vendor task, so a stalled network read is interrupted too.
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Callable, List, Optional

from .state import State
from .cancelled_error import CancelledError

_logger = logging.getLogger("iota.cancellation")


class CancellationToken:
    """A cooperative cancellation token with optional cascading semantics.

    Thread-safe for ``cancel`` + ``raise_if_cancelled`` usage. Child tokens
    inherit cancellation when the parent is cancelled. Callbacks registered via
    :meth:`on_cancel` run exactly once, on the thread that calls ``cancel``.
    """

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._state = State()
        self._lock = Lock()
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cooperative cancellation, fire callbacks and cascade to children."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            callbacks = list(self._state.callbacks)
            self._state.callbacks.clear()
            children = list(self._children)
        for callback in callbacks:
            self._run_callback(callback, reason)
        for child in children:
            child.cancel(reason)

    def on_cancel(self, callback: Callable[[Optional[str]], None]) -> Callable[[], None]:
        """Register ``callback(reason)`` to run on cancellation.

        Runs immediately when the token is already cancelled. Returns a
        function that unregisters the callback.
        """
        with self._lock:
            if not self._state.cancelled:
                self._state.callbacks.append(callback)
                return lambda: self._remove_callback(callback)
            reason = self._state.reason
        self._run_callback(callback, reason)
        return lambda: None

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        with self._lock:
            self._children.append(token)
            should_cancel = self._state.cancelled
            reason = self._state.reason
        if should_cancel:
            token.cancel(reason)
        return token

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if token is cancelled."""
        if self._state.cancelled:
            raise CancelledError(self._state.reason or "operation cancelled")

    def child(self) -> "CancellationToken":
        """Create and link a child token (shortcut)."""
        return CancellationToken(parent=self)

    def _remove_callback(self, callback: Callable[[Optional[str]], None]) -> None:
        with self._lock:
            if callback in self._state.callbacks:
                self._state.callbacks.remove(callback)

    @staticmethod
    def _run_callback(callback: Callable[[Optional[str]], None], reason: Optional[str]) -> None:
        # A failing listener must not prevent the remaining ones from running.
        try:
            callback(reason)
        except Exception:  # pragma: no cover - listener bug
            _logger.debug("cancellation callback failed", exc_info=True)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._state.cancelled}, "
            f"reason={self._state.reason!r}, children={len(self._children)})"
        )


__all__ = ["CancellationToken"]
