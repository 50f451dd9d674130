"""Generic ordered event queue with a separate terminal-result future.

Producers ``push`` events from the adapter task; consumers drain them with
``async for`` from another task. The stream completes when a pushed event
satisfies the completion predicate (the result is extracted from it) or when
``end`` is called. Pushing after completion is a silent no-op.
"""
from __future__ import annotations

import asyncio
from collections import deque
from typing import AsyncIterator, Callable, Deque, Generic, TypeVar

E = TypeVar("E")
R = TypeVar("R")

_END = object()
_UNSET = object()


class EventStream(Generic[E, R]):
    """Single-loop, unbounded event queue consumed as an async iterator."""

    def __init__(self, is_complete: Callable[[E], bool], extract_result: Callable[[E], R]) -> None:
        self._is_complete = is_complete
        self._extract_result = extract_result
        self._queue: Deque[E] = deque()
        self._waiters: Deque[asyncio.Future] = deque()
        self._done = False
        self._result: object = _UNSET
        self._result_ready = asyncio.Event()

    @property
    def done(self) -> bool:
        """Whether the stream accepts no further events."""
        return self._done

    def push(self, event: E) -> None:
        if self._done:
            return
        if self._is_complete(event):
            self._done = True
            self._resolve(self._extract_result(event))
        while self._waiters:
            waiter = self._waiters.popleft()
            if not waiter.done():
                waiter.set_result(event)
                return
        self._queue.append(event)

    def end(self, result: object = _UNSET) -> None:
        """Close the stream, optionally resolving the result, and release waiters."""
        self._done = True
        if result is not _UNSET:
            self._resolve(result)
        while self._waiters:
            waiter = self._waiters.popleft()
            if not waiter.done():
                waiter.set_result(_END)

    def _resolve(self, result: object) -> None:
        if self._result is _UNSET:
            self._result = result
            self._result_ready.set()

    async def __aiter__(self) -> AsyncIterator[E]:
        while True:
            if self._queue:
                yield self._queue.popleft()
                continue
            if self._done:
                return
            waiter = asyncio.get_running_loop().create_future()
            self._waiters.append(waiter)
            item = await waiter
            if item is _END:
                return
            yield item

    async def result(self) -> R:
        """Wait for and return the terminal result (safe before, during or after iteration)."""
        await self._result_ready.wait()
        return self._result  # type: ignore[return-value]


__all__ = ["EventStream"]
