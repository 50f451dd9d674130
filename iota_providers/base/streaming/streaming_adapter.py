"""Base streaming adapter abstraction.

Every backend adapter shares one lifecycle: build a :class:`StreamController`,
emit ``start``, run the vendor loop in its own asyncio task, then ``finish``
(or ``fail`` if the loop raised). Subclasses implement ``_drive`` only.
"""
from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Optional, Set

from ..dto.stream_options import ResolvedStreamOptions
from ..models_parts.context import NormalizedContext
from ..models_parts.literals import Provider
from ..models_parts.model_info import ModelInfo
from ..utils.debug_log import DebugLogger
from .assistant_stream import AssistantStream
from .stream_controller import StreamController

# The event loop keeps only weak references to tasks.
_RUNNING: Set[asyncio.Task] = set()


class BaseStreamingAdapter(ABC):
    """Encapsulates the per-call streaming boilerplate shared by all backends."""

    provider: Provider

    def __init__(self, *, base_url: Optional[str] = None) -> None:
        self.base_url = base_url

    def stream(
        self,
        model: ModelInfo,
        context: NormalizedContext,
        options: ResolvedStreamOptions,
    ) -> AssistantStream:
        """Start one streaming call and return its stream immediately.

        Must be called from a running event loop. The vendor loop runs in a
        background task; nothing raised by it escapes the returned stream.
        """
        ctrl = StreamController(
            model,
            signal=options.signal,
            service_tier=options.service_tier,
            reasoning=options.reasoning,
        )
        debug = DebugLogger(model.provider, model.id)
        ctrl.start()
        loop = asyncio.get_running_loop()
        task = loop.create_task(self._run(ctrl, model, context, options, debug))
        _RUNNING.add(task)
        unregister = None
        if options.signal is not None:
            unregister = options.signal.on_cancel(
                lambda _reason: loop.call_soon_threadsafe(task.cancel)
            )

        def _on_done(done: asyncio.Task) -> None:
            _RUNNING.discard(done)
            if unregister is not None:
                unregister()
            # A task cancelled before its first step never runs `_run`.
            if not ctrl.frozen:
                ctrl.fail(asyncio.CancelledError())

        task.add_done_callback(_on_done)
        return ctrl.stream

    async def _run(
        self,
        ctrl: StreamController,
        model: ModelInfo,
        context: NormalizedContext,
        options: ResolvedStreamOptions,
        debug: DebugLogger,
    ) -> None:
        try:
            await self._drive(ctrl, model, context, options, debug)
            ctrl.finish()
        except asyncio.CancelledError as exc:
            ctrl.fail(exc)
        except Exception as exc:
            ctrl.fail(exc)
        finally:
            await debug.flush()

    @abstractmethod
    async def _drive(
        self,
        ctrl: StreamController,
        model: ModelInfo,
        context: NormalizedContext,
        options: ResolvedStreamOptions,
        debug: DebugLogger,
    ) -> None:
        """Open the vendor call and fold its events into ``ctrl``.

        Implementations return normally once the vendor sequence ends (or the
        cancellation token is observed) and raise on vendor errors.
        """


__all__ = ["BaseStreamingAdapter"]
