"""OpenAI provider adapter for the Responses API.

Streams ``client.responses.create(stream=True)`` and folds its typed events
into the shared :class:`StreamController`. Public surface: ``OpenAIProvider``,
an implementation of :class:`BaseStreamingAdapter`.

Reasoning summaries become thinking parts only when a reasoning effort other
than ``none`` was requested; the encrypted reasoning item is attached as
round-trip metadata when the item completes.
"""

from __future__ import annotations

from typing import Any

import openai

from ..base.dto.stream_options import ResolvedStreamOptions
from ..base.logging import get_logger
from ..base.models import ModelInfo, NormalizedContext
from ..base.streaming import BaseStreamingAdapter, StreamController
from ..base.utils.debug_log import DebugLogger
from .helpers import build_params
from .stream_helpers import OpenAIStreamState

__all__ = ["OpenAIProvider"]

_logger = get_logger("iota.openai")


class OpenAIProvider(BaseStreamingAdapter):
    """Streaming adapter for OpenAI Responses API models."""

    provider = "openai"

    def _create_client(self, options: ResolvedStreamOptions, model: ModelInfo) -> Any:
        return openai.AsyncOpenAI(api_key=options.api_key, base_url=self.base_url or model.base_url)

    async def _drive(
        self,
        ctrl: StreamController,
        model: ModelInfo,
        context: NormalizedContext,
        options: ResolvedStreamOptions,
        debug: DebugLogger,
    ) -> None:
        client = self._create_client(options, model)
        params = build_params(model, context, options)
        debug.log_request(params)
        _logger.debug("openai request: model=%s reasoning=%s", model.id, options.reasoning)
        state = OpenAIStreamState(ctrl, reasoning=options.reasoning, model=model.id)
        events = await client.responses.create(**params)
        async with events:
            async for event in events:
                debug.log_response_event(event)
                if options.cancelled:
                    break
                state.handle(event)
