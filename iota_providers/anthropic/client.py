"""AnthropicProvider adapter.

This module implements the Anthropic backend using the ``anthropic`` SDK
Messages API with raw server-sent events
(``client.messages.create(stream=True)``).

Key behaviors / architecture notes:
* Requests enable fine-grained tool streaming, plus interleaved thinking
  when a reasoning effort is requested.
* Thinking blocks survive the call only when a ``signature_delta`` attached
  their signature; the stream controller drops unsigned ones.
* The cancellation token is polled between events; the shared adapter base
  also cancels the task so a stalled read is interrupted.
"""

from __future__ import annotations

from typing import Any

import anthropic

from ..base.dto.stream_options import ResolvedStreamOptions
from ..base.logging import get_logger
from ..base.models import ModelInfo, NormalizedContext
from ..base.streaming import BaseStreamingAdapter, StreamController
from ..base.utils.debug_log import DebugLogger
from .helpers import beta_headers, build_params
from .stream_helpers import AnthropicStreamState

_logger = get_logger("iota.anthropic")


class AnthropicProvider(BaseStreamingAdapter):
    """Streaming adapter for the Anthropic Messages API."""

    provider = "anthropic"

    def _create_client(self, options: ResolvedStreamOptions, model: ModelInfo) -> Any:
        """Instantiate the async SDK client with the beta feature header."""
        return anthropic.AsyncAnthropic(
            api_key=options.api_key,
            base_url=self.base_url or model.base_url,
            default_headers=beta_headers(options.reasoning),
        )

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
        _logger.debug("anthropic request: model=%s thinking=%s", model.id, "thinking" in params)
        state = AnthropicStreamState(ctrl, reasoning=options.reasoning)
        events = await client.messages.create(**params)
        async with events:
            async for event in events:
                debug.log_response_event(event)
                if options.cancelled:
                    break
                state.handle(event)


__all__ = ["AnthropicProvider"]
