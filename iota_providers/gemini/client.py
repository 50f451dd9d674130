"""GeminiProvider adapter.

Uses the ``google-genai`` SDK (``genai.Client(...).aio.models``) and its
streaming ``generate_content_stream`` call. Unlike the other backends, Gemini
streams whole response chunks; the per-call :class:`GeminiStreamState` turns
them into part lifecycle events.
"""

from __future__ import annotations

from typing import Any

from google import genai

from ..base.dto.stream_options import ResolvedStreamOptions
from ..base.logging import get_logger
from ..base.models import ModelInfo, NormalizedContext
from ..base.streaming import BaseStreamingAdapter, StreamController
from ..base.utils.debug_log import DebugLogger
from ..config.defaults import GEMINI_API_VERSION, GEMINI_DEFAULT_BASE_URL
from .helpers import build_params
from .stream_helpers import GeminiStreamState

_logger = get_logger("iota.gemini")


class GeminiProvider(BaseStreamingAdapter):
    """Streaming adapter for Gemini models on the Generative Language API."""

    provider = "gemini"

    def _create_client(self, options: ResolvedStreamOptions, model: ModelInfo) -> Any:
        return genai.Client(
            api_key=options.api_key,
            http_options={"base_url": self.base_url or GEMINI_DEFAULT_BASE_URL, "api_version": GEMINI_API_VERSION},
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
        _logger.debug("gemini request: model=%s reasoning=%s", model.id, options.reasoning)
        state = GeminiStreamState(ctrl, reasoning=options.reasoning)
        chunks = await client.aio.models.generate_content_stream(**params)
        async for chunk in chunks:
            debug.log_response_event(chunk)
            if options.cancelled:
                break
            state.handle(chunk)
        state.close()


__all__ = ["GeminiProvider"]
