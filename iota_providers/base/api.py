"""Public streaming entry points.

``stream`` performs every pre-flight check synchronously (credentials,
reasoning clamp, context normalization, tool capability, tool schemas) and
only then hands the call to a backend adapter. Pre-flight failures raise;
anything after that is reported through the returned stream.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from ..config import get_provider_config
from ..config.defaults import DEFAULT_REASONING_EFFORT
from .context.normalizer import context_uses_tools, normalize_context_for_target
from .dto.stream_options import ResolvedStreamOptions, StreamOptions
from .errors_parts.configuration_error import ConfigurationError
from .errors_parts.error_code import ErrorCode
from .factory import ProviderFactory
from .logging import LogContext, get_logger, log_event
from .models_parts.context import Context, NormalizedContext
from .models_parts.message import AssistantMessage
from .models_parts.model_info import ModelInfo
from .registry.reasoning import clamp_reasoning_for_model
from .streaming.assistant_stream import AssistantStream
from .tools.validation import validate_tools

_logger = get_logger("iota.stream")


def get_api_key(provider: str) -> Optional[str]:
    """Credential for ``provider`` from the config file or environment, if any."""
    return get_provider_config(provider).get("api_key") or None


def preflight(
    model: ModelInfo, context: Context, options: Optional[StreamOptions] = None
) -> Tuple[NormalizedContext, ResolvedStreamOptions]:
    """Run every synchronous check of a call and return what the adapter receives.

    Raises:
        ConfigurationError: Missing credential or tool use on a model without
            tool support.
        ToolValidationError: A tool definition or schema is rejected.
    """
    options = options or StreamOptions()
    api_key = options.api_key or get_api_key(model.provider)
    if not api_key:
        raise ConfigurationError(
            ErrorCode.CONFIGURATION,
            f"Missing API key for provider: {model.provider}",
            provider=model.provider,
            model=model.id,
        )

    reasoning = clamp_reasoning_for_model(model, options.reasoning or DEFAULT_REASONING_EFFORT)
    normalized = normalize_context_for_target(model, context)

    if not model.supports.tools and context_uses_tools(normalized):
        raise ConfigurationError(
            ErrorCode.UNSUPPORTED,
            f"Model does not support tools: {model.provider}/{model.id}",
            provider=model.provider,
            model=model.id,
        )

    validate_tools(normalized.tools)

    resolved = ResolvedStreamOptions(
        api_key=api_key,
        max_tokens=options.max_tokens or model.max_output_tokens,
        reasoning=reasoning,
        temperature=options.temperature,
        service_tier=options.service_tier,
        signal=options.signal,
    )
    log_event(
        _logger,
        "stream.preflight",
        LogContext(provider=model.provider, model=model.id),
        level=logging.DEBUG,
        reasoning=reasoning,
        max_tokens=resolved.max_tokens,
        messages=len(normalized.messages),
        tools=len(normalized.tools or []),
    )
    return normalized, resolved


def stream(model: ModelInfo, context: Context, options: Optional[StreamOptions] = None) -> AssistantStream:
    """Start a streaming call against ``model`` and return its event stream.

    Must be called from a running asyncio event loop. Pre-flight failures
    raise (see :func:`preflight`); everything later ends the stream instead.
    """
    normalized, resolved = preflight(model, context, options)
    adapter = ProviderFactory.create(model.provider)
    return adapter.stream(model, normalized, resolved)


async def complete(model: ModelInfo, context: Context, options: Optional[StreamOptions] = None) -> AssistantMessage:
    """Run a call to completion and return the final message (never raises after pre-flight)."""
    return await stream(model, context, options).result()


async def complete_or_throw(
    model: ModelInfo, context: Context, options: Optional[StreamOptions] = None
) -> AssistantMessage:
    """Like :func:`complete` but raise :class:`StreamFailedError` for ``error``/``aborted``."""
    return await stream(model, context, options).result_or_throw()


__all__ = ["get_api_key", "preflight", "stream", "complete", "complete_or_throw"]
