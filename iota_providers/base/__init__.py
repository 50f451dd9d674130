"""
Providers Base Package

Exports the backend-agnostic machinery shared by every adapter:
- Models: parts, messages, events, usage and model descriptors
- Streaming: event streams, the stream controller and the adapter base class
- Registry: static model catalog, cost and reasoning helpers
- Factory: lazy creation of backend adapters by canonical name
- Entry points: ``stream``, ``complete``, ``complete_or_throw`` and ``agent``
"""

from .cancellation import CancellationToken, CancelledError
from .errors import (
    AgentFailedError,
    ConfigurationError,
    ErrorCode,
    ModelNotFoundError,
    ProviderError,
    StreamFailedError,
    ToolValidationError,
    UnhandledCaseError,
    classify_exception,
)
from .dto import AgentOptions, ResolvedStreamOptions, StreamOptions
from .registry import (
    calculate_cost,
    clamp_reasoning,
    clamp_reasoning_for_model,
    get_model,
    list_models,
    supports_xhigh,
)
from .context import context_uses_tools, normalize_context_for_target
from .tools import validate_tools
from .streaming import AgentStream, AssistantStream, BaseStreamingAdapter, EventStream, StreamController
from .factory import ProviderFactory, UnknownProviderError
from .api import complete, complete_or_throw, get_api_key, preflight, stream
from .agent import agent

__all__ = [
    # Cancellation
    "CancellationToken",
    "CancelledError",
    # Errors
    "ErrorCode",
    "ProviderError",
    "ConfigurationError",
    "ModelNotFoundError",
    "ToolValidationError",
    "StreamFailedError",
    "AgentFailedError",
    "UnhandledCaseError",
    "classify_exception",
    # Options
    "StreamOptions",
    "ResolvedStreamOptions",
    "AgentOptions",
    # Registry
    "get_model",
    "list_models",
    "calculate_cost",
    "clamp_reasoning",
    "clamp_reasoning_for_model",
    "supports_xhigh",
    # Context & tools
    "normalize_context_for_target",
    "context_uses_tools",
    "validate_tools",
    # Streaming
    "EventStream",
    "AssistantStream",
    "AgentStream",
    "StreamController",
    "BaseStreamingAdapter",
    # Factory
    "ProviderFactory",
    "UnknownProviderError",
    # Entry points
    "get_api_key",
    "preflight",
    "stream",
    "complete",
    "complete_or_throw",
    "agent",
]
