"""iota_providers package

One streaming interface over OpenAI (Responses API), Anthropic and Gemini.

Purpose:
    Callers build a :class:`Context`, pick a model from the registry and call
    :func:`stream` (or :func:`complete`, :func:`agent`). Every backend emits the
    same ordered ``start``/``part_*``/``done``/``error`` events and produces an
    :class:`AssistantMessage` that can be fed back as history to any backend.

Public API (re-exported):
    - Version: ``__version__``
    - Entry points: :func:`stream`, :func:`complete`, :func:`complete_or_throw`,
      :func:`agent`, :func:`get_api_key`, :func:`normalize_context_for_target`
    - Registry: :func:`get_model`, :func:`calculate_cost`, :func:`clamp_reasoning`,
      :func:`clamp_reasoning_for_model`, :func:`supports_xhigh`
    - Data model types, :class:`CancellationToken` and the error classes
"""

from .base import (
    AgentFailedError,
    AgentOptions,
    AgentStream,
    AssistantStream,
    CancellationToken,
    CancelledError,
    ConfigurationError,
    ErrorCode,
    EventStream,
    ModelNotFoundError,
    ProviderError,
    ProviderFactory,
    StreamFailedError,
    StreamOptions,
    ToolValidationError,
    UnhandledCaseError,
    agent,
    calculate_cost,
    clamp_reasoning,
    clamp_reasoning_for_model,
    complete,
    complete_or_throw,
    get_api_key,
    get_model,
    list_models,
    normalize_context_for_target,
    stream,
    supports_xhigh,
)
from .base.models import (
    AgentDoneEvent,
    AgentErrorEvent,
    AgentResult,
    AgentStreamEvent,
    AnthropicThinkingSignatureMeta,
    AssistantEvent,
    AssistantMessage,
    AssistantMessageInput,
    AssistantPart,
    AssistantStreamEvent,
    Context,
    Cost,
    DoneEvent,
    ErrorEvent,
    GeminiThoughtSignatureMeta,
    Message,
    ModelInfo,
    NormalizedContext,
    OpenAIFunctionCallItemIdMeta,
    OpenAIMessageIdMeta,
    OpenAIReasoningItemMeta,
    PartDeltaEvent,
    PartEndEvent,
    PartStartEvent,
    StartEvent,
    SystemMessage,
    TextPart,
    ThinkingPart,
    Tool,
    ToolCallPart,
    ToolMessage,
    ToolResultEvent,
    TurnStartEvent,
    Usage,
    UserMessage,
)
from .base.logging import configure_logger, get_logger

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Entry points
    "stream",
    "complete",
    "complete_or_throw",
    "agent",
    "get_api_key",
    "normalize_context_for_target",
    # Registry
    "get_model",
    "list_models",
    "calculate_cost",
    "clamp_reasoning",
    "clamp_reasoning_for_model",
    "supports_xhigh",
    "ProviderFactory",
    # Streams & options
    "EventStream",
    "AssistantStream",
    "AgentStream",
    "StreamOptions",
    "AgentOptions",
    "CancellationToken",
    # Data model
    "ModelInfo",
    "Context",
    "NormalizedContext",
    "Tool",
    "Message",
    "SystemMessage",
    "UserMessage",
    "AssistantMessageInput",
    "AssistantMessage",
    "ToolMessage",
    "AssistantPart",
    "TextPart",
    "ThinkingPart",
    "ToolCallPart",
    "OpenAIReasoningItemMeta",
    "OpenAIMessageIdMeta",
    "OpenAIFunctionCallItemIdMeta",
    "AnthropicThinkingSignatureMeta",
    "GeminiThoughtSignatureMeta",
    "Usage",
    "Cost",
    "AssistantStreamEvent",
    "StartEvent",
    "PartStartEvent",
    "PartDeltaEvent",
    "PartEndEvent",
    "DoneEvent",
    "ErrorEvent",
    "AgentStreamEvent",
    "AgentResult",
    "TurnStartEvent",
    "AssistantEvent",
    "ToolResultEvent",
    "AgentDoneEvent",
    "AgentErrorEvent",
    # Errors
    "ProviderError",
    "ErrorCode",
    "ConfigurationError",
    "ModelNotFoundError",
    "ToolValidationError",
    "StreamFailedError",
    "AgentFailedError",
    "UnhandledCaseError",
    "CancelledError",
    # Logging
    "get_logger",
    "configure_logger",
]
