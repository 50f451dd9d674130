"""Models parts package public surface.

Re-exports the individual data model modules so callers can import from
`iota_providers.base.models_parts` if needed, while `iota_providers.base.models`
remains the primary stable import path.
"""

from .literals import Provider, ReasoningEffort, ServiceTier, StopReason
from .part_meta import (
    AnthropicThinkingSignatureMeta,
    GeminiThoughtSignatureMeta,
    OpenAIFunctionCallItemIdMeta,
    OpenAIMessageIdMeta,
    OpenAIReasoningItemMeta,
    PartMeta,
)
from .content_part import AssistantPart, ContentPartType, TextPart, ThinkingPart, ToolCallPart
from .usage import Cost, Usage
from .message import (
    AssistantMessage,
    AssistantMessageInput,
    Message,
    NormalizedMessage,
    SystemMessage,
    ToolMessage,
    UserMessage,
)
from .context import Context, JsonSchema, NormalizedContext, Tool
from .model_info import ModelCapabilities, ModelInfo, Pricing
from .events import (
    AssistantStreamEvent,
    DoneEvent,
    ErrorEvent,
    PartDeltaEvent,
    PartEndEvent,
    PartStartEvent,
    StartEvent,
)
from .agent_events import (
    AgentDoneEvent,
    AgentErrorEvent,
    AgentResult,
    AgentStreamEvent,
    AssistantEvent,
    ToolResultEvent,
    TurnStartEvent,
)

__all__ = [
    "Provider",
    "ReasoningEffort",
    "ServiceTier",
    "StopReason",
    "AnthropicThinkingSignatureMeta",
    "GeminiThoughtSignatureMeta",
    "OpenAIFunctionCallItemIdMeta",
    "OpenAIMessageIdMeta",
    "OpenAIReasoningItemMeta",
    "PartMeta",
    "AssistantPart",
    "ContentPartType",
    "TextPart",
    "ThinkingPart",
    "ToolCallPart",
    "Cost",
    "Usage",
    "AssistantMessage",
    "AssistantMessageInput",
    "Message",
    "NormalizedMessage",
    "SystemMessage",
    "ToolMessage",
    "UserMessage",
    "Context",
    "JsonSchema",
    "NormalizedContext",
    "Tool",
    "ModelCapabilities",
    "ModelInfo",
    "Pricing",
    "AssistantStreamEvent",
    "DoneEvent",
    "ErrorEvent",
    "PartDeltaEvent",
    "PartEndEvent",
    "PartStartEvent",
    "StartEvent",
    "AgentDoneEvent",
    "AgentErrorEvent",
    "AgentResult",
    "AgentStreamEvent",
    "AssistantEvent",
    "ToolResultEvent",
    "TurnStartEvent",
]
