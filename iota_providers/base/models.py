"""
Provider-agnostic domain models public surface.

This module re-exports the one-concern-per-file implementations under
``iota_providers.base.models_parts`` to keep a single stable import path.
"""

from .models_parts import (
    Provider,
    ReasoningEffort,
    ServiceTier,
    StopReason,
    AnthropicThinkingSignatureMeta,
    GeminiThoughtSignatureMeta,
    OpenAIFunctionCallItemIdMeta,
    OpenAIMessageIdMeta,
    OpenAIReasoningItemMeta,
    PartMeta,
    AssistantPart,
    ContentPartType,
    TextPart,
    ThinkingPart,
    ToolCallPart,
    Cost,
    Usage,
    AssistantMessage,
    AssistantMessageInput,
    Message,
    NormalizedMessage,
    SystemMessage,
    ToolMessage,
    UserMessage,
    Context,
    JsonSchema,
    NormalizedContext,
    Tool,
    ModelCapabilities,
    ModelInfo,
    Pricing,
    AssistantStreamEvent,
    DoneEvent,
    ErrorEvent,
    PartDeltaEvent,
    PartEndEvent,
    PartStartEvent,
    StartEvent,
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
