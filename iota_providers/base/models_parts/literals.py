"""Closed string vocabularies shared by the data model."""
from __future__ import annotations

from typing import Literal, Tuple, get_args

Provider = Literal["openai", "anthropic", "gemini"]
ReasoningEffort = Literal["none", "minimal", "low", "medium", "high", "xhigh"]
StopReason = Literal["stop", "length", "tool_use", "error", "aborted"]
ServiceTier = Literal["flex", "standard", "priority"]

PROVIDERS: Tuple[str, ...] = get_args(Provider)
REASONING_EFFORTS: Tuple[str, ...] = get_args(ReasoningEffort)
STOP_REASONS: Tuple[str, ...] = get_args(StopReason)
SERVICE_TIERS: Tuple[str, ...] = get_args(ServiceTier)

# Stop reasons that surface as the terminal ``error`` event.
FAILED_STOP_REASONS: Tuple[str, ...] = ("error", "aborted")

__all__ = [
    "Provider",
    "ReasoningEffort",
    "StopReason",
    "ServiceTier",
    "PROVIDERS",
    "REASONING_EFFORTS",
    "STOP_REASONS",
    "SERVICE_TIERS",
    "FAILED_STOP_REASONS",
]
