"""
Pydantic DTOs for per-call options.

Purpose
-------
Validate caller-supplied options once, at the ``stream()`` boundary, before a
backend adapter is selected. Numeric bounds are checked here so that adapters
can forward values to vendor SDKs unchanged.

External dependencies: Pydantic only (no network calls).

Failure modes: invalid values raise ``pydantic.ValidationError`` from the
constructor; ``stream()`` lets it propagate as a pre-flight error.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..cancellation import CancellationToken
from ..models_parts.literals import ReasoningEffort, ServiceTier
from ...config.defaults import DEFAULT_MAX_TURNS, DEFAULT_REASONING_EFFORT


class StreamOptions(BaseModel):
    """Options accepted by ``stream``/``complete``/``agent``.

    Attributes:
        api_key: Explicit credential; when unset the backend's environment
            variable (or config file) is used.
        temperature: Sampling temperature, forwarded as-is.
        max_tokens: Output token cap; defaults to the model's max output.
        reasoning: Requested reasoning effort, clamped per model.
        service_tier: OpenAI processing tier (affects request and cost only
            for OpenAI models).
        signal: Cooperative cancellation token.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    api_key: Optional[str] = None
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(default=None, gt=0)
    reasoning: Optional[ReasoningEffort] = None
    service_tier: Optional[ServiceTier] = None
    signal: Optional[CancellationToken] = None


class ResolvedStreamOptions(BaseModel):
    """Options after pre-flight resolution; what adapters receive."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    api_key: str = Field(..., min_length=1)
    max_tokens: int = Field(..., gt=0)
    reasoning: ReasoningEffort = DEFAULT_REASONING_EFFORT
    temperature: Optional[float] = None
    service_tier: Optional[ServiceTier] = None
    signal: Optional[CancellationToken] = None

    @property
    def cancelled(self) -> bool:
        return self.signal is not None and self.signal.cancelled


class AgentOptions(BaseModel):
    """Options for the multi-turn agent loop."""

    model_config = ConfigDict(frozen=True)

    max_turns: int = Field(default=DEFAULT_MAX_TURNS, ge=1)


__all__ = ["StreamOptions", "ResolvedStreamOptions", "AgentOptions"]
