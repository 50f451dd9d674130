"""
Model descriptor returned by the static registry.

Represents one callable model: its backend, wire id, limits, capability flags
and per-million-token pricing.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict

from .literals import Provider


@dataclass(frozen=True)
class Pricing:
    """US dollars per one million tokens, per bucket."""

    input_per_1m: float
    output_per_1m: float
    cache_read_per_1m: float = 0.0
    cache_write_per_1m: float = 0.0


@dataclass(frozen=True)
class ModelCapabilities:
    reasoning: bool = False
    tools: bool = False


@dataclass(frozen=True)
class ModelInfo:
    """A single registry entry.

    Attributes:
        provider: Backend key owning this model.
        id: Identifier sent on the wire.
        name: Human-friendly display name.
        base_url: Vendor API base URL.
        context_window: Maximum context size in tokens.
        max_output_tokens: Default and upper bound for ``max_tokens``.
        supports: Capability flags.
        pricing: Per-million-token prices used for cost computation.
    """

    provider: Provider
    id: str
    name: str
    base_url: str
    context_window: int
    max_output_tokens: int
    supports: ModelCapabilities
    pricing: Pricing

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the entry."""
        return asdict(self)


__all__ = ["Pricing", "ModelCapabilities", "ModelInfo"]
