"""
Token usage and derived cost.

Cost is always recomputed from the counts (see ``registry.pricing``); it is
never accumulated across updates.
"""
from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Dict


@dataclass
class Cost:
    """Dollar cost per bucket and their sum."""

    input: float = 0.0
    output: float = 0.0
    cache_read: float = 0.0
    cache_write: float = 0.0
    total: float = 0.0


@dataclass
class Usage:
    """Unified four-bucket token accounting plus the vendor-reported total."""

    input_tokens: int = 0
    output_tokens: int = 0
    cache_read_tokens: int = 0
    cache_write_tokens: int = 0
    total_tokens: int = 0
    cost: Cost = field(default_factory=Cost)

    @classmethod
    def empty(cls) -> "Usage":
        return cls()

    def token_counts(self) -> Dict[str, int]:
        """Return the counts only (used by the normalized log schema)."""
        return {
            "input": self.input_tokens,
            "output": self.output_tokens,
            "cache_read": self.cache_read_tokens,
            "cache_write": self.cache_write_tokens,
            "total": self.total_tokens,
        }

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["Cost", "Usage"]
