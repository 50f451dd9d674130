"""
Structured provider error exception type.

Wraps pre-flight failures, vendor failures and loop-level failures with a
normalized `ErrorCode` for consistent handling and structured logging.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass(eq=False)
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message; this is what ``str()`` returns.
        provider: Backend key where the error originated (e.g., ``"openai"``).
        model: Optional model id associated with the failure.
        retryable: Hint for callers that implement their own retries.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: Optional[str] = None
    model: Optional[str] = None
    retryable: bool = False
    raw: Optional[BaseException] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def describe(self) -> str:
        """Return a compact string combining provider, model, code, and message."""
        return f"{self.provider or '-'}:{self.model or '-'} {self.code.value}: {self.message}"


__all__ = ["ProviderError"]
