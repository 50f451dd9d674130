"""Tool definition validation error."""
from __future__ import annotations

from .provider_error import ProviderError


class ToolValidationError(ProviderError):
    """Raised when a tool definition or its JSON Schema is rejected.

    Always raised synchronously from ``stream()`` before the vendor call.
    """


__all__ = ["ToolValidationError"]
