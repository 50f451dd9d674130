"""Error raised when a closed variant receives a value nobody handles."""
from __future__ import annotations

from .provider_error import ProviderError


class UnhandledCaseError(ProviderError):
    """Signals an unmapped vendor value or an impossible variant."""


__all__ = ["UnhandledCaseError"]
