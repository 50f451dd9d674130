"""Pre-flight configuration errors (missing credentials, unknown models)."""
from __future__ import annotations

from .provider_error import ProviderError


class ConfigurationError(ProviderError):
    """Raised before any stream is opened when the call cannot be configured."""


class ModelNotFoundError(ConfigurationError):
    """Raised by the model registry for unknown ``(provider, id)`` pairs."""


__all__ = ["ConfigurationError", "ModelNotFoundError"]
