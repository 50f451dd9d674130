"""Backend adapter factory.

Purpose
-------
Centralize creation of backend adapters (subclasses of
``BaseStreamingAdapter``). Adapters are imported lazily using ``importlib`` so
that importing the package does not import every vendor SDK.

Failure modes
-------------
- Unknown backend names and import failures raise :class:`UnknownProviderError`
  (a :class:`ConfigurationError`), before any stream is opened.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Optional, Tuple, Type

from ..config import get_provider_config
from .errors_parts.configuration_error import ConfigurationError
from .errors_parts.error_code import ErrorCode


class UnknownProviderError(ConfigurationError):
    """Raised when a backend name cannot be resolved to an adapter."""


class ProviderFactory:
    """Create backend adapters based on a canonical name (e.g., ``"openai"``)."""

    # Map canonical backend names to import paths and class names
    _PROVIDERS: Dict[str, Dict[str, str]] = {
        "openai": {"module": "iota_providers.openai.client", "class": "OpenAIProvider"},
        "anthropic": {"module": "iota_providers.anthropic.client", "class": "AnthropicProvider"},
        "gemini": {"module": "iota_providers.gemini.client", "class": "GeminiProvider"},
    }

    @classmethod
    def create(cls, provider: str, *, base_url: Optional[str] = None) -> Any:
        """Create an adapter for ``provider``.

        ``base_url`` defaults to the merged backend configuration (config file
        or ``<PROVIDER>_BASE_URL``).

        Raises
        ------
        UnknownProviderError
            If the backend is unknown or its module/class cannot be loaded.
        """
        name = (provider or "").lower().strip()
        spec = cls._PROVIDERS.get(name)
        if not spec:
            supported = ", ".join(cls.supported())
            raise UnknownProviderError(
                ErrorCode.CONFIGURATION,
                f"Unknown provider '{provider}' (supported: {supported})",
                provider=provider,
            )

        module_path, class_name = spec["module"], spec["class"]
        try:
            mod = import_module(module_path)
        except ImportError as exc:  # pragma: no cover - missing SDK
            raise UnknownProviderError(
                ErrorCode.CONFIGURATION,
                f"Failed to import module '{module_path}' for provider '{provider}': {exc}",
                provider=name,
                raw=exc,
            ) from exc

        try:
            klass: Type = getattr(mod, class_name)
        except AttributeError as exc:
            raise UnknownProviderError(
                ErrorCode.CONFIGURATION,
                f"Adapter class '{class_name}' not found in '{module_path}' for provider '{provider}'",
                provider=name,
                raw=exc,
            ) from exc

        if base_url is None:
            base_url = get_provider_config(name).get("base_url")
        return klass(base_url=base_url)

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Return the supported canonical backend names in deterministic order."""
        return tuple(cls._PROVIDERS.keys())


def create_provider(provider: str, **kwargs: Any) -> Any:
    """Shorthand for :meth:`ProviderFactory.create`."""
    return ProviderFactory.create(provider, **kwargs)


__all__ = ["ProviderFactory", "UnknownProviderError", "create_provider"]
