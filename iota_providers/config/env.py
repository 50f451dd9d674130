"""iota_providers.config.env
=========================

Centralized environment variable mapping and helpers for backend credentials.

Design Notes
------------
- Canonical mapping is defined in ``ENV_MAP``. Gemini also accepts
  ``GOOGLE_API_KEY``; aliases are listed in ``ENV_ALIASES`` with the canonical
  name first to establish precedence.
- Helpers never raise on unknown providers or unset variables; callers decide
  how to proceed.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

ENV_MAP: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "gemini": "GEMINI_API_KEY",
}

ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "gemini": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
}


def get_env_var_name(provider: str) -> Optional[str]:
    """Return the canonical environment variable name for a provider."""
    return ENV_MAP.get(provider.lower()) if provider else None


def get_env_var_candidates(provider: str) -> Iterable[str]:
    """Yield acceptable environment variable names, canonical first."""
    p = (provider or "").lower()
    canonical = ENV_MAP.get(p)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(p, ()):
        if alias != canonical:
            yield alias


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve an API key for a provider from the process environment.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        ``(value, env_var_used)`` for the first non-blank candidate, or
        ``(None, None)`` when nothing is set.
    """
    for name in get_env_var_candidates(provider):
        val = os.environ.get(name)
        if val and val.strip():
            return val.strip(), name
    return None, None


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "get_env_var_name",
    "get_env_var_candidates",
    "resolve_provider_key",
]
