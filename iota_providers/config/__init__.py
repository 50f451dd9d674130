"""Unified configuration layer for backends.

Sources are merged in a predictable order (later wins):
    1. Built-in defaults (base URLs)
    2. Optional config file (JSON or YAML) pointed to by IOTA_PROVIDERS_CONFIG_FILE
    3. Environment variables (``<PROVIDER>_API_KEY`` plus aliases, ``<PROVIDER>_BASE_URL``)
    4. In-code overrides passed to the helper

Config file example::

    openai:
      base_url: https://proxy.internal/v1
    anthropic:
      api_key: sk-ant-...

Public API
----------
* get_provider_config(provider: str, overrides: dict | None = None) -> dict
* reset_config_cache() -> None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import (
    ANTHROPIC_DEFAULT_BASE_URL,
    CONFIG_FILE_ENV,
    GEMINI_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_BASE_URL,
)
from .env import resolve_provider_key

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {"base_url": OPENAI_DEFAULT_BASE_URL},
    "anthropic": {"base_url": ANTHROPIC_DEFAULT_BASE_URL},
    "gemini": {"base_url": GEMINI_DEFAULT_BASE_URL},
}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_FILE_CACHE_PATH: Optional[str] = None


def _load_external_config() -> Dict[str, Any]:
    """Load and cache the optional config file (JSON first, then YAML)."""
    global _FILE_CACHE, _FILE_CACHE_PATH
    path = os.getenv(CONFIG_FILE_ENV)
    if _FILE_CACHE is not None and _FILE_CACHE_PATH == path:
        return _FILE_CACHE
    data: Any = {}
    if path and Path(path).is_file():
        text = Path(path).read_text(encoding="utf-8")
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            data = yaml.safe_load(text) or {}
    _FILE_CACHE = data if isinstance(data, dict) else {}
    _FILE_CACHE_PATH = path
    return _FILE_CACHE


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    key, _ = resolve_provider_key(provider)
    if key:
        out["api_key"] = key
    base_url = os.getenv(f"{provider.upper()}_BASE_URL")
    if base_url:
        out["base_url"] = base_url
    return out


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a backend.

    Merge order (later wins): defaults -> config file -> env vars -> overrides.
    ``None`` values in ``overrides`` are ignored.
    """
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {}
    cfg |= DEFAULTS.get(name, {})
    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg
    cfg |= _env_overrides(name)
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


def reset_config_cache() -> None:
    """Drop the cached config file contents (tests, long-running processes)."""
    global _FILE_CACHE, _FILE_CACHE_PATH
    _FILE_CACHE = None
    _FILE_CACHE_PATH = None


__all__ = [
    "get_provider_config",
    "reset_config_cache",
    "DEFAULTS",
]
