"""Small helpers shared by the adapters (JSON repair, unicode, debug capture)."""

from .exhaustive import exhaustive
from .partial_json import parse_json_strict, parse_partial_json
from .sanitize import sanitize_surrogates

__all__ = ["exhaustive", "parse_json_strict", "parse_partial_json", "sanitize_surrogates"]
