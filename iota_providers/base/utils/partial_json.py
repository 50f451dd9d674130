"""
Tolerant JSON parsing for streamed tool-call arguments.

Vendors stream tool arguments as raw JSON text fragments. While a call is in
flight, ``parse_partial_json`` turns the prefix received so far into the best
object it can by completing it the way a JSON repair
helper does (close the open string, drop dangling commas/keys/literals, append
missing closers). When the part closes, ``parse_json_strict`` parses the full
text. Neither function ever raises; both fall back to ``{}``.
"""
from __future__ import annotations

import json
import re
from typing import Any, List

_DANGLING_KEY = re.compile(r'([{,])\s*"(?:[^"\\]|\\.)*"\s*:?\s*$')
_PARTIAL_LITERAL = re.compile(
    r"(?<=[\[{,:\s])(?:-|t|tr|tru|f|fa|fal|fals|n|nu|nul|-?\d+\.|-?\d+(?:\.\d+)?[eE][+-]?)$"
)
_PARTIAL_UNICODE_ESCAPE = re.compile(r"\\u[0-9a-fA-F]{0,3}$")


def _scan(text: str) -> tuple[List[str], bool, bool]:
    """Return (open container stack, inside string, pending escape) after ``text``."""
    stack: List[str] = []
    in_str = False
    escape = False
    for ch in text:
        if in_str:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_str = False
            continue
        if ch == '"':
            in_str = True
        elif ch in "{[":
            stack.append(ch)
        elif ch in "}]" and stack:
            stack.pop()
    return stack, in_str, escape


def _trim_dangling(text: str, stack: List[str]) -> str:
    """Drop trailing tokens that cannot be completed into valid JSON."""
    while True:
        stripped = text.rstrip()
        if stripped.endswith(","):
            text = stripped[:-1]
            continue
        if stack and stack[-1] == "{":
            m = _DANGLING_KEY.search(stripped)
            if m:
                # Keep the opening brace or separating comma; the comma is
                # removed on the next pass.
                text = stripped[: m.start() + 1]
                continue
        m = _PARTIAL_LITERAL.search(stripped)
        if m:
            text = stripped[: m.start()]
            continue
        return stripped


def complete_json_prefix(text: str) -> str:
    """Complete a streamed JSON prefix into text ``json.loads`` can accept."""
    stack, in_str, escape = _scan(text)
    if in_str:
        if escape:
            text = text[:-1]
        text = _PARTIAL_UNICODE_ESCAPE.sub("", text) + '"'
    text = _trim_dangling(text, stack)
    stack, _, _ = _scan(text)
    closers = "".join("}" if opener == "{" else "]" for opener in reversed(stack))
    return text + closers


def parse_partial_json(text: str | None) -> Any:
    """Best-effort parse of a possibly truncated JSON document.

    Returns the strictly parsed value when ``text`` is complete, otherwise the
    value of the repaired prefix, otherwise ``{}``.
    """
    if not text or not text.strip():
        return {}
    try:
        return json.loads(text)
    except ValueError:
        pass
    try:
        value = json.loads(complete_json_prefix(text))
    except ValueError:
        return {}
    return {} if value is None else value


def parse_json_strict(text: str | None) -> Any:
    """Parse complete JSON text; ``{}`` for empty or invalid input."""
    if not text or not text.strip():
        return {}
    try:
        return json.loads(text)
    except ValueError:
        return {}


__all__ = ["parse_partial_json", "parse_json_strict", "complete_json_prefix"]
