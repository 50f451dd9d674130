"""Call context: system text, conversation entries and tool definitions."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .message import Message, NormalizedMessage

JsonSchema = Dict[str, Any]


@dataclass
class Tool:
    """A caller-defined function the model may call.

    ``parameters`` is a JSON Schema restricted to the subset accepted by
    ``base.tools.validation.validate_tools``.
    """

    name: str
    parameters: JsonSchema
    description: Optional[str] = None


@dataclass
class Context:
    messages: List[Message] = field(default_factory=list)
    system: Optional[str] = None
    tools: Optional[List[Tool]] = None


@dataclass
class NormalizedContext:
    """A context rewritten for one target backend/model."""

    messages: List[NormalizedMessage] = field(default_factory=list)
    system: Optional[str] = None
    tools: Optional[List[Tool]] = None


__all__ = ["JsonSchema", "Tool", "Context", "NormalizedContext"]
