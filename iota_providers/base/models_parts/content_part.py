"""
Assistant content parts.

An assistant message is an ordered list of parts, each one of ``text``,
``thinking`` or ``tool_call``. A part's ``type`` is fixed at construction;
adapters only ever grow ``text``, replace ``args`` or attach ``meta``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional, Union

from .part_meta import PartMeta


ContentPartType = Literal["text", "thinking", "tool_call"]


@dataclass
class TextPart:
    """Visible assistant text."""

    text: str = ""
    meta: Optional[PartMeta] = None
    type: Literal["text"] = field(default="text", init=False)


@dataclass
class ThinkingPart:
    """Reasoning/thinking text.

    Only portable back to the backend that produced it, and only when ``meta``
    carries that backend's signature or reasoning item.
    """

    text: str = ""
    meta: Optional[PartMeta] = None
    type: Literal["thinking"] = field(default="thinking", init=False)


@dataclass
class ToolCallPart:
    """A tool invocation requested by the model.

    Attributes:
        id: Vendor-assigned call id; tool results refer back to it.
        name: Tool name as declared in the context's tools.
        args: Parsed arguments. While streaming this is a best-effort parse of
            the JSON received so far.
        meta: Optional round-trip metadata.
    """

    id: str
    name: str
    args: Any = field(default_factory=dict)
    meta: Optional[PartMeta] = None
    type: Literal["tool_call"] = field(default="tool_call", init=False)

    def args_dict(self) -> Dict[str, Any]:
        """Return ``args`` when it is a mapping, otherwise an empty dict."""
        return dict(self.args) if isinstance(self.args, dict) else {}


AssistantPart = Union[TextPart, ThinkingPart, ToolCallPart]


__all__ = [
    "ContentPartType",
    "TextPart",
    "ThinkingPart",
    "ToolCallPart",
    "AssistantPart",
]
