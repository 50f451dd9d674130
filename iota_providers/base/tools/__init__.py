"""Tool definition helpers."""

from .validation import TOOL_NAME_RE, validate_json_schema, validate_tools

__all__ = ["TOOL_NAME_RE", "validate_json_schema", "validate_tools"]
