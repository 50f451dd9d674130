"""Pre-flight validation of caller tool definitions.

Tool parameter schemas are restricted to a JSON Schema subset that all three
backends accept. Validation is synchronous and runs before any vendor call;
the first problem found raises :class:`ToolValidationError`.
"""
from __future__ import annotations

import re
from numbers import Number
from typing import Any, Iterable, Optional

from ..errors_parts.error_code import ErrorCode
from ..errors_parts.tool_validation_error import ToolValidationError
from ..models_parts.context import Tool

TOOL_NAME_RE = re.compile(r"^[a-zA-Z0-9_-]{1,64}$")

SUPPORTED_TYPES = frozenset({"object", "string", "number", "integer", "boolean", "array"})
NUMERIC_BOUND_KEYS = frozenset({"minimum", "maximum", "exclusiveMinimum", "exclusiveMaximum", "multipleOf"})
SUPPORTED_SCHEMA_KEYS = frozenset(
    {"type", "description", "properties", "required", "enum", "items", "additionalProperties"}
) | NUMERIC_BOUND_KEYS


def _fail(message: str) -> ToolValidationError:
    return ToolValidationError(ErrorCode.VALIDATION, message)


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def validate_tools(tools: Optional[Iterable[Tool]]) -> None:
    """Validate names, descriptions and parameter schemas of ``tools``.

    Raises:
        ToolValidationError: On the first invalid definition.
    """
    if not tools:
        return
    seen = set()
    for tool in tools:
        name = getattr(tool, "name", None)
        if not isinstance(name, str) or not name.strip():
            raise _fail("Invalid tool definition: tool.name must be a non-empty string")
        if not TOOL_NAME_RE.match(name):
            raise _fail(
                f"Invalid tool definition: tool.name '{name}' must match {TOOL_NAME_RE.pattern} and be <= 64 chars"
            )
        if name in seen:
            raise _fail(f"Invalid tool definition: duplicate tool name '{name}'")
        seen.add(name)
        if tool.description is not None and not isinstance(tool.description, str):
            raise _fail(f"Invalid tool definition: tool.description for '{name}' must be a string")
        validate_json_schema(tool.parameters, f"tool:{name}", is_root=True)


def validate_json_schema(schema: Any, path: str, *, is_root: bool = False) -> None:  # noqa: C901
    """Recursively check ``schema`` against the supported keyword subset."""
    if not isinstance(schema, dict):
        raise _fail(f"Invalid tool JSON Schema at {path}: expected an object schema")

    for key in schema:
        if key not in SUPPORTED_SCHEMA_KEYS:
            raise _fail(f"Unsupported tool JSON Schema keyword at {path}.{key}")

    schema_type = schema.get("type")
    if schema_type is not None:
        if not isinstance(schema_type, str):
            raise _fail(f"Invalid tool JSON Schema at {path}.type: expected a string")
        if schema_type not in SUPPORTED_TYPES:
            raise _fail(f"Invalid tool JSON Schema at {path}.type: unsupported type {schema_type}")

    if "description" in schema and not isinstance(schema["description"], str):
        raise _fail(f"Invalid tool JSON Schema at {path}.description: expected a string")

    properties = schema.get("properties")
    if is_root:
        if schema_type != "object":
            raise _fail(f"Invalid tool JSON Schema at {path}: root schema must have type 'object'")
        if not isinstance(properties, dict):
            raise _fail(f"Invalid tool JSON Schema at {path}: root schema must have properties")

    if "properties" in schema:
        if not isinstance(properties, dict):
            raise _fail(f"Invalid tool JSON Schema at {path}.properties: expected an object")
        for key, value in properties.items():
            validate_json_schema(value, f"{path}.properties.{key}")

    if "required" in schema:
        required = schema["required"]
        if not isinstance(required, list) or any(not isinstance(v, str) for v in required):
            raise _fail(f"Invalid tool JSON Schema at {path}.required: expected string[]")
        if isinstance(properties, dict):
            for key in required:
                if key not in properties:
                    raise _fail(
                        f"Invalid tool JSON Schema at {path}.required: '{key}' is not present in properties"
                    )

    if "enum" in schema:
        values = schema["enum"]
        if not isinstance(values, list):
            raise _fail(f"Invalid tool JSON Schema at {path}.enum: expected an array")
        for value in values:
            if not isinstance(value, (str, bool)) and not _is_number(value):
                raise _fail(
                    f"Invalid tool JSON Schema at {path}.enum: only string/number/boolean values are supported"
                )

    if "items" in schema:
        if schema_type != "array":
            raise _fail(f"Invalid tool JSON Schema at {path}.items: only valid when type is 'array'")
        validate_json_schema(schema["items"], f"{path}.items")

    if "additionalProperties" in schema and not isinstance(schema["additionalProperties"], bool):
        raise _fail(f"Invalid tool JSON Schema at {path}.additionalProperties: expected boolean")

    for key in NUMERIC_BOUND_KEYS.intersection(schema):
        if schema_type not in ("number", "integer"):
            raise _fail(f"Invalid tool JSON Schema at {path}.{key}: only valid when type is 'number' or 'integer'")
        if not _is_number(schema[key]):
            raise _fail(f"Invalid tool JSON Schema at {path}.{key}: expected a number")


__all__ = ["validate_tools", "validate_json_schema", "TOOL_NAME_RE"]
