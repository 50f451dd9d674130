"""
Normalized provider error codes (taxonomy).

Defines the `ErrorCode` enumeration used across backend adapters, pre-flight
validation and the agent loop. Values are lowercase snake_case and are
considered a stable public contract for logging.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    TRANSIENT = "transient"
    UNSUPPORTED = "unsupported"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    INTERNAL = "internal"
    UNAVAILABLE = "unavailable"
    CONFIGURATION = "configuration"
    TOOL = "tool"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
