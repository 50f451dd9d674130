"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

Used by the stream controller to tag failure log events. Resolution goes
through HTTP status codes exposed by the vendor SDK exceptions first, then the
SDK exception class names, then message substrings.
"""
from __future__ import annotations

import asyncio
from typing import Dict, Optional

from ..cancellation_parts.cancelled_error import CancelledError
from .error_code import ErrorCode
from .provider_error import ProviderError


def _extract_status(exc: BaseException) -> Optional[int]:
    """Attempt to extract an HTTP status code from a vendor exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code`` (openai, anthropic)
    - ``exc.code`` / ``exc.status`` (google-genai ``APIError``)
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
    529: ErrorCode.UNAVAILABLE,
}

# SDK exception class names shared by the openai and anthropic clients.
_CLASS_NAME_MAP: Dict[str, ErrorCode] = {
    "APITimeoutError": ErrorCode.TIMEOUT,
    "APIConnectionError": ErrorCode.TRANSIENT,
    "AuthenticationError": ErrorCode.AUTH,
    "PermissionDeniedError": ErrorCode.AUTH,
    "RateLimitError": ErrorCode.RATE_LIMIT,
    "OverloadedError": ErrorCode.UNAVAILABLE,
}

_MESSAGE_PATTERNS = (
    (ErrorCode.RATE_LIMIT, ("rate limit",)),
    (ErrorCode.TIMEOUT, ("timeout", "timed out")),
    (ErrorCode.AUTH, ("api key", "unauthorized", "forbidden")),
    (ErrorCode.UNSUPPORTED, ("unsupported", "not supported")),
    (ErrorCode.NOT_FOUND, ("not found", "does not exist")),
    (ErrorCode.UNAVAILABLE, ("unavailable", "overloaded")),
    (ErrorCode.VALIDATION, ("invalid", "malformed")),
    (ErrorCode.SERVER_ERROR, ("server error", "internal error")),
)


# Failure categories where a fresh call may succeed; surfaced as ``ProviderError.retryable``.
RETRYABLE_CODES = frozenset(
    {
        ErrorCode.RATE_LIMIT,
        ErrorCode.TIMEOUT,
        ErrorCode.TRANSIENT,
        ErrorCode.UNAVAILABLE,
        ErrorCode.SERVER_ERROR,
    }
)

def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:
    for code, patterns in _MESSAGE_PATTERNS:
        if any(p in msg for p in patterns):
            return code
    return None


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. Cancellation (cooperative or asyncio task cancellation).
        3. Timeout exceptions.
        4. HTTP status mapping.
        5. SDK exception class names.
        6. Message substring heuristics.
        7. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (CancelledError, asyncio.CancelledError)):
        return ErrorCode.CANCELLED
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError)):
        return ErrorCode.TIMEOUT
    status = _extract_status(exc)
    if status is not None and status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    for klass in type(exc).__mro__:
        mapped = _CLASS_NAME_MAP.get(klass.__name__)
        if mapped is not None:
            return mapped
    code = _heuristic_from_message(str(exc).lower())
    return code if code is not None else ErrorCode.UNKNOWN


__all__ = [
    "RETRYABLE_CODES",
    "classify_exception",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]
