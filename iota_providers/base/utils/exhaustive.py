"""Guard for closed variants (stop reasons, part types, wire event types)."""
from __future__ import annotations

from typing import Any, NoReturn, Optional

from ..errors_parts.error_code import ErrorCode
from ..errors_parts.unhandled_case_error import UnhandledCaseError


def exhaustive(value: Any, message: Optional[str] = None) -> NoReturn:
    """Raise :class:`UnhandledCaseError` for a value no branch handled."""
    try:
        rendered = repr(value)
    except Exception:  # pragma: no cover - exotic __repr__
        rendered = "[unrepresentable]"
    raise UnhandledCaseError(ErrorCode.INTERNAL, message or f"Unhandled case: {rendered}")


__all__ = ["exhaustive"]
