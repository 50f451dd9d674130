"""Cancellation error type.

Defines the public ``CancelledError`` used to signal cooperative cancellation
of a streaming call. Kept isolated to satisfy one-class-per-file policy.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation is cancelled cooperatively.

    Distinguishes cooperative cancellation from other runtime failures so the
    stream controller can report stop reason ``aborted`` instead of ``error``.
    """

__all__ = ["CancelledError"]
