"""Unified provider error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``iota_providers.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.configuration_error import ConfigurationError, ModelNotFoundError
from .errors_parts.tool_validation_error import ToolValidationError
from .errors_parts.stream_failed_error import AgentFailedError, StreamFailedError
from .errors_parts.unhandled_case_error import UnhandledCaseError
from .errors_parts.classification import RETRYABLE_CODES, classify_exception

__all__ = [
    "ErrorCode",
    "ProviderError",
    "ConfigurationError",
    "ModelNotFoundError",
    "ToolValidationError",
    "StreamFailedError",
    "AgentFailedError",
    "UnhandledCaseError",
    "classify_exception",
    "RETRYABLE_CODES",
]
