"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `iota_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .configuration_error import ConfigurationError, ModelNotFoundError
from .tool_validation_error import ToolValidationError
from .stream_failed_error import AgentFailedError, StreamFailedError
from .unhandled_case_error import UnhandledCaseError
from .classification import classify_exception

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
]
