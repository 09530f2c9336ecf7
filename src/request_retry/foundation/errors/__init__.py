"""Error types for request_retry.

- FailureKind: Transient/permanent classification of a failed attempt
- ConfigurationError: Invalid policy options
- InvocationError: Non-callable operation passed to run()
"""

from .errors import (
    ConfigurationError,
    FailureKind,
    InvocationError,
    RetryError,
    format_validation_error,
)

__all__ = [
    "FailureKind",
    "RetryError", "ConfigurationError", "InvocationError",
    "format_validation_error",
]
