"""Foundation layer: errors and configuration shared by the runtime."""

from .config import LoggingSettings, RequestRetrySettings, RetrySettings, clear_settings_cache, get_settings
from .errors import ConfigurationError, FailureKind, InvocationError, RetryError, format_validation_error

__all__ = [
    "ConfigurationError", "FailureKind", "InvocationError", "RetryError", "format_validation_error",
    "LoggingSettings", "RequestRetrySettings", "RetrySettings", "clear_settings_cache", "get_settings",
]
