"""Configuration management using pydantic-settings.

Provides environment-based configuration with type safety and validation.
"""

from .settings import (
    DEFAULT_HTTP_ERROR_CODES,
    DEFAULT_NETWORK_ERROR_CODES,
    LoggingSettings,
    RequestRetrySettings,
    RetrySettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "DEFAULT_HTTP_ERROR_CODES",
    "DEFAULT_NETWORK_ERROR_CODES",
    "LoggingSettings",
    "RequestRetrySettings",
    "RetrySettings",
    "clear_settings_cache",
    "get_settings",
]
