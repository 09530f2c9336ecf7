"""Environment-based configuration using pydantic-settings.

Provides type-safe, validated defaults for retry policies and logging,
read from environment variables or a `.env` file.

Example:
    >>> from request_retry.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.retry.number_of_retries
    2
    >>> settings.logging.level
    'INFO'

    # Or with environment variables:
    # REQUEST_RETRY_NUMBER_OF_RETRIES=5
    # REQUEST_RETRY_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, NonNegativeInt, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Common transient socket errors. ESOCKETTIMEDOUT is a client-library alias
# distinct from ETIMEDOUT; both spellings occur in the wild.
DEFAULT_NETWORK_ERROR_CODES: tuple[str, ...] = (
    "ECONNRESET",  # Connection forcibly closed by peer
    "ENOTFOUND",
    "ESOCKETTIMEDOUT",
    "ETIMEDOUT",
    "ECONNREFUSED",
    "EHOSTUNREACH",  # Host down or unreachable from a remote router
    "EPIPE",  # Socket shut down for writing
    "EAI_AGAIN",  # Temporary failure in name resolution
)

# 5xx server errors, minus 509 (non-standard)
DEFAULT_HTTP_ERROR_CODES: tuple[int, ...] = (500, 501, 502, 503, 504, 505, 506, 507, 508, 510, 511)


class RetrySettings(BaseSettings):
    """Default retry configuration."""

    model_config = SettingsConfigDict(
        env_prefix="REQUEST_RETRY_",
        extra="ignore",
    )

    number_of_retries: NonNegativeInt = 2
    wait_between_first_retry_ms: NonNegativeInt = Field(default=1000, description="Delay before first retry in ms")
    network_error_codes: list[str] = Field(default_factory=lambda: list(DEFAULT_NETWORK_ERROR_CODES))
    http_error_codes: list[int] = Field(default_factory=lambda: list(DEFAULT_HTTP_ERROR_CODES))
    backoff_factor: Annotated[float, Field(ge=1.0, allow_inf_nan=False)] = 2.0
    max_wait_ms: NonNegativeInt | None = Field(default=None, description="Cap on any single delay in ms")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="REQUEST_RETRY_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "text"] = "text"

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class RequestRetrySettings(BaseSettings):
    """Root settings for request_retry.

    Example environment variables:
        REQUEST_RETRY_NUMBER_OF_RETRIES=3
        REQUEST_RETRY_WAIT_BETWEEN_FIRST_RETRY_MS=250
        REQUEST_RETRY_HTTP_ERROR_CODES=[502, 503]
        REQUEST_RETRY_LOG_FORMAT=json
    """

    model_config = SettingsConfigDict(
        env_prefix="REQUEST_RETRY_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    retry: RetrySettings = Field(default_factory=RetrySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_settings() -> RequestRetrySettings:
    """Get the global settings instance (cached)."""
    return RequestRetrySettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
