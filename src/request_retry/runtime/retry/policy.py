"""Retry policy configuration for request retries.

Immutable, validated description of how many times to retry, how long to
wait, and which network codes / HTTP statuses count as transient.

Options are accepted under their snake_case field names or the camelCase
option names (`numberOfRetries`, `waitBetweenFirstRetryInMilliseconds`,
`retryNetworkErrorCodes`, `retryHttpErrorCodes`).

Optimizations:
- Frozen for immutability and hashability
- Code sets stored as frozensets for O(1) membership tests
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Annotated, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    ValidationError,
    computed_field,
    field_serializer,
)

from request_retry.foundation.config import DEFAULT_HTTP_ERROR_CODES, DEFAULT_NETWORK_ERROR_CODES, get_settings
from request_retry.foundation.errors import ConfigurationError

from .backoff import ExponentialBackoff

if TYPE_CHECKING:
    from request_retry.foundation.config import RetrySettings


logger = logging.getLogger("request_retry.retry")

NonNegativeStrictInt = Annotated[int, Field(ge=0, strict=True)]

DEFAULT_NETWORK_CODES: frozenset[str] = frozenset(DEFAULT_NETWORK_ERROR_CODES)
DEFAULT_HTTP_STATUSES: frozenset[int] = frozenset(DEFAULT_HTTP_ERROR_CODES)


class RetryPolicy(BaseModel):
    """Configurable retry policy for asynchronous requests.

    Attributes:
        max_retries: Retries after the first attempt (0 = single attempt)
        base_delay_ms: Wait before the first retry, in milliseconds
        retryable_network_codes: Network error codes treated as transient
        retryable_http_statuses: HTTP statuses treated as transient
        backoff_factor: Growth factor between consecutive delays
        max_delay_ms: Optional cap on any single delay

    Example:
        >>> policy = RetryPolicy(numberOfRetries=3, waitBetweenFirstRetryInMilliseconds=250)
        >>> policy.max_attempts
        4
        >>> [policy.delay_for_retry(k) for k in (1, 2, 3)]
        [0.25, 0.5, 1.0]
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        validate_default=True,
        extra="forbid",
        revalidate_instances="never",
        json_schema_extra={
            "title": "Retry Policy",
            "description": "Configuration for automatic request retries",
            "examples": [{
                "numberOfRetries": 2,
                "waitBetweenFirstRetryInMilliseconds": 1000,
                "retryHttpErrorCodes": [502, 503, 504],
            }],
        },
    )

    max_retries: NonNegativeStrictInt = Field(default=2, alias="numberOfRetries")
    base_delay_ms: NonNegativeStrictInt = Field(default=1000, alias="waitBetweenFirstRetryInMilliseconds")
    retryable_network_codes: frozenset[StrictStr] = Field(default=DEFAULT_NETWORK_CODES, alias="retryNetworkErrorCodes")
    retryable_http_statuses: frozenset[StrictInt] = Field(default=DEFAULT_HTTP_STATUSES, alias="retryHttpErrorCodes")
    backoff_factor: Annotated[float, Field(ge=1.0, allow_inf_nan=False, strict=True)] = Field(
        default=2.0, alias="backoffFactor"
    )
    max_delay_ms: NonNegativeStrictInt | None = Field(default=None, alias="maxWaitInMilliseconds")

    @field_serializer("retryable_network_codes", "retryable_http_statuses")
    def _serialize_codes(self, v: frozenset[str] | frozenset[int]) -> list[str] | list[int]:
        return sorted(v)

    @computed_field
    @property
    def max_attempts(self) -> int:
        """Total invocations allowed, including the first."""
        return self.max_retries + 1

    @computed_field
    @property
    def is_disabled(self) -> bool:
        """Whether retries are effectively disabled."""
        return self.max_retries == 0

    @property
    def base_delay(self) -> float:
        """Wait before the first retry, in seconds."""
        return self.base_delay_ms / 1000

    @property
    def backoff(self) -> ExponentialBackoff:
        return ExponentialBackoff(
            base=self.base_delay,
            multiplier=self.backoff_factor,
            max_delay=None if self.max_delay_ms is None else self.max_delay_ms / 1000,
        )

    def delay_for_retry(self, retry: int) -> float:
        """Seconds to wait before the given retry (1-based)."""
        if retry < 1:
            raise ValueError(f"retry must be >= 1, got {retry}")
        return self.backoff.delay(retry - 1)

    def retries_left(self, attempt_number: int) -> int:
        """Retries still available after the given attempt (1-based) fails."""
        return max(self.max_retries - (attempt_number - 1), 0)

    @classmethod
    def from_options(cls, options: Mapping[str, object] | None = None, /, **overrides: object) -> Self:
        """Validate an options mapping into a policy.

        Args:
            options: Option mapping; None means all defaults
            **overrides: Options merged over `options`

        Raises:
            ConfigurationError: Describing every violated field and constraint
        """
        if options is None:
            options = {}
        elif not isinstance(options, Mapping):
            msg = f"options must be a mapping, got {type(options).__name__}"
            raise ConfigurationError(f"Invalid retry options (1 error):\n  value: {msg}", (("value", msg),))
        try:
            return cls.model_validate({**options, **overrides})
        except ValidationError as e:
            raise ConfigurationError.from_validation_error(e) from e

    @classmethod
    def from_settings(cls, settings: RetrySettings | None = None) -> Self:
        """Build a policy from environment-backed RetrySettings."""
        s = settings or get_settings().retry
        logger.debug(f"Loading retry policy from settings: retries={s.number_of_retries} wait={s.wait_between_first_retry_ms}ms")
        return cls.from_options(
            max_retries=s.number_of_retries,
            base_delay_ms=s.wait_between_first_retry_ms,
            retryable_network_codes=s.network_error_codes,
            retryable_http_statuses=s.http_error_codes,
            backoff_factor=s.backoff_factor,
            max_delay_ms=s.max_wait_ms,
        )


# Singleton for no-retry policy
NO_RETRY = RetryPolicy(max_retries=0)
