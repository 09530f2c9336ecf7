"""request_retry - Retry policy for asynchronous requests that fail transiently.

Wraps any zero-argument async operation, classifies each failure as
transient (network blip, 5xx) or permanent, and retries transient failures
with exponential backoff up to a fixed attempt limit.

Quick Start:
    >>> from request_retry import RequestRetry
    >>>
    >>> retry = RequestRetry()  # 2 retries, 1s then 2s
    >>> retry.events.on("failed_attempt", lambda f: print(f"attempt {f.attempt_number} failed, {f.retries_left} left"))
    >>> data = await retry.run(fetch_profile)

Custom Policy:
    >>> retry = RequestRetry(
    ...     numberOfRetries=4,
    ...     waitBetweenFirstRetryInMilliseconds=250,
    ...     retryHttpErrorCodes=[429, 502, 503, 504],
    ... )

Classification Only:
    >>> from request_retry import RetryPolicy, is_retryable
    >>> is_retryable(exc, RetryPolicy())

Configuration from Environment:
    >>> policy = RetryPolicy.from_settings()  # REQUEST_RETRY_NUMBER_OF_RETRIES, ...
"""

from __future__ import annotations

__version__ = "0.1.0"

# Errors
from .foundation.errors import ConfigurationError, FailureKind, InvocationError, RetryError

# Settings
from .foundation.config import get_settings

# Retry
from .runtime.retry import (
    FAILED_ATTEMPT,
    NO_RETRY,
    AttemptFailure,
    Backoff,
    ErrorClassifier,
    ExponentialBackoff,
    RequestRetry,
    RetryEngine,
    RetryEvents,
    RetryPolicy,
    RetryState,
    classify,
    execute_with_retry,
    is_retryable,
)

# Observability
from .runtime.observability import configure_logging

__all__ = [
    "__version__",
    # Errors
    "RetryError", "ConfigurationError", "InvocationError", "FailureKind",
    # Settings
    "get_settings",
    # Policy & backoff
    "RetryPolicy", "NO_RETRY", "Backoff", "ExponentialBackoff",
    # Classification
    "ErrorClassifier", "classify", "is_retryable",
    # Engine & events
    "RequestRetry", "RetryEngine", "RetryState", "execute_with_retry",
    "RetryEvents", "AttemptFailure", "FAILED_ATTEMPT",
    # Observability
    "configure_logging",
]
