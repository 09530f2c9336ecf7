"""Runtime layer: retry engine and observability."""

from .observability import configure_logging
from .retry import (
    AttemptFailure,
    ErrorClassifier,
    ExponentialBackoff,
    RequestRetry,
    RetryEngine,
    RetryEvents,
    RetryPolicy,
    execute_with_retry,
    is_retryable,
)

__all__ = [
    "AttemptFailure", "ErrorClassifier", "ExponentialBackoff", "RequestRetry", "RetryEngine",
    "RetryEvents", "RetryPolicy", "execute_with_retry", "is_retryable",
    "configure_logging",
]
