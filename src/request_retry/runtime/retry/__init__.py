"""Retry policies for asynchronous requests.

Classifies each failure as transient or permanent and retries transient
ones with exponential backoff, up to the policy's attempt limit.

Example:
    >>> from request_retry import RequestRetry
    >>>
    >>> retry = RequestRetry(numberOfRetries=2, waitBetweenFirstRetryInMilliseconds=500)
    >>> retry.events.on("failed_attempt", lambda f: print(f.attempt_number, f.retries_left, f.cause))
    >>>
    >>> async def fetch() -> bytes:
    ...     async with httpx.AsyncClient() as client:
    ...         r = await client.get("https://example.com")
    ...         r.raise_for_status()  # HTTPStatusError exposes response.status_code
    ...         return r.content
    >>>
    >>> content = await retry.run(fetch)
"""

from .backoff import Backoff, ExponentialBackoff
from .classifier import (
    HTTP_STATUS_ACCESSORS,
    NETWORK_CODE_ACCESSORS,
    ErrorClassifier,
    classify,
    is_retryable,
    reach,
)
from .engine import RequestRetry, RetryEngine, RetryState, execute_with_retry
from .events import FAILED_ATTEMPT, AttemptFailure, RetryEvents
from .policy import DEFAULT_HTTP_STATUSES, DEFAULT_NETWORK_CODES, NO_RETRY, RetryPolicy

__all__ = [
    # Backoff
    "Backoff",
    "ExponentialBackoff",
    # Policy
    "RetryPolicy",
    "DEFAULT_NETWORK_CODES",
    "DEFAULT_HTTP_STATUSES",
    "NO_RETRY",
    # Classification
    "ErrorClassifier",
    "classify",
    "is_retryable",
    "reach",
    "NETWORK_CODE_ACCESSORS",
    "HTTP_STATUS_ACCESSORS",
    # Events
    "FAILED_ATTEMPT",
    "AttemptFailure",
    "RetryEvents",
    # Execution
    "RequestRetry",
    "RetryEngine",
    "RetryState",
    "execute_with_retry",
]
