"""Retry engine: drives an operation under a RetryPolicy.

Each failed attempt goes through the same two steps:
1. Emit a `failed_attempt` notification (always, even for permanent
   failures and for the final attempt)
2. Classify, then either wait and retry or re-raise the original failure

The failure that ends a run is re-raised as-is: same object, same type,
same attributes, same traceback.

Example:
    >>> retry = RequestRetry(numberOfRetries=3, waitBetweenFirstRetryInMilliseconds=200)
    >>> retry.events.on("failed_attempt", lambda f: log.info("attempt failed", n=f.attempt_number))
    >>> body = await retry.run(lambda: client.get("https://example.com/api"))
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Mapping
from enum import StrEnum
from typing import TypeVar

from request_retry.foundation.errors import ConfigurationError, FailureKind, InvocationError

from .classifier import ErrorClassifier
from .events import FAILED_ATTEMPT, AttemptFailure, RetryEvents
from .policy import RetryPolicy

T = TypeVar("T")

logger = logging.getLogger("request_retry.retry")


class RetryState(StrEnum):
    """Lifecycle of a single run() call."""
    READY = "ready"
    ATTEMPTING = "attempting"
    EVALUATING_FAILURE = "evaluating_failure"
    WAITING = "waiting"
    SUCCEEDED = "succeeded"  # Terminal
    TERMINAL_FAILURE = "terminal_failure"  # Terminal


class RequestRetry:
    """Retry asynchronous requests that fail transiently.

    Holds an immutable policy, a classifier derived from it, and a private
    event hub. Reusable across any number of sequential or concurrent
    run() calls: every call keeps its own attempt counter.

    Args:
        options: Option mapping (camelCase or snake_case keys); None for defaults
        policy: Prebuilt RetryPolicy, mutually exclusive with options
        **kwargs: Options given as keywords

    Raises:
        ConfigurationError: If options are invalid
    """

    __slots__ = ("_policy", "_classifier", "_events")

    def __init__(
        self,
        options: Mapping[str, object] | None = None,
        *,
        policy: RetryPolicy | None = None,
        **kwargs: object,
    ) -> None:
        if policy is not None:
            if options is not None or kwargs:
                raise ConfigurationError(
                    "Invalid retry options (1 error):\n  policy: pass either a policy or options, not both",
                    (("policy", "pass either a policy or options, not both"),),
                )
            self._policy = policy
        else:
            self._policy = RetryPolicy.from_options(options, **kwargs)
        self._classifier = ErrorClassifier.for_policy(self._policy)
        self._events = RetryEvents()

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    @property
    def classifier(self) -> ErrorClassifier:
        return self._classifier

    @property
    def events(self) -> RetryEvents:
        return self._events

    async def run(self, operation: Callable[[], Awaitable[T] | T]) -> T:
        """Invoke operation, retrying transient failures with exponential backoff.

        Args:
            operation: Zero-argument callable; may be async or return an awaitable

        Returns:
            The operation's result from the first successful attempt

        Raises:
            InvocationError: If operation is not callable (no attempt is made)
            Exception: The original failure that ended the run, unmodified
        """
        if not callable(operation):
            raise InvocationError(operation)

        policy = self._policy
        name = getattr(operation, "__qualname__", type(operation).__name__)
        state = RetryState.READY

        for attempt in range(1, policy.max_attempts + 1):
            state = RetryState.ATTEMPTING
            try:
                result = operation()
                if inspect.isawaitable(result):
                    result = await result
            except Exception as e:
                state = RetryState.EVALUATING_FAILURE
                failure = AttemptFailure(attempt, policy.retries_left(attempt), e)
                logger.debug(f"[{name}] Attempt {attempt}/{policy.max_attempts} failed: {e!r}")
                await self._events.emit(FAILED_ATTEMPT, failure)

                kind = self._classifier.classify(e)
                if kind is FailureKind.PERMANENT:
                    logger.debug(f"[{name}] {type(e).__name__} is not retryable, giving up ({state} -> {RetryState.TERMINAL_FAILURE})")
                    raise
                if attempt >= policy.max_attempts:
                    if policy.max_retries:
                        logger.warning(f"[{name}] Giving up after {attempt} attempts: {e!r}")
                    raise

                state = RetryState.WAITING
                delay = policy.delay_for_retry(attempt)
                logger.info(f"[{name}] Retry {attempt}/{policy.max_retries} after {delay:.3f}s ({type(e).__name__})")
                await asyncio.sleep(delay)
            else:
                logger.debug(f"[{name}] Attempt {attempt} succeeded ({state} -> {RetryState.SUCCEEDED})")
                return result

        raise AssertionError("unreachable: retry loop exited without result or failure")  # pragma: no cover

    def __repr__(self) -> str:
        p = self._policy
        return f"RequestRetry(max_retries={p.max_retries}, base_delay_ms={p.base_delay_ms})"


RetryEngine = RequestRetry


async def execute_with_retry(
    operation: Callable[[], Awaitable[T] | T],
    policy: RetryPolicy | None = None,
) -> T:
    """Run operation once under a throwaway engine.

    Use a RequestRetry instance instead when failed-attempt notifications
    are needed.
    """
    return await RequestRetry(policy=policy or RetryPolicy()).run(operation)
