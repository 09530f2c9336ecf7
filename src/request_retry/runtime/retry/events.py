"""Per-engine notification hub for failed attempts.

Each RequestRetry owns its own RetryEvents; nothing here is process-wide,
so concurrent engines never see each other's notifications.

Handlers run in-line with the retry loop: emit() returns only after every
handler has finished (awaitable results are awaited), so a handler that
reads `retries_left` sees the same value the engine acts on next.

Example:
    >>> retry = RequestRetry()
    >>> retry.events.on("failed_attempt", lambda f: print(f.attempt_number, f.retries_left))
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Final

FAILED_ATTEMPT: Final = "failed_attempt"

# camelCase spelling accepted for callers ported from the JS event name
_EVENT_ALIASES: dict[str, str] = {
    FAILED_ATTEMPT: FAILED_ATTEMPT,
    "failedAttempt": FAILED_ATTEMPT,
}


@dataclass(frozen=True, slots=True)
class AttemptFailure:
    """Metadata for one failed attempt.

    Attributes:
        attempt_number: 1-based attempt that failed
        retries_left: Retries still available after this attempt
        cause: The raw failure, unmodified
    """

    attempt_number: int
    retries_left: int
    cause: BaseException | object


Handler = Callable[[AttemptFailure], Awaitable[object] | object]


def _event_name(event: str) -> str:
    try:
        return _EVENT_ALIASES[event]
    except KeyError:
        raise ValueError(f"Unknown event {event!r}. Known events: {FAILED_ATTEMPT!r}") from None


@dataclass(slots=True, eq=False)
class _Subscription:
    handler: Handler
    once: bool = False


@dataclass(slots=True)
class RetryEvents:
    """Subscribe/unsubscribe hub for retry notifications."""

    _subs: dict[str, list[_Subscription]] = field(default_factory=dict)

    def on(self, event: str, handler: Handler | None = None) -> Handler | Callable[[Handler], Handler]:
        """Subscribe handler. Without a handler, returns a decorator.

        Example:
            >>> @retry.events.on("failed_attempt")
            ... def report(f: AttemptFailure) -> None:
            ...     metrics.increment("request.retry", attempt=f.attempt_number)
        """
        name = _event_name(event)
        if handler is None:
            def register(fn: Handler) -> Handler:
                self._subs.setdefault(name, []).append(_Subscription(fn))
                return fn
            return register
        self._subs.setdefault(name, []).append(_Subscription(handler))
        return handler

    def once(self, event: str, handler: Handler) -> Handler:
        """Subscribe handler for the next emission only."""
        self._subs.setdefault(_event_name(event), []).append(_Subscription(handler, once=True))
        return handler

    def off(self, event: str, handler: Handler) -> bool:
        """Remove the most recent subscription of handler. Returns True if removed."""
        subs = self._subs.get(_event_name(event), [])
        for i in range(len(subs) - 1, -1, -1):
            if subs[i].handler == handler:  # Bound methods are recreated on access
                del subs[i]
                return True
        return False

    def listeners(self, event: str) -> list[Handler]:
        return [s.handler for s in self._subs.get(_event_name(event), [])]

    def clear(self) -> None:
        self._subs.clear()

    async def emit(self, event: str, payload: AttemptFailure) -> int:
        """Deliver payload to current subscribers in registration order.

        Returns the number of handlers invoked. Handler exceptions propagate.
        """
        name = _event_name(event)
        subs = list(self._subs.get(name, []))  # Snapshot: handlers may (un)subscribe
        for sub in subs:
            if sub.once:
                self._drop(name, sub)
            if inspect.isawaitable(result := sub.handler(payload)):
                await result
        return len(subs)

    def _drop(self, name: str, sub: _Subscription) -> None:
        subs = self._subs.get(name, [])
        if sub in subs:
            subs.remove(sub)
