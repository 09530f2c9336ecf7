"""Tests for the per-engine event hub."""

from __future__ import annotations

import pytest

from request_retry import FAILED_ATTEMPT, AttemptFailure, RetryEvents


@pytest.fixture
def failure() -> AttemptFailure:
    return AttemptFailure(attempt_number=1, retries_left=2, cause=ConnectionResetError())


class TestSubscription:
    """on / once / off / listeners."""

    def test_on_returns_handler(self) -> None:
        events = RetryEvents()

        @events.on(FAILED_ATTEMPT)
        def handler(f: AttemptFailure) -> None: ...

        assert events.listeners(FAILED_ATTEMPT) == [handler]

    def test_camel_case_alias(self) -> None:
        events = RetryEvents()
        events.on("failedAttempt", print)
        assert events.listeners("failed_attempt") == [print]

    def test_unknown_event(self) -> None:
        with pytest.raises(ValueError, match="Unknown event 'retry'"):
            RetryEvents().on("retry", print)

    def test_off(self) -> None:
        events = RetryEvents()
        events.on(FAILED_ATTEMPT, print)
        assert events.off(FAILED_ATTEMPT, print) is True
        assert events.off(FAILED_ATTEMPT, print) is False
        assert events.listeners(FAILED_ATTEMPT) == []

    def test_clear(self) -> None:
        events = RetryEvents()
        events.on(FAILED_ATTEMPT, print)
        events.clear()
        assert events.listeners(FAILED_ATTEMPT) == []


class TestEmit:
    """Delivery order and handler kinds."""

    @pytest.mark.asyncio
    async def test_registration_order(self, failure: AttemptFailure) -> None:
        events = RetryEvents()
        order: list[str] = []
        events.on(FAILED_ATTEMPT, lambda f: order.append("first"))

        async def second(f: AttemptFailure) -> None:
            order.append("second")

        events.on(FAILED_ATTEMPT, second)
        assert await events.emit(FAILED_ATTEMPT, failure) == 2
        assert order == ["first", "second"]

    @pytest.mark.asyncio
    async def test_once(self, failure: AttemptFailure) -> None:
        events = RetryEvents()
        seen: list[AttemptFailure] = []
        events.once(FAILED_ATTEMPT, seen.append)
        await events.emit(FAILED_ATTEMPT, failure)
        await events.emit(FAILED_ATTEMPT, failure)
        assert seen == [failure]

    @pytest.mark.asyncio
    async def test_no_listeners(self, failure: AttemptFailure) -> None:
        assert await RetryEvents().emit(FAILED_ATTEMPT, failure) == 0

    @pytest.mark.asyncio
    async def test_handler_may_unsubscribe_itself(self, failure: AttemptFailure) -> None:
        events = RetryEvents()
        calls: list[int] = []

        def handler(f: AttemptFailure) -> None:
            calls.append(f.attempt_number)
            events.off(FAILED_ATTEMPT, handler)

        events.on(FAILED_ATTEMPT, handler)
        await events.emit(FAILED_ATTEMPT, failure)
        await events.emit(FAILED_ATTEMPT, failure)
        assert calls == [1]


class TestAttemptFailure:
    def test_frozen(self, failure: AttemptFailure) -> None:
        with pytest.raises(AttributeError):
            failure.retries_left = 5  # type: ignore[misc]
