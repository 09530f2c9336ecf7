"""Backoff strategies for retry policies.

Delay calculation is separated from the retry loop so policies can be
inspected (and tested) without sleeping. Attempt numbers are 0-indexed
(first retry = attempt 0).
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class Backoff(Protocol):
    """Protocol for backoff delay calculation."""

    def delay(self, attempt: int) -> float:
        """Calculate delay in seconds for given attempt number.

        Args:
            attempt: 0-indexed retry attempt number

        Returns:
            Delay in seconds before next retry
        """
        ...


@dataclass(frozen=True, slots=True)
class ExponentialBackoff:
    """Exponential backoff with optional cap and jitter.

    Delay = min(base * (multiplier ^ attempt), max_delay) * jitter

    With the defaults the schedule is base, 2*base, 4*base, ...
    A zero base always yields 0; growth past float range saturates at
    max_delay (or inf when uncapped).

    Attributes:
        base: Initial delay in seconds (default: 1.0)
        multiplier: Exponential growth factor (default: 2.0)
        max_delay: Maximum delay cap in seconds, None for uncapped
        jitter: Randomize 0.5-1.5x (default: False)
    """

    base: float = 1.0
    multiplier: float = 2.0
    max_delay: float | None = None
    jitter: bool = False

    def delay(self, attempt: int) -> float:
        if self.base == 0:
            return 0.0
        try:
            d = self.base * (self.multiplier ** attempt)
        except OverflowError:
            d = math.inf
        if self.max_delay is not None:
            d = min(d, self.max_delay)
        return d * (0.5 + random.random()) if self.jitter else d

    def schedule(self, retries: int) -> tuple[float, ...]:
        """Delays for the first `retries` retries, in order."""
        return tuple(self.delay(i) for i in range(retries))
