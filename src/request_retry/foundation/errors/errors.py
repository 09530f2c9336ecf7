"""Standardized errors for retry configuration and invocation.

Errors raised by the retried operation itself are never wrapped: the engine
surfaces them unchanged. The classes here cover only what this package
raises on its own behalf.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Self

if TYPE_CHECKING:
    from pydantic import ValidationError


class FailureKind(StrEnum):
    """Classification of a failed attempt.

    Used by the engine to decide between retrying and giving up.
    """
    TRANSIENT = "TRANSIENT"  # Worth retrying (network blip, server overload)
    PERMANENT = "PERMANENT"  # Unlikely to change on retry


class RetryError(Exception):
    """Base class for errors raised by request_retry itself."""


class ConfigurationError(RetryError, ValueError):
    """Invalid retry policy options.

    Attributes:
        errors: (location, message) pairs, one per violated constraint
    """

    def __init__(self, message: str, errors: tuple[tuple[str, str], ...] = ()) -> None:
        self.errors = errors
        super().__init__(message)

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> Self:
        """Build from a pydantic ValidationError, keeping per-field detail."""
        errors = tuple((_loc(e["loc"]), e["msg"]) for e in exc.errors())
        return cls(format_validation_error(exc), errors)


class InvocationError(RetryError, TypeError):
    """`run` was called with something that cannot be invoked."""

    def __init__(self, operation: object) -> None:
        self.operation = operation
        super().__init__(f"operation must be callable, got {type(operation).__name__}")


def _loc(loc: tuple[int | str, ...]) -> str:
    return ".".join(str(p) for p in loc) or "value"


def format_validation_error(exc: ValidationError) -> str:
    """Render a pydantic ValidationError as `field: message` lines.

    Locations use the option names the caller supplied (aliases), so
    `numberOfRetries: Input should be greater than or equal to 0` points
    at the exact key that was wrong.
    """
    lines = [f"{_loc(e['loc'])}: {e['msg']}" for e in exc.errors()]
    noun = "error" if len(lines) == 1 else "errors"
    return f"Invalid retry options ({len(lines)} {noun}):\n  " + "\n  ".join(lines)
