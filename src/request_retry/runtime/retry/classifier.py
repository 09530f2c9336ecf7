"""Transient vs permanent classification of request failures.

HTTP clients surface failures in different shapes. Rather than adapting
each client, the classifier probes a fixed, ordered list of locations for a
network error code or HTTP status and compares what it finds against the
policy's code sets.

Network code locations:
    code                  generic `err.code` string (Node-style clients, custom errors)
    errno name            OSError.errno mapped through `errno.errorcode`
    bare TimeoutError     treated as ETIMEDOUT

HTTP status locations, in probe order:
    code                  urllib.error.HTTPError, custom errors
    statusCode            boom / wreck style errors
    output.statusCode     boom payloads
    response.status       axios style, aiohttp responses
    status_code           errors carrying the status directly
    status                aiohttp.ClientResponseError
    response.status_code  requests.HTTPError, httpx.HTTPStatusError
"""

from __future__ import annotations

import errno
import socket
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING

from request_retry.foundation.errors import FailureKind

if TYPE_CHECKING:
    from .policy import RetryPolicy

Accessor = Callable[[object], object | None]

_MISSING = object()


def _attr(obj: object, name: str) -> object:
    """Single-step lookup tolerant of mappings and missing attributes.

    A lookup that raises (a property that fails, a deprecation warning
    promoted to an error) counts as missing, so the original failure
    is what surfaces.
    """
    try:
        if isinstance(obj, Mapping):
            return obj.get(name, _MISSING)
        return getattr(obj, name, _MISSING)
    except Exception:
        return _MISSING


def reach(obj: object, path: str) -> object | None:
    """Follow a dotted path through attributes or mapping keys.

    Returns None when any step is missing instead of raising.
    """
    for part in path.split("."):
        if obj is None or (obj := _attr(obj, part)) is _MISSING:
            return None
    return obj


# ─────────────────────────────────────────────────────────────────────────────
# Network code accessors
# ─────────────────────────────────────────────────────────────────────────────


def network_code(failure: object) -> str | None:
    """Direct `code` attribute, when it holds a string."""
    code = reach(failure, "code")
    return code if isinstance(code, str) else None


# getaddrinfo failures carry EAI_* codes, not errno values
_GAI_CODES: dict[int, str] = {
    getattr(socket, name): code
    for name, code in (
        ("EAI_AGAIN", "EAI_AGAIN"),
        ("EAI_NONAME", "ENOTFOUND"),
        ("EAI_NODATA", "ENOTFOUND"),
    )
    if hasattr(socket, name)
}


def errno_name(failure: object) -> str | None:
    """Symbolic errno of an OSError (ECONNRESET, EPIPE, EAI_AGAIN, ENOTFOUND, ...)."""
    if not isinstance(failure, OSError) or not isinstance(failure.errno, int):
        return None
    if isinstance(failure, socket.gaierror):
        return _GAI_CODES.get(failure.errno)
    return errno.errorcode.get(failure.errno)


def timeout_name(failure: object) -> str | None:
    """Bare TimeoutError without an errno (asyncio / socket timeouts)."""
    return "ETIMEDOUT" if isinstance(failure, TimeoutError) and failure.errno is None else None


NETWORK_CODE_ACCESSORS: tuple[Accessor, ...] = (network_code, errno_name, timeout_name)


# ─────────────────────────────────────────────────────────────────────────────
# HTTP status accessors
# ─────────────────────────────────────────────────────────────────────────────


def code_status(failure: object) -> object | None:
    return reach(failure, "code")


def status_code_camel(failure: object) -> object | None:
    return reach(failure, "statusCode")


def output_status_code(failure: object) -> object | None:
    return reach(failure, "output.statusCode")


def response_status(failure: object) -> object | None:
    return reach(failure, "response.status")


def status_code(failure: object) -> object | None:
    return reach(failure, "status_code")


def status(failure: object) -> object | None:
    return reach(failure, "status")


def response_status_code(failure: object) -> object | None:
    return reach(failure, "response.status_code")


HTTP_STATUS_ACCESSORS: tuple[Accessor, ...] = (
    code_status,
    status_code_camel,
    output_status_code,
    response_status,
    status_code,
    status,
    response_status_code,
)


def _as_status(value: object) -> int | None:
    # bool is an int subclass; True must never match status 1
    return value if isinstance(value, int) and not isinstance(value, bool) else None


class ErrorClassifier:
    """Decide whether a failure is worth retrying.

    Pure and stateless beyond the two immutable code sets, so one instance
    can serve any number of concurrent retry loops.

    Example:
        >>> classifier = ErrorClassifier(frozenset({"ECONNRESET"}), frozenset({503}))
        >>> classifier.is_retryable(ConnectionResetError(errno.ECONNRESET, "reset"))
        True
        >>> classifier.is_retryable(ValueError("bad input"))
        False
    """

    __slots__ = ("_network_codes", "_http_statuses")

    def __init__(self, network_codes: frozenset[str], http_statuses: frozenset[int]) -> None:
        self._network_codes = network_codes
        self._http_statuses = http_statuses

    @classmethod
    def for_policy(cls, policy: RetryPolicy) -> ErrorClassifier:
        return cls(policy.retryable_network_codes, policy.retryable_http_statuses)

    @property
    def network_codes(self) -> frozenset[str]:
        return self._network_codes

    @property
    def http_statuses(self) -> frozenset[int]:
        return self._http_statuses

    def matched_network_code(self, failure: object) -> str | None:
        """First retryable network code found on the failure, if any."""
        for accessor in NETWORK_CODE_ACCESSORS:
            if (code := accessor(failure)) is not None and code in self._network_codes:
                return code
        return None

    def matched_http_status(self, failure: object) -> int | None:
        """First retryable HTTP status found on the failure, if any."""
        for accessor in HTTP_STATUS_ACCESSORS:
            if (code := _as_status(accessor(failure))) is not None and code in self._http_statuses:
                return code
        return None

    def classify(self, failure: object) -> FailureKind:
        # Non-exception values carry no error semantics
        if not isinstance(failure, BaseException):
            return FailureKind.PERMANENT
        if self.matched_network_code(failure) is not None or self.matched_http_status(failure) is not None:
            return FailureKind.TRANSIENT
        return FailureKind.PERMANENT

    def is_retryable(self, failure: object) -> bool:
        return self.classify(failure) is FailureKind.TRANSIENT

    def __repr__(self) -> str:
        return f"ErrorClassifier(network_codes={sorted(self._network_codes)}, http_statuses={sorted(self._http_statuses)})"


def classify(failure: object, policy: RetryPolicy) -> FailureKind:
    """Classify a failure against a policy's code sets."""
    return ErrorClassifier.for_policy(policy).classify(failure)


def is_retryable(failure: object, policy: RetryPolicy) -> bool:
    """Whether the failure is transient under the given policy."""
    return ErrorClassifier.for_policy(policy).is_retryable(failure)
