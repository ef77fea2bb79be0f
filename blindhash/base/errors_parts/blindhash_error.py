"""
Structured blind hashing exception types.

`BlindHashError` carries a normalized `ErrorCode` so that retry logic, stats
recording and structured logging can branch on a single attribute. The
subclasses pin the code for each failure category.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class BlindHashError(Exception):
    """Represents a structured client error with a normalized error code.

    Attributes:
        message: Human-readable error message suitable for logging.
        code: Normalized :class:`ErrorCode` classification for the failure.
        host: Host the failing attempt targeted, when one was involved.
        raw: Optional original exception for diagnostics.
    """

    message: str
    code: ErrorCode = ErrorCode.UNKNOWN
    host: Optional[str] = None
    raw: Optional[BaseException] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.host or '-'} {self.code.value}: {self.message}"


@dataclass
class ConfigFetchError(BlindHashError):
    """Configuration could not be fetched or was unusable."""

    code: ErrorCode = ErrorCode.CONFIG


@dataclass
class InputFormatError(BlindHashError):
    """Caller supplied malformed hex input. Raised before any network I/O."""

    code: ErrorCode = ErrorCode.INPUT_FORMAT
    field: Optional[str] = None


@dataclass
class TransportError(BlindHashError):
    """Connection-level failure of a single attempt."""

    code: ErrorCode = ErrorCode.TRANSPORT


@dataclass
class RemoteError(BlindHashError):
    """Non-success status or malformed body returned by a salt server."""

    code: ErrorCode = ErrorCode.REMOTE
    status_code: Optional[int] = None


@dataclass
class AttemptTimeoutError(BlindHashError):
    """A single attempt exceeded its deadline."""

    code: ErrorCode = ErrorCode.TIMEOUT


@dataclass
class SaltRetrievalExhausted(BlindHashError):
    """Every attempt of a salt retrieval failed.

    Attributes:
        attempts: Number of attempts made before giving up.
        last_error: The final per-attempt failure.
    """

    code: ErrorCode = ErrorCode.EXHAUSTED
    attempts: int = 0
    last_error: Optional[BlindHashError] = None


__all__ = [
    "BlindHashError",
    "ConfigFetchError",
    "InputFormatError",
    "TransportError",
    "RemoteError",
    "AttemptTimeoutError",
    "SaltRetrievalExhausted",
]
