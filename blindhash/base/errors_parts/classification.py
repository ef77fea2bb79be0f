"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

Used by the request layer to decide whether a failed attempt counts as a
timeout or an error in host statistics, and by logging to tag events.
"""
from __future__ import annotations

import asyncio
from typing import Optional

import httpx

from .blindhash_error import BlindHashError
from .error_code import ErrorCode


def _extract_status(exc: object) -> Optional[int]:
    """Attempt to extract an HTTP status code from an exception-like object.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.status``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. BlindHashError passthrough.
        2. Timeout exceptions (builtin, asyncio, httpx).
        3. Transport exceptions (httpx transport errors, unusable URLs, OSError).
        4. Anything carrying an HTTP status maps to ``REMOTE``.
        5. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, BlindHashError):
        return exc.code
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError, httpx.TimeoutException)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, (httpx.TransportError, httpx.InvalidURL, OSError)):
        return ErrorCode.TRANSPORT
    if _extract_status(exc) is not None:
        return ErrorCode.REMOTE
    return ErrorCode.UNKNOWN


__all__ = ["classify_exception", "_extract_status"]
