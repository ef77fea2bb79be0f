"""
Normalized blind hashing error codes (taxonomy).

Defines the `ErrorCode` enumeration shared by the request layer, the stats
tracker and structured logging. Values are lowercase snake_case and are a
stable public contract for logs and dashboards.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    CONFIG = "config"
    INPUT_FORMAT = "input_format"
    TRANSPORT = "transport"
    REMOTE = "remote"
    TIMEOUT = "timeout"
    EXHAUSTED = "exhausted"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
