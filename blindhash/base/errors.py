"""Unified blind hashing error taxonomy public surface.

Re-exports the implementations under ``blindhash.base.errors_parts`` to keep
a stable import path.
"""

from .errors_parts import (
    AttemptTimeoutError,
    BlindHashError,
    ConfigFetchError,
    ErrorCode,
    InputFormatError,
    RemoteError,
    SaltRetrievalExhausted,
    TransportError,
    classify_exception,
)

__all__ = [
    "ErrorCode",
    "BlindHashError",
    "ConfigFetchError",
    "InputFormatError",
    "TransportError",
    "RemoteError",
    "AttemptTimeoutError",
    "SaltRetrievalExhausted",
    "classify_exception",
]
