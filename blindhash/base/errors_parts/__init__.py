"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `blindhash.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .blindhash_error import (
    AttemptTimeoutError,
    BlindHashError,
    ConfigFetchError,
    InputFormatError,
    RemoteError,
    SaltRetrievalExhausted,
    TransportError,
)
from .classification import classify_exception

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
