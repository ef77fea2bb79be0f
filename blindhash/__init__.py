"""blindhash package

Client for a remote blind hashing service. Passwords never leave the caller:
a locally computed ``hash1`` is exchanged for a server-held ``salt2`` and the
stored value is ``hash2 = HMAC-SHA512(salt2, hash1)``. Salt requests are
spread over a pool of servers with sequential failover, and servers are
re-ranked continuously by observed failure rate and latency.

Public API (re-exported):
    - Version: ``__version__``
    - Entry points: :func:`initialize`, :class:`BlindHashClient`
    - Session and results: :class:`Session`, :class:`SaltResult`,
      :class:`VerifyResult`, :class:`NewPasswordResult`
    - Exceptions: :class:`BlindHashError` and its subclasses, :class:`ErrorCode`
    - Primitives: :func:`derive_hash2`
"""

from ._version import __version__
from .base.errors import (
    AttemptTimeoutError,
    BlindHashError,
    ConfigFetchError,
    ErrorCode,
    InputFormatError,
    RemoteError,
    SaltRetrievalExhausted,
    TransportError,
)
from .base.hashing import derive_hash2
from .base.models import NewPasswordResult, SaltResult, VerifyResult
from .base.session import Session
from .client import BlindHashClient, SaltClient, initialize

__all__ = [
    "__version__",
    "initialize",
    "BlindHashClient",
    "SaltClient",
    "Session",
    "SaltResult",
    "VerifyResult",
    "NewPasswordResult",
    "derive_hash2",
    "ErrorCode",
    "BlindHashError",
    "ConfigFetchError",
    "InputFormatError",
    "TransportError",
    "RemoteError",
    "AttemptTimeoutError",
    "SaltRetrievalExhausted",
]
