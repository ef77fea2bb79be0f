"""
Blindhash Base Package

Leaf building blocks shared by the client layer:
- Errors: normalized taxonomy and classification
- Hashing: the HMAC-SHA512 blind hashing primitives
- Session: application identity, host order and tunables
- Metrics: per-host rolling statistics and host re-ranking
- Resilience: sequential multi-host failover
- Logging, timeouts and HTTP client construction
"""

from .errors import (
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
from .hashing import decode_hex, derive_hash2, derive_hash2_hex, hash2_matches
from .metrics import HostStats, HostStatsSnapshot, HostStatsTracker
from .models import NewPasswordResult, SaltResult, VerifyResult
from .resilience import FailoverConfig, plan_hosts, run_with_failover
from .session import Session
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    # Errors
    "ErrorCode",
    "BlindHashError",
    "ConfigFetchError",
    "InputFormatError",
    "TransportError",
    "RemoteError",
    "AttemptTimeoutError",
    "SaltRetrievalExhausted",
    "classify_exception",
    # Hashing
    "decode_hex",
    "derive_hash2",
    "derive_hash2_hex",
    "hash2_matches",
    # Session & models
    "Session",
    "SaltResult",
    "VerifyResult",
    "NewPasswordResult",
    # Metrics
    "HostStats",
    "HostStatsSnapshot",
    "HostStatsTracker",
    # Resilience
    "FailoverConfig",
    "plan_hosts",
    "run_with_failover",
    # Timeouts
    "TimeoutConfig",
    "get_timeout_config",
]
