"""Host statistics snapshot dataclass.

Immutable point-in-time view of one host's counters, designed for
serialization and logging.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class HostStatsSnapshot:
    """Immutable snapshot of a single host's statistics.

    Attributes:
        host: Host address.
        total_requests: Lifetime attempts against the host.
        total_errors: Lifetime error outcomes.
        total_timeouts: Lifetime timeout outcomes.
        recent_requests: Attempts inside the rolling window.
        recent_errors: Errors inside the rolling window.
        recent_timeouts: Timeouts inside the rolling window.
        current_failure_rate: ``(errors + timeouts) / requests`` for the window,
            ``None`` when the host saw no recent traffic.
        current_latency_ms: Mean successful latency for the window, or ``None``.
        latency_histogram: ``{bucket_lower_bound_ms: count}`` of lifetime
            successful latencies (overflow bucket keyed by its lower bound).
        generated_at_ms: Monotonic timestamp of the snapshot.
    """

    host: str
    total_requests: int
    total_errors: int
    total_timeouts: int
    recent_requests: int
    recent_errors: int
    recent_timeouts: int
    current_failure_rate: Optional[float]
    current_latency_ms: Optional[float]
    latency_histogram: Dict[int, int]
    generated_at_ms: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["HostStatsSnapshot"]
