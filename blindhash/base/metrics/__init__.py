"""Host statistics package.

Exports the per-host rolling counters, their snapshots and the tracker that
re-ranks a session's hosts by observed reliability and latency.
"""

from .stats_parts import (
    HostStats,
    HostStatsSnapshot,
    HostStatsTracker,
    LatencyHistogram,
    bucket_index,
    monotonic_ms,
    rank_key,
)

__all__ = [
    "HostStats",
    "HostStatsSnapshot",
    "HostStatsTracker",
    "LatencyHistogram",
    "bucket_index",
    "monotonic_ms",
    "rank_key",
]
