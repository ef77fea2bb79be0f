"""One-class-per-file parts for per-host statistics."""

from .latency_histogram import LatencyHistogram, bucket_index
from .host_stats_snapshot import HostStatsSnapshot
from .host_stats import HostStats, monotonic_ms
from .stats_tracker import HostStatsTracker, rank_key

__all__ = [
    "LatencyHistogram",
    "bucket_index",
    "HostStatsSnapshot",
    "HostStats",
    "monotonic_ms",
    "HostStatsTracker",
    "rank_key",
]
