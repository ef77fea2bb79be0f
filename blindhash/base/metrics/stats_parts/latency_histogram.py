"""Fixed-width latency histogram for successful salt requests.

Bucket ``i`` (0..100) counts latencies in ``[20*i, 20*(i+1))`` milliseconds.
Anything at or above 2020 ms lands in the overflow bucket (index 101).
Negative latencies are clamped into bucket 0.
"""

from __future__ import annotations

from typing import List, Tuple

BUCKET_WIDTH_MS = 20
LAST_REGULAR_BUCKET = 100
OVERFLOW_BUCKET = LAST_REGULAR_BUCKET + 1


def bucket_index(latency_ms: float) -> int:
    """Return the histogram bucket for ``latency_ms``."""
    if latency_ms <= 0:
        return 0
    return min(int(latency_ms // BUCKET_WIDTH_MS), OVERFLOW_BUCKET)


class LatencyHistogram:
    """Lifetime histogram; not thread-safe on its own (owned by HostStats)."""

    __slots__ = ("_buckets",)

    def __init__(self) -> None:
        self._buckets: List[int] = [0] * (OVERFLOW_BUCKET + 1)

    def add(self, latency_ms: float) -> int:
        idx = bucket_index(latency_ms)
        self._buckets[idx] += 1
        return idx

    @property
    def count(self) -> int:
        return sum(self._buckets)

    @property
    def overflow(self) -> int:
        return self._buckets[OVERFLOW_BUCKET]

    def buckets(self) -> Tuple[int, ...]:
        return tuple(self._buckets)

    def non_empty(self) -> dict[int, int]:
        """Return ``{bucket_lower_bound_ms: count}`` for populated buckets."""
        return {i * BUCKET_WIDTH_MS: n for i, n in enumerate(self._buckets) if n}


__all__ = [
    "LatencyHistogram",
    "bucket_index",
    "BUCKET_WIDTH_MS",
    "LAST_REGULAR_BUCKET",
    "OVERFLOW_BUCKET",
]
