"""Thread-safe rolling statistics for a single salt server.

Lifetime counters only grow. Recent activity lives in time-ordered deques of
monotonic millisecond timestamps; because entries are appended in time order,
expiry is a prefix trim. An event recorded at ``T`` is live at ``now`` while
``now - T < window_ms``.
"""

from __future__ import annotations

import time
from collections import deque
from threading import RLock
from typing import Callable, Deque, Optional, Tuple

from .host_stats_snapshot import HostStatsSnapshot
from .latency_histogram import LatencyHistogram

DEFAULT_WINDOW_MS = 60_000


def monotonic_ms() -> int:
    """Return current monotonic time in milliseconds."""
    return int(time.monotonic() * 1000)


def _trim(window: Deque, cutoff: float, key=None) -> None:
    while window and (key(window[0]) if key else window[0]) <= cutoff:
        window.popleft()


class HostStats:
    """Counters, histogram and sliding windows for one host."""

    __slots__ = (
        "_host",
        "_window_ms",
        "_clock",
        "_lock",
        "_total_requests",
        "_total_errors",
        "_total_timeouts",
        "_histogram",
        "_recent_requests",
        "_recent_errors",
        "_recent_timeouts",
        "_recent_latencies",
        "_current_failure_rate",
        "_current_latency",
    )

    def __init__(
        self,
        host: str,
        window_ms: int = DEFAULT_WINDOW_MS,
        clock: Callable[[], float] = monotonic_ms,
    ):
        self._host = host
        self._window_ms = window_ms
        self._clock = clock
        self._lock = RLock()
        self._total_requests = 0
        self._total_errors = 0
        self._total_timeouts = 0
        self._histogram = LatencyHistogram()
        self._recent_requests: Deque[float] = deque()
        self._recent_errors: Deque[float] = deque()
        self._recent_timeouts: Deque[float] = deque()
        self._recent_latencies: Deque[Tuple[float, float]] = deque()
        self._current_failure_rate: Optional[float] = None
        self._current_latency: Optional[float] = None

    @property
    def host(self) -> str:
        return self._host

    @property
    def total_requests(self) -> int:
        return self._total_requests

    @property
    def total_errors(self) -> int:
        return self._total_errors

    @property
    def total_timeouts(self) -> int:
        return self._total_timeouts

    @property
    def latency_histogram(self) -> LatencyHistogram:
        return self._histogram

    @property
    def current_failure_rate(self) -> Optional[float]:
        """Failure rate computed at the last :meth:`refresh`; ``None`` when unused."""
        return self._current_failure_rate

    @property
    def current_latency(self) -> Optional[float]:
        """Mean latency computed at the last :meth:`refresh`; ``None`` when unknown."""
        return self._current_latency

    # -------------------------- Record Methods -------------------------- #
    def record_success(self, latency_ms: float, now_ms: Optional[float] = None) -> None:
        with self._lock:
            now = self._clock() if now_ms is None else now_ms
            self._total_requests += 1
            self._recent_requests.append(now)
            self._histogram.add(latency_ms)
            self._recent_latencies.append((now, float(latency_ms)))

    def record_error(self, now_ms: Optional[float] = None) -> None:
        with self._lock:
            now = self._clock() if now_ms is None else now_ms
            self._total_requests += 1
            self._total_errors += 1
            self._recent_requests.append(now)
            self._recent_errors.append(now)

    def record_timeout(self, now_ms: Optional[float] = None) -> None:
        with self._lock:
            now = self._clock() if now_ms is None else now_ms
            self._total_requests += 1
            self._total_timeouts += 1
            self._recent_requests.append(now)
            self._recent_timeouts.append(now)

    # -------------------------- Window Maintenance -------------------------- #
    def evict(self, now_ms: float) -> None:
        """Drop window entries recorded ``window_ms`` or more before ``now_ms``."""
        cutoff = now_ms - self._window_ms
        with self._lock:
            _trim(self._recent_requests, cutoff)
            _trim(self._recent_errors, cutoff)
            _trim(self._recent_timeouts, cutoff)
            _trim(self._recent_latencies, cutoff, key=lambda entry: entry[0])

    def refresh(self, now_ms: Optional[float] = None) -> Tuple[Optional[float], Optional[float]]:
        """Evict expired entries and recompute the derived rates.

        Returns:
            ``(current_failure_rate, current_latency)``.
        """
        now = self._clock() if now_ms is None else now_ms
        with self._lock:
            self.evict(now)
            requests = len(self._recent_requests)
            if requests:
                failures = len(self._recent_errors) + len(self._recent_timeouts)
                self._current_failure_rate = failures / requests
            else:
                self._current_failure_rate = None
            if self._recent_latencies:
                total = sum(latency for _, latency in self._recent_latencies)
                self._current_latency = total / len(self._recent_latencies)
            else:
                self._current_latency = None
            return self._current_failure_rate, self._current_latency

    # -------------------------- Snapshot API -------------------------- #
    def snapshot(self, now_ms: Optional[float] = None) -> HostStatsSnapshot:
        """Return an immutable snapshot with freshly computed window values."""
        now = self._clock() if now_ms is None else now_ms
        with self._lock:
            failure_rate, latency = self.refresh(now)
            return HostStatsSnapshot(
                host=self._host,
                total_requests=self._total_requests,
                total_errors=self._total_errors,
                total_timeouts=self._total_timeouts,
                recent_requests=len(self._recent_requests),
                recent_errors=len(self._recent_errors),
                recent_timeouts=len(self._recent_timeouts),
                current_failure_rate=failure_rate,
                current_latency_ms=latency,
                latency_histogram=self._histogram.non_empty(),
                generated_at_ms=int(now),
            )


__all__ = ["HostStats", "monotonic_ms", "DEFAULT_WINDOW_MS"]
