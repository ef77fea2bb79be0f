"""Per-host statistics registry and host re-ranking.

The tracker owns one :class:`HostStats` per host (created lazily on first
record) and periodically re-sorts the session's host list:

* primary key: ascending recent failure rate; a host with no recent traffic
  counts as ``0.0``;
* tie-break: ascending mean recent latency; a host with no recent successful
  latency counts as infinitely slow, so it sorts last within its tier.

The sort is stable, so hosts that compare equal keep their current relative
order. When the session has statistics disabled the tracker neither records
nor reorders.
"""

from __future__ import annotations

import math
from threading import Lock
from typing import Callable, Dict, Optional, Tuple

from ...logging import get_logger, log_event
from ...session import Session
from ...timeouts import get_timeout_config
from .host_stats import HostStats, monotonic_ms
from .host_stats_snapshot import HostStatsSnapshot

RankKey = Tuple[float, float]


def rank_key(failure_rate: Optional[float], latency: Optional[float]) -> RankKey:
    """Return the sort key for a host given its derived window values."""
    return (
        0.0 if failure_rate is None else failure_rate,
        math.inf if latency is None else latency,
    )


class HostStatsTracker:
    """Records attempt outcomes per host and re-ranks the session's hosts.

    Args:
        session: Session whose host list is re-ranked on :meth:`tick`.
        clock: Millisecond monotonic clock; injectable for tests.
        window_ms: Rolling window length. Defaults to
            ``get_timeout_config().stats_window_ms``.
    """

    def __init__(
        self,
        session: Session,
        *,
        clock: Callable[[], float] = monotonic_ms,
        window_ms: Optional[int] = None,
    ):
        self._session = session
        self._clock = clock
        self._window_ms = window_ms if window_ms is not None else get_timeout_config().stats_window_ms
        self._stats: Dict[str, HostStats] = {}
        self._registry_lock = Lock()
        self._tick_lock = Lock()
        self._logger = get_logger("blindhash.stats")

    @property
    def enabled(self) -> bool:
        return self._session.stats_enabled

    @property
    def window_ms(self) -> int:
        return self._window_ms

    def stats_for(self, host: str) -> HostStats:
        """Return the stats object for ``host``, creating it on first use."""
        stats = self._stats.get(host)
        if stats is not None:
            return stats
        with self._registry_lock:
            stats = self._stats.get(host)
            if stats is None:
                stats = HostStats(host, window_ms=self._window_ms, clock=self._clock)
                self._stats[host] = stats
            return stats

    def known_hosts(self) -> Tuple[str, ...]:
        return tuple(self._stats)

    # -------------------------- Record Methods -------------------------- #
    def record_success(self, host: str, latency_ms: float, now_ms: Optional[float] = None) -> None:
        if not self.enabled:
            return
        self.stats_for(host).record_success(latency_ms, now_ms)

    def record_error(self, host: str, now_ms: Optional[float] = None) -> None:
        if not self.enabled:
            return
        self.stats_for(host).record_error(now_ms)

    def record_timeout(self, host: str, now_ms: Optional[float] = None) -> None:
        if not self.enabled:
            return
        self.stats_for(host).record_timeout(now_ms)

    # -------------------------- Re-ranking -------------------------- #
    def tick(self, now_ms: Optional[float] = None) -> Tuple[str, ...]:
        """Refresh every host's window and install the re-ranked host order.

        Returns:
            The host order in effect after the tick.
        """
        if not self.enabled:
            return self._session.hosts
        now = self._now(now_ms)
        with self._tick_lock:
            keys: Dict[str, RankKey] = {}
            for host, stats in list(self._stats.items()):
                keys[host] = rank_key(*stats.refresh(now))
            current = self._session.hosts
            unused = rank_key(None, None)
            ordered = tuple(sorted(current, key=lambda h: keys.get(h, unused)))
            if ordered != current:
                self._session.replace_hosts(ordered)
                log_event(
                    self._logger,
                    "stats.tick",
                    previous=list(current),
                    hosts=list(ordered),
                )
            return ordered

    # -------------------------- Snapshot API -------------------------- #
    def snapshot(self, now_ms: Optional[float] = None) -> Dict[str, HostStatsSnapshot]:
        now = self._now(now_ms)
        return {host: stats.snapshot(now) for host, stats in list(self._stats.items())}

    def as_dict(self, now_ms: Optional[float] = None) -> Dict[str, dict]:
        return {host: snap.to_dict() for host, snap in self.snapshot(now_ms).items()}

    def _now(self, now_ms: Optional[float]) -> float:
        return self._clock() if now_ms is None else now_ms


__all__ = ["HostStatsTracker", "rank_key"]
