"""Client session: application identity, preferred host order and tunables.

The Session is the single owner of the mutable host list. Readers get an
immutable tuple snapshot without locking; the stats tracker installs a new
order with :meth:`Session.replace_hosts`, which swaps the whole tuple under a
lock so no reader ever sees a partially reordered list.
"""
from __future__ import annotations

import threading
from typing import Iterable, Tuple

from .errors import ConfigFetchError
from .timeouts import DEFAULT_ATTEMPT_TIMEOUT_MS, DEFAULT_MAX_RETRIES


class Session:
    """Application identity, ordered host list and request tunables.

    Attributes:
        app_id: Opaque application identifier.
        hosts: Current host order, most preferred first (read-only snapshot).
        timeout_ms: Per-attempt deadline in milliseconds.
        max_retries: Retries after the first attempt; a call makes at most
            ``max_retries + 1`` attempts.
        stats_enabled: Whether host statistics are recorded and hosts re-ranked.
    """

    __slots__ = ("_app_id", "_hosts", "_timeout_ms", "_max_retries", "_stats_enabled", "_lock")

    def __init__(
        self,
        app_id: str,
        hosts: Iterable[str],
        *,
        timeout_ms: int = DEFAULT_ATTEMPT_TIMEOUT_MS,
        max_retries: int = DEFAULT_MAX_RETRIES,
        stats_enabled: bool = False,
    ):
        host_tuple = tuple(hosts)
        if not host_tuple:
            raise ConfigFetchError("configuration supplied no servers")
        if timeout_ms <= 0:
            raise ConfigFetchError(f"timeout must be positive, got {timeout_ms}")
        if max_retries < 0:
            raise ConfigFetchError(f"retries must be >= 0, got {max_retries}")
        self._app_id = app_id
        self._hosts: Tuple[str, ...] = host_tuple
        self._timeout_ms = int(timeout_ms)
        self._max_retries = int(max_retries)
        self._stats_enabled = bool(stats_enabled)
        self._lock = threading.Lock()

    @property
    def app_id(self) -> str:
        return self._app_id

    @property
    def hosts(self) -> Tuple[str, ...]:
        return self._hosts

    @property
    def timeout_ms(self) -> int:
        return self._timeout_ms

    @property
    def timeout_seconds(self) -> float:
        return self._timeout_ms / 1000.0

    @property
    def max_retries(self) -> int:
        return self._max_retries

    @property
    def stats_enabled(self) -> bool:
        return self._stats_enabled

    def replace_hosts(self, ordered: Iterable[str]) -> Tuple[str, ...]:
        """Atomically install a new host order.

        The new order must be a permutation of the current hosts; reordering
        never adds or drops servers.

        Raises:
            ConfigFetchError: if ``ordered`` is empty or not a permutation.
        """
        new_hosts = tuple(ordered)
        if not new_hosts:
            raise ConfigFetchError("host list may not become empty")
        with self._lock:
            if sorted(new_hosts) != sorted(self._hosts):
                raise ConfigFetchError("reordered host list does not match configured servers")
            self._hosts = new_hosts
        return new_hosts

    def __repr__(self) -> str:
        return (
            f"Session(app_id={self._app_id!r}, hosts={list(self._hosts)!r}, "
            f"timeout_ms={self._timeout_ms}, max_retries={self._max_retries}, "
            f"stats_enabled={self._stats_enabled})"
        )


__all__ = ["Session"]
