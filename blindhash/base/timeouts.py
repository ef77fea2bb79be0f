"""Unified timing configuration for the blindhash client.

Centralizes the durations that are not part of the fetched application
configuration: the configuration fetch timeout, the stats tick period and the
length of the rolling statistics window. Per-attempt salt request timeouts come
from the application configuration (``Session.timeout_ms``) instead.

Supported environment variables (all optional, positive numbers):
    BLINDHASH_CONFIG_TIMEOUT_SECONDS   (default 10)
    BLINDHASH_STATS_INTERVAL_SECONDS   (default 10)
    BLINDHASH_STATS_WINDOW_SECONDS     (default 60)

Values are parsed once and cached; the cache is refreshed when the relevant
environment variables change so tests can adjust them with ``monkeypatch``.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_ATTEMPT_TIMEOUT_MS = 500
DEFAULT_MAX_RETRIES = 3

_ENV_NAMES = (
    "BLINDHASH_CONFIG_TIMEOUT_SECONDS",
    "BLINDHASH_STATS_INTERVAL_SECONDS",
    "BLINDHASH_STATS_WINDOW_SECONDS",
)


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timing values (seconds).

    Attributes:
        config_timeout_seconds: Deadline for the one-shot configuration fetch.
        stats_interval_seconds: Period between host re-ranking ticks.
        stats_window_seconds: Age after which a recorded event leaves the
            rolling statistics window.
    """

    config_timeout_seconds: float = 10.0
    stats_interval_seconds: float = 10.0
    stats_window_seconds: float = 60.0

    @property
    def stats_window_ms(self) -> int:
        return int(self.stats_window_seconds * 1000)


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Read ``name`` from the environment as a positive float, else ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(name, "") for name in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    _CACHED = TimeoutConfig(
        config_timeout_seconds=_parse_env_float("BLINDHASH_CONFIG_TIMEOUT_SECONDS", 10.0),
        stats_interval_seconds=_parse_env_float("BLINDHASH_STATS_INTERVAL_SECONDS", 10.0),
        stats_window_seconds=_parse_env_float("BLINDHASH_STATS_WINDOW_SECONDS", 60.0),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
    "DEFAULT_ATTEMPT_TIMEOUT_MS",
    "DEFAULT_MAX_RETRIES",
]
