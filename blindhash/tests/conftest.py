"""Pytest configuration for the blindhash test suite.

Clears ``BLINDHASH_*`` environment settings so a developer's local
configuration never leaks into tests, and provides the common fixtures.
"""

from __future__ import annotations

from typing import Iterator

import pytest

from blindhash.base.session import Session
from blindhash.config import ENV_FIELD_MAP, reset_config_cache
from blindhash.tests.utils import FakeClock, StubService

_EXTRA_ENV = (
    "BLINDHASH_CONFIG_FILE",
    "BLINDHASH_LOG_LEVEL",
    "BLINDHASH_CONFIG_TIMEOUT_SECONDS",
    "BLINDHASH_STATS_INTERVAL_SECONDS",
    "BLINDHASH_STATS_WINDOW_SECONDS",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in (*ENV_FIELD_MAP.values(), *_EXTRA_ENV):
        monkeypatch.delenv(name, raising=False)
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture()
def service() -> StubService:
    return StubService()


@pytest.fixture()
def session() -> Session:
    return Session(
        "app-1",
        ["a.test", "b.test", "c.test"],
        timeout_ms=200,
        max_retries=3,
        stats_enabled=True,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()
