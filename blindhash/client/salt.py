"""Salt retrieval client.

Issues salt requests against the session's hosts through the failover loop,
feeds every attempt outcome into the host stats tracker and, when statistics
are enabled, runs the periodic re-ranking tick as a background asyncio task.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import uuid
from typing import Optional

import httpx

from ..base.errors import BlindHashError, SaltRetrievalExhausted, classify_exception
from ..base.hashing import decode_hex
from ..base.logging import LogContext, get_logger, log_event, normalized_log_event
from ..base.metrics import HostStatsTracker
from ..base.models import SaltResult, VersionId
from ..base.resilience.failover import (
    OUTCOME_SUCCESS,
    AttemptLogger,
    AttemptRecord,
    FailoverConfig,
    run_with_failover,
)
from ..base.session import Session
from ..base.timeouts import get_timeout_config
from ..config.defaults import DEFAULT_SCHEME
from .helpers import build_salt_url, normalize_version, request_salt, to_salt_result


class SaltClient:
    """Fetches ``salt2`` for a ``hash1`` with multi-host failover.

    Args:
        session: Session supplying app id, host order and tunables.
        http_client: Shared ``httpx.AsyncClient``; not closed by this class.
        tracker: Stats tracker; one bound to ``session`` is created when omitted.
        scheme: URL scheme for hosts given without one.
        stats_interval_seconds: Tick period; defaults to
            ``get_timeout_config().stats_interval_seconds``.
    """

    def __init__(
        self,
        session: Session,
        http_client: httpx.AsyncClient,
        *,
        tracker: Optional[HostStatsTracker] = None,
        scheme: str = DEFAULT_SCHEME,
        stats_interval_seconds: Optional[float] = None,
    ):
        self._session = session
        self._http = http_client
        self._tracker = tracker if tracker is not None else HostStatsTracker(session)
        self._scheme = scheme
        self._interval = (
            stats_interval_seconds
            if stats_interval_seconds is not None
            else get_timeout_config().stats_interval_seconds
        )
        self._ticker: Optional[asyncio.Task] = None
        self._logger = get_logger("blindhash.salt")

    @property
    def session(self) -> Session:
        return self._session

    @property
    def tracker(self) -> HostStatsTracker:
        return self._tracker

    @property
    def running(self) -> bool:
        return self._ticker is not None and not self._ticker.done()

    async def get_salt(self, hash1_hex: str, version_id: Optional[VersionId] = None) -> SaltResult:
        """Retrieve ``salt2`` for ``hash1_hex`` at ``version_id`` (latest when empty).

        Raises:
            InputFormatError: ``hash1_hex`` is not valid hex; nothing is sent.
            SaltRetrievalExhausted: every attempt failed.
        """
        decode_hex(hash1_hex, "hash1")
        version = normalize_version(version_id)
        session = self._session
        ctx = LogContext(app_id=session.app_id, request_id=uuid.uuid4().hex[:12])
        config = FailoverConfig(
            max_retries=session.max_retries,
            timeout_ms=session.timeout_ms,
            attempt_logger=self._attempt_logger(ctx),
        )

        async def attempt(host: str):
            url = build_salt_url(host, self._scheme, session.app_id, hash1_hex, version)
            return await request_salt(self._http, url, host=host)

        try:
            response = await run_with_failover(session.hosts, attempt, config, recorder=self._tracker)
        except SaltRetrievalExhausted as exc:
            log_event(
                self._logger,
                "salt.exhausted",
                ctx,
                level=logging.ERROR,
                attempts=exc.attempts,
                error_code=exc.last_error.code.value if exc.last_error else None,
            )
            raise
        return to_salt_result(response, version_id, version)

    def _attempt_logger(self, ctx: LogContext) -> AttemptLogger:
        logger = self._logger

        def _log(record: AttemptRecord, *, max_attempts: int, will_retry: bool) -> None:
            failed = record.outcome != OUTCOME_SUCCESS
            normalized_log_event(
                logger,
                "salt.attempt",
                ctx.with_host(record.host),
                phase="salt",
                attempt=record.attempt,
                outcome=record.outcome,
                latency_ms=round(record.latency_ms, 3) if record.latency_ms is not None else None,
                error_code=record.error.code.value if record.error else None,
                level=logging.WARNING if failed else logging.DEBUG,
                max_attempts=max_attempts,
                will_retry=will_retry,
                detail=record.error.message if record.error else None,
            )

        return _log

    # -------------------------- Stats ticker -------------------------- #
    def start(self) -> None:
        """Start the periodic re-ranking task (no-op when stats are disabled).

        Must be called from within a running event loop.
        """
        if not self._session.stats_enabled or self.running:
            return
        self._ticker = asyncio.get_running_loop().create_task(self._run_ticker())

    async def stop(self) -> None:
        task, self._ticker = self._ticker, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _run_ticker(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                self._tracker.tick()
            except Exception as exc:  # CancelledError still propagates
                log_event(
                    self._logger,
                    "stats.tick.error",
                    level=logging.ERROR,
                    error_code=classify_exception(exc).value,
                    error=exc.message if isinstance(exc, BlindHashError) else repr(exc),
                )


__all__ = ["SaltClient"]
