"""Sequential multi-host failover.

A call makes up to ``max_retries + 1`` attempts. Attempt ``n`` targets
``hosts[n % len(hosts)]`` of the host order captured when the call started,
so retries walk down the preference list and wrap around. Each attempt runs
under its own ``asyncio.wait_for`` deadline; ``wait_for`` cancels the attempt
when the deadline fires, so every attempt resolves to exactly one outcome
(success, error or timeout) and is recorded once.

Only failures whose code is in ``FailoverConfig.retryable_codes`` are retried;
anything else propagates immediately. When the budget is used up the loop
raises :class:`SaltRetrievalExhausted` chained to the last failure.
"""
from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, Protocol, Sequence, TypeVar

from ..errors import (
    AttemptTimeoutError,
    BlindHashError,
    ErrorCode,
    SaltRetrievalExhausted,
)
from ..timeouts import DEFAULT_ATTEMPT_TIMEOUT_MS, DEFAULT_MAX_RETRIES

T = TypeVar("T")

OUTCOME_SUCCESS = "success"
OUTCOME_ERROR = "error"
OUTCOME_TIMEOUT = "timeout"


@dataclass(frozen=True)
class AttemptRecord:
    """Outcome of one attempt against one host."""

    attempt: int
    host: str
    outcome: str
    latency_ms: Optional[float] = None
    error: Optional[BlindHashError] = None


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(self, record: AttemptRecord, *, max_attempts: int, will_retry: bool) -> None: ...


class OutcomeRecorder(Protocol):  # pragma: no cover - structural protocol
    def record_success(self, host: str, latency_ms: float) -> None: ...

    def record_error(self, host: str) -> None: ...

    def record_timeout(self, host: str) -> None: ...


@dataclass(frozen=True)
class FailoverConfig:
    max_retries: int = DEFAULT_MAX_RETRIES
    timeout_ms: int = DEFAULT_ATTEMPT_TIMEOUT_MS
    retryable_codes: tuple[ErrorCode, ...] = (
        ErrorCode.TRANSPORT,
        ErrorCode.REMOTE,
        ErrorCode.TIMEOUT,
    )
    attempt_logger: AttemptLogger | None = None

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1


def plan_hosts(hosts: Sequence[str], max_retries: int) -> List[str]:
    """Return the hosts a call will target, in attempt order."""
    if not hosts:
        raise ValueError("plan_hosts requires at least one host")
    return [hosts[n % len(hosts)] for n in range(max_retries + 1)]


def _record(recorder: Optional[OutcomeRecorder], record: AttemptRecord) -> None:
    if recorder is None:
        return
    if record.outcome == OUTCOME_SUCCESS:
        recorder.record_success(record.host, record.latency_ms or 0.0)
    elif record.outcome == OUTCOME_TIMEOUT:
        recorder.record_timeout(record.host)
    else:
        recorder.record_error(record.host)


async def run_with_failover(
    hosts: Sequence[str],
    attempt: Callable[[str], Awaitable[T]],
    config: FailoverConfig,
    *,
    recorder: Optional[OutcomeRecorder] = None,
) -> T:
    """Run ``attempt(host)`` against successive hosts until one succeeds.

    Parameters:
        hosts: Host order snapshot; attempt ``n`` targets ``hosts[n % len(hosts)]``.
        attempt: Coroutine factory performing one request against one host.
            Must raise :class:`BlindHashError` subclasses for expected failures.
        config: Retry budget, per-attempt deadline and optional attempt logger.
        recorder: Optional sink for per-attempt outcomes (the stats tracker).

    Returns:
        The first successful result.

    Raises:
        SaltRetrievalExhausted: every planned attempt failed.
        BlindHashError: a failure whose code is not retryable.
    """
    targets = plan_hosts(hosts, config.max_retries)
    deadline = config.timeout_ms / 1000.0
    last_error: Optional[BlindHashError] = None

    for index, host in enumerate(targets):
        started = time.monotonic()
        try:
            result = await asyncio.wait_for(attempt(host), timeout=deadline)
        except asyncio.TimeoutError as exc:
            error: BlindHashError = AttemptTimeoutError(
                f"no response within {config.timeout_ms}ms", host=host, raw=exc
            )
        except BlindHashError as exc:
            if exc.code not in config.retryable_codes:
                raise
            error = exc
        else:
            record = AttemptRecord(
                attempt=index,
                host=host,
                outcome=OUTCOME_SUCCESS,
                latency_ms=(time.monotonic() - started) * 1000.0,
            )
            _record(recorder, record)
            if config.attempt_logger:
                config.attempt_logger(record, max_attempts=config.max_attempts, will_retry=False)
            return result

        outcome = OUTCOME_TIMEOUT if error.code is ErrorCode.TIMEOUT else OUTCOME_ERROR
        record = AttemptRecord(attempt=index, host=host, outcome=outcome, error=error)
        _record(recorder, record)
        if config.attempt_logger:
            config.attempt_logger(
                record,
                max_attempts=config.max_attempts,
                will_retry=index + 1 < len(targets),
            )
        last_error = error

    raise SaltRetrievalExhausted(
        f"all {len(targets)} attempts failed",
        host=last_error.host if last_error else None,
        raw=last_error,
        attempts=len(targets),
        last_error=last_error,
    ) from last_error


__all__ = [
    "AttemptRecord",
    "AttemptLogger",
    "OutcomeRecorder",
    "FailoverConfig",
    "plan_hosts",
    "run_with_failover",
    "OUTCOME_SUCCESS",
    "OUTCOME_ERROR",
    "OUTCOME_TIMEOUT",
]
