"""Resilience helpers: sequential multi-host failover."""

from .failover import (
    AttemptRecord,
    FailoverConfig,
    plan_hosts,
    run_with_failover,
)

__all__ = ["AttemptRecord", "FailoverConfig", "plan_hosts", "run_with_failover"]
