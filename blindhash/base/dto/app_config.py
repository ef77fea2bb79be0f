"""Pydantic model for the application configuration document.

The configuration service answers ``GET /{app_id}`` with::

    {"servers": ["s1.example", "s2.example"], "timeout": 500, "retries": 3, "stats": 0}

Unknown keys are ignored. ``timeout`` is milliseconds per attempt; ``stats``
may be a boolean or an integer flag.

Failure modes: validation either succeeds or raises
``pydantic.ValidationError``; the fetcher wraps that in ``ConfigFetchError``.
"""
from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from ..timeouts import DEFAULT_ATTEMPT_TIMEOUT_MS, DEFAULT_MAX_RETRIES

_TRUE_STRINGS = frozenset(("1", "true", "yes", "on"))


class AppConfig(BaseModel):
    """Server list and tunables for one application.

    Attributes:
        servers: Ordered salt server addresses, most preferred first.
        timeout: Per-attempt timeout in milliseconds.
        retries: Retries after the first attempt.
        stats: Whether to record host statistics and re-rank hosts.
    """

    model_config = ConfigDict(extra="ignore")

    servers: List[str] = Field(min_length=1)
    timeout: int = Field(default=DEFAULT_ATTEMPT_TIMEOUT_MS, gt=0)
    retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0)
    stats: bool = False

    @field_validator("servers")
    @classmethod
    def _strip_servers(cls, value: List[str]) -> List[str]:
        servers = [s.strip() for s in value if s and s.strip()]
        if not servers:
            raise ValueError("servers must contain at least one non-empty host")
        return servers

    @field_validator("timeout", "retries", mode="before")
    @classmethod
    def _null_means_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    @field_validator("stats", mode="before")
    @classmethod
    def _coerce_flag(cls, value: Any) -> bool:
        if value is None:
            return False
        if isinstance(value, str):
            return value.strip().lower() in _TRUE_STRINGS
        return bool(value)


__all__ = ["AppConfig"]
