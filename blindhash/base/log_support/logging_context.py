"""Structured logging context object.

:class:`LogContext` carries the fields common to request-layer log events
(application id, target host, request id and extra metadata).
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for blind hashing log events."""

    app_id: Optional[str] = None
    host: Optional[str] = None
    request_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def with_host(self, host: str) -> "LogContext":
        """Return a copy bound to ``host``."""
        return replace(self, host=host, extra=dict(self.extra))

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
