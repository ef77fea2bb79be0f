"""
VerifyResult: outcome of a password verification.

``new_version_id`` and ``new_hash2_hex`` are only populated for a successful
match against an outdated version; callers that persist them must update both
together.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .salt_result import VersionId


@dataclass(frozen=True)
class VerifyResult:
    matched: bool
    new_version_id: Optional[VersionId] = None
    new_hash2_hex: Optional[str] = None

    def __bool__(self) -> bool:
        return self.matched


__all__ = ["VerifyResult"]
