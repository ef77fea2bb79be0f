"""NewPasswordResult: ``hash2`` for a new password and the version used to derive it."""
from __future__ import annotations

from dataclasses import dataclass

from .salt_result import VersionId


@dataclass(frozen=True)
class NewPasswordResult:
    hash2_hex: str
    version_id: VersionId


__all__ = ["NewPasswordResult"]
