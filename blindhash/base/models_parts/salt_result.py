"""
SaltResult: the value returned by a salt retrieval.

When a specific version was requested the server may also advertise a newer
version; ``new_salt2_hex``/``new_version_id`` are then both set. When the
latest version was requested they are always ``None``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

VersionId = Union[int, str]


@dataclass(frozen=True)
class SaltResult:
    salt2_hex: str
    version_id: VersionId
    new_salt2_hex: Optional[str] = None
    new_version_id: Optional[VersionId] = None

    @property
    def has_upgrade(self) -> bool:
        return self.new_salt2_hex is not None and self.new_version_id is not None


__all__ = ["SaltResult", "VersionId"]
