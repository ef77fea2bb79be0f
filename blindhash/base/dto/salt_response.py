"""Pydantic model for a salt server response body.

Shape: ``{"s2": <hex>, "vid": <version>}`` plus ``new_s2``/``new_vid`` when a
specific, outdated version was requested. A body that does not validate makes
the attempt count as a remote failure.
"""
from __future__ import annotations

import binascii
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

VersionField = Union[int, str]


class SaltResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    s2: str
    vid: VersionField
    new_s2: Optional[str] = None
    new_vid: Optional[VersionField] = None

    @field_validator("s2", "new_s2")
    @classmethod
    def _require_hex(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        if not value:
            raise ValueError("salt must not be empty")
        try:
            binascii.unhexlify(value)
        except (binascii.Error, ValueError) as exc:
            raise ValueError("salt is not valid hex") from exc
        return value


__all__ = ["SaltResponse"]
