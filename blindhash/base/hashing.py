"""Blind hashing protocol primitives.

``hash2 = HMAC-SHA512(key=salt2, msg=hash1)``. Everything here is pure: no
state, no I/O. Hex decoding happens at the API boundary and raises
:class:`InputFormatError` so malformed input never reaches the network layer.
"""
from __future__ import annotations

import binascii
import hashlib
import hmac

from .errors import InputFormatError


def decode_hex(value: object, field: str = "value") -> bytes:
    """Decode a hex string into bytes.

    Raises:
        InputFormatError: when ``value`` is not a non-empty, even-length hex string.
    """
    if not isinstance(value, str) or not value:
        raise InputFormatError(f"{field} must be a non-empty hex string", field=field)
    try:
        return binascii.unhexlify(value)
    except (binascii.Error, ValueError) as exc:
        raise InputFormatError(f"{field} is not valid hex", field=field, raw=exc) from exc


def derive_hash2(hash1: bytes, salt2: bytes) -> bytes:
    """Return HMAC-SHA512 keyed by ``salt2`` over ``hash1``."""
    return hmac.new(salt2, hash1, hashlib.sha512).digest()


def derive_hash2_hex(hash1_hex: str, salt2_hex: str) -> str:
    hash1 = decode_hex(hash1_hex, "hash1")
    salt2 = decode_hex(salt2_hex, "salt2")
    return derive_hash2(hash1, salt2).hex()


def hash2_matches(expected_hex: str, actual: bytes) -> bool:
    """Constant-time comparison of a stored hex ``hash2`` against derived bytes."""
    expected = decode_hex(expected_hex, "hash2")
    return hmac.compare_digest(expected, actual)


__all__ = ["decode_hex", "derive_hash2", "derive_hash2_hex", "hash2_matches"]
