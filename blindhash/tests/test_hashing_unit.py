from __future__ import annotations

import hashlib
import hmac

import pytest

from blindhash.base.errors import ErrorCode, InputFormatError
from blindhash.base.hashing import decode_hex, derive_hash2, derive_hash2_hex, hash2_matches


def test_derive_hash2_matches_rfc4231_sha512_vector():
    # RFC 4231 test case 2
    out = derive_hash2(b"what do ya want for nothing?", b"Jefe")
    assert out.hex() == (
        "164b7a7bfcf819e2e395fbe73b56e0a387bd64222e831fd610270cd7ea250554"
        "9758bf75c05a994a6d034f65f8f0e6fdcaeab1a34d4a6b4b636e070a38bce737"
    )


def test_derive_hash2_is_deterministic_and_input_sensitive():
    hash1 = hashlib.sha512(b"pw").digest()
    salt = bytes(range(32))
    a = derive_hash2(hash1, salt)
    assert a == derive_hash2(hash1, salt)
    assert len(a) == 64
    assert derive_hash2(hash1, salt[:-1] + b"\xff") != a
    assert derive_hash2(hashlib.sha512(b"pw2").digest(), salt) != a


def test_derive_hash2_hex_decodes_inputs():
    hash1 = hashlib.sha512(b"pw").digest()
    salt = b"\x01" * 16
    expected = hmac.new(salt, hash1, hashlib.sha512).hexdigest()
    assert derive_hash2_hex(hash1.hex(), salt.hex()) == expected


@pytest.mark.parametrize("bad", ["", "abc", "zz", "0g", None, 1234, "ééé"])
def test_decode_hex_rejects_malformed_input(bad):
    with pytest.raises(InputFormatError) as ei:
        decode_hex(bad, "hash1")
    assert ei.value.code is ErrorCode.INPUT_FORMAT
    assert ei.value.field == "hash1"


def test_decode_hex_accepts_mixed_case():
    assert decode_hex("0aFF") == b"\x0a\xff"


def test_hash2_matches_constant_time_compare():
    digest = derive_hash2(b"h1", b"s2")
    assert hash2_matches(digest.hex(), digest)
    assert hash2_matches(digest.hex().upper(), digest)
    assert not hash2_matches(("00" * 64), digest)
    with pytest.raises(InputFormatError):
        hash2_matches("not-hex", digest)
