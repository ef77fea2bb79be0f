"""Verification/derivation API and initialization against the stub services."""
from __future__ import annotations

import asyncio
import hashlib
import hmac

import pytest

from blindhash import BlindHashClient, initialize
from blindhash.base.errors import ConfigFetchError, InputFormatError, SaltRetrievalExhausted
from blindhash.base.session import Session
from blindhash.tests.utils import CONFIG_HOST, HASH1_HEX, SALT_V1, SALT_V2, connect_error, salt_ok, status


def _hash2(salt_hex: str, hash1_hex: str = HASH1_HEX) -> str:
    return hmac.new(bytes.fromhex(salt_hex), bytes.fromhex(hash1_hex), hashlib.sha512).hexdigest()


def _with_client(service, session, op):
    async def _main():
        async with BlindHashClient(session, transport=service.transport()) as client:
            return await op(client)

    return asyncio.run(_main())


def test_new_password_derives_hash2_under_latest_version(service, session):
    service.on("a.test", salt_ok(s2=SALT_V1, vid=9))

    result = _with_client(service, session, lambda c: c.new_password(HASH1_HEX))

    assert result.hash2_hex == _hash2(SALT_V1)
    assert result.version_id == 9
    assert service.requests[0].url.path.endswith("/")


def test_verify_password_match_without_upgrade(service, session):
    service.on("a.test", salt_ok(s2=SALT_V1, vid=2))

    result = _with_client(service, session, lambda c: c.verify_password(HASH1_HEX, _hash2(SALT_V1), 2))

    assert result.matched
    assert result.new_version_id is None and result.new_hash2_hex is None


def test_verify_password_match_returns_upgrade(service, session):
    service.on("a.test", salt_ok(s2=SALT_V1, vid=1, new_s2=SALT_V2, new_vid=2))

    result = _with_client(service, session, lambda c: c.verify_password(HASH1_HEX, _hash2(SALT_V1), 1))

    assert result.matched
    assert result.new_version_id == 2
    assert result.new_hash2_hex == _hash2(SALT_V2)


def test_verify_password_mismatch_never_returns_upgrade(service, session):
    service.on("a.test", salt_ok(s2=SALT_V1, vid=1, new_s2=SALT_V2, new_vid=2))
    wrong = _hash2(SALT_V2)

    result = _with_client(service, session, lambda c: c.verify_password(HASH1_HEX, wrong, 1))

    assert result.matched is False
    assert not result
    assert result.new_version_id is None and result.new_hash2_hex is None


def test_verify_rejects_malformed_expected_hash_before_network(service, session):
    with pytest.raises(InputFormatError) as ei:
        _with_client(service, session, lambda c: c.verify_password(HASH1_HEX, "nothex", 1))
    assert ei.value.field == "hash2"
    assert service.requests == []


def test_exhaustion_surfaces_single_terminal_error(service, session):
    for host in ("a.test", "b.test", "c.test"):
        service.on(host, connect_error())

    with pytest.raises(SaltRetrievalExhausted):
        _with_client(service, session, lambda c: c.new_password(HASH1_HEX))


def test_get_stats_reports_hosts_when_enabled(service, session):
    service.on("a.test", status(500))

    async def op(client):
        await client.new_password(HASH1_HEX)
        return client.get_stats()

    stats = _with_client(service, session, op)

    assert set(stats) == {"a.test", "b.test"}
    assert stats["a.test"]["total_errors"] == 1
    assert stats["b.test"]["recent_requests"] == 1


def test_get_stats_empty_when_disabled(service):
    session = Session("app-1", ["a.test"], stats_enabled=False)

    async def op(client):
        await client.new_password(HASH1_HEX)
        return client.get_stats()

    assert _with_client(service, session, op) == {}


# -------------------------- initialize -------------------------- #
def test_initialize_builds_session_from_config(service):
    service.config_doc = {"servers": ["s1.test", "s2.test"], "timeout": 750, "retries": 2, "stats": 1, "extra": "x"}

    session = asyncio.run(initialize("my-app", transport=service.transport(), config_host=CONFIG_HOST))

    assert session.app_id == "my-app"
    assert session.hosts == ("s1.test", "s2.test")
    assert (session.timeout_ms, session.max_retries, session.stats_enabled) == (750, 2, True)
    assert service.requests[0].url.path == "/my-app"


def test_initialize_applies_defaults(service):
    service.config_doc = {"servers": ["s1.test"]}

    session = asyncio.run(initialize("my-app", transport=service.transport(), config_host=CONFIG_HOST))

    assert (session.timeout_ms, session.max_retries, session.stats_enabled) == (500, 3, False)


def test_initialize_local_overrides_win(service):
    session = asyncio.run(
        initialize("my-app", transport=service.transport(), config_host=CONFIG_HOST, stats=False, retries=0)
    )
    assert session.stats_enabled is False
    assert session.max_retries == 0
    assert session.timeout_ms == 200


@pytest.mark.parametrize(
    "doc",
    [
        {"servers": []},
        {"servers": ["  "]},
        {"timeout": 500},
        {"servers": ["s1"], "timeout": -1},
        ["s1", "s2"],
    ],
)
def test_initialize_rejects_unusable_documents(service, doc):
    service.config_doc = doc
    with pytest.raises(ConfigFetchError):
        asyncio.run(initialize("my-app", transport=service.transport(), config_host=CONFIG_HOST))


@pytest.mark.parametrize("behavior", [status(500), connect_error()])
def test_initialize_surfaces_fetch_failures(service, behavior):
    service.on(CONFIG_HOST, behavior)
    with pytest.raises(ConfigFetchError):
        asyncio.run(initialize("my-app", transport=service.transport(), config_host=CONFIG_HOST))
    assert len(service.requests) == 1


def test_create_initializes_and_serves_requests(service):
    async def _main():
        client = await BlindHashClient.create("my-app", transport=service.transport(), config_host=CONFIG_HOST)
        async with client:
            assert client.salt_client.running
            result = await client.new_password(HASH1_HEX)
        assert not client.salt_client.running
        return client, result

    client, result = asyncio.run(_main())

    assert client.session.hosts == ("a.test", "b.test", "c.test")
    assert result.hash2_hex == _hash2(SALT_V1)
    assert service.hosts_called == ["a.test"]
