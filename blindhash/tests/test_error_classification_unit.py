from __future__ import annotations

import asyncio
import types

import httpx
import pytest

from blindhash.base.errors import (
    AttemptTimeoutError,
    BlindHashError,
    ConfigFetchError,
    ErrorCode,
    RemoteError,
    SaltRetrievalExhausted,
    TransportError,
    classify_exception,
)


def test_subclasses_pin_their_codes():
    assert ConfigFetchError("x").code is ErrorCode.CONFIG
    assert TransportError("x").code is ErrorCode.TRANSPORT
    assert RemoteError("x", status_code=503).code is ErrorCode.REMOTE
    assert AttemptTimeoutError("x").code is ErrorCode.TIMEOUT
    assert SaltRetrievalExhausted("x").code is ErrorCode.EXHAUSTED
    assert isinstance(SaltRetrievalExhausted("x"), BlindHashError)


def test_str_includes_host_and_code():
    err = RemoteError("unexpected status 500", host="a.test", status_code=500)
    assert str(err) == "a.test remote: unexpected status 500"


def test_classify_passthrough_and_timeouts():
    assert classify_exception(TransportError("boom")) is ErrorCode.TRANSPORT
    assert classify_exception(TimeoutError()) is ErrorCode.TIMEOUT
    assert classify_exception(asyncio.TimeoutError()) is ErrorCode.TIMEOUT
    request = httpx.Request("GET", "https://a.test/")
    assert classify_exception(httpx.ReadTimeout("slow", request=request)) is ErrorCode.TIMEOUT


def test_classify_transport_and_status():
    request = httpx.Request("GET", "https://a.test/")
    assert classify_exception(httpx.ConnectError("refused", request=request)) is ErrorCode.TRANSPORT
    assert classify_exception(ConnectionResetError()) is ErrorCode.TRANSPORT
    resp = types.SimpleNamespace(response=types.SimpleNamespace(status_code=502))
    assert classify_exception(resp) is ErrorCode.REMOTE
    assert classify_exception(ValueError("random")) is ErrorCode.UNKNOWN


def test_classify_unusable_url_as_transport():
    with pytest.raises(httpx.InvalidURL) as ei:
        httpx.URL("https://a.test:notaport/")
    assert classify_exception(ei.value) is ErrorCode.TRANSPORT
