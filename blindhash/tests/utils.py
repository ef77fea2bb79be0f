"""Shared testing utilities: a scripted stand-in for the remote services.

``StubService`` is mounted on ``httpx.MockTransport``. Requests to
``CONFIG_HOST`` return ``config_doc``; requests to any other host are routed
to the behavior registered for that host (default: a successful salt reply).
"""
from __future__ import annotations

import asyncio
import hashlib
import inspect
from typing import Any, Callable, Dict, List, Optional

import httpx

HASH1_HEX = hashlib.sha512(b"correct horse battery staple").hexdigest()
SALT_V1 = "11" * 32
SALT_V2 = "22" * 32
CONFIG_HOST = "config.test"

Behavior = Callable[[httpx.Request], Any]


def salt_ok(s2: str = SALT_V1, vid: Any = 1, new_s2: Optional[str] = None, new_vid: Any = None) -> Behavior:
    body: Dict[str, Any] = {"s2": s2, "vid": vid}
    if new_s2 is not None:
        body["new_s2"] = new_s2
    if new_vid is not None:
        body["new_vid"] = new_vid
    return lambda request: httpx.Response(200, json=body)


def status(code: int, text: str = "error") -> Behavior:
    return lambda request: httpx.Response(code, text=text)


def garbage() -> Behavior:
    return lambda request: httpx.Response(200, content=b"<html>not json</html>")


def connect_error() -> Behavior:
    def _raise(request: httpx.Request):
        raise httpx.ConnectError("connection refused", request=request)

    return _raise


def read_timeout() -> Behavior:
    def _raise(request: httpx.Request):
        raise httpx.ReadTimeout("read timed out", request=request)

    return _raise


def slow(seconds: float, then: Optional[Behavior] = None) -> Behavior:
    after = then or salt_ok()

    async def _sleep(request: httpx.Request):
        await asyncio.sleep(seconds)
        return after(request)

    return _sleep


class StubService:
    """Routes requests by host to scripted behaviors and records every call."""

    def __init__(self) -> None:
        self.behaviors: Dict[str, Behavior] = {}
        self.requests: List[httpx.Request] = []
        self.config_doc: Any = {
            "servers": ["a.test", "b.test", "c.test"],
            "timeout": 200,
            "retries": 3,
            "stats": 1,
        }

    @property
    def hosts_called(self) -> List[str]:
        return [r.url.host for r in self.requests if r.url.host != CONFIG_HOST]

    def on(self, host: str, behavior: Behavior) -> "StubService":
        self.behaviors[host] = behavior
        return self

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == CONFIG_HOST and CONFIG_HOST not in self.behaviors:
            return httpx.Response(200, json=self.config_doc)
        behavior = self.behaviors.get(request.url.host, salt_ok())
        result = behavior(request)
        if inspect.isawaitable(result):
            result = await result
        return result

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


def echo_hash1(vid: Any = 1) -> Behavior:
    """Reply with a salt derived from the request's hash1 path segment."""

    async def _reply(request: httpx.Request):
        await asyncio.sleep(0)
        hash1 = request.url.path.split("/")[2]
        return httpx.Response(200, json={"s2": hash1[:64], "vid": vid})

    return _reply
