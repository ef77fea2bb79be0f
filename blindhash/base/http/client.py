"""Shared async HTTP client construction.

Purpose:
    Build the ``httpx.AsyncClient`` that a blindhash client instance uses for
    both the configuration fetch and every salt request. One client per
    ``BlindHashClient`` keeps its keep-alive pool bound to the event loop that
    created it; concurrent requests to any host reuse pooled connections.

External dependencies:
    - ``httpx`` for the async client and connection pooling.

Timeout strategy:
    - The client carries no default timeout. Salt attempts are bounded by
      ``asyncio.wait_for`` using the session's per-attempt timeout and the
      configuration fetch passes its own timeout explicitly.

Testing:
    - ``transport`` accepts any ``httpx.AsyncBaseTransport``; tests inject an
      ``httpx.MockTransport`` to stub the remote service.
"""

from __future__ import annotations

import contextlib
from typing import Optional

import httpx

# Concurrent salt calls fan out across hosts, so allow many sockets but keep
# only a small idle pool; idle sockets are dropped after 30s.
MAX_CONNECTIONS = 100
MAX_KEEPALIVE_CONNECTIONS = 10
KEEPALIVE_EXPIRY_SECONDS = 30.0


def default_limits() -> httpx.Limits:
    return httpx.Limits(
        max_connections=MAX_CONNECTIONS,
        max_keepalive_connections=MAX_KEEPALIVE_CONNECTIONS,
        keepalive_expiry=KEEPALIVE_EXPIRY_SECONDS,
    )


def create_async_client(
    *,
    user_agent: str,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Return a new pooled ``httpx.AsyncClient`` with JSON request headers.

    Parameters:
        user_agent: Value sent as ``User-Agent`` on every request.
        transport: Optional transport override (used by tests).

    Returns:
        An ``httpx.AsyncClient``. The caller owns it and must close it with
        :func:`close_client`.
    """
    headers = {"User-Agent": user_agent, "Accept": "application/json"}
    if transport is not None:
        return httpx.AsyncClient(headers=headers, timeout=None, transport=transport)
    return httpx.AsyncClient(headers=headers, timeout=None, limits=default_limits())


async def close_client(client: Optional[httpx.AsyncClient]) -> None:
    """Close ``client`` if it is still open.

    Connection teardown failures during shutdown are not actionable and are
    suppressed.
    """
    if client is None or client.is_closed:
        return
    with contextlib.suppress(httpx.HTTPError, OSError):
        await client.aclose()


__all__ = ["create_async_client", "close_client", "default_limits"]
