"""Request helpers for the blindhash client.

Purpose:
- Build request URLs, perform the one-shot configuration fetch and a single
  salt request against one host, translating every transport-level outcome
  into the client's error taxonomy so ``httpx`` exceptions never leak.

External dependencies:
- ``httpx`` (shared ``AsyncClient`` owned by the caller).
- ``pydantic`` models for response validation.

Failure semantics:
- ``fetch_app_config`` raises :class:`ConfigFetchError` for any failure.
- ``request_salt`` raises :class:`AttemptTimeoutError`, :class:`TransportError`
  or :class:`RemoteError`; retry decisions belong to the failover loop.
"""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from ..base.dto import AppConfig, SaltResponse
from ..base.errors import (
    AttemptTimeoutError,
    ConfigFetchError,
    ErrorCode,
    RemoteError,
    TransportError,
    classify_exception,
)
from ..base.logging import LogContext, log_event
from ..base.models import SaltResult, VersionId

LATEST_VERSION = ""


def normalize_version(version_id: Optional[VersionId]) -> str:
    """Map a caller version to its path segment; ``None``/``0``/``""`` mean latest."""
    if version_id is None or version_id == 0:
        return LATEST_VERSION
    return str(version_id).strip()


def host_url(host: str, scheme: str) -> str:
    """Return the base URL for ``host``; hosts may already carry a scheme."""
    host = host.strip().rstrip("/")
    if "://" in host:
        return host
    return f"{scheme}://{host}"


def build_salt_url(host: str, scheme: str, app_id: str, hash1_hex: str, version: str) -> str:
    return f"{host_url(host, scheme)}/{quote(app_id, safe='')}/{hash1_hex}/{quote(version, safe='')}"


def build_config_url(config_host: str, scheme: str, app_id: str) -> str:
    return f"{host_url(config_host, scheme)}/{quote(app_id, safe='')}"


async def request_salt(client: httpx.AsyncClient, url: str, *, host: str) -> SaltResponse:
    """Perform one salt request against one host.

    Raises:
        AttemptTimeoutError: httpx reported a connect/read/write/pool timeout.
        TransportError: any other transport-level failure, including a host
            that does not form a valid URL.
        RemoteError: non-200 status or a body that does not validate.
    """
    try:
        response = await client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        if classify_exception(exc) is ErrorCode.TIMEOUT:
            raise AttemptTimeoutError(f"request timed out: {exc!r}", host=host, raw=exc) from exc
        raise TransportError(f"request failed: {exc!r}", host=host, raw=exc) from exc

    if response.status_code != 200:
        raise RemoteError(
            f"unexpected status {response.status_code}",
            host=host,
            status_code=response.status_code,
        )
    try:
        return SaltResponse.model_validate_json(response.content)
    except ValidationError as exc:
        raise RemoteError("malformed salt response", host=host, status_code=200, raw=exc) from exc


def to_salt_result(response: SaltResponse, requested_version: Optional[VersionId], version: str) -> SaltResult:
    """Shape a validated response according to the requested version.

    A request for a specific version echoes that version and carries the
    upgrade pair when the server offered one. A request for the latest version
    reports the server's version and never carries upgrade fields.
    """
    if version == LATEST_VERSION:
        return SaltResult(salt2_hex=response.s2, version_id=response.vid)
    if response.new_s2 is not None and response.new_vid is not None:
        return SaltResult(
            salt2_hex=response.s2,
            version_id=requested_version,
            new_salt2_hex=response.new_s2,
            new_version_id=response.new_vid,
        )
    return SaltResult(salt2_hex=response.s2, version_id=requested_version)


async def fetch_app_config(
    client: httpx.AsyncClient,
    app_id: str,
    *,
    config_host: str,
    scheme: str,
    timeout_seconds: float,
    logger: logging.Logger,
) -> AppConfig:
    """Fetch and validate the application configuration document.

    No retries: a failure here is fatal to initialization and surfaced as
    :class:`ConfigFetchError`; callers may retry initialization themselves.
    """
    url = build_config_url(config_host, scheme, app_id)
    ctx = LogContext(app_id=app_id, host=config_host)
    log_event(logger, "config.fetch.start", ctx, level=logging.DEBUG, url=url)
    try:
        response = await client.get(url, timeout=timeout_seconds)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        log_event(logger, "config.fetch.error", ctx, level=logging.ERROR, error=repr(exc))
        raise ConfigFetchError(f"configuration request failed: {exc!r}", host=config_host, raw=exc) from exc

    if response.status_code != 200:
        log_event(logger, "config.fetch.error", ctx, level=logging.ERROR, status_code=response.status_code)
        raise ConfigFetchError(
            f"configuration request returned status {response.status_code}",
            host=config_host,
        )
    try:
        config = AppConfig.model_validate_json(response.content)
    except ValidationError as exc:
        log_event(logger, "config.fetch.error", ctx, level=logging.ERROR, error="malformed configuration")
        raise ConfigFetchError("malformed configuration document", host=config_host, raw=exc) from exc

    log_event(
        logger,
        "config.fetch.ok",
        ctx,
        servers=len(config.servers),
        timeout_ms=config.timeout,
        retries=config.retries,
        stats=config.stats,
    )
    return config


__all__ = [
    "LATEST_VERSION",
    "normalize_version",
    "host_url",
    "build_salt_url",
    "build_config_url",
    "request_salt",
    "to_salt_result",
    "fetch_app_config",
]
