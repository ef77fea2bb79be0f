"""Public blind hashing API.

``initialize`` fetches the application configuration and builds a
:class:`Session`. :class:`BlindHashClient` exposes the two protocol
operations on top of the salt retrieval client:

* ``verify_password(hash1_hex, expected_hash2_hex, version_id)`` checks a
  stored ``hash2`` and, for a correct password stored under an outdated
  version, returns the upgraded ``hash2`` and version id. Callers that persist
  the upgrade must update both values together.
* ``new_password(hash1_hex)`` derives ``hash2`` under the latest version and
  returns the version id to store alongside it.

Example::

    async with await BlindHashClient.create("my-app-id") as client:
        result = await client.new_password(hash1_hex)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from ..base.hashing import decode_hex, derive_hash2, hash2_matches
from ..base.http import close_client, create_async_client
from ..base.logging import LogContext, get_logger, log_event
from ..base.metrics import HostStatsTracker
from ..base.models import NewPasswordResult, SaltResult, VerifyResult, VersionId
from ..base.session import Session
from ..base.timeouts import get_timeout_config
from ..config import get_client_config
from .helpers import fetch_app_config
from .salt import SaltClient

CLIENT_LOGGER_NAME = "blindhash.client"


async def initialize(
    app_id: str,
    *,
    http_client: Optional[httpx.AsyncClient] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    **overrides: Any,
) -> Session:
    """Fetch the configuration for ``app_id`` and return a ready :class:`Session`.

    Parameters:
        app_id: Application identifier issued by the service.
        http_client: Client to use for the fetch; a temporary one is created
            (and closed) when omitted.
        transport: Transport for the temporary client (tests).
        **overrides: Local settings (see ``blindhash.config``); ``timeout``,
            ``retries`` and ``stats`` override the fetched values.

    Raises:
        ConfigFetchError: the fetch failed or returned an unusable document.
    """
    settings = get_client_config(overrides)
    owned = http_client is None
    client = http_client or create_async_client(user_agent=settings["user_agent"], transport=transport)
    try:
        config = await fetch_app_config(
            client,
            app_id,
            config_host=settings["config_host"],
            scheme=settings["scheme"],
            timeout_seconds=get_timeout_config().config_timeout_seconds,
            logger=get_logger(CLIENT_LOGGER_NAME),
        )
    finally:
        if owned:
            await close_client(client)

    return Session(
        app_id,
        config.servers,
        timeout_ms=settings["timeout"] if settings["timeout"] is not None else config.timeout,
        max_retries=settings["retries"] if settings["retries"] is not None else config.retries,
        stats_enabled=settings["stats"] if settings["stats"] is not None else config.stats,
    )


class BlindHashClient:
    """Blind hashing client bound to one :class:`Session`.

    Use as an async context manager (or call :meth:`start`/:meth:`aclose`) so
    the statistics ticker runs and pooled connections are released.
    """

    def __init__(
        self,
        session: Session,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        tracker: Optional[HostStatsTracker] = None,
        stats_interval_seconds: Optional[float] = None,
        **overrides: Any,
    ):
        self._settings = get_client_config(overrides)
        self._owns_http = http_client is None
        self._http = http_client or create_async_client(
            user_agent=self._settings["user_agent"], transport=transport
        )
        self._session = session
        self._salt = SaltClient(
            session,
            self._http,
            tracker=tracker,
            scheme=self._settings["scheme"],
            stats_interval_seconds=stats_interval_seconds,
        )

    @classmethod
    async def create(
        cls,
        app_id: str,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **overrides: Any,
    ) -> "BlindHashClient":
        """Initialize a session for ``app_id`` and return a client sharing its HTTP pool."""
        settings = get_client_config(overrides)
        http = create_async_client(user_agent=settings["user_agent"], transport=transport)
        try:
            session = await initialize(app_id, http_client=http, **overrides)
        except BaseException:
            await close_client(http)
            raise
        client = cls(session, http_client=http, **overrides)
        client._owns_http = True
        return client

    @property
    def session(self) -> Session:
        return self._session

    @property
    def salt_client(self) -> SaltClient:
        return self._salt

    # -------------------------- Lifecycle -------------------------- #
    def start(self) -> None:
        self._salt.start()
        log_event(
            get_logger(CLIENT_LOGGER_NAME),
            "client.start",
            LogContext(app_id=self._session.app_id),
            level=logging.DEBUG,
            hosts=list(self._session.hosts),
            stats=self._session.stats_enabled,
        )

    async def aclose(self) -> None:
        await self._salt.stop()
        if self._owns_http:
            await close_client(self._http)
        log_event(
            get_logger(CLIENT_LOGGER_NAME),
            "client.close",
            LogContext(app_id=self._session.app_id),
            level=logging.DEBUG,
        )

    async def __aenter__(self) -> "BlindHashClient":
        self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # -------------------------- Operations -------------------------- #
    async def get_salt(self, hash1_hex: str, version_id: Optional[VersionId] = None) -> SaltResult:
        return await self._salt.get_salt(hash1_hex, version_id)

    async def verify_password(
        self,
        hash1_hex: str,
        expected_hash2_hex: str,
        version_id: Optional[VersionId],
    ) -> VerifyResult:
        """Verify a stored ``hash2`` for ``hash1_hex`` under ``version_id``.

        Returns:
            ``VerifyResult(matched, new_version_id, new_hash2_hex)``; the upgrade
            fields are only set when the password matched and the server offered
            a newer version.

        Raises:
            InputFormatError: malformed hex input (checked before any request).
            SaltRetrievalExhausted: no server answered.
        """
        hash1 = decode_hex(hash1_hex, "hash1")
        decode_hex(expected_hash2_hex, "hash2")
        salt = await self._salt.get_salt(hash1_hex, version_id)

        derived = derive_hash2(hash1, decode_hex(salt.salt2_hex, "salt2"))
        if not hash2_matches(expected_hash2_hex, derived):
            return VerifyResult(matched=False)
        if salt.has_upgrade:
            new_hash2 = derive_hash2(hash1, decode_hex(salt.new_salt2_hex, "new_salt2"))
            return VerifyResult(
                matched=True,
                new_version_id=salt.new_version_id,
                new_hash2_hex=new_hash2.hex(),
            )
        return VerifyResult(matched=True)

    async def new_password(self, hash1_hex: str) -> NewPasswordResult:
        """Derive ``hash2`` for a new password using the latest version.

        Raises:
            InputFormatError: malformed ``hash1_hex``.
            SaltRetrievalExhausted: no server answered.
        """
        hash1 = decode_hex(hash1_hex, "hash1")
        salt = await self._salt.get_salt(hash1_hex, None)
        hash2 = derive_hash2(hash1, decode_hex(salt.salt2_hex, "salt2"))
        return NewPasswordResult(hash2_hex=hash2.hex(), version_id=salt.version_id)

    def get_stats(self) -> Dict[str, Dict[str, Any]]:
        """Return per-host statistics keyed by host; empty when stats are disabled."""
        if not self._session.stats_enabled:
            return {}
        return self._salt.tracker.as_dict()


__all__ = ["initialize", "BlindHashClient"]
