"""HTTP utilities for the blindhash client (async client construction)."""

from .client import close_client, create_async_client, default_limits

__all__ = ["create_async_client", "close_client", "default_limits"]
