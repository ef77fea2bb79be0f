"""Blind hashing client: salt retrieval with failover and the public API."""

from .api import BlindHashClient, initialize
from .salt import SaltClient

__all__ = ["BlindHashClient", "SaltClient", "initialize"]
