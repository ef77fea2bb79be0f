"""Pydantic DTOs for the documents exchanged with the remote services."""

from .app_config import AppConfig
from .salt_response import SaltResponse

__all__ = ["AppConfig", "SaltResponse"]
