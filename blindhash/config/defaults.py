"""Centralized defaults for local client settings."""
from __future__ import annotations

import platform

from .._version import __version__

DEFAULT_CONFIG_HOST = "api.taplink.co"
DEFAULT_SCHEME = "https"
DEFAULT_USER_AGENT = f"blindhash-client/{__version__} python/{platform.python_version()}"

__all__ = ["DEFAULT_CONFIG_HOST", "DEFAULT_SCHEME", "DEFAULT_USER_AGENT"]
