"""Local configuration layer for the blindhash client.

Settings that are not part of the fetched application configuration, merged
in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external file (JSON or YAML) named by BLINDHASH_CONFIG_FILE
    3. Environment variables (BLINDHASH_CONFIG_HOST, BLINDHASH_SCHEME, ...)
    4. In-code overrides passed to ``get_client_config``

``timeout``, ``retries`` and ``stats`` are unset by default. When set, they
take precedence over the values in the fetched application configuration
(useful to force statistics on for load tests).

External config file example::

    config_host: config.internal.example
    scheme: https
    stats: true
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import DEFAULT_CONFIG_HOST, DEFAULT_SCHEME, DEFAULT_USER_AGENT

DEFAULTS: Dict[str, Any] = {
    "config_host": DEFAULT_CONFIG_HOST,
    "scheme": DEFAULT_SCHEME,
    "user_agent": DEFAULT_USER_AGENT,
    "timeout": None,
    "retries": None,
    "stats": None,
}

ENV_FIELD_MAP = {
    "config_host": "BLINDHASH_CONFIG_HOST",
    "scheme": "BLINDHASH_SCHEME",
    "user_agent": "BLINDHASH_USER_AGENT",
    "timeout": "BLINDHASH_TIMEOUT_MS",
    "retries": "BLINDHASH_RETRIES",
    "stats": "BLINDHASH_STATS",
}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_FILE_CACHE_PATH: Optional[str] = None


def _load_external_config() -> Dict[str, Any]:
    """Load the optional settings file, caching by path.

    JSON is tried first, then YAML. An unreadable or non-mapping document
    yields an empty mapping.
    """
    global _FILE_CACHE, _FILE_CACHE_PATH
    path = os.getenv("BLINDHASH_CONFIG_FILE") or None
    if _FILE_CACHE is not None and _FILE_CACHE_PATH == path:
        return _FILE_CACHE
    data: Any = {}
    if path and Path(path).is_file():
        text = Path(path).read_text(encoding="utf-8")
        try:
            data = json.loads(text)
        except ValueError:
            try:
                data = yaml.safe_load(text) or {}
            except yaml.YAMLError:
                data = {}
    if not isinstance(data, dict):
        data = {}
    _FILE_CACHE = {k: v for k, v in data.items() if k in DEFAULTS}
    _FILE_CACHE_PATH = path
    return _FILE_CACHE


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field, name in ENV_FIELD_MAP.items():
        val = os.getenv(name)
        if val is not None and val.strip():
            out[field] = val.strip()
    return out


def _coerce_optional_int(value: Any, field: str) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{field} must be an integer, got {value!r}") from exc


def _coerce_optional_flag(value: Any) -> Optional[bool]:
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def get_client_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged local client settings.

    Merge order (later wins): defaults -> external file -> env vars -> overrides.
    ``None`` values in ``overrides`` are ignored so callers can pass optional
    keyword arguments straight through.

    Raises:
        ValueError: when ``timeout`` or ``retries`` is not an integer.
    """
    cfg: Dict[str, Any] = dict(DEFAULTS)
    cfg |= _load_external_config()
    cfg |= _env_overrides()
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    cfg["timeout"] = _coerce_optional_int(cfg.get("timeout"), "timeout")
    cfg["retries"] = _coerce_optional_int(cfg.get("retries"), "retries")
    cfg["stats"] = _coerce_optional_flag(cfg.get("stats"))
    cfg["scheme"] = str(cfg.get("scheme") or DEFAULT_SCHEME).rstrip(":/")
    return cfg


def reset_config_cache() -> None:
    """Forget the cached external file contents."""
    global _FILE_CACHE, _FILE_CACHE_PATH
    _FILE_CACHE = None
    _FILE_CACHE_PATH = None


__all__ = ["DEFAULTS", "ENV_FIELD_MAP", "get_client_config", "reset_config_cache"]
