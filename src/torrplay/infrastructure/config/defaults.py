"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "torrplay",
    "environment": "dev",
    "engine": {
        "base_url": "http://127.0.0.1:8090",
        "timeout_seconds": 15.0,
        "info_wait_seconds": 20.0,
        "poll_interval_seconds": 0.5,
        "save_to_db": False,
    },
    "http": {
        "user_agent": "torrplay/0.1.0",
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
    "auth": {
        "enabled": False,
        "realm": "Authorization Required",
        "accounts": {},
    },
}
