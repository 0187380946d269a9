from __future__ import annotations

from .load import load_config
from .schema import AppConfig, AuthConfig, EnvOverrides

__all__ = ["AppConfig", "AuthConfig", "EnvOverrides", "load_config"]
