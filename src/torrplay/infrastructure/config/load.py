from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from .defaults import DEFAULT_CONFIG
from .schema import AppConfig, EnvOverrides

_TOP_LEVEL_KEYS: tuple[str, ...] = ("app_name", "environment")
_SECTION_KEYS: frozenset[str] = frozenset({"engine", "http", "logging", "auth"})

# Flat key (ENV/CLI spelling) -> (section, key) in the YAML layout.
_FLAT_MAP: dict[str, tuple[str, str]] = {
    "engine_base_url": ("engine", "base_url"),
    "engine_timeout_seconds": ("engine", "timeout_seconds"),
    "engine_info_wait_seconds": ("engine", "info_wait_seconds"),
    "engine_poll_interval_seconds": ("engine", "poll_interval_seconds"),
    "engine_save_to_db": ("engine", "save_to_db"),
    "http_user_agent": ("http", "user_agent"),
    "log_level": ("logging", "level"),
    "log_format": ("logging", "format"),
    "auth_enabled": ("auth", "enabled"),
    "auth_realm": ("auth", "realm"),
}


def _deep_merge(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge `override` into `base` in place; nested mappings merge, scalars win."""
    for key, value in override.items():
        current = base.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            _deep_merge(current, value)
        else:
            base[key] = deepcopy(value)
    return base


def _normalize_layer(data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Bring one layer into the sectioned shape.

    Sectioned blocks pass through, flat keys from _FLAT_MAP move into their
    section, and unknown keys are dropped.
    """
    out: dict[str, Any] = {k: data[k] for k in _TOP_LEVEL_KEYS if k in data}

    for section, block in data.items():
        if section in _SECTION_KEYS and isinstance(block, Mapping):
            out[section] = dict(block)

    for flat_key, (section, section_key) in _FLAT_MAP.items():
        if flat_key in data:
            out.setdefault(section, {})[section_key] = data[flat_key]

    return out


def _read_yaml_config(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise FileNotFoundError(config_path)
    parsed = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError(f"Config YAML must be a mapping, got: {type(parsed)!r}")
    return parsed


def load_config(
    *,
    config_path: Path | None = None,
    dotenv_path: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """
    Load configuration with strict precedence:
    defaults < YAML file < env vars (incl. .env) < cli overrides

    Nothing is written to disk.
    """
    if dotenv_path is not None:
        if not dotenv_path.exists():
            raise FileNotFoundError(dotenv_path)
        load_dotenv(dotenv_path, override=False)

    layers: list[Mapping[str, Any]] = [DEFAULT_CONFIG]
    if config_path is not None:
        layers.append(_read_yaml_config(config_path))
    layers.append(EnvOverrides().to_update_dict())
    layers.append(cli_overrides or {})

    merged: dict[str, Any] = {}
    for layer in layers:
        _deep_merge(merged, _normalize_layer(layer))

    return AppConfig.model_validate(merged)
