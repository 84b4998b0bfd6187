from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import ValidationError

from .errors import ConfigError
from .models import AppConfig

_ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "EXPO_PUSH_ENDPOINT": ("expo", "push_endpoint"),
    "EXPO_ACCESS_TOKEN": ("expo", "access_token"),
    "HOST": ("server", "host"),
    "PORT": ("server", "port"),
}


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        msg = f"config not found: {path}"
        raise ConfigError(msg) from exc
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        msg = "toml parse error"
        raise ConfigError(msg) from exc


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    merged = {key: dict(value) if isinstance(value, dict) else value for key, value in data.items()}
    for env_key, (section, field) in _ENV_OVERRIDES.items():
        value = os.environ.get(env_key)
        if not value:
            continue
        table = merged.setdefault(section, {})
        if not isinstance(table, dict):
            msg = f"{section} must be a table"
            raise ConfigError(msg)
        table[field] = value
    return merged


def load_config(path: Path | None = None) -> AppConfig:
    env_file = Path.cwd() / ".env"
    if env_file.exists():
        load_dotenv(env_file)

    data = _read_toml(path) if path is not None else {}
    data = _apply_env_overrides(data)

    try:
        return AppConfig.from_raw(data)
    except ValidationError as exc:
        msg = "invalid configuration"
        raise ConfigError(msg) from exc
