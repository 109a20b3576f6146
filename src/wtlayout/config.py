"""XDG config loading/saving."""

from __future__ import annotations

import os
import sys
from contextlib import suppress
from pathlib import Path
from typing import Literal, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator

if sys.version_info >= (3, 11):
    import tomllib
else:  # pragma: no cover
    import tomli as tomllib

from wtlayout.layout import DEFAULT_ICON, DEFAULT_MAX_ACTIONS, DEFAULT_TOLERANCE
from wtlayout.logging import normalize_level

DEFAULT_CONFIG_PATH = Path("~/.config/wtlayout/config.toml").expanduser()
DEFAULT_LOG_LEVEL: Literal["DEBUG", "INFO", "WARN", "ERROR"] = "INFO"
SETTINGS_PATH_ENV = "WTLAYOUT_SETTINGS"
MAX_TOLERANCE = 0.01
MAX_ACTIONS_LIMIT = 100_000

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARN", "ERROR"}


class AppConfig(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    grid_tolerance: float = Field(default=DEFAULT_TOLERANCE, gt=0, le=MAX_TOLERANCE)
    max_actions: int = Field(default=DEFAULT_MAX_ACTIONS, ge=1, le=MAX_ACTIONS_LIMIT)
    default_icon: str = Field(default=DEFAULT_ICON, min_length=1)
    settings_path: str = ""
    log_level: Literal["DEBUG", "INFO", "WARN", "ERROR"] = DEFAULT_LOG_LEVEL

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return normalize_level(value)
        return value


def get_config_path(path: str | Path | None = None) -> Path:
    if path is None:
        return DEFAULT_CONFIG_PATH
    return Path(path).expanduser()


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _toml_scalar(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, str):
        return f'"{_escape(value)}"'
    raise TypeError(f"Unsupported TOML scalar type: {type(value)!r}")


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _sanitize(raw: dict[str, object]) -> AppConfig:
    cfg = AppConfig()

    grid_tolerance = raw.get("grid_tolerance", cfg.grid_tolerance)
    if _is_number(grid_tolerance) and 0 < float(cast(float, grid_tolerance)) <= MAX_TOLERANCE:
        cfg.grid_tolerance = float(cast(float, grid_tolerance))

    max_actions = raw.get("max_actions", cfg.max_actions)
    if isinstance(max_actions, int) and not isinstance(max_actions, bool):
        if 1 <= max_actions <= MAX_ACTIONS_LIMIT:
            cfg.max_actions = max_actions

    default_icon = raw.get("default_icon", cfg.default_icon)
    if isinstance(default_icon, str) and default_icon.strip():
        cfg.default_icon = default_icon.strip()

    settings_path = raw.get("settings_path", cfg.settings_path)
    if isinstance(settings_path, str):
        cfg.settings_path = settings_path
    env_settings = os.getenv(SETTINGS_PATH_ENV, "").strip()
    if env_settings:
        cfg.settings_path = env_settings

    log_level = raw.get("log_level", cfg.log_level)
    if isinstance(log_level, str) and normalize_level(log_level) in _VALID_LOG_LEVELS:
        cfg.log_level = cast(Literal["DEBUG", "INFO", "WARN", "ERROR"], normalize_level(log_level))

    return cfg


def load_config(path: str | Path | None = None) -> AppConfig:
    resolved = get_config_path(path)
    if not resolved.exists():
        return _sanitize({})
    try:
        with resolved.open("rb") as handle:
            raw = tomllib.load(handle)
    except (tomllib.TOMLDecodeError, OSError):
        return _sanitize({})
    if not isinstance(raw, dict):
        return _sanitize({})
    return _sanitize(raw)


def save_config(config: AppConfig, path: str | Path | None = None) -> Path:
    resolved = get_config_path(path)
    resolved.parent.mkdir(parents=True, exist_ok=True)
    lines = [
        f"grid_tolerance = {_toml_scalar(config.grid_tolerance)}",
        f"max_actions = {_toml_scalar(config.max_actions)}",
        f"default_icon = {_toml_scalar(config.default_icon)}",
        f"settings_path = {_toml_scalar(config.settings_path)}",
        f"log_level = {_toml_scalar(config.log_level)}",
    ]
    resolved.write_text("\n".join(lines) + "\n", encoding="utf-8")
    with suppress(OSError):
        resolved.chmod(0o600)
    return resolved
