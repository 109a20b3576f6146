"""Windows Terminal settings.json profiles and LocalState locations."""

from __future__ import annotations

import json
import logging as py_logging
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path

from wtlayout.jsonc import load_jsonc
from wtlayout.layout.geometry import DEFAULT_ICON

logger = py_logging.getLogger(__name__)

SETTINGS_FILE_NAME = "settings.json"
_PACKAGE_FAMILIES = (
    "Microsoft.WindowsTerminal_8wekyb3d8bbwe",
    "Microsoft.WindowsTerminalPreview_8wekyb3d8bbwe",
)


@dataclass(frozen=True)
class ProfileInfo:
    name: str
    icon: str = ""
    guid: str = ""
    source: str = ""
    hidden: bool = False

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "icon": self.icon,
            "guid": self.guid,
            "source": self.source,
            "hidden": self.hidden,
        }


def _dedupe(values: list[str]) -> list[str]:
    result: list[str] = []
    seen: set[str] = set()
    for value in values:
        key = value.lower()
        if key in seen:
            continue
        seen.add(key)
        result.append(value)
    return result


def get_local_state_paths(environ: Mapping[str, str] | None = None) -> list[str]:
    """Return candidate LocalState folders of installed terminals."""
    env = environ if environ is not None else os.environ
    local_app_data = env.get("LOCALAPPDATA", "").strip()
    if not local_app_data:
        return []
    base = Path(local_app_data)
    candidates = [str(base / "Packages" / family / "LocalState") for family in _PACKAGE_FAMILIES]
    candidates.append(str(base / "Microsoft" / "Windows Terminal"))
    return _dedupe(candidates)


def _text(profile: dict[str, object], key: str) -> str:
    value = profile.get(key)
    return value.strip() if isinstance(value, str) else ""


def parse_settings_payload(payload: object) -> list[ProfileInfo]:
    """Visible, named profiles declared in a decoded settings document."""
    if not isinstance(payload, dict):
        return []
    profiles = payload.get("profiles")
    raw_list: object = profiles.get("list") if isinstance(profiles, dict) else profiles
    if not isinstance(raw_list, list):
        return []

    result: list[ProfileInfo] = []
    for item in raw_list:
        if not isinstance(item, dict):
            continue
        name = _text(item, "name")
        if not name or item.get("hidden") is True:
            continue
        result.append(
            ProfileInfo(
                name=name,
                icon=_text(item, "icon"),
                guid=_text(item, "guid"),
                source=_text(item, "source"),
            )
        )
    return result


def load_profiles(path: str | Path) -> list[ProfileInfo]:
    resolved = Path(path)
    if resolved.name != SETTINGS_FILE_NAME or not resolved.is_file():
        return []
    try:
        raw = resolved.read_text(encoding="utf-8-sig")
    except OSError:
        logger.debug("settings read-failed path=%s", resolved, exc_info=True)
        return []
    except UnicodeDecodeError:
        logger.warning("settings decode-failed path=%s", resolved)
        return []
    try:
        payload = load_jsonc(raw)
    except json.JSONDecodeError:
        logger.warning("settings parse-failed path=%s", resolved)
        return []
    profiles = parse_settings_payload(payload)
    logger.debug("settings loaded path=%s profiles=%s", resolved, len(profiles))
    return profiles


def map_profile_icons(
    profiles: Iterable[ProfileInfo],
    default_icon: str = DEFAULT_ICON,
) -> dict[str, str]:
    """Profile name to icon reference; the first profile of a name wins."""
    icons: dict[str, str] = {}
    for profile in profiles:
        if profile.name in icons:
            continue
        icons[profile.name] = profile.icon or default_icon
    return icons


def load_profile_icons(path: str | Path, default_icon: str = DEFAULT_ICON) -> dict[str, str]:
    return map_profile_icons(load_profiles(path), default_icon)
