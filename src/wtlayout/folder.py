"""Summary of one LocalState folder: profiles, saved layouts, last run."""

from __future__ import annotations

import logging as py_logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from wtlayout.config import AppConfig
from wtlayout.errors import ExitCode, StateDocumentError, WTLayoutError
from wtlayout.settings import SETTINGS_FILE_NAME, ProfileInfo, load_profiles, map_profile_icons
from wtlayout.state import StateLayout, is_state_file, parse_state_file

logger = py_logging.getLogger(__name__)

STATE_FILE_NAME = "state.json"
INTERESTING_FILES = (SETTINGS_FILE_NAME, STATE_FILE_NAME, "elevated-state.json")


@dataclass
class FileSummary:
    file_name: str
    last_modified: datetime
    size: int
    profiles: list[ProfileInfo] = field(default_factory=list)
    layout: StateLayout | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "fileName": self.file_name,
            "lastModified": self.last_modified.isoformat(),
            "size": self.size,
            "profiles": [profile.to_dict() for profile in self.profiles],
            "layout": None if self.layout is None else self.layout.to_dict(),
        }


@dataclass
class LocalStateSummary:
    name: str
    path: str
    is_default: bool = False
    last_run: datetime | None = None
    files: list[FileSummary] = field(default_factory=list)

    def file(self, file_name: str) -> FileSummary | None:
        for item in self.files:
            if item.file_name == file_name:
                return item
        return None

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "path": self.path,
            "isDefault": self.is_default,
            "lastRun": None if self.last_run is None else self.last_run.isoformat(),
            "files": [item.to_dict() for item in self.files],
        }


def inspect_local_state(
    folder: str | Path,
    *,
    name: str | None = None,
    is_default: bool = False,
    config: AppConfig | None = None,
    profile_icons: Mapping[str, str] | None = None,
) -> LocalStateSummary:
    """Summarize the settings and state files found in ``folder``.

    Icons come from the folder's own ``settings.json``; ``profile_icons`` is
    used when the folder has no visible profiles.
    """
    root = Path(folder).expanduser()
    if not root.is_dir():
        raise WTLayoutError(
            f"LocalState folder not found: {root}",
            code=ExitCode.CONFIG_ERROR,
            hint="Pass an existing LocalState folder path.",
        )
    cfg = config or AppConfig()
    summary = LocalStateSummary(name=name or root.name, path=str(root), is_default=is_default)
    icons: dict[str, str] = dict(profile_icons or {})

    for file_name in INTERESTING_FILES:
        path = root / file_name
        if not path.is_file():
            continue
        stat = path.stat()
        item = FileSummary(
            file_name=file_name,
            last_modified=datetime.fromtimestamp(stat.st_mtime),
            size=stat.st_size,
        )
        if file_name == SETTINGS_FILE_NAME:
            item.profiles = load_profiles(path)
            if item.profiles:
                icons = map_profile_icons(item.profiles, cfg.default_icon)
        elif is_state_file(path):
            try:
                item.layout = parse_state_file(
                    path,
                    icons,
                    max_actions=cfg.max_actions,
                    tolerance=cfg.grid_tolerance,
                    default_icon=cfg.default_icon,
                )
            except StateDocumentError as exc:
                logger.warning("local-state state-unreadable path=%s reason=%s", path, exc.message)
        if summary.last_run is None and file_name == STATE_FILE_NAME:
            summary.last_run = item.last_modified
        summary.files.append(item)

    logger.debug("local-state inspected path=%s files=%s", root, len(summary.files))
    return summary
