"""Persisted window state (state.json) reading and layout reconstruction."""

from __future__ import annotations

import json
import logging as py_logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from wtlayout.errors import StateDocumentError
from wtlayout.jsonc import load_jsonc
from wtlayout.layout import (
    DEFAULT_ICON,
    DEFAULT_MAX_ACTIONS,
    DEFAULT_TOLERANCE,
    Tab,
    compute_grid_layouts,
    parse_actions,
    replay_actions,
)

logger = py_logging.getLogger(__name__)

STATE_FILE_SUFFIX = "state.json"


class PersistedWindowLayout(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    tab_layout: list[Any] | None = Field(default=None, alias="tabLayout")


class StateDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    persisted_window_layouts: list[PersistedWindowLayout] | None = Field(
        default=None,
        alias="persistedWindowLayouts",
    )


@dataclass
class StateLayout:
    tabs: list[Tab] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {"tabs": [tab.to_dict() for tab in self.tabs]}


def is_state_file(path: str | Path) -> bool:
    return Path(path).name.endswith(STATE_FILE_SUFFIX)


def _first_tab_layout(payload: object) -> list[Any] | None:
    if not isinstance(payload, dict):
        return None
    try:
        document = StateDocument.model_validate(payload)
    except ValidationError as exc:
        logger.debug("state document-invalid errors=%s", exc.error_count())
        return None
    if not document.persisted_window_layouts:
        return None
    entries = document.persisted_window_layouts[0].tab_layout
    if not entries:
        return None
    return entries


def parse_state_payload(
    payload: object,
    profile_icons: Mapping[str, str] | None = None,
    *,
    max_actions: int = DEFAULT_MAX_ACTIONS,
    tolerance: float = DEFAULT_TOLERANCE,
    default_icon: str = DEFAULT_ICON,
) -> StateLayout | None:
    """Reconstruct the first persisted window layout of a decoded document.

    Returns ``None`` when the document has no layout or no action list, or
    when replaying the actions produces no tab.
    """
    entries = _first_tab_layout(payload)
    if entries is None:
        return None
    actions = parse_actions(entries)
    if len(actions) != len(entries):
        logger.debug("state actions-skipped count=%s", len(entries) - len(actions))
    tabs = replay_actions(
        actions,
        profile_icons,
        max_actions=max_actions,
        default_icon=default_icon,
    )
    if not tabs:
        return None
    return StateLayout(tabs=compute_grid_layouts(tabs, tolerance=tolerance))


def parse_state_text(
    raw: str,
    profile_icons: Mapping[str, str] | None = None,
    *,
    max_actions: int = DEFAULT_MAX_ACTIONS,
    tolerance: float = DEFAULT_TOLERANCE,
    default_icon: str = DEFAULT_ICON,
) -> StateLayout | None:
    try:
        payload = load_jsonc(raw)
    except json.JSONDecodeError as exc:
        raise StateDocumentError(
            f"State document is not valid JSON (line {exc.lineno}, column {exc.colno})",
            hint="Check that the file is a Windows Terminal state.json.",
        ) from exc
    return parse_state_payload(
        payload,
        profile_icons,
        max_actions=max_actions,
        tolerance=tolerance,
        default_icon=default_icon,
    )


def parse_state_file(
    path: str | Path,
    profile_icons: Mapping[str, str] | None = None,
    *,
    max_actions: int = DEFAULT_MAX_ACTIONS,
    tolerance: float = DEFAULT_TOLERANCE,
    default_icon: str = DEFAULT_ICON,
) -> StateLayout | None:
    """Reconstruct the layout stored in ``state.json`` or ``elevated-state.json``.

    Files with another name, or that do not exist, yield ``None``. Files
    that cannot be read or decoded raise ``StateDocumentError``.
    """
    resolved = Path(path)
    if not is_state_file(resolved) or not resolved.is_file():
        return None
    try:
        raw = resolved.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as exc:
        raise StateDocumentError(
            f"State document is not valid UTF-8: {resolved}",
            hint="Check that the file is a Windows Terminal state.json.",
        ) from exc
    except OSError as exc:
        raise StateDocumentError(
            f"Unable to read state file: {resolved}",
            hint="Check the file permissions.",
        ) from exc
    layout = parse_state_text(
        raw,
        profile_icons,
        max_actions=max_actions,
        tolerance=tolerance,
        default_icon=default_icon,
    )
    logger.debug(
        "state parsed path=%s tabs=%s",
        resolved,
        0 if layout is None else len(layout.tabs),
    )
    return layout
