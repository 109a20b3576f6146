"""Layout action vocabulary recorded in a persisted window layout."""

from __future__ import annotations

import logging as py_logging
from collections.abc import Iterable
from enum import Enum
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError

logger = py_logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


class ActionKind(str, Enum):
    NEW_TAB = "newtab"
    SPLIT_PANE = "splitpane"
    FOCUS_PANE = "focuspane"
    MOVE_FOCUS = "movefocus"
    SWITCH_TO_TAB = "switchtotab"


class SplitDirection(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


class FocusDirection(str, Enum):
    PREVIOUS_IN_ORDER = "previousinorder"
    NEXT_IN_ORDER = "nextinorder"


def _lookup(enum_type: type[E], value: str | None) -> E | None:
    if value is None:
        return None
    normalized = value.lower()
    for member in enum_type:
        if member.value == normalized:
            return member
    return None


class LayoutAction(BaseModel):
    """One ``tabLayout`` entry.

    Field names follow the engine's vocabulary; aliases follow the keys
    Windows Terminal writes into ``state.json``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    action: str | None = None
    profile_name: str | None = Field(default=None, alias="profile")
    split_direction: str | None = Field(default=None, alias="split")
    pane_index: StrictInt | None = Field(default=None, alias="id")
    move_direction: str | None = Field(default=None, alias="direction")
    tab_index: StrictInt | None = Field(default=None, alias="index")
    tab_title: str | None = Field(default=None, alias="tabTitle")
    commandline: str | None = None
    session_id: str | None = Field(default=None, alias="sessionId")
    starting_directory: str | None = Field(default=None, alias="startingDirectory")
    size: float | None = None
    suppress_application_title: bool | None = Field(default=None, alias="suppressApplicationTitle")

    @property
    def kind(self) -> ActionKind | None:
        return _lookup(ActionKind, self.action)

    @property
    def split(self) -> SplitDirection | None:
        return _lookup(SplitDirection, self.split_direction)

    @property
    def focus_direction(self) -> FocusDirection | None:
        return _lookup(FocusDirection, self.move_direction)


# Fields each kind reads during replay. A mistyped field outside this set is
# discarded and the action is kept.
KIND_FIELDS: dict[ActionKind, frozenset[str]] = {
    ActionKind.NEW_TAB: frozenset({"action", "profile_name", "tab_title"}),
    ActionKind.SPLIT_PANE: frozenset({"action", "profile_name", "split_direction"}),
    ActionKind.FOCUS_PANE: frozenset({"action", "pane_index"}),
    ActionKind.MOVE_FOCUS: frozenset({"action", "move_direction"}),
    ActionKind.SWITCH_TO_TAB: frozenset({"action", "tab_index"}),
}


def _field_name(key: str) -> str:
    for name, info in LayoutAction.model_fields.items():
        if key in (name, info.alias):
            return name
    return key


def parse_action(raw: object) -> LayoutAction | None:
    """Validate one raw entry; ``None`` when it is not a usable action record."""
    if not isinstance(raw, dict):
        return None
    try:
        return LayoutAction.model_validate(raw)
    except ValidationError as exc:
        invalid = {str(error["loc"][0]) for error in exc.errors() if error["loc"]}

    action = raw.get("action")
    kind = _lookup(ActionKind, action) if isinstance(action, str) else None
    if kind is None or any(_field_name(key) in KIND_FIELDS[kind] for key in invalid):
        logger.debug("action-invalid action=%s fields=%s", action, sorted(invalid))
        return None
    logger.debug("action-fields-dropped action=%s fields=%s", action, sorted(invalid))
    return LayoutAction.model_validate({key: value for key, value in raw.items() if key not in invalid})


def parse_actions(entries: Iterable[object]) -> list[LayoutAction]:
    actions: list[LayoutAction] = []
    for entry in entries:
        parsed = parse_action(entry)
        if parsed is not None:
            actions.append(parsed)
    return actions
