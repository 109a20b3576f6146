"""Replay of a persisted tab-layout action log."""

from __future__ import annotations

import logging as py_logging
from collections.abc import Callable, Mapping, Sequence

from wtlayout.layout.actions import ActionKind, FocusDirection, LayoutAction
from wtlayout.layout.context import ReplayContext
from wtlayout.layout.geometry import DEFAULT_ICON, Tab, full_pane, split_pane

logger = py_logging.getLogger(__name__)

DEFAULT_MAX_ACTIONS = 1000


class IconLookup:
    """Profile name to icon reference, with a fallback for unknown profiles."""

    def __init__(self, icons: Mapping[str, str] | None = None, default: str = DEFAULT_ICON) -> None:
        self.icons = dict(icons or {})
        self.default = default

    def __call__(self, profile_name: str | None) -> str:
        if profile_name is not None and profile_name in self.icons:
            return self.icons[profile_name]
        return self.default


ActionHandler = Callable[[LayoutAction, ReplayContext, IconLookup], ReplayContext]


def handle_new_tab(action: LayoutAction, context: ReplayContext, icons: IconLookup) -> ReplayContext:
    profile = action.profile_name or ""
    tab = Tab(title=action.tab_title, panes=[full_pane(profile, icons(action.profile_name))])
    context.open_tab(tab)
    return context


def handle_split_pane(action: LayoutAction, context: ReplayContext, icons: IconLookup) -> ReplayContext:
    if context.current_tab is None or context.focused_pane is None:
        logger.debug("replay split-skipped reason=no-focus")
        return context
    direction = action.split
    if direction is None:
        logger.debug("replay split-skipped direction=%s", action.split_direction)
        return context
    new_pane = split_pane(
        context.focused_pane,
        direction,
        profile_name=action.profile_name or "",
        icon=icons(action.profile_name),
    )
    context.current_tab.panes.append(new_pane)
    context.focused_pane = new_pane
    return context


def handle_focus_pane(action: LayoutAction, context: ReplayContext, icons: IconLookup) -> ReplayContext:
    del icons
    if action.pane_index is None or not context.focus(action.pane_index):
        logger.debug("replay focus-skipped id=%s", action.pane_index)
    return context


def handle_move_focus(action: LayoutAction, context: ReplayContext, icons: IconLookup) -> ReplayContext:
    del icons
    tab = context.current_tab
    if tab is None or not tab.panes or context.focused_pane is None:
        return context
    current = context.focused_index()
    if current < 0:
        return context
    count = len(tab.panes)
    direction = action.focus_direction
    if direction is FocusDirection.PREVIOUS_IN_ORDER:
        context.focus((current - 1 + count) % count)
    elif direction is FocusDirection.NEXT_IN_ORDER:
        context.focus((current + 1) % count)
    else:
        logger.debug("replay move-focus-skipped direction=%s", action.move_direction)
    return context


def handle_switch_to_tab(action: LayoutAction, context: ReplayContext, icons: IconLookup) -> ReplayContext:
    del icons
    if action.tab_index is None or not context.switch_to(action.tab_index):
        logger.debug("replay switch-skipped index=%s tabs=%s", action.tab_index, len(context.tabs))
    return context


ACTION_HANDLERS: dict[ActionKind, ActionHandler] = {
    ActionKind.NEW_TAB: handle_new_tab,
    ActionKind.SPLIT_PANE: handle_split_pane,
    ActionKind.FOCUS_PANE: handle_focus_pane,
    ActionKind.MOVE_FOCUS: handle_move_focus,
    ActionKind.SWITCH_TO_TAB: handle_switch_to_tab,
}


def apply_action(action: LayoutAction, context: ReplayContext, icons: IconLookup) -> ReplayContext:
    kind = action.kind
    if kind is None:
        logger.debug("replay action-ignored action=%s", action.action)
        return context
    return ACTION_HANDLERS[kind](action, context, icons)


def replay_actions(
    actions: Sequence[LayoutAction],
    profile_icons: Mapping[str, str] | None = None,
    *,
    max_actions: int = DEFAULT_MAX_ACTIONS,
    default_icon: str = DEFAULT_ICON,
) -> list[Tab]:
    """Rebuild the tabs described by ``actions`` with continuous pane geometry.

    Malformed or out-of-range actions are skipped. A log longer than
    ``max_actions`` is rejected and yields no tabs.
    """
    if len(actions) > max_actions:
        logger.warning("replay rejected actions=%s max=%s", len(actions), max_actions)
        return []

    icons = IconLookup(profile_icons, default_icon)
    context = ReplayContext()
    for action in actions:
        context = apply_action(action, context, icons)
    logger.debug("replay complete actions=%s tabs=%s", len(actions), len(context.tabs))
    return context.tabs
