"""Session-layout reconstruction: action replay and grid inference."""

from .actions import ActionKind, FocusDirection, LayoutAction, SplitDirection, parse_action, parse_actions
from .context import ReplayContext
from .geometry import DEFAULT_ICON, Pane, Tab, full_pane, split_pane
from .grid import DEFAULT_TOLERANCE, collect_boundaries, compute_grid_layout, compute_grid_layouts
from .replay import DEFAULT_MAX_ACTIONS, IconLookup, apply_action, replay_actions

__all__ = [
    "ActionKind",
    "apply_action",
    "collect_boundaries",
    "compute_grid_layout",
    "compute_grid_layouts",
    "DEFAULT_ICON",
    "DEFAULT_MAX_ACTIONS",
    "DEFAULT_TOLERANCE",
    "FocusDirection",
    "full_pane",
    "IconLookup",
    "LayoutAction",
    "Pane",
    "parse_action",
    "parse_actions",
    "replay_actions",
    "ReplayContext",
    "split_pane",
    "SplitDirection",
    "Tab",
]
