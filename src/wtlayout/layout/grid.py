"""Grid inference over bisected pane rectangles."""

from __future__ import annotations

import logging as py_logging
from collections.abc import Iterable

from wtlayout.layout.geometry import Pane, Tab

logger = py_logging.getLogger(__name__)

DEFAULT_TOLERANCE = 1e-4


def collect_boundaries(values: Iterable[float], tolerance: float = DEFAULT_TOLERANCE) -> list[float]:
    """Sorted edge coordinates with values closer than ``tolerance`` merged."""
    boundaries: list[float] = []
    for value in sorted(values):
        if boundaries and value - boundaries[-1] < tolerance:
            continue
        boundaries.append(value)
    return boundaries


def find_boundary(boundaries: list[float], value: float, tolerance: float = DEFAULT_TOLERANCE) -> int:
    for index, boundary in enumerate(boundaries):
        if abs(boundary - value) < tolerance:
            return index
    return -1


def _place(boundaries: list[float], start: float, end: float, tolerance: float) -> tuple[int, int]:
    first = find_boundary(boundaries, start, tolerance)
    last = find_boundary(boundaries, end, tolerance)
    if first == -1 or last == -1 or last <= first:
        return 0, 1
    return first, last - first


def compute_grid_layout(tab: Tab, *, tolerance: float = DEFAULT_TOLERANCE) -> Tab:
    """Assign integer grid rows, columns and spans to every pane of ``tab``.

    Every pane edge becomes a grid line, so the grid is the coarsest one in
    which each pane covers a whole block of cells. A pane whose edges cannot
    be matched falls back to a single cell at the origin on that axis.
    """
    x_lines = collect_boundaries(_edges(tab.panes, vertical=True), tolerance)
    y_lines = collect_boundaries(_edges(tab.panes, vertical=False), tolerance)
    tab.grid_columns = max(len(x_lines) - 1, 0)
    tab.grid_rows = max(len(y_lines) - 1, 0)

    for pane in tab.panes:
        pane.grid_column, pane.grid_column_span = _place(x_lines, pane.x, pane.right, tolerance)
        pane.grid_row, pane.grid_row_span = _place(y_lines, pane.y, pane.bottom, tolerance)
    logger.debug(
        "grid computed rows=%s columns=%s panes=%s", tab.grid_rows, tab.grid_columns, len(tab.panes)
    )
    return tab


def compute_grid_layouts(tabs: Iterable[Tab], *, tolerance: float = DEFAULT_TOLERANCE) -> list[Tab]:
    return [compute_grid_layout(tab, tolerance=tolerance) for tab in tabs]


def _edges(panes: list[Pane], *, vertical: bool) -> list[float]:
    edges: list[float] = []
    for pane in panes:
        if vertical:
            edges.extend((pane.x, pane.right))
        else:
            edges.extend((pane.y, pane.bottom))
    return edges
