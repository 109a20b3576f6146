"""Pane rectangles in normalized tab space and the bisection that produces them."""

from __future__ import annotations

from dataclasses import dataclass, field

from typing_extensions import TypedDict

from wtlayout.layout.actions import SplitDirection

DEFAULT_ICON = "unknown"


class PanePayload(TypedDict):
    profileName: str
    iconRef: str
    splitDirection: str
    x: float
    y: float
    width: float
    height: float
    gridRow: int
    gridColumn: int
    gridRowSpan: int
    gridColumnSpan: int


class TabPayload(TypedDict):
    title: str | None
    gridRows: int
    gridColumns: int
    panes: list[PanePayload]


@dataclass(eq=False)
class Pane:
    profile_name: str = ""
    icon: str = DEFAULT_ICON
    x: float = 0.0
    y: float = 0.0
    width: float = 1.0
    height: float = 1.0
    split_direction: str = ""
    grid_row: int = 0
    grid_column: int = 0
    grid_row_span: int = 1
    grid_column_span: int = 1

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    def rect(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)

    def placement(self) -> tuple[int, int, int, int]:
        return (self.grid_row, self.grid_column, self.grid_row_span, self.grid_column_span)

    def to_dict(self) -> PanePayload:
        return {
            "profileName": self.profile_name,
            "iconRef": self.icon,
            "splitDirection": self.split_direction,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "gridRow": self.grid_row,
            "gridColumn": self.grid_column,
            "gridRowSpan": self.grid_row_span,
            "gridColumnSpan": self.grid_column_span,
        }


@dataclass(eq=False)
class Tab:
    title: str | None = None
    panes: list[Pane] = field(default_factory=list)
    grid_rows: int = 1
    grid_columns: int = 1

    def to_dict(self) -> TabPayload:
        return {
            "title": self.title,
            "gridRows": self.grid_rows,
            "gridColumns": self.grid_columns,
            "panes": [pane.to_dict() for pane in self.panes],
        }


def full_pane(profile_name: str = "", icon: str = DEFAULT_ICON) -> Pane:
    """First pane of a tab, covering the whole tab."""
    return Pane(profile_name=profile_name, icon=icon, x=0.0, y=0.0, width=1.0, height=1.0)


def split_pane(
    focused: Pane,
    direction: SplitDirection,
    *,
    profile_name: str = "",
    icon: str = DEFAULT_ICON,
) -> Pane:
    """Halve ``focused`` along ``direction`` and return the new half.

    The new pane takes the side named by ``direction``; ``focused`` is
    shrunk in place to the remaining half.
    """
    x, y, width, height = focused.rect()
    new_pane = Pane(
        profile_name=profile_name,
        icon=icon,
        x=x,
        y=y,
        width=width,
        height=height,
        split_direction=direction.value,
    )

    if direction is SplitDirection.LEFT:
        half = width / 2
        new_pane.width = half
        focused.x = x + half
        focused.width = half
    elif direction is SplitDirection.RIGHT:
        half = width / 2
        new_pane.x = x + half
        new_pane.width = half
        focused.width = half
    elif direction is SplitDirection.UP:
        half = height / 2
        new_pane.height = half
        focused.y = y + half
        focused.height = half
    else:
        half = height / 2
        new_pane.y = y + half
        new_pane.height = half
        focused.height = half
    return new_pane
