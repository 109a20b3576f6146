"""Current-tab and focused-pane bookkeeping for a single replay."""

from __future__ import annotations

from dataclasses import dataclass, field

from wtlayout.layout.geometry import Pane, Tab


@dataclass
class ReplayContext:
    tabs: list[Tab] = field(default_factory=list)
    current_tab: Tab | None = None
    focused_pane: Pane | None = None

    def open_tab(self, tab: Tab) -> None:
        self.tabs.append(tab)
        self.current_tab = tab
        self.focused_pane = tab.panes[0] if tab.panes else None

    def focused_index(self) -> int:
        """Position of the focused pane in the current tab, ``-1`` when absent."""
        if self.current_tab is None or self.focused_pane is None:
            return -1
        for index, pane in enumerate(self.current_tab.panes):
            if pane is self.focused_pane:
                return index
        return -1

    def focus(self, index: int) -> bool:
        if self.current_tab is None:
            return False
        if index < 0 or index >= len(self.current_tab.panes):
            return False
        self.focused_pane = self.current_tab.panes[index]
        return True

    def switch_to(self, index: int) -> bool:
        if index < 0 or index >= len(self.tabs):
            return False
        self.current_tab = self.tabs[index]
        if self.current_tab.panes:
            self.focused_pane = self.current_tab.panes[0]
        return True
