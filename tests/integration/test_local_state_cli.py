from __future__ import annotations

import json
from pathlib import Path

from wtlayout import cli

_STATE = """
{
    "persistedWindowLayouts": [
        {
            "initialPosition": "100,100",
            "launchMode": "default",
            "tabLayout": [
                { "action": "newTab", "profile": "Windows PowerShell", "startingDirectory": "C:\\\\src", "tabTitle": "dev", },
                { "action": "splitPane", "profile": "Ubuntu", "split": "right", "size": 0.5 },
                { "action": "splitPane", "profile": "Command Prompt", "split": "down", "size": 0.5 },
                { "action": "moveFocus", "direction": "previousInOrder" },
                { "action": "splitPane", "profile": "Ubuntu", "split": "up", "size": 0.5 },
                { "action": "newTab", "profile": "Command Prompt" },
                { "action": "switchToTab", "index": 0 },
                { "action": "closeOtherPanes" },
            ],
        },
    ],
}
"""

_SETTINGS = """
{
    // profiles shown in the tooltip
    "profiles": {
        "list": [
            { "name": "Windows PowerShell", "icon": "ms-appx:///ProfileIcons/powershell.png" },
            { "name": "Ubuntu", "icon": "ubuntu.png", "source": "Windows.Terminal.Wsl" },
            { "name": "Azure Cloud Shell", "hidden": true },
        ],
    },
}
"""


def test_folder_with_real_world_state(tmp_path: Path, capsys) -> None:
    (tmp_path / "settings.json").write_text(_SETTINGS, encoding="utf-8")
    (tmp_path / "state.json").write_text(_STATE, encoding="utf-8")

    code = cli.main([str(tmp_path), "--config", str(tmp_path / "config.toml")])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    state = next(item for item in payload["files"] if item["fileName"] == "state.json")
    first, second = state["layout"]["tabs"]

    assert first["title"] == "dev"
    assert (first["gridRows"], first["gridColumns"]) == (3, 2)
    placements = [
        (pane["profileName"], pane["gridRow"], pane["gridColumn"], pane["gridRowSpan"], pane["gridColumnSpan"])
        for pane in first["panes"]
    ]
    assert placements == [
        ("Windows PowerShell", 0, 0, 3, 1),
        ("Ubuntu", 1, 1, 1, 1),
        ("Command Prompt", 2, 1, 1, 1),
        ("Ubuntu", 0, 1, 1, 1),
    ]
    assert [pane["iconRef"] for pane in first["panes"]] == [
        "ms-appx:///ProfileIcons/powershell.png",
        "ubuntu.png",
        "unknown",
        "ubuntu.png",
    ]
    assert second["panes"][0]["profileName"] == "Command Prompt"
