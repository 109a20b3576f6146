from __future__ import annotations

import json
from pathlib import Path

import pytest

from wtlayout.config import AppConfig
from wtlayout.errors import ExitCode, WTLayoutError
from wtlayout.folder import inspect_local_state


def _write(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def _state(*actions: dict[str, object]) -> dict[str, object]:
    return {"persistedWindowLayouts": [{"tabLayout": list(actions)}]}


def test_folder_summary_uses_settings_icons_for_state_files(tmp_path: Path) -> None:
    _write(tmp_path / "settings.json", {"profiles": {"list": [{"name": "pwsh", "icon": "pwsh.png"}]}})
    _write(
        tmp_path / "state.json",
        _state({"action": "newTab", "profile": "pwsh"}, {"action": "splitPane", "split": "down"}),
    )
    _write(tmp_path / "elevated-state.json", _state({"action": "newTab", "profile": "cmd"}))

    summary = inspect_local_state(tmp_path, name="Work", config=AppConfig(default_icon="default.png"))

    assert summary.name == "Work"
    assert [item.file_name for item in summary.files] == [
        "settings.json",
        "state.json",
        "elevated-state.json",
    ]
    settings = summary.file("settings.json")
    assert settings is not None
    assert [profile.name for profile in settings.profiles] == ["pwsh"]
    assert settings.layout is None

    state = summary.file("state.json")
    assert state is not None and state.layout is not None
    assert [pane.icon for pane in state.layout.tabs[0].panes] == ["pwsh.png", "default.png"]
    assert state.layout.tabs[0].grid_rows == 2
    assert summary.last_run == state.last_modified

    elevated = summary.file("elevated-state.json")
    assert elevated is not None and elevated.layout is not None
    assert elevated.layout.tabs[0].panes[0].icon == "default.png"


def test_folder_without_state_has_no_last_run(tmp_path: Path) -> None:
    _write(tmp_path / "elevated-state.json", _state({"action": "newTab"}))

    summary = inspect_local_state(tmp_path)

    assert summary.name == tmp_path.name
    assert summary.last_run is None
    assert len(summary.files) == 1


def test_folder_uses_supplied_icons_without_settings(tmp_path: Path) -> None:
    _write(tmp_path / "state.json", _state({"action": "newTab", "profile": "cmd"}))

    summary = inspect_local_state(tmp_path, profile_icons={"cmd": "cmd.png"}, is_default=True)

    state = summary.file("state.json")
    assert state is not None and state.layout is not None
    assert state.layout.tabs[0].panes[0].icon == "cmd.png"
    assert summary.is_default is True


def test_undecodable_state_is_summarized_without_layout(tmp_path: Path) -> None:
    (tmp_path / "state.json").write_text("{{{", encoding="utf-8")

    summary = inspect_local_state(tmp_path)

    state = summary.file("state.json")
    assert state is not None
    assert state.layout is None
    assert state.size == 3


def test_non_utf8_state_is_summarized_without_layout(tmp_path: Path) -> None:
    (tmp_path / "state.json").write_bytes(b"\xff\xfe\x00garbage")
    (tmp_path / "settings.json").write_bytes(b"\xff")

    summary = inspect_local_state(tmp_path)

    state = summary.file("state.json")
    settings = summary.file("settings.json")
    assert state is not None and state.layout is None
    assert settings is not None and settings.profiles == []
    assert summary.last_run == state.last_modified


def test_folder_respects_configured_action_cap(tmp_path: Path) -> None:
    _write(tmp_path / "state.json", _state(*[{"action": "newTab"} for _ in range(3)]))

    summary = inspect_local_state(tmp_path, config=AppConfig(max_actions=2))

    state = summary.file("state.json")
    assert state is not None
    assert state.layout is None


def test_summary_payload_is_json_serializable(tmp_path: Path) -> None:
    _write(tmp_path / "state.json", _state({"action": "newTab", "tabTitle": "logs"}))

    payload = inspect_local_state(tmp_path).to_dict()
    encoded = json.loads(json.dumps(payload))

    assert encoded["lastRun"] is not None
    assert encoded["files"][0]["layout"]["tabs"][0]["title"] == "logs"


def test_missing_folder_raises_config_error(tmp_path: Path) -> None:
    with pytest.raises(WTLayoutError) as info:
        inspect_local_state(tmp_path / "missing")

    assert info.value.code == ExitCode.CONFIG_ERROR
