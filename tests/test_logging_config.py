from __future__ import annotations

import io
import logging as py_logging
from pathlib import Path

import wtlayout.logging as wtl_logging


def test_default_log_path_is_expanded() -> None:
    path = wtl_logging.default_log_path()

    assert path.is_absolute()
    assert path.name == "wtlayout.log"


def test_warning_alias_maps_to_warning_level() -> None:
    logger = wtl_logging.configure_logging("warning")

    assert logger.level == wtl_logging.LOG_LEVELS["WARN"]


def test_unknown_log_level_falls_back_to_info() -> None:
    logger = wtl_logging.configure_logging("not-a-level")

    assert logger.level == py_logging.INFO


def test_configure_logging_resets_existing_handlers() -> None:
    logger = wtl_logging.configure_logging("INFO")
    assert len(logger.handlers) == 1

    logger = wtl_logging.configure_logging("INFO")

    assert len(logger.handlers) == 1


def test_module_loggers_write_through_package_logger() -> None:
    stream = io.StringIO()
    wtl_logging.configure_logging("DEBUG", stream)

    py_logging.getLogger("wtlayout.layout.replay").debug("replay marker=%s", 1)

    assert "replay marker=1" in stream.getvalue()


def test_configure_logging_adds_debug_file_handler(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "wtlayout.log"

    logger = wtl_logging.configure_logging("ERROR", log_file=log_file)
    file_handlers = [
        handler for handler in logger.handlers if isinstance(handler, py_logging.FileHandler)
    ]

    assert len(file_handlers) == 1
    assert file_handlers[0].level == py_logging.DEBUG
    assert log_file.exists()


def test_configure_logging_ignores_file_handler_oserror(monkeypatch, tmp_path: Path) -> None:
    def raise_os_error(*args: object, **kwargs: object) -> py_logging.Handler:
        raise OSError("disk full")

    monkeypatch.setattr(wtl_logging.py_logging, "FileHandler", raise_os_error)

    logger = wtl_logging.configure_logging("INFO", log_file=tmp_path / "nope" / "wtlayout.log")

    assert len(logger.handlers) == 1
    assert type(logger.handlers[0]) is py_logging.StreamHandler


def test_level_table_uses_normalized_names() -> None:
    assert set(wtl_logging.LOG_LEVELS) == {"DEBUG", "INFO", "WARN", "ERROR"}
    assert all(wtl_logging.normalize_level(name) == name for name in wtl_logging.LOG_LEVELS)
    assert wtl_logging.normalize_level(" Warning ") == "WARN"
