"""Public CLI contract and entrypoint."""

from __future__ import annotations

import argparse
import json
import logging as py_logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from pydantic import ValidationError

from .config import MAX_ACTIONS_LIMIT, MAX_TOLERANCE, AppConfig, load_config
from .errors import ExitCode, WTLayoutError, user_facing_error
from .folder import inspect_local_state
from .logging import configure_logging, default_log_path, normalize_level
from .settings import SETTINGS_FILE_NAME, load_profile_icons
from .state import parse_state_file

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")


def _log_level_type(value: str) -> str:
    normalized = normalize_level(value)
    if normalized not in _VALID_LOG_LEVELS:
        accepted = ", ".join(_VALID_LOG_LEVELS)
        raise argparse.ArgumentTypeError(f"--log-level must be one of: {accepted}")
    return normalized


def _max_actions_type(value: str) -> int:
    try:
        count = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("--max-actions must be an integer") from exc
    if count < 1 or count > MAX_ACTIONS_LIMIT:
        raise argparse.ArgumentTypeError(f"--max-actions must be between 1 and {MAX_ACTIONS_LIMIT}")
    return count


def _tolerance_type(value: str) -> float:
    try:
        tolerance = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("--tolerance must be a number") from exc
    if not 0 < tolerance <= MAX_TOLERANCE:
        raise argparse.ArgumentTypeError(f"--tolerance must be in (0, {MAX_TOLERANCE}]")
    return tolerance


def _indent_type(value: str) -> int:
    try:
        indent = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("--indent must be an integer") from exc
    if indent < 0:
        raise argparse.ArgumentTypeError("--indent cannot be negative")
    return indent


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wtlayout",
        description="Print the pane grid stored in a Windows Terminal state file or LocalState folder.",
    )
    parser.add_argument("path", type=Path, help="state.json / elevated-state.json file or LocalState folder")
    parser.add_argument("--settings", type=Path, default=None, help="settings.json used for profile icons")
    parser.add_argument("--config", type=Path, default=None)
    parser.add_argument("--max-actions", type=_max_actions_type, default=None)
    parser.add_argument("--tolerance", type=_tolerance_type, default=None)
    parser.add_argument("--indent", type=_indent_type, default=2)
    parser.add_argument("--log-level", type=_log_level_type, default=None)
    parser.add_argument("--log-file", type=Path, default=None)
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    return parser.parse_args(argv)


def resolve_config(namespace: argparse.Namespace) -> AppConfig:
    config = load_config(namespace.config)
    try:
        if namespace.max_actions is not None:
            config.max_actions = namespace.max_actions
        if namespace.tolerance is not None:
            config.grid_tolerance = namespace.tolerance
        if namespace.settings is not None:
            config.settings_path = str(namespace.settings)
        if namespace.log_level is not None:
            config.log_level = namespace.log_level
    except ValidationError as exc:
        raise WTLayoutError(
            "Invalid configuration override.",
            code=ExitCode.CONFIG_ERROR,
            hint=str(exc.errors()[0].get("msg", "")),
        ) from exc
    return config


def _profile_icons(config: AppConfig, default_settings: Path | None) -> dict[str, str] | None:
    if config.settings_path:
        return load_profile_icons(Path(config.settings_path).expanduser(), config.default_icon)
    if default_settings is None:
        return None
    return load_profile_icons(default_settings, config.default_icon)


def run_cli_flow(namespace: argparse.Namespace, config: AppConfig) -> dict[str, object]:
    target: Path = namespace.path.expanduser()
    if target.is_dir():
        icons = _profile_icons(config, None)
        return inspect_local_state(target, config=config, profile_icons=icons).to_dict()

    if not target.is_file():
        raise WTLayoutError(
            f"Path not found: {target}",
            code=ExitCode.INVALID_ARGS,
            hint="Pass a state.json file or a LocalState folder.",
        )
    layout = parse_state_file(
        target,
        _profile_icons(config, target.parent / SETTINGS_FILE_NAME),
        max_actions=config.max_actions,
        tolerance=config.grid_tolerance,
        default_icon=config.default_icon,
    )
    if layout is None:
        raise WTLayoutError(
            f"No window layout found in {target.name}",
            code=ExitCode.NO_LAYOUT,
            hint="The file must be a *state.json with a non-empty persistedWindowLayouts[0].tabLayout.",
        )
    return layout.to_dict()


def main(argv: Sequence[str] | None = None, *, stdout: TextIO | None = None) -> int:
    log_path = default_log_path()
    logger = configure_logging(log_file=log_path)
    parser = build_parser()
    try:
        namespace = parser.parse_args(argv)
    except SystemExit as exc:
        if exc.code not in (None, 0):
            logger.warning("Argument parsing failed with exit code %s", exc.code)
        return int(exc.code or 0)

    if namespace.log_file is not None:
        log_path = namespace.log_file.expanduser()

    try:
        config = resolve_config(namespace)
        logger = configure_logging(level=config.log_level, log_file=log_path)
        logger.debug("Starting CLI flow path=%s", namespace.path)
        payload = run_cli_flow(namespace, config)
        print(json.dumps(payload, indent=namespace.indent or None), file=stdout or sys.stdout)
        return int(ExitCode.SUCCESS)
    except WTLayoutError as exc:
        logger.error(
            "Handled WTLayoutError (code=%s): %s",
            int(exc.code),
            exc.message,
            exc_info=logger.isEnabledFor(py_logging.DEBUG),
        )
        print(user_facing_error(exc.message, hint=exc.hint), file=sys.stderr)
        return int(exc.code)
    except Exception:
        logger.exception("Unhandled exception in CLI entrypoint")
        print(
            user_facing_error("Unexpected runtime failure", hint=f"Inspect logs: {log_path}"),
            file=sys.stderr,
        )
        return int(ExitCode.RUNTIME_ERROR)


def run(argv: Sequence[str] | None = None) -> int:
    return main(argv)
