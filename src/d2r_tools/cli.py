#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
d2r-tools command line entry

Commands:
- apply: compile a settings profile into the game's locale files
- load: read the settings back from the game's locale files into a profile
- highlights: show which rune highlight files are active on disk
- config: show or change the stored configuration

Usage:
    d2r-tools apply profile.json --home "C:/Games/Diablo II Resurrected"
    d2r-tools load current.json --profile profile.json
    d2r-tools highlights profile.json
    d2r-tools config home_directory "C:/Games/Diablo II Resurrected"
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Optional

from .core.orchestrator import ApplyAllOrchestrator
from .core.settings import AppSettings
from .utils.common import SUPPORTED_LOCALES
from .utils.config import CONFIG_KEYS, ConfigManager, get_config
from .utils.logger import (
    ConfigurationError,
    D2RToolsError,
    FileOperationError,
    log_exceptions,
    setup_logger,
)
from .utils.ui import (
    LOADED_TITLE,
    StatusMessage,
    error_title,
    show_config,
    show_highlight_states,
)


@log_exceptions()
def load_profile(path: Path) -> AppSettings:
    """Load an exported profile (or a bare settings tree) from JSON."""
    try:
        data = json.loads(path.read_text(encoding='utf-8-sig'))
    except OSError as e:
        raise ConfigurationError(f"Cannot read profile {path}: {e}", config_key="profile") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Malformed profile {path}: {e}", config_key="profile") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Profile {path} is not a JSON object", config_key="profile")
    return AppSettings.from_dict(data)


def save_profile(path: Path, settings: AppSettings) -> None:
    """Write ``settings`` as an exported profile."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps({"settings": settings.to_dict()}, indent=2, ensure_ascii=False),
            encoding='utf-8',
        )
    except OSError as e:
        raise FileOperationError(f"Cannot write profile {path}: {e}", file_path=path) from e


def parse_config_value(raw: str) -> Any:
    """JSON value when ``raw`` parses as one (numbers, lists, null), else the string."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="d2r-tools",
        description="Diablo II: Resurrected loot filter compiler",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  d2r-tools apply profile.json --home "D:/Games/Diablo II Resurrected"
  d2r-tools apply profile.json --locales enUS deDE
  d2r-tools load current.json --profile profile.json
  d2r-tools highlights profile.json
  d2r-tools config selected_locales '["enUS", "deDE"]'
""",
    )
    parser.add_argument("--config", type=Path, help="Config file (default: ~/.d2r-tools/config.json)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command")
    locales_help = f"Locales to use ({', '.join(SUPPORTED_LOCALES)})"

    apply_parser = sub.add_parser("apply", help="Write the profile into the game's locale files")
    apply_parser.add_argument("profile", type=Path, help="Profile JSON")
    apply_parser.add_argument("--home", help="Game install directory (or the D2R.exe path)")
    apply_parser.add_argument("--locales", nargs="+", choices=SUPPORTED_LOCALES, metavar="LOCALE",
                              help=locales_help)

    load_parser = sub.add_parser("load", help="Read the settings back from the game's locale files")
    load_parser.add_argument("output", type=Path, help="Profile JSON to write")
    load_parser.add_argument("--profile", type=Path, help="Profile supplying what the files do not hold")
    load_parser.add_argument("--home", help="Game install directory")
    load_parser.add_argument("--locales", nargs="+", choices=SUPPORTED_LOCALES, metavar="LOCALE",
                             help=locales_help)

    highlight_parser = sub.add_parser("highlights", help="Show rune highlight state on disk")
    highlight_parser.add_argument("profile", type=Path, nargs="?", help="Profile JSON, limits the runes listed")
    highlight_parser.add_argument("--home", help="Game install directory")

    config_parser = sub.add_parser("config", help="Show or change the configuration")
    config_parser.add_argument("key", nargs="?", choices=sorted(CONFIG_KEYS), metavar="KEY",
                               help="Config key; all keys are listed when omitted")
    config_parser.add_argument("value", nargs="?", help="New value (JSON or plain text)")

    return parser


def run_apply(args: argparse.Namespace, manager: ConfigManager) -> int:
    settings = load_profile(args.profile)
    orchestrator = ApplyAllOrchestrator(config=manager.config)
    report = orchestrator.apply_all(settings, args.locales, args.home)

    names = ", ".join(path.name for path in report.files_written) or "no locale files changed"
    StatusMessage.success(
        f"{names}; {len(report.highlight_files)} highlight files; {report.updates} fields updated"
    )
    return 0


def run_load(args: argparse.Namespace, manager: ConfigManager) -> int:
    current = load_profile(args.profile) if args.profile is not None else None
    orchestrator = ApplyAllOrchestrator(config=manager.config)
    settings = orchestrator.load_all(current, args.locales, args.home)
    save_profile(args.output, settings)

    StatusMessage.success(
        f"{len(settings.runes)} runes, {len(settings.gems)} gem groups, "
        f"{len(settings.common)} common items, {len(settings.items.items)} item bases -> {args.output}",
        title=LOADED_TITLE,
    )
    return 0


def run_highlights(args: argparse.Namespace, manager: ConfigManager) -> int:
    runes = None
    if args.profile is not None:
        runes = list(load_profile(args.profile).runes)
    orchestrator = ApplyAllOrchestrator(config=manager.config)
    states = orchestrator.read_highlight_states(runes, args.home)

    if not states:
        StatusMessage.warning("No rune highlight files found")
        return 0
    show_highlight_states(states)
    return 0


def run_config(args: argparse.Namespace, manager: ConfigManager) -> int:
    if args.key is None:
        show_config(asdict(manager.config))
        return 0
    if args.value is None:
        show_config({args.key: manager.get(args.key)})
        return 0

    manager.set(args.key, parse_config_value(args.value))
    StatusMessage.success(f"{args.key} = {manager.get(args.key)!r}", title="Config saved")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point; returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    manager = ConfigManager(args.config) if args.config else get_config()
    log_file = Path(manager.config.log_file) if manager.config.log_file else None
    setup_logger(level=logging.DEBUG if args.verbose else logging.INFO, log_file=log_file)

    commands = {
        "apply": run_apply,
        "load": run_load,
        "highlights": run_highlights,
        "config": run_config,
    }
    try:
        return commands[args.command](args, manager)
    except D2RToolsError as e:
        StatusMessage.error(str(e), title=error_title(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
