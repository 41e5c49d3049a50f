"""CLI entry and startup wiring."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import NoReturn

from .commands import execute, normalize_command
from .config import load_config
from .constants import APP_NAME
from .errors import SwitcherError
from .logging_utils import log_event, setup_logging
from .path_mapping import map_path
from .presenters import render_error
from .repl import run_repl
from .slot_manager import SlotManager

_EPILOG = """\
commands:
  setup        capture personal auth, then API billing auth
  personal, p  switch to personal authentication
  api, a       switch to API billing authentication
  status       show keychain and backup status
  test         test keychain access (troubleshooting)
  (none)       interactive menu
"""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{render_error(message)}\n")


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    started = time.perf_counter()

    command: str | None = None
    if args.command is not None:
        command = normalize_command(args.command)
        if command is None:
            print(render_error(f"Unknown command: {args.command}"), file=sys.stderr)
            parser.print_usage(sys.stderr)
            return 1

    try:
        config_path = _resolve_path(args.config)
        config = load_config(config_path)
        log_file = _resolve_path(args.log) or config.log_file
        setup_logging(log_file)
    except (SwitcherError, OSError) as exc:
        print(render_error(str(exc)), file=sys.stderr)
        return 1

    log_event(
        "app_start",
        command=command or "menu",
        account=config.account,
        config_file=str(config_path) if config_path else None,
        log_file=str(log_file) if log_file else None,
    )

    manager = SlotManager(config)
    try:
        if command is None:
            exit_code = run_repl(manager)
        else:
            exit_code = execute(manager, command)
    except KeyboardInterrupt:
        print()
        print("Interrupted.")
        exit_code = 1

    log_event(
        "app_stop",
        level=logging.INFO if exit_code == 0 else logging.WARNING,
        command=command or "menu",
        exit_code=exit_code,
        uptime_ms=round((time.perf_counter() - started) * 1000, 1),
    )
    return exit_code


def _resolve_path(raw: str | None) -> Path | None:
    if raw is None:
        return None
    return map_path(raw, base_dir=Path.cwd())


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=APP_NAME,
        description="Switch Claude Code between personal and API billing authentication.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        help="Path to a JSON config file (default: ~/.claude-code-auth-switcher/config.json).",
    )
    parser.add_argument(
        "--log",
        help="Path to a log file. Logging is off unless this or log_file in the config is set.",
    )
    parser.add_argument(
        "command",
        nargs="?",
        help="setup | personal | p | api | a | status | test",
    )
    return parser
