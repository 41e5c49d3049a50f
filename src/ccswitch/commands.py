"""Command dispatch shared by the one-shot CLI and the interactive menu."""

from __future__ import annotations

import logging

from .constants import (
    COMMAND_ALIASES,
    COMMAND_API,
    COMMAND_PERSONAL,
    COMMAND_SETUP,
    COMMAND_STATUS,
    COMMAND_TEST,
    COMMANDS,
)
from .errors import SwitcherError
from .logging_utils import log_event
from .models import Identity
from .presenters import (
    render_activation_result,
    render_diagnostics_lines,
    render_error,
    render_status_lines,
)
from .setup_flow import run_setup
from .slot_manager import SlotManager


def normalize_command(raw: str) -> str | None:
    """Resolve aliases; None for unknown commands."""
    command = raw.strip().lower()
    command = COMMAND_ALIASES.get(command, command)
    return command if command in COMMANDS else None


def execute(manager: SlotManager, command: str) -> int:
    """Run one command and return its exit code (0 ok, 1 error)."""
    try:
        if command == COMMAND_SETUP:
            return 0 if run_setup(manager) else 1
        if command == COMMAND_PERSONAL:
            _switch(manager, Identity.PERSONAL)
            return 0
        if command == COMMAND_API:
            _switch(manager, Identity.API)
            return 0
        if command == COMMAND_STATUS:
            report = manager.report_status()
            _print_lines(render_status_lines(report))
            return 1 if report.store_error is not None else 0
        if command == COMMAND_TEST:
            _print_lines(render_diagnostics_lines(manager.diagnose()))
            return 0
    except SwitcherError as exc:
        log_event(
            "command_error",
            level=logging.ERROR,
            command=command,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        print(render_error(str(exc)))
        return 1

    print(render_error(f"Unknown command: {command}"))
    return 1


def _switch(manager: SlotManager, identity: Identity) -> None:
    print(f"Switching to {identity.display_name} authentication...")
    _print_lines(render_activation_result(manager.activate_identity(identity)))


def _print_lines(lines: list[str]) -> None:
    for line in lines:
        print(line)
