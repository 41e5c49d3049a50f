"""Guided two-step capture of the personal and API billing credentials."""

from __future__ import annotations

import logging

from .constants import CLIENT_APP_NAME
from .errors import SwitcherError
from .logging_utils import log_event
from .models import Identity
from .presenters import render_capture_result, render_error
from .prompts import read_line
from .slot_manager import SlotManager

_PERSONAL_INSTRUCTIONS = (
    "Step 1: Backing up personal Claude plan authentication",
    "",
    "Please make sure that you are signed in with your PERSONAL Claude plan "
    "and then press Enter.",
)
_API_INSTRUCTIONS = (
    "Step 2: Setting up API billing authentication",
    "",
    "Now you need to switch to API billing:",
    f"1. In {CLIENT_APP_NAME}, type /login, choose Anthropic Console Account "
    "and finish setting up API billing",
    "2. MAKE SURE YOU ARE SIGNED IN WITH API BILLING, then press Enter here",
)


def run_setup(manager: SlotManager) -> bool:
    """Capture both identities in order. Returns True when both succeed."""
    print("=== Setup Process ===")
    print()

    if not _capture_step(manager, Identity.PERSONAL, _PERSONAL_INSTRUCTIONS):
        print(
            render_error(
                "Failed to set up personal credentials. Aborting setup. "
                "Run setup again once the problem is fixed."
            )
        )
        return False

    print()
    if not _capture_step(manager, Identity.API, _API_INSTRUCTIONS):
        print(
            render_error(
                "Personal auth was saved, but API setup is incomplete. "
                "Run setup again from the start."
            )
        )
        return False

    print()
    print("Setup complete! You can now switch between personal and API billing auth.")
    return True


def _capture_step(
    manager: SlotManager, identity: Identity, instructions: tuple[str, ...]
) -> bool:
    for line in instructions:
        print(line)
    if read_line("") is None:
        print("Setup canceled.")
        return False

    print(f"Extracting {identity.display_name} credentials...")
    try:
        result = manager.capture_identity(identity)
    except SwitcherError as exc:
        log_event(
            "command_error",
            level=logging.ERROR,
            command=f"setup:{identity.value}",
            error_type=type(exc).__name__,
            error=str(exc),
        )
        print(render_error(str(exc)))
        return False

    for line in render_capture_result(result):
        print(line)
    return True
