"""Interactive menu loop."""

from __future__ import annotations

from .commands import execute
from .constants import (
    COMMAND_API,
    COMMAND_PERSONAL,
    COMMAND_SETUP,
    COMMAND_STATUS,
    COMMAND_TEST,
)
from .presenters import render_app_banner, render_error, render_main_menu
from .prompts import read_line
from .slot_manager import SlotManager

_MENU_CHOICES = {
    "1": COMMAND_SETUP,
    "2": COMMAND_PERSONAL,
    "3": COMMAND_API,
    "4": COMMAND_STATUS,
    "5": COMMAND_TEST,
}
_EXIT_CHOICE = "6"


def run_repl(manager: SlotManager) -> int:
    """Loop until the user exits; a failed action re-prompts instead of exiting."""
    print(render_app_banner())

    while True:
        print()
        print(render_main_menu())
        print()
        choice_raw = read_line("Enter your choice (1-6): ")
        if choice_raw is None:
            print("Goodbye!")
            return 0
        choice = choice_raw.strip()

        if choice == _EXIT_CHOICE:
            print("Goodbye!")
            return 0

        command = _MENU_CHOICES.get(choice)
        if command is None:
            print(render_error("Invalid choice. Please try again."))
            continue

        print()
        execute(manager, command)
