"""Terminal input helpers."""

from __future__ import annotations

from prompt_toolkit import prompt as pt_prompt


def read_line(prompt: str) -> str | None:
    """Read one line; None on EOF or Ctrl-C."""
    try:
        return pt_prompt(prompt)
    except (EOFError, KeyboardInterrupt):
        return None
