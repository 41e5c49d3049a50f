"""Switch Claude Code between personal-plan and API-billing credentials."""

__version__ = "0.1.0"
