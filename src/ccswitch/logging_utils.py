"""Structured logging for ccswitch.

Call sites emit events with ``log_event("capture", identity=..., ...)``; the
payload is a single JSON message which ``StructuredTextFormatter`` renders as a
readable block in the log file. Secret values must never be passed as fields.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

_LOG_PATH_FIELDS = {
    "config_file",
    "log_file",
    "backup_path",
}

EVENT_KEY_ORDER: dict[str, list[str]] = {
    "app_start": ["ts", "level", "command", "account", "config_file", "log_file"],
    "app_stop": ["ts", "level", "command", "reason", "exit_code", "uptime_ms"],
    "store_get": ["ts", "level", "service", "account", "result", "length"],
    "store_set": ["ts", "level", "service", "account", "deleted_prior", "length"],
    "store_delete": ["ts", "level", "service", "account", "result"],
    "store_probe": ["ts", "level", "candidates", "account", "matched_service"],
    "capture": [
        "ts",
        "level",
        "identity",
        "source_service",
        "backup_path",
        "format",
        "length",
        "pinned_service",
        "captured_at",
    ],
    "activate": [
        "ts",
        "level",
        "identity",
        "service",
        "backup_path",
        "format",
        "length",
        "unwrapped_legacy_envelope",
        "cleared_services",
        "shadowed_by",
    ],
    "command_error": ["ts", "level", "command", "error_type", "error"],
}
DEFAULT_EVENT_KEY_ORDER = ["ts", "level"]


def sanitize_error_message(error_msg: str) -> str:
    """Sanitize error messages to remove sensitive information."""
    sanitized = re.sub(r"sk-ant-[A-Za-z0-9_-]{10,}", "[REDACTED_API_KEY]", error_msg)
    sanitized = re.sub(r"sk-[A-Za-z0-9]{10,}", "[REDACTED_API_KEY]", sanitized)
    sanitized = re.sub(
        r"Bearer\s+[A-Za-z0-9_\-\.]{20,}",
        "Bearer [REDACTED_TOKEN]",
        sanitized,
    )
    sanitized = re.sub(
        r"eyJ[A-Za-z0-9_-]+\.eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+",
        "[REDACTED_JWT]",
        sanitized,
    )
    return sanitized


def _to_log_safe(value: Any) -> Any:
    """Convert values to JSON-serializable, log-safe representations."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, dict):
        return {str(k): _to_log_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_to_log_safe(v) for v in value]
    return str(value)


def log_event(event: str, level: int = logging.INFO, **fields: Any) -> None:
    """Emit a structured log event."""
    payload: dict[str, Any] = {
        "ts": datetime.now().astimezone().isoformat(),
        "event": event,
    }
    for key, value in fields.items():
        if key in _LOG_PATH_FIELDS and isinstance(value, str):
            value = str(Path(value).expanduser())
        if key == "error" and isinstance(value, str):
            value = sanitize_error_message(value)
        payload[key] = _to_log_safe(value)
    logging.getLogger("ccswitch").log(
        level, json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    )


class StructuredTextFormatter(logging.Formatter):
    """Format all log records as human-readable structured blocks."""

    @staticmethod
    def _format_value(value: Any) -> str:
        if isinstance(value, list):
            return ", ".join(str(item) for item in value) or "(none)"
        return str(value).replace("\n", "\\n")

    @staticmethod
    def _ordered_keys(event_name: str, data: dict[str, Any]) -> list[str]:
        preferred = EVENT_KEY_ORDER.get(event_name, DEFAULT_EVENT_KEY_ORDER)
        preferred_present = [k for k in preferred if k in data and data[k] is not None]
        remaining = sorted(
            k for k in data.keys() if k not in preferred and data[k] is not None
        )
        return preferred_present + remaining

    def format(self, record: logging.LogRecord) -> str:
        base: dict[str, Any] = {
            "ts_utc": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
        }

        message = record.getMessage()
        parsed = None
        if message.startswith("{") and message.endswith("}"):
            try:
                parsed = json.loads(message)
            except json.JSONDecodeError:
                parsed = None

        if isinstance(parsed, dict):
            base.update(parsed)
        else:
            base["event"] = record.name
            base["message"] = message

        event_name = str(base.pop("event", record.name))
        lines = [f"=== {event_name} ==="]
        for key in self._ordered_keys(event_name, base):
            lines.append(f"{key}: {self._format_value(base[key])}")

        if record.exc_info:
            lines.append("traceback:")
            lines.append(self.formatException(record.exc_info))

        return "\n".join(lines)


def setup_logging(log_file: Path | None = None) -> None:
    """Log to ``log_file`` when given; otherwise keep the terminal quiet."""
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(str(log_file), encoding="utf-8")
        # Blank line after each block.
        handler.terminator = "\n\n"
        handler.setFormatter(StructuredTextFormatter())
        logging.disable(logging.NOTSET)
        logging.basicConfig(level=logging.INFO, handlers=[handler], force=True)
    else:
        logging.disable(logging.CRITICAL)
