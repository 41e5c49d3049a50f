"""User-facing text rendering."""

from __future__ import annotations

from . import __version__
from .constants import CLIENT_APP_NAME
from .models import (
    ActivationResult,
    CaptureResult,
    CredentialSummary,
    DiagnosticsReport,
    Identity,
    SlotState,
    SlotStatus,
    StatusReport,
)

_MAIN_MENU_TEXT = "\n".join(
    (
        "Choose an option:",
        "1. Setup (backup personal auth + setup API billing auth)",
        "2. Switch to personal authentication",
        "3. Switch to API billing authentication",
        "4. Show status",
        "5. Test keychain access (troubleshooting)",
        "6. Exit",
    )
)
_WARNING_PREFIX = "WARNING:"
_ERROR_PREFIX = "ERROR:"
_INDENT = "  "

_STATE_TEXT = {
    SlotState.UNCONFIGURED: "not configured",
    SlotState.BACKED_UP: "backed up",
    SlotState.ACTIVE: "active",
}


def render_app_banner() -> str:
    return f"=== {CLIENT_APP_NAME} Authentication Switcher ({__version__}) ==="


def render_main_menu() -> str:
    return _MAIN_MENU_TEXT


def render_error(message: str) -> str:
    return f"{_ERROR_PREFIX} {message}"


def render_warning(message: str) -> str:
    return f"{_WARNING_PREFIX} {message}"


def render_restart_note() -> str:
    return f"Note: You need to restart {CLIENT_APP_NAME} for changes to take effect."


def render_summary_lines(summary: CredentialSummary) -> list[str]:
    lines = [f"{_INDENT}Format: {summary.format.value}"]
    if summary.email is not None:
        lines.append(f"{_INDENT}Email: {summary.email}")
    if summary.masked_value is not None:
        lines.append(f"{_INDENT}Value: {summary.masked_value}")
    lines.append(f"{_INDENT}Type: {summary.label}")
    return lines


def render_capture_result(result: CaptureResult) -> list[str]:
    name = result.identity.display_name
    lines = [
        f"Extracted {name} credentials from '{result.source_service}' "
        f"({result.summary.length} characters).",
        *render_summary_lines(result.summary),
        f"Credentials saved to {result.backup_path}",
        f"Captured at {result.captured_at}",
    ]
    if result.pinned_service is not None:
        lines.append(f"Stored credentials in keychain as '{result.pinned_service}'")
    if result.duplicate_of is not None:
        lines.append(
            render_warning(
                f"These credentials are identical to the {result.duplicate_of.display_name} "
                f"backup. Make sure you signed in with the {name} account."
            )
        )
    return lines


def render_activation_result(result: ActivationResult) -> list[str]:
    lines = [f"Credentials restored from {result.backup_path}"]
    for service in result.cleared_services:
        lines.append(f"Removed keychain entry '{service}'")
    lines.append(f"Stored credentials in keychain as '{result.service_name}'")
    if result.unwrapped_legacy_envelope:
        lines.append("Unwrapped API key from an older backup format.")
    if result.shadowed_by is not None:
        lines.append(
            render_warning(
                f"'{result.shadowed_by}' still holds credentials and is read before "
                f"'{result.service_name}'. {CLIENT_APP_NAME} may keep using them. "
                "Enable exclusive_activation or remove that entry."
            )
        )
    lines.append(f"Switched to {_switch_target(result)} authentication")
    lines.append(render_restart_note())
    return lines


def render_status_lines(report: StatusReport) -> list[str]:
    lines = ["=== Current Status ===", f"Account: {report.account}"]

    if report.store_error is not None:
        lines.append(render_error(report.store_error))
    elif report.live is None:
        lines.append(f"No {CLIENT_APP_NAME} credentials in keychain")
    else:
        lines.append(
            f"{CLIENT_APP_NAME} credentials found in keychain as '{report.live.service}'"
        )
        lines.extend(render_summary_lines(report.live.summary))

    lines.append("")
    for slot in report.slots:
        lines.extend(_render_slot_lines(slot))

    if all(slot.state is SlotState.ACTIVE for slot in report.slots):
        lines.append("")
        lines.append(
            f"Note: Both slots are present in the keychain. {CLIENT_APP_NAME} "
            "decides which service name it reads."
        )
    return lines


def render_diagnostics_lines(report: DiagnosticsReport) -> list[str]:
    lines = [
        "=== Keychain Test ===",
        f"Current user: {report.account}",
        f"Keyring backend: {report.backend_name}",
        f"Personal service name: '{report.personal_service_name}'",
        f"API service name: '{report.api_service_name}'",
        "Service lookups:",
    ]
    for probe in report.probes:
        if probe.error is not None:
            lines.append(f"{_INDENT}'{probe.service}': {render_error(probe.error)}")
        elif probe.found and probe.summary is not None:
            lines.append(
                f"{_INDENT}'{probe.service}': found "
                f"({probe.summary.format.value}, {probe.summary.length} characters)"
            )
        else:
            lines.append(f"{_INDENT}'{probe.service}': no credentials")
    return lines


def _render_slot_lines(slot: SlotStatus) -> list[str]:
    title = (
        "Personal auth backup"
        if slot.identity is Identity.PERSONAL
        else "API billing auth backup"
    )
    if slot.state is SlotState.UNCONFIGURED:
        return [f"{title}: Not found ({slot.backup_path})"]

    lines = [f"{title}: {slot.backup_path} [{_STATE_TEXT[slot.state]}]"]
    if slot.backup is not None:
        lines.append(f"{_INDENT}Permissions: {slot.backup.mode_octal}")
        lines.append(f"{_INDENT}Size: {slot.backup.size_bytes} bytes")
    if slot.summary is not None:
        lines.extend(render_summary_lines(slot.summary))
    if slot.error is not None:
        lines.append(f"{_INDENT}{render_error(slot.error)}")
    lines.append(f"{_INDENT}Keychain service: '{slot.service_name}'")
    return lines


def _switch_target(result: ActivationResult) -> str:
    if result.identity is Identity.PERSONAL:
        return "personal Claude plan"
    return "API billing"
