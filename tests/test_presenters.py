from __future__ import annotations

from pathlib import Path

from ccswitch.models import (
    ActivationResult,
    BackupFileInfo,
    CaptureResult,
    CredentialFormat,
    CredentialSummary,
    DiagnosticsReport,
    Identity,
    LiveCredential,
    ServiceProbe,
    SlotState,
    SlotStatus,
    StatusReport,
)
from ccswitch.presenters import (
    render_activation_result,
    render_capture_result,
    render_diagnostics_lines,
    render_error,
    render_status_lines,
    render_summary_lines,
    render_warning,
)

_JSON_SUMMARY = CredentialSummary(
    format=CredentialFormat.JSON, label="Personal plan", length=52, email="a@x.com"
)
_TOKEN_SUMMARY = CredentialSummary(
    format=CredentialFormat.STRING,
    label="API billing",
    length=23,
    masked_value="sk-ant-a...wxyz",
)


def test_prefixes() -> None:
    assert render_error("boom") == "ERROR: boom"
    assert render_warning("careful") == "WARNING: careful"


def test_summary_lines() -> None:
    assert render_summary_lines(_JSON_SUMMARY) == [
        "  Format: JSON",
        "  Email: a@x.com",
        "  Type: Personal plan",
    ]
    assert render_summary_lines(_TOKEN_SUMMARY) == [
        "  Format: String",
        "  Value: sk-ant-a...wxyz",
        "  Type: API billing",
    ]


def test_status_lines() -> None:
    report = StatusReport(
        account="tester",
        live=LiveCredential(service="Claude Code", summary=_TOKEN_SUMMARY),
        slots=[
            SlotStatus(
                identity=Identity.PERSONAL,
                state=SlotState.UNCONFIGURED,
                service_name="Claude Code-credentials",
                backup_path=Path("/safe/personal.txt"),
            ),
            SlotStatus(
                identity=Identity.API,
                state=SlotState.ACTIVE,
                service_name="Claude Code",
                backup_path=Path("/safe/api.txt"),
                backup=BackupFileInfo(path=Path("/safe/api.txt"), mode=0o600, size_bytes=23),
                summary=_TOKEN_SUMMARY,
            ),
        ],
    )

    lines = render_status_lines(report)

    assert lines[:3] == [
        "=== Current Status ===",
        "Account: tester",
        "Claude Code credentials found in keychain as 'Claude Code'",
    ]
    assert f"Personal auth backup: Not found ({Path('/safe/personal.txt')})" in lines
    assert f"API billing auth backup: {Path('/safe/api.txt')} [active]" in lines
    assert "  Permissions: 600" in lines
    assert "  Size: 23 bytes" in lines
    assert "  Keychain service: 'Claude Code'" in lines
    assert not any(line.startswith("Note: Both slots") for line in lines)


def test_status_lines_with_store_error() -> None:
    report = StatusReport(account="tester", live=None, slots=[], store_error="locked")

    assert "ERROR: locked" in render_status_lines(report)


def test_capture_result_with_duplicate_warning() -> None:
    result = CaptureResult(
        identity=Identity.API,
        source_service="Claude Code-credentials",
        backup_path=Path("/safe/api.txt"),
        summary=_JSON_SUMMARY,
        pinned_service="Claude Code",
        captured_at="2026-03-01T12:30:45.000000Z",
        duplicate_of=Identity.PERSONAL,
    )

    lines = render_capture_result(result)

    assert lines[0] == "Extracted API billing credentials from 'Claude Code-credentials' (52 characters)."
    assert f"Credentials saved to {Path('/safe/api.txt')}" in lines
    assert "Captured at 2026-03-01T12:30:45.000000Z" in lines
    assert "Stored credentials in keychain as 'Claude Code'" in lines
    assert lines[-1].startswith("WARNING: These credentials are identical to the personal backup.")


def test_activation_result_ends_with_restart_note() -> None:
    result = ActivationResult(
        identity=Identity.PERSONAL,
        service_name="Claude Code-credentials",
        backup_path=Path("/safe/personal.txt"),
        summary=_JSON_SUMMARY,
    )

    lines = render_activation_result(result)

    assert "Switched to personal Claude plan authentication" in lines
    assert lines[-1] == "Note: You need to restart Claude Code for changes to take effect."


def test_activation_result_lists_cleared_entries() -> None:
    result = ActivationResult(
        identity=Identity.API,
        service_name="Claude Code",
        backup_path=Path("/safe/api.txt"),
        summary=_JSON_SUMMARY,
        cleared_services=("Claude Code-credentials",),
    )

    lines = render_activation_result(result)

    removed = lines.index("Removed keychain entry 'Claude Code-credentials'")
    assert removed < lines.index("Stored credentials in keychain as 'Claude Code'")
    assert not any(line.startswith("WARNING:") for line in lines)


def test_activation_result_warns_about_shadowing_entry() -> None:
    result = ActivationResult(
        identity=Identity.API,
        service_name="Claude Code",
        backup_path=Path("/safe/api.txt"),
        summary=_JSON_SUMMARY,
        shadowed_by="Claude Code-credentials",
    )

    lines = render_activation_result(result)

    warnings = [line for line in lines if line.startswith("WARNING:")]
    assert len(warnings) == 1
    assert "'Claude Code-credentials' still holds credentials" in warnings[0]
    assert "read before 'Claude Code'" in warnings[0]
    assert lines[-1] == "Note: You need to restart Claude Code for changes to take effect."


def test_diagnostics_lines() -> None:
    report = DiagnosticsReport(
        account="tester",
        backend_name="keyring.backends.macOS.Keyring",
        personal_service_name="Claude Code-credentials",
        api_service_name="Claude Code",
        probes=[
            ServiceProbe(service="Claude Code-credentials", found=True, summary=_JSON_SUMMARY),
            ServiceProbe(service="Claude Code", found=False),
            ServiceProbe(service="legacy", found=False, error="denied"),
        ],
    )

    lines = render_diagnostics_lines(report)

    assert "Keyring backend: keyring.backends.macOS.Keyring" in lines
    assert "  'Claude Code-credentials': found (JSON, 52 characters)" in lines
    assert "  'Claude Code': no credentials" in lines
    assert "  'legacy': ERROR: denied" in lines
