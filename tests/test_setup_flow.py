from __future__ import annotations

import pytest

import ccswitch.prompts as prompts
from ccswitch.backup_files import read_backup
from ccswitch.config import SwitcherConfig
from ccswitch.setup_flow import run_setup
from ccswitch.slot_manager import SlotManager
from tests.test_helpers import (
    ACCOUNT,
    API_BLOB,
    API_SERVICE,
    PERSONAL_BLOB,
    PERSONAL_SERVICE,
    FakeKeyring,
)


def test_setup_captures_both_identities(
    manager: SlotManager,
    fake_keyring: FakeKeyring,
    config: SwitcherConfig,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    fake_keyring.entries[(PERSONAL_SERVICE, ACCOUNT)] = PERSONAL_BLOB
    prompts_seen: list[int] = []

    def fake_prompt(message: str) -> str:
        prompts_seen.append(len(prompts_seen))
        if len(prompts_seen) == 2:
            # The user runs /login with a Console account before pressing Enter.
            fake_keyring.entries[(PERSONAL_SERVICE, ACCOUNT)] = API_BLOB
        return ""

    monkeypatch.setattr(prompts, "pt_prompt", fake_prompt)

    assert run_setup(manager) is True

    out = capsys.readouterr().out
    assert read_backup(config.personal_backup_path) == PERSONAL_BLOB
    assert read_backup(config.api_backup_path) == API_BLOB
    assert fake_keyring.entries[(API_SERVICE, ACCOUNT)] == API_BLOB
    assert "Step 1:" in out
    assert "Step 2:" in out
    assert "Type: Personal plan" in out
    assert "Value: sk-ant-a...wxyz" in out
    assert "Setup complete!" in out


def test_setup_aborts_when_personal_capture_fails(
    manager: SlotManager,
    config: SwitcherConfig,
    fake_keyring: FakeKeyring,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setattr(prompts, "pt_prompt", lambda message: "")

    assert run_setup(manager) is False

    out = capsys.readouterr().out
    assert "Could not extract personal credentials" in out
    assert "Failed to set up personal credentials. Aborting setup." in out
    assert "Step 2:" not in out
    assert not config.personal_backup_path.exists()


def test_setup_reports_partial_success(
    manager: SlotManager,
    fake_keyring: FakeKeyring,
    config: SwitcherConfig,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    fake_keyring.entries[(PERSONAL_SERVICE, ACCOUNT)] = PERSONAL_BLOB
    calls: list[str] = []

    def fake_prompt(message: str) -> str:
        calls.append(message)
        if len(calls) == 2:
            fake_keyring.entries.clear()
        return ""

    monkeypatch.setattr(prompts, "pt_prompt", fake_prompt)

    assert run_setup(manager) is False

    out = capsys.readouterr().out
    assert read_backup(config.personal_backup_path) == PERSONAL_BLOB
    assert "Personal auth was saved, but API setup is incomplete." in out
    assert not config.api_backup_path.exists()


def test_setup_can_be_canceled(
    manager: SlotManager,
    fake_keyring: FakeKeyring,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    def fake_prompt(message: str) -> str:
        raise KeyboardInterrupt

    monkeypatch.setattr(prompts, "pt_prompt", fake_prompt)

    assert run_setup(manager) is False
    assert "Setup canceled." in capsys.readouterr().out
