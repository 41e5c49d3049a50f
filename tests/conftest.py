"""Pytest configuration and fixtures for ccswitch tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

import ccswitch.secret_store as secret_store
from ccswitch.config import SwitcherConfig
from ccswitch.secret_store import KeyringSecretStore
from ccswitch.slot_manager import SlotManager
from tests.test_helpers import ACCOUNT, API_SERVICE, PERSONAL_SERVICE, FakeKeyring


@pytest.fixture(autouse=True)
def _restore_logging():
    """Undo setup_logging() side effects between tests."""
    yield
    logging.disable(logging.NOTSET)
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()


@pytest.fixture
def fake_keyring(monkeypatch: pytest.MonkeyPatch) -> FakeKeyring:
    fake = FakeKeyring()
    monkeypatch.setattr(secret_store, "keyring", fake)
    return fake


@pytest.fixture
def store(fake_keyring: FakeKeyring) -> KeyringSecretStore:
    return KeyringSecretStore()


@pytest.fixture
def backup_dir(tmp_path: Path) -> Path:
    return tmp_path / "auth-switcher"


@pytest.fixture
def config(backup_dir: Path) -> SwitcherConfig:
    return SwitcherConfig(
        personal_service_name=PERSONAL_SERVICE,
        api_service_name=API_SERVICE,
        personal_backup_path=backup_dir / "personal.txt",
        api_backup_path=backup_dir / "api.txt",
        account=ACCOUNT,
    )


@pytest.fixture
def manager(config: SwitcherConfig, store: KeyringSecretStore) -> SlotManager:
    return SlotManager(config, store)
