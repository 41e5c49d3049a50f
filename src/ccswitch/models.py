"""Dataclasses and enums shared across ccswitch layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any


class Identity(StrEnum):
    PERSONAL = "personal"
    API = "api"

    @property
    def display_name(self) -> str:
        if self is Identity.PERSONAL:
            return "personal"
        return "API billing"


class SlotState(StrEnum):
    UNCONFIGURED = "unconfigured"
    BACKED_UP = "backed_up"
    ACTIVE = "active"


class CredentialFormat(StrEnum):
    JSON = "JSON"
    STRING = "String"


@dataclass(frozen=True)
class StructuredCredential:
    """A blob that parses as a JSON object."""

    raw: str
    data: dict[str, Any] = field(repr=False)

    @property
    def format(self) -> CredentialFormat:
        return CredentialFormat.JSON


@dataclass(frozen=True)
class OpaqueToken:
    """Any blob that is not a JSON object, such as a bare API key."""

    raw: str = field(repr=False)

    @property
    def format(self) -> CredentialFormat:
        return CredentialFormat.STRING


CredentialBlob = StructuredCredential | OpaqueToken


@dataclass(frozen=True)
class CredentialSummary:
    """Display-only view of a blob. Never carries the full secret."""

    format: CredentialFormat
    label: str
    length: int
    email: str | None = None
    masked_value: str | None = None


@dataclass(frozen=True)
class BackupFileInfo:
    path: Path
    mode: int
    size_bytes: int

    @property
    def mode_octal(self) -> str:
        return f"{self.mode:o}"


@dataclass(frozen=True)
class LiveCredential:
    service: str
    summary: CredentialSummary


@dataclass(frozen=True)
class SlotStatus:
    identity: Identity
    state: SlotState
    service_name: str
    backup_path: Path
    backup: BackupFileInfo | None = None
    summary: CredentialSummary | None = None
    error: str | None = None


@dataclass(frozen=True)
class StatusReport:
    account: str
    live: LiveCredential | None
    slots: list[SlotStatus]
    store_error: str | None = None


@dataclass(frozen=True)
class CaptureResult:
    identity: Identity
    source_service: str
    backup_path: Path
    summary: CredentialSummary
    pinned_service: str | None
    captured_at: str
    duplicate_of: Identity | None = None


@dataclass(frozen=True)
class ActivationResult:
    identity: Identity
    service_name: str
    backup_path: Path
    summary: CredentialSummary
    unwrapped_legacy_envelope: bool = False
    # Other service entries removed before the insert.
    cleared_services: tuple[str, ...] = ()
    # A service that probe order reads before the activated one.
    shadowed_by: str | None = None


@dataclass(frozen=True)
class ServiceProbe:
    service: str
    found: bool
    summary: CredentialSummary | None = None
    error: str | None = None


@dataclass(frozen=True)
class DiagnosticsReport:
    account: str
    backend_name: str
    personal_service_name: str
    api_service_name: str
    probes: list[ServiceProbe]
