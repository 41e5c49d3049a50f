"""Switcher configuration: service names, backup paths, and account."""

from __future__ import annotations

import getpass
import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo
from pydantic import field_validator, model_validator

from .constants import (
    API_BACKUP_FILENAME,
    DEFAULT_API_SERVICE_NAME,
    DEFAULT_BACKUP_DIR,
    DEFAULT_CONFIG_PATH,
    DEFAULT_PERSONAL_SERVICE_NAME,
    PERSONAL_BACKUP_FILENAME,
)
from .errors import ConfigError, PathMappingError
from .models import Identity
from .path_mapping import map_path


def _default_backup_path(filename: str) -> Path:
    return map_path(f"{DEFAULT_BACKUP_DIR}/{filename}")


class SwitcherConfig(BaseModel):
    """Everything the slot manager needs to address the store and the disk.

    Tests build this directly with temporary paths and fake service names.
    """

    model_config = ConfigDict(extra="forbid")

    personal_service_name: str = DEFAULT_PERSONAL_SERVICE_NAME
    api_service_name: str = DEFAULT_API_SERVICE_NAME
    # Ordered candidates for probe lookups; empty means [personal, api].
    probe_service_names: list[str] = []
    personal_backup_path: Path = Field(
        default_factory=lambda: _default_backup_path(PERSONAL_BACKUP_FILENAME)
    )
    api_backup_path: Path = Field(
        default_factory=lambda: _default_backup_path(API_BACKUP_FILENAME)
    )
    account: str = Field(default_factory=getpass.getuser)
    pin_on_capture: bool = True
    # Activation clears every other known service entry before inserting.
    exclusive_activation: bool = True
    # Unwrap older {"authType", "apiKey", "createdAt", "format": "string"} backups.
    legacy_envelope_backups: bool = False
    log_file: Path | None = None

    @field_validator("personal_backup_path", "api_backup_path", "log_file", mode="before")
    @classmethod
    def _map_path_fields(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None or isinstance(value, Path):
            return value
        if not isinstance(value, str):
            raise ValueError("must be a path string")
        base_dir = (info.context or {}).get("base_dir")
        try:
            return map_path(value, base_dir=base_dir)
        except PathMappingError as exc:
            raise ValueError(str(exc)) from exc

    @field_validator("personal_service_name", "api_service_name", "account")
    @classmethod
    def _require_non_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("probe_service_names")
    @classmethod
    def _validate_probe_names(cls, value: list[str]) -> list[str]:
        if any(not name.strip() for name in value):
            raise ValueError("service names must not be blank")
        if len(set(value)) != len(value):
            raise ValueError("service names must be unique")
        return value

    @model_validator(mode="after")
    def _check_consistency(self) -> SwitcherConfig:
        if self.personal_service_name == self.api_service_name:
            raise ValueError(
                "personal_service_name and api_service_name must differ"
            )
        if self.personal_backup_path == self.api_backup_path:
            raise ValueError(
                "personal_backup_path and api_backup_path must differ"
            )
        home = Path.home().resolve()
        for name in ("personal_backup_path", "api_backup_path"):
            parent = getattr(self, name).parent.resolve()
            if parent == home or parent == Path(parent.anchor):
                raise ValueError(
                    f"{name} must be inside a dedicated directory, not {parent}"
                )
        return self

    @property
    def candidate_services(self) -> list[str]:
        if self.probe_service_names:
            return list(self.probe_service_names)
        return [self.personal_service_name, self.api_service_name]

    def service_name_for(self, identity: Identity) -> str:
        if identity is Identity.PERSONAL:
            return self.personal_service_name
        return self.api_service_name

    def backup_path_for(self, identity: Identity) -> Path:
        if identity is Identity.PERSONAL:
            return self.personal_backup_path
        return self.api_backup_path


def load_config(path: Path | None = None) -> SwitcherConfig:
    """Load config from a JSON file.

    With no explicit path the default location is used, and a missing
    default file yields the built-in defaults. An explicit path must exist.
    Relative path entries resolve against the config file's directory.
    """
    required = path is not None
    if path is None:
        path = map_path(DEFAULT_CONFIG_PATH)

    if not path.exists():
        if required:
            raise ConfigError(f"Config file not found: {path}")
        return SwitcherConfig()

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read config {path}: {exc}") from exc

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(payload, dict):
        raise ConfigError(f"Config JSON must be an object: {path}")

    try:
        return SwitcherConfig.model_validate(
            payload, context={"base_dir": path.parent}
        )
    except ValidationError as exc:
        raise ConfigError(f"Invalid config {path}: {exc}") from exc
