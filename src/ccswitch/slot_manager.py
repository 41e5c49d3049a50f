"""Capture and restore the two credential slots.

Per identity the lifecycle is ``unconfigured -> backed_up -> active``:
capture copies the live store entry into the identity's backup file, and
activation writes the backup back under the identity's own service name.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from .backup_files import backup_exists, describe_backup, read_backup, write_backup
from .classification import classify, summarize, unwrap_legacy_envelope
from .constants import DIAGNOSTIC_SERVICE_NAMES
from .config import SwitcherConfig
from .errors import (
    ExtractionFailedError,
    NotConfiguredError,
    ReadFailedError,
    SecretNotFoundError,
    StoreUnavailableError,
)
from .logging_utils import log_event
from .models import (
    ActivationResult,
    CaptureResult,
    DiagnosticsReport,
    Identity,
    LiveCredential,
    ServiceProbe,
    SlotState,
    SlotStatus,
    StatusReport,
)
from .secret_store import KeyringSecretStore, SecretStore

_UTC_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


class SlotManager:
    def __init__(self, config: SwitcherConfig, store: SecretStore | None = None) -> None:
        self.config = config
        self.store = store if store is not None else KeyringSecretStore()

    @property
    def account(self) -> str:
        return self.config.account

    def capture_order(self, identity: Identity) -> list[str]:
        """Probe order for a capture: the identity's own service first, if it is a candidate."""
        candidates = self.config.candidate_services
        own = self.config.service_name_for(identity)
        if own in candidates:
            return [own] + [service for service in candidates if service != own]
        return candidates

    def capture_identity(self, identity: Identity) -> CaptureResult:
        """Back up whatever credential is live in the store as ``identity``.

        Raises ExtractionFailedError if no candidate service holds an entry,
        StoreUnavailableError if the store cannot be read, and WriteFailedError
        if the backup cannot be written. A failed write leaves the store as is.
        """
        services = self.capture_order(identity)
        try:
            source_service, blob = self.store.probe(self.account, services)
        except SecretNotFoundError as exc:
            raise ExtractionFailedError(identity.display_name, services) from exc

        summary = summarize(classify(blob))
        backup_path = self.config.backup_path_for(identity)
        write_backup(backup_path, blob)

        pinned_service: str | None = None
        if self.config.pin_on_capture:
            pinned_service = self.config.service_name_for(identity)
            self.store.set(self.account, pinned_service, blob)

        result = CaptureResult(
            identity=identity,
            source_service=source_service,
            backup_path=backup_path,
            summary=summary,
            pinned_service=pinned_service,
            captured_at=datetime.now(timezone.utc).strftime(_UTC_TIMESTAMP_FORMAT),
            duplicate_of=self._find_duplicate_backup(identity, blob),
        )
        log_event(
            "capture",
            identity=identity.value,
            source_service=source_service,
            backup_path=str(backup_path),
            format=summary.format.value,
            length=summary.length,
            pinned_service=pinned_service,
            duplicate_of=result.duplicate_of.value if result.duplicate_of else None,
            captured_at=result.captured_at,
        )
        return result

    def activate_identity(self, identity: Identity) -> ActivationResult:
        """Write the identity's backup into the store under its service name.

        With ``exclusive_activation`` every other known service entry is
        removed first, so only this identity stays live. Idempotent. Raises
        NotConfiguredError when there is no backup, ReadFailedError when it
        cannot be read, StoreUnavailableError when a store call fails.
        """
        backup_path = self.config.backup_path_for(identity)
        if not backup_exists(backup_path):
            raise NotConfiguredError(identity.display_name, backup_path)

        blob = read_backup(backup_path)
        legacy_key = self._unwrap_legacy(blob)
        payload = legacy_key if legacy_key is not None else blob

        service_name = self.config.service_name_for(identity)
        cleared: list[str] = []
        if self.config.exclusive_activation:
            for other in self._known_services():
                if other == service_name:
                    continue
                try:
                    self.store.delete(self.account, other)
                except SecretNotFoundError:
                    continue
                cleared.append(other)
        self.store.set(self.account, service_name, payload)
        shadowed_by = self._shadowing_service(service_name)

        summary = summarize(classify(payload))
        log_event(
            "activate",
            level=logging.INFO if shadowed_by is None else logging.WARNING,
            identity=identity.value,
            service=service_name,
            backup_path=str(backup_path),
            format=summary.format.value,
            length=summary.length,
            unwrapped_legacy_envelope=legacy_key is not None,
            cleared_services=cleared,
            shadowed_by=shadowed_by,
        )
        return ActivationResult(
            identity=identity,
            service_name=service_name,
            backup_path=backup_path,
            summary=summary,
            unwrapped_legacy_envelope=legacy_key is not None,
            cleared_services=tuple(cleared),
            shadowed_by=shadowed_by,
        )

    def report_status(self) -> StatusReport:
        """Read-only snapshot of the live credential and both slots."""
        live: LiveCredential | None = None
        store_error: str | None = None
        try:
            service, blob = self.store.probe(self.account, self.config.candidate_services)
            live = LiveCredential(service=service, summary=summarize(classify(blob)))
        except SecretNotFoundError:
            live = None
        except StoreUnavailableError as exc:
            store_error = str(exc)

        slots = [self._slot_status(identity) for identity in Identity]
        return StatusReport(
            account=self.account,
            live=live,
            slots=slots,
            store_error=store_error,
        )

    def diagnose(self) -> DiagnosticsReport:
        """Check every known service name, plus names other client versions
        have used, for an entry (the ``test`` command)."""
        services = self._known_services()
        for service in DIAGNOSTIC_SERVICE_NAMES:
            if service not in services:
                services.append(service)

        probes: list[ServiceProbe] = []
        for service in services:
            try:
                blob = self.store.get(self.account, service)
            except SecretNotFoundError:
                probes.append(ServiceProbe(service=service, found=False))
                continue
            except StoreUnavailableError as exc:
                probes.append(ServiceProbe(service=service, found=False, error=str(exc)))
                continue
            probes.append(
                ServiceProbe(service=service, found=True, summary=summarize(classify(blob)))
            )

        return DiagnosticsReport(
            account=self.account,
            backend_name=self.store.backend_name,
            personal_service_name=self.config.personal_service_name,
            api_service_name=self.config.api_service_name,
            probes=probes,
        )

    def _slot_status(self, identity: Identity) -> SlotStatus:
        backup_path = self.config.backup_path_for(identity)
        service_name = self.config.service_name_for(identity)

        try:
            info = describe_backup(backup_path)
            if info is None:
                return SlotStatus(
                    identity=identity,
                    state=SlotState.UNCONFIGURED,
                    service_name=service_name,
                    backup_path=backup_path,
                )
            blob = read_backup(backup_path)
        except ReadFailedError as exc:
            log_event(
                "command_error",
                level=logging.WARNING,
                command="status",
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return SlotStatus(
                identity=identity,
                state=SlotState.BACKED_UP,
                service_name=service_name,
                backup_path=backup_path,
                error=str(exc),
            )

        legacy_key = self._unwrap_legacy(blob)
        expected = legacy_key if legacy_key is not None else blob
        try:
            stored = self.store.get(self.account, service_name)
        except (SecretNotFoundError, StoreUnavailableError):
            # Store errors are reported once, on the live-credential line.
            stored = None

        return SlotStatus(
            identity=identity,
            state=SlotState.ACTIVE if stored == expected else SlotState.BACKED_UP,
            service_name=service_name,
            backup_path=backup_path,
            backup=info,
            summary=summarize(classify(blob)),
        )

    def _known_services(self) -> list[str]:
        services: list[str] = []
        for service in [
            *self.config.candidate_services,
            self.config.personal_service_name,
            self.config.api_service_name,
        ]:
            if service not in services:
                services.append(service)
        return services

    def _unwrap_legacy(self, blob: str) -> str | None:
        if not self.config.legacy_envelope_backups:
            return None
        return unwrap_legacy_envelope(classify(blob))

    def _shadowing_service(self, service_name: str) -> str | None:
        try:
            live_service, _ = self.store.probe(
                self.account, self.config.candidate_services
            )
        except SecretNotFoundError:
            return None
        return live_service if live_service != service_name else None

    def _find_duplicate_backup(self, identity: Identity, blob: str) -> Identity | None:
        for other in Identity:
            if other is identity:
                continue
            other_path = self.config.backup_path_for(other)
            if not backup_exists(other_path):
                continue
            try:
                if read_backup(other_path) == blob:
                    return other
            except ReadFailedError:
                continue
        return None
