"""OS credential store access.

``SecretStore`` is the three-operation contract the slot manager depends on;
``KeyringSecretStore`` fulfils it with the ``keyring`` library, which talks to
the macOS Keychain, Windows Credential Locker, or the Secret Service.
"""

from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod

import keyring
from keyring.errors import PasswordDeleteError

from .errors import SecretNotFoundError, StoreUnavailableError
from .logging_utils import log_event, sanitize_error_message


def credential_store_name() -> str:
    """Return a human-readable name for the platform's credential store."""
    if sys.platform == "darwin":
        return "macOS Keychain"
    elif sys.platform == "win32":
        return "Windows Credential Manager"
    else:
        return "system credential store"


class SecretStore(ABC):
    """Get/set/delete one opaque secret per (account, service) pair."""

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Name of the underlying store implementation."""

    @abstractmethod
    def get(self, account: str, service: str) -> str:
        """Return the secret. Raises SecretNotFoundError or StoreUnavailableError."""

    @abstractmethod
    def insert(self, account: str, service: str, blob: str) -> None:
        """Insert a new entry. Raises StoreUnavailableError."""

    @abstractmethod
    def delete(self, account: str, service: str) -> None:
        """Remove an entry. Raises SecretNotFoundError when there is none."""

    def set(self, account: str, service: str, blob: str) -> bool:
        """Upsert by delete-then-insert. Returns True if a prior entry was removed.

        Keychains reject a duplicate (account, service) insert, so any prior
        entry is removed first; a missing prior entry is not an error.
        """
        try:
            self.delete(account, service)
            deleted_prior = True
        except SecretNotFoundError:
            deleted_prior = False

        self.insert(account, service, blob)
        log_event(
            "store_set",
            service=service,
            account=account,
            deleted_prior=deleted_prior,
            length=len(blob),
        )
        return deleted_prior

    def probe(self, account: str, services: list[str]) -> tuple[str, str]:
        """Try each candidate service in order; return (service, blob) of the first hit."""
        if not services:
            raise SecretNotFoundError(account, services)

        for service in services:
            try:
                blob = self.get(account, service)
            except SecretNotFoundError:
                continue
            log_event(
                "store_probe",
                candidates=services,
                account=account,
                matched_service=service,
            )
            return service, blob

        log_event(
            "store_probe",
            level=logging.WARNING,
            candidates=services,
            account=account,
            matched_service=None,
        )
        raise SecretNotFoundError(account, services)


class KeyringSecretStore(SecretStore):
    """Credential store backed by the active ``keyring`` backend."""

    @property
    def backend_name(self) -> str:
        try:
            backend = keyring.get_keyring()
        except Exception as e:
            return f"unavailable ({sanitize_error_message(str(e))})"
        backend_type = type(backend)
        return f"{backend_type.__module__}.{backend_type.__qualname__}"

    def get(self, account: str, service: str) -> str:
        try:
            blob = keyring.get_password(service, account)
        except Exception as e:
            raise StoreUnavailableError(
                f"read from {credential_store_name()}", service, str(e)
            ) from e

        if not isinstance(blob, str):
            log_event("store_get", service=service, account=account, result="missing")
            raise SecretNotFoundError(account, [service])

        log_event(
            "store_get",
            service=service,
            account=account,
            result="found",
            length=len(blob),
        )
        return blob

    def insert(self, account: str, service: str, blob: str) -> None:
        try:
            keyring.set_password(service, account, blob)
        except Exception as e:
            raise StoreUnavailableError(
                f"write to {credential_store_name()}", service, str(e)
            ) from e

    def delete(self, account: str, service: str) -> None:
        try:
            keyring.delete_password(service, account)
        except PasswordDeleteError as e:
            log_event(
                "store_delete",
                level=logging.DEBUG,
                service=service,
                account=account,
                result="nothing_to_delete",
            )
            raise SecretNotFoundError(account, [service]) from e
        except Exception as e:
            raise StoreUnavailableError(
                f"delete from {credential_store_name()}", service, str(e)
            ) from e

        log_event("store_delete", service=service, account=account, result="deleted")
