"""Custom exception types for ccswitch."""

from __future__ import annotations


class SwitcherError(Exception):
    """Base class for all ccswitch errors."""


class ConfigError(SwitcherError):
    def __init__(self, message: str) -> None:
        super().__init__(message)


class PathMappingError(ConfigError):
    def __init__(self, message: str) -> None:
        super().__init__(message)


class SecretNotFoundError(SwitcherError):
    """No credential-store entry exists for the requested service(s)."""

    def __init__(self, account: str, services: list[str]) -> None:
        self.account = account
        self.services = list(services)
        joined = ", ".join(f"'{service}'" for service in self.services)
        super().__init__(f"No credential found for account '{account}' under {joined}.")


class StoreUnavailableError(SwitcherError):
    """The OS credential store could not be reached or rejected the call."""

    def __init__(self, operation: str, service: str, detail: str) -> None:
        self.operation = operation
        self.service = service
        self.detail = detail
        super().__init__(
            f"Credential store {operation} failed for '{service}': {detail}"
        )


class ExtractionFailedError(SwitcherError):
    def __init__(self, identity: str, services: list[str]) -> None:
        self.identity = identity
        joined = ", ".join(f"'{service}'" for service in services)
        super().__init__(
            f"Could not extract {identity} credentials: nothing stored under {joined}. "
            "Sign in to Claude Code at least once, then run setup again."
        )


class WriteFailedError(SwitcherError):
    def __init__(self, path: object, detail: str) -> None:
        self.path = path
        super().__init__(f"Failed to write backup {path}: {detail}")


class ReadFailedError(SwitcherError):
    def __init__(self, path: object, detail: str) -> None:
        self.path = path
        super().__init__(f"Could not read backup {path}: {detail}")


class NotConfiguredError(SwitcherError):
    def __init__(self, identity: str, path: object) -> None:
        self.identity = identity
        self.path = path
        super().__init__(
            f"{path} not found. Please run setup first to capture the {identity} credentials."
        )
