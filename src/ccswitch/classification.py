"""Credential classification and display summaries.

``classify`` decides storage shape; everything else here is display-only and
never influences what gets written to the store or to disk.
"""

from __future__ import annotations

import json
from typing import Any

from .constants import (
    LABEL_API_BILLING,
    LABEL_API_BILLING_ORG,
    LABEL_PERSONAL_PLAN,
    LEGACY_ENVELOPE_FORMAT,
    MASK_HEAD_CHARS,
    MASK_MIN_LENGTH,
    MASK_PLACEHOLDER,
    MASK_TAIL_CHARS,
)
from .models import CredentialBlob, CredentialSummary, OpaqueToken, StructuredCredential


def classify(blob: str | bytes) -> CredentialBlob:
    """Classify a blob as structured (JSON object) or opaque. Never raises."""
    if isinstance(blob, bytes):
        try:
            text = blob.decode("utf-8")
        except UnicodeDecodeError:
            return OpaqueToken(raw=blob.decode("utf-8", errors="replace"))
    else:
        text = blob

    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        return OpaqueToken(raw=text)

    if isinstance(parsed, dict):
        return StructuredCredential(raw=text, data=parsed)
    return OpaqueToken(raw=text)


def mask_token(value: str) -> str:
    if len(value) <= MASK_MIN_LENGTH:
        return MASK_PLACEHOLDER
    return f"{value[:MASK_HEAD_CHARS]}...{value[-MASK_TAIL_CHARS:]}"


def summarize(credential: CredentialBlob) -> CredentialSummary:
    if isinstance(credential, StructuredCredential):
        email = credential.data.get("emailAddress")
        return CredentialSummary(
            format=credential.format,
            label=_structured_label(credential.data),
            length=len(credential.raw),
            email=email if isinstance(email, str) and email else None,
        )
    return CredentialSummary(
        format=credential.format,
        label=LABEL_API_BILLING,
        length=len(credential.raw),
        masked_value=mask_token(credential.raw),
    )


def _structured_label(data: dict[str, Any]) -> str:
    org_uuid = data.get("organizationUuid")
    if org_uuid is not None and org_uuid != "":
        return LABEL_API_BILLING_ORG
    return LABEL_PERSONAL_PLAN


def unwrap_legacy_envelope(credential: CredentialBlob) -> str | None:
    """Return the wrapped key if the blob is an older-revision string envelope.

    Earlier backups stored bare API keys as
    ``{"authType", "apiKey", "createdAt", "format": "string"}``.
    """
    if not isinstance(credential, StructuredCredential):
        return None
    data = credential.data
    if data.get("format") != LEGACY_ENVELOPE_FORMAT:
        return None
    api_key = data.get("apiKey")
    if not isinstance(api_key, str) or "authType" not in data:
        return None
    return api_key
