"""Helpers for safe debug logging.

pyvoc sends a Basic auth credential with every request and the account
payloads include personal details. This module masks those fields before
they reach DEBUG logs while keeping enough shape to tell values apart.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

REDACTED = "<redacted>"

# Values dropped entirely.
_PERSONAL_KEYS: frozenset[str] = frozenset(
    {"password", "credential", "cookie", "username", "firstname", "lastname"}
)
# ``<scheme> <secret>`` values: the auth scheme stays visible.
_CREDENTIAL_KEYS: frozenset[str] = frozenset({"authorization"})
# Identifiers: the last few characters stay visible.
_IDENTIFIER_KEYS: frozenset[str] = frozenset({"vin", "registrationnumber"})

_SENSITIVE_KEYS = _PERSONAL_KEYS | _CREDENTIAL_KEYS | _IDENTIFIER_KEYS

_MAX_DEPTH = 20
_IDENTIFIER_TAIL = 4


def mask_credential(value: Any) -> str:
    """Mask an ``Authorization`` value, keeping its scheme (``Basic <redacted>``)."""
    if isinstance(value, str):
        scheme, sep, _secret = value.partition(" ")
        if sep and scheme.isalpha():
            return f"{scheme} {REDACTED}"
    return REDACTED


def mask_identifier(value: Any) -> str:
    """Mask a VIN or plate, keeping its last characters when it is long enough."""
    if isinstance(value, str) and len(value) > 2 * _IDENTIFIER_TAIL:
        return f"{REDACTED}{value[-_IDENTIFIER_TAIL:]}"
    return REDACTED


def _mask_entry(lowered_key: str, value: Any) -> str:
    if lowered_key in _CREDENTIAL_KEYS:
        return mask_credential(value)
    if lowered_key in _IDENTIFIER_KEYS:
        return mask_identifier(value)
    return REDACTED


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a copy of *value* with sensitive mapping entries masked.

    Strings longer than *max_string* are truncated. Bytes are logged by
    length only.
    """
    if _depth > _MAX_DEPTH:
        return "<max-depth>"

    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return value if len(value) <= max_string else f"{value[:max_string]}…<truncated>"
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, Mapping):
        result: dict[str, Any] = {}
        for raw_key, item in value.items():
            key = str(raw_key)
            lowered = key.lower()
            if lowered in _SENSITIVE_KEYS:
                result[key] = _mask_entry(lowered, item)
            else:
                result[key] = redact_for_log(item, max_string=max_string, _depth=_depth + 1)
        return result

    if isinstance(value, Sequence):
        return [redact_for_log(item, max_string=max_string, _depth=_depth + 1) for item in value]

    return repr(value)
