"""Shared helpers for endpoint modules."""

from __future__ import annotations

from typing import Any

from pyvoc.exceptions import VocTransportError


def require_object(payload: Any, endpoint: str) -> dict[str, Any]:
    """Return *payload* if it is a JSON object, else raise :class:`VocTransportError`."""
    if not isinstance(payload, dict):
        raise VocTransportError(
            f"Expected a JSON object from {endpoint}, got {type(payload).__name__}",
            endpoint=endpoint,
        )
    return payload
