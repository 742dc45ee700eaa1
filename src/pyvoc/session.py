"""Session state for authenticated API calls."""

from __future__ import annotations

import base64
import binascii
import time

from pydantic import BaseModel, ConfigDict, Field


def encode_credential(identifier: str, secret: str) -> str:
    """Encode an account identifier and secret into a Basic auth credential.

    The result is ``base64("<identifier>:<secret>")``; no network call is made.
    """
    return base64.b64encode(f"{identifier}:{secret}".encode()).decode("ascii")


def decode_credential(credential: str) -> tuple[str, str]:
    """Split a credential produced by :func:`encode_credential`.

    Raises
    ------
    ValueError
        If *credential* is not valid base64 or lacks the ``:`` separator.
    """
    try:
        decoded = base64.b64decode(credential, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise ValueError("credential is not valid base64") from exc
    identifier, sep, secret = decoded.partition(":")
    if not sep:
        raise ValueError("credential does not contain an identifier:secret pair")
    return identifier, secret


class Session(BaseModel):
    """Immutable authenticated session.

    Created once by :meth:`authenticate` and kept for the lifetime of the
    client. The credential is never refreshed.

    Parameters
    ----------
    credential : str
        Opaque Basic auth credential.
    created_at : float
        Monotonic timestamp (``time.monotonic()``) of creation.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        str_strip_whitespace=True,
    )

    credential: str = Field(min_length=1, repr=False)
    created_at: float = Field(default_factory=time.monotonic)

    @classmethod
    def authenticate(cls, identifier: str, secret: str) -> Session:
        return cls(credential=encode_credential(identifier, secret))

    @property
    def authorization_header(self) -> str:
        return f"Basic {self.credential}"

    @property
    def age(self) -> float:
        """Seconds since the session was created."""
        return time.monotonic() - self.created_at
