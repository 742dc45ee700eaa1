from __future__ import annotations

import pydantic
import pytest

from pyvoc.session import Session, decode_credential, encode_credential


def test_encode_credential_is_deterministic_base64() -> None:
    assert encode_credential("user@example.com", "secret") == "dXNlckBleGFtcGxlLmNvbTpzZWNyZXQ="
    assert encode_credential("user@example.com", "secret") == encode_credential("user@example.com", "secret")


def test_decode_credential_keeps_colons_in_secret() -> None:
    credential = encode_credential("user@example.com", "pa:ss:word")

    assert decode_credential(credential) == ("user@example.com", "pa:ss:word")


def test_decode_credential_rejects_garbage() -> None:
    with pytest.raises(ValueError):
        decode_credential("%%%not-base64%%%")


def test_session_authenticate_builds_authorization_header() -> None:
    session = Session.authenticate("user@example.com", "secret")

    assert session.authorization_header == "Basic dXNlckBleGFtcGxlLmNvbTpzZWNyZXQ="
    assert session.age >= 0


def test_session_is_immutable_and_hides_credential() -> None:
    session = Session.authenticate("user@example.com", "secret")

    with pytest.raises(pydantic.ValidationError):
        session.credential = "other"  # type: ignore[misc]
    assert session.credential not in repr(session)


def test_session_rejects_empty_credential() -> None:
    with pytest.raises(pydantic.ValidationError):
        Session(credential="")
