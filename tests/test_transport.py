from __future__ import annotations

import base64
import json
from typing import Any

import aiohttp
import pytest

from pyvoc._transport import RestTransport
from pyvoc.config import VocConfig
from pyvoc.exceptions import VocHttpError, VocTransportError, VocUnauthenticatedError


class _FakeResponse:
    def __init__(self, status: int, text: str | bytes = "", *, error: Exception | None = None) -> None:
        self.status = status
        self._body = text.encode("utf-8") if isinstance(text, str) else text
        self._error = error
        self.read_calls = 0

    async def read(self) -> bytes:
        self.read_calls += 1
        return self._body

    async def __aenter__(self) -> _FakeResponse:
        if self._error is not None:
            raise self._error
        return self

    async def __aexit__(self, *_exc: object) -> None:
        return None


class _FakeHttpSession:
    def __init__(self, *responses: _FakeResponse) -> None:
        self._responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def request(self, method: str, url: str, **kwargs: Any) -> _FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        return self._responses.pop(0)


def _make_transport(*responses: _FakeResponse, region: str = "eu") -> tuple[RestTransport, _FakeHttpSession]:
    http = _FakeHttpSession(*responses)
    config = VocConfig(username="user@example.com", password="secret", region=region)
    return RestTransport(config, http), http  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_request_without_credential_raises_and_sends_nothing() -> None:
    transport, http = _make_transport(_FakeResponse(200, "{}"))

    with pytest.raises(VocUnauthenticatedError):
        await transport.request("customeraccounts", "GET")

    assert http.calls == []
    assert not transport.is_authenticated


@pytest.mark.asyncio
async def test_non_2xx_raises_http_error_without_reading_body() -> None:
    response = _FakeResponse(500, "<html>boom</html>")
    transport, _http = _make_transport(response)
    transport.authenticate("user@example.com", "secret")

    with pytest.raises(VocHttpError) as exc_info:
        await transport.request("vehicles/YV1/updatestatus", "POST", body={})

    assert exc_info.value.status_code == 500
    assert exc_info.value.endpoint == "vehicles/YV1/updatestatus"
    assert response.read_calls == 0


@pytest.mark.asyncio
async def test_get_sends_no_body_and_returns_json() -> None:
    transport, http = _make_transport(_FakeResponse(200, json.dumps({"status": "Queued"})))
    transport.authenticate("user@example.com", "secret")

    result = await transport.request("vehicles/YV1/services/42", "GET")

    assert result == {"status": "Queued"}
    call = http.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == "https://vocapi.wirelesscar.net/customerapi/rest/v3.0/vehicles/YV1/services/42"
    assert call["data"] is None


@pytest.mark.asyncio
async def test_post_sends_empty_object_by_default() -> None:
    transport, http = _make_transport(_FakeResponse(200, json.dumps({"customerServiceId": "1"})))
    transport.authenticate("user@example.com", "secret")

    await transport.request("vehicles/YV1/updatestatus", "POST")

    assert http.calls[0]["method"] == "POST"
    assert http.calls[0]["data"] == "{}"


@pytest.mark.asyncio
async def test_authorization_header_is_basic_credential() -> None:
    transport, http = _make_transport(_FakeResponse(200, "{}"))
    transport.authenticate("user@example.com", "secret")

    await transport.request("customeraccounts", "GET")

    expected = base64.b64encode(b"user@example.com:secret").decode("ascii")
    headers = http.calls[0]["headers"]
    assert headers["Authorization"] == f"Basic {expected}"
    assert headers["Content-Type"] == "application/json"
    assert headers["X-Device-Id"] == "Device"


def test_header_override_replaces_only_matching_key() -> None:
    transport, _http = _make_transport()
    transport.authenticate("user@example.com", "secret")

    defaults = transport.build_headers()
    merged = transport.build_headers({"User-Agent": "pyvoc-test", "X-Extra": "1"})

    assert merged["User-Agent"] == "pyvoc-test"
    assert merged["X-Extra"] == "1"
    for key, value in defaults.items():
        if key != "User-Agent":
            assert merged[key] == value


def test_region_selects_prefixed_host() -> None:
    transport, _http = _make_transport(region="na")

    assert transport.build_url("customeraccounts") == (
        "https://vocapi-na.wirelesscar.net/customerapi/rest/v3.0/customeraccounts"
    )


@pytest.mark.asyncio
async def test_invalid_json_raises_transport_error() -> None:
    transport, _http = _make_transport(_FakeResponse(200, "not json"))
    transport.authenticate("user@example.com", "secret")

    with pytest.raises(VocTransportError) as exc_info:
        await transport.request("customeraccounts", "GET")

    assert not isinstance(exc_info.value, VocHttpError)
    assert exc_info.value.endpoint == "customeraccounts"


@pytest.mark.asyncio
async def test_client_error_is_wrapped() -> None:
    error = aiohttp.ClientConnectionError("connection reset")
    transport, _http = _make_transport(_FakeResponse(0, error=error))
    transport.authenticate("user@example.com", "secret")

    with pytest.raises(VocTransportError) as exc_info:
        await transport.request("customeraccounts", "GET")

    assert exc_info.value.__cause__ is error
    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_timeout_is_wrapped() -> None:
    transport, _http = _make_transport(_FakeResponse(0, error=TimeoutError()))
    transport.authenticate("user@example.com", "secret")

    with pytest.raises(VocTransportError, match="timed out"):
        await transport.request("customeraccounts", "GET")


def test_header_override_is_case_insensitive() -> None:
    transport, _http = _make_transport()
    transport.authenticate("user@example.com", "secret")

    merged = transport.build_headers({"authorization": "Bearer token", "content-type": "text/plain"})

    assert merged.getall("Authorization") == ["Bearer token"]
    assert merged.getall("Content-Type") == ["text/plain"]
    assert len(merged) == len(transport.build_headers())


@pytest.mark.asyncio
async def test_undecodable_body_raises_transport_error() -> None:
    transport, _http = _make_transport(_FakeResponse(200, b'{"status":"\xff"}'))
    transport.authenticate("user@example.com", "secret")

    with pytest.raises(VocTransportError) as exc_info:
        await transport.request("vehicles/YV1/services/42", "GET")

    assert exc_info.value.status_code == 200
    assert exc_info.value.endpoint == "vehicles/YV1/services/42"
    assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)
