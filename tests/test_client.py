from __future__ import annotations

import json
from typing import Any

import pytest

from pyvoc.client import VocClient
from pyvoc.config import VocConfig
from pyvoc.exceptions import VocAuthenticationError, VocError, VocHttpError, VocUnauthenticatedError
from pyvoc.models.vehicle import Vehicle

BASE = "https://vocapi.wirelesscar.net/customerapi/rest/v3.0/"


class _FakeResponse:
    def __init__(self, status: int, payload: Any = None) -> None:
        self.status = status
        self._payload = payload

    async def read(self) -> bytes:
        return b"" if self._payload is None else json.dumps(self._payload).encode("utf-8")

    async def __aenter__(self) -> _FakeResponse:
        return self

    async def __aexit__(self, *_exc: object) -> None:
        return None


class _RoutedHttpSession:
    """Serves queued responses per (method, path) and records every call."""

    def __init__(self, routes: dict[tuple[str, str], list[_FakeResponse]]) -> None:
        self._routes = routes
        self.calls: list[tuple[str, str, dict[str, str]]] = []

    def request(self, method: str, url: str, **kwargs: Any) -> _FakeResponse:
        path = url.removeprefix(BASE)
        self.calls.append((method, path, kwargs["headers"]))
        queue = self._routes[(method, path)]
        return queue.pop(0) if len(queue) > 1 else queue[0]


def _config() -> VocConfig:
    return VocConfig(username="user@example.com", password="secret")


async def _no_sleep(_delay: float) -> None:
    return None


_ACCOUNT = {
    "username": "user@example.com",
    "firstName": "Ada",
    "lastName": "Lovelace",
    "accountId": "acc-1",
    "accountVehicleRelations": [f"{BASE}vehicle-account-relations/123"],
}
_RELATION = {
    "vehicleId": "YV1ABC",
    "status": "Verified",
    "customerVehicleRelationId": 123,
}


@pytest.mark.asyncio
async def test_login_sets_credential_and_lists_vehicles() -> None:
    http = _RoutedHttpSession(
        {
            ("GET", "customeraccounts"): [_FakeResponse(200, _ACCOUNT)],
            ("GET", "vehicle-account-relations/123"): [_FakeResponse(200, _RELATION)],
        }
    )

    async with VocClient(_config(), session=http) as client:  # type: ignore[arg-type]
        account = await client.login()
        vehicles = await client.get_vehicles()

    assert account.account_vehicle_relations == [123]
    assert client.account is account
    assert vehicles == [Vehicle(id="YV1ABC", relation_id=123, status="Verified")]
    assert all(headers["Authorization"].startswith("Basic ") for _m, _p, headers in http.calls)


@pytest.mark.asyncio
async def test_login_rejected_raises_authentication_error() -> None:
    http = _RoutedHttpSession({("GET", "customeraccounts"): [_FakeResponse(401)]})

    async with VocClient(_config(), session=http) as client:  # type: ignore[arg-type]
        with pytest.raises(VocAuthenticationError) as exc_info:
            await client.login()

    assert exc_info.value.status_code == 401
    assert isinstance(exc_info.value.__cause__, VocHttpError)


@pytest.mark.asyncio
async def test_get_vehicles_requires_login() -> None:
    http = _RoutedHttpSession({})

    async with VocClient(_config(), session=http) as client:  # type: ignore[arg-type]
        with pytest.raises(VocError, match="Not logged in"):
            await client.get_vehicles()


@pytest.mark.asyncio
async def test_methods_require_context_manager() -> None:
    client = VocClient(_config())

    with pytest.raises(VocError, match="not initialized"):
        await client.login()
    with pytest.raises(VocError, match="not initialized"):
        client.cancel_operation(Vehicle(id="YV1"))


@pytest.mark.asyncio
async def test_update_status_polls_until_delivered() -> None:
    vehicle = Vehicle(id="YV1ABC", relation_id=123, status="Verified")
    http = _RoutedHttpSession(
        {
            ("GET", "customeraccounts"): [_FakeResponse(200, _ACCOUNT)],
            ("POST", "vehicles/YV1ABC/updatestatus"): [
                _FakeResponse(200, {"customerServiceId": "987", "status": "Queued"})
            ],
            ("GET", "vehicles/YV1ABC/services/987"): [
                _FakeResponse(200, {"customerServiceId": "987", "status": "Started"}),
                _FakeResponse(200, {"customerServiceId": "987", "status": "MessageDelivered"}),
            ],
        }
    )

    async with VocClient(_config(), session=http, sleep=_no_sleep) as client:  # type: ignore[arg-type]
        await client.login()
        operation = await client.update_status(vehicle)
        assert not client.operation_in_flight(vehicle)

    assert operation.status == "MessageDelivered"
    assert [(m, p) for m, p, _h in http.calls].count(("POST", "vehicles/YV1ABC/updatestatus")) == 1


@pytest.mark.asyncio
async def test_vehicle_info_reads_attributes_then_status() -> None:
    vehicle = Vehicle(id="YV1ABC", relation_id=123, status="Verified")
    http = _RoutedHttpSession(
        {
            ("GET", "customeraccounts"): [_FakeResponse(200, _ACCOUNT)],
            ("GET", "vehicles/YV1ABC/attributes"): [_FakeResponse(200, {"VIN": "YV1ABC", "modelYear": 2018})],
            ("GET", "vehicles/YV1ABC/status"): [_FakeResponse(200, {"carLocked": False, "odometer": 1000})],
        }
    )

    async with VocClient(_config(), session=http) as client:  # type: ignore[arg-type]
        await client.login()
        info = await client.get_vehicle_info(vehicle)

    assert info.attributes.model_year == 2018
    assert info.status.car_locked is False
    paths = [p for _m, p, _h in http.calls]
    assert paths == ["customeraccounts", "vehicles/YV1ABC/attributes", "vehicles/YV1ABC/status"]


@pytest.mark.asyncio
async def test_reads_before_login_are_unauthenticated() -> None:
    http = _RoutedHttpSession({})

    async with VocClient(_config(), session=http) as client:  # type: ignore[arg-type]
        with pytest.raises(VocUnauthenticatedError):
            await client.get_status(Vehicle(id="YV1ABC"))

    assert http.calls == []


@pytest.mark.asyncio
async def test_vehicle_info_by_relation_resolves_identity_first() -> None:
    http = _RoutedHttpSession(
        {
            ("GET", "customeraccounts"): [_FakeResponse(200, _ACCOUNT)],
            ("GET", "vehicle-account-relations/123"): [_FakeResponse(200, _RELATION)],
            ("GET", "vehicles/YV1ABC/attributes"): [_FakeResponse(200, {"VIN": "YV1ABC", "modelYear": 2018})],
            ("GET", "vehicles/YV1ABC/status"): [_FakeResponse(200, {"carLocked": True})],
        }
    )

    async with VocClient(_config(), session=http) as client:  # type: ignore[arg-type]
        await client.login()
        info = await client.get_vehicle_info_by_relation(123)

    assert info.vehicle == Vehicle(id="YV1ABC", relation_id=123, status="Verified")
    assert info.status.car_locked is True
    paths = [p for _m, p, _h in http.calls]
    assert paths == [
        "customeraccounts",
        "vehicle-account-relations/123",
        "vehicles/YV1ABC/attributes",
        "vehicles/YV1ABC/status",
    ]


@pytest.mark.asyncio
async def test_get_service_operation_reads_single_status() -> None:
    vehicle = Vehicle(id="YV1ABC", relation_id=123, status="Verified")
    http = _RoutedHttpSession(
        {
            ("GET", "customeraccounts"): [_FakeResponse(200, _ACCOUNT)],
            ("GET", "vehicles/YV1ABC/services/987"): [
                _FakeResponse(200, {"customerServiceId": 987, "status": "Started", "serviceType": "RVS"})
            ],
        }
    )

    async with VocClient(_config(), session=http) as client:  # type: ignore[arg-type]
        await client.login()
        operation = await client.get_service_operation(vehicle, "987")

    assert operation.customer_service_id == "987"
    assert operation.status == "Started"
    assert not operation.is_terminal
    assert http.calls[-1][:2] == ("GET", "vehicles/YV1ABC/services/987")
