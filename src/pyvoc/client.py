"""High-level async client for the Volvo On Call API."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import aiohttp

from pyvoc._api.account import fetch_account
from pyvoc._client import commands as _commands
from pyvoc._client import reads as _reads
from pyvoc._client.operations import ClockFn, OperationOrchestrator, SleepFn
from pyvoc._transport import RestTransport
from pyvoc.config import VocConfig
from pyvoc.exceptions import VocError
from pyvoc.models.account import Account
from pyvoc.models.operation import ServiceCommand, ServiceOperation
from pyvoc.models.vehicle import Vehicle, VehicleAttributes, VehicleInfo, VehicleRelation, VehicleStatus

_logger = logging.getLogger(__name__)


class VocClient:
    """Async client for the Volvo On Call API.

    Usage::

        async with VocClient(config) as client:
            await client.login()
            vehicles = await client.get_vehicles()
            await client.update_status(vehicles[0])
    """

    def __init__(
        self,
        config: VocConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        sleep: SleepFn | None = None,
        clock: ClockFn | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._sleep = sleep
        self._clock = clock
        self._transport: RestTransport | None = None
        self._orchestrator: OperationOrchestrator | None = None
        self._account: Account | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> VocClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = RestTransport(self._config, self._http_session)
        self._orchestrator = OperationOrchestrator(
            self._transport,
            poll_interval=self._config.poll_interval,
            operation_timeout=self._config.operation_timeout,
            sleep=self._sleep,
            clock=self._clock,
        )
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if self._orchestrator is not None:
            await self._orchestrator.aclose()
            self._orchestrator = None
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    @property
    def account(self) -> Account | None:
        return self._account

    async def login(self) -> Account:
        """Set the credential and verify it by fetching the account."""
        transport = self._require_transport()
        transport.authenticate(self._config.username, self._config.password)
        self._account = await fetch_account(transport)
        _logger.info("Logged in with %d linked vehicle(s)", len(self._account.account_vehicle_relations))
        return self._account

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> RestTransport:
        if self._transport is None:
            raise VocError("Client not initialized. Use 'async with VocClient(...) as client:'")
        return self._transport

    def _require_orchestrator(self) -> OperationOrchestrator:
        if self._orchestrator is None:
            raise VocError("Client not initialized. Use 'async with VocClient(...) as client:'")
        return self._orchestrator

    # ------------------------------------------------------------------
    # Read endpoints
    # ------------------------------------------------------------------

    async def get_relation(self, relation_id: int) -> VehicleRelation:
        return await _reads.get_relation(self, relation_id)

    async def get_vehicle_by_relation(self, relation_id: int) -> Vehicle:
        return await _reads.get_vehicle_by_relation(self, relation_id)

    async def get_vehicle_info_by_relation(self, relation_id: int) -> VehicleInfo:
        return await _reads.get_vehicle_info_by_relation(self, relation_id)

    async def get_vehicles(self) -> list[Vehicle]:
        """Fetch every vehicle linked to the logged-in account."""
        return await _reads.get_vehicles(self)

    async def get_status(self, vehicle: Vehicle) -> VehicleStatus:
        return await _reads.get_status(self, vehicle)

    async def get_attributes(self, vehicle: Vehicle) -> VehicleAttributes:
        return await _reads.get_attributes(self, vehicle)

    async def get_vehicle_info(self, vehicle: Vehicle) -> VehicleInfo:
        return await _reads.get_vehicle_info(self, vehicle)

    async def get_service_operation(self, vehicle: Vehicle, operation_id: str) -> ServiceOperation:
        return await _reads.get_service_operation(self, vehicle, operation_id)

    # ------------------------------------------------------------------
    # Remote commands
    # ------------------------------------------------------------------

    async def run_command(
        self,
        vehicle: Vehicle,
        command: ServiceCommand,
        *,
        body: Mapping[str, Any] | None = None,
        timeout: float | None = None,
    ) -> ServiceOperation:
        """Send *command* and wait until the vehicle reports a terminal state."""
        return await _commands.run_command(self, vehicle, command, body=body, timeout=timeout)

    async def update_status(self, vehicle: Vehicle, *, timeout: float | None = None) -> ServiceOperation:
        """Ask the vehicle to push fresh status to the server."""
        return await _commands.update_status(self, vehicle, timeout=timeout)

    async def lock(self, vehicle: Vehicle, *, timeout: float | None = None) -> ServiceOperation:
        return await _commands.lock(self, vehicle, timeout=timeout)

    async def unlock(self, vehicle: Vehicle, *, timeout: float | None = None) -> ServiceOperation:
        return await _commands.unlock(self, vehicle, timeout=timeout)

    async def start_heater(self, vehicle: Vehicle, *, timeout: float | None = None) -> ServiceOperation:
        return await _commands.start_heater(self, vehicle, timeout=timeout)

    async def stop_heater(self, vehicle: Vehicle, *, timeout: float | None = None) -> ServiceOperation:
        return await _commands.stop_heater(self, vehicle, timeout=timeout)

    async def start_preclimatization(self, vehicle: Vehicle, *, timeout: float | None = None) -> ServiceOperation:
        return await _commands.start_preclimatization(self, vehicle, timeout=timeout)

    async def stop_preclimatization(self, vehicle: Vehicle, *, timeout: float | None = None) -> ServiceOperation:
        return await _commands.stop_preclimatization(self, vehicle, timeout=timeout)

    def cancel_operation(self, vehicle: Vehicle) -> bool:
        """Cancel the vehicle's in-flight command, if any."""
        return self._require_orchestrator().cancel(vehicle.id)

    def operation_in_flight(self, vehicle: Vehicle) -> bool:
        return self._require_orchestrator().in_flight(vehicle.id)
