"""Internal remote command operations for :class:`pyvoc.client.VocClient`."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pyvoc.models.operation import ServiceCommand, ServiceOperation
from pyvoc.models.vehicle import Vehicle

if TYPE_CHECKING:
    from pyvoc.client import VocClient


async def run_command(
    client: VocClient,
    vehicle: Vehicle,
    command: ServiceCommand,
    *,
    body: Mapping[str, Any] | None = None,
    timeout: float | None = None,
) -> ServiceOperation:
    orchestrator = client._require_orchestrator()
    return await orchestrator.submit(vehicle, command, body=body, timeout=timeout)


async def update_status(client: VocClient, vehicle: Vehicle, *, timeout: float | None = None) -> ServiceOperation:
    return await run_command(client, vehicle, ServiceCommand.UPDATE_STATUS, timeout=timeout)


async def lock(client: VocClient, vehicle: Vehicle, *, timeout: float | None = None) -> ServiceOperation:
    return await run_command(client, vehicle, ServiceCommand.LOCK, timeout=timeout)


async def unlock(client: VocClient, vehicle: Vehicle, *, timeout: float | None = None) -> ServiceOperation:
    return await run_command(client, vehicle, ServiceCommand.UNLOCK, timeout=timeout)


async def start_heater(client: VocClient, vehicle: Vehicle, *, timeout: float | None = None) -> ServiceOperation:
    return await run_command(client, vehicle, ServiceCommand.HEATER_START, timeout=timeout)


async def stop_heater(client: VocClient, vehicle: Vehicle, *, timeout: float | None = None) -> ServiceOperation:
    return await run_command(client, vehicle, ServiceCommand.HEATER_STOP, timeout=timeout)


async def start_preclimatization(
    client: VocClient,
    vehicle: Vehicle,
    *,
    timeout: float | None = None,
) -> ServiceOperation:
    return await run_command(client, vehicle, ServiceCommand.PRECLIMATIZATION_START, timeout=timeout)


async def stop_preclimatization(
    client: VocClient,
    vehicle: Vehicle,
    *,
    timeout: float | None = None,
) -> ServiceOperation:
    return await run_command(client, vehicle, ServiceCommand.PRECLIMATIZATION_STOP, timeout=timeout)
