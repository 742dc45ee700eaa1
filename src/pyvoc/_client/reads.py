"""Internal read operations for :class:`pyvoc.client.VocClient`.

These functions keep `client.py` small without changing the public API.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from pyvoc._api.services import fetch_service_operation
from pyvoc._api.vehicles import fetch_attributes, fetch_relation, fetch_status
from pyvoc.exceptions import VocError
from pyvoc.models.operation import ServiceOperation
from pyvoc.models.vehicle import Vehicle, VehicleAttributes, VehicleInfo, VehicleRelation, VehicleStatus

if TYPE_CHECKING:
    from pyvoc.client import VocClient

_logger = logging.getLogger(__name__)


async def get_relation(client: VocClient, relation_id: int) -> VehicleRelation:
    return await fetch_relation(client._require_transport(), relation_id)


async def get_vehicle_by_relation(client: VocClient, relation_id: int) -> Vehicle:
    relation = await get_relation(client, relation_id)
    vehicle = Vehicle.from_relation(relation)
    if vehicle.relation_id is None:
        vehicle = vehicle.model_copy(update={"relation_id": relation_id})
    if not vehicle.is_verified:
        _logger.info("Vehicle %s relation %s is not verified (status=%s)", vehicle.id, relation_id, vehicle.status)
    return vehicle


async def get_vehicle_info_by_relation(client: VocClient, relation_id: int) -> VehicleInfo:
    """Resolve a relation, then read the vehicle's attributes and status."""
    vehicle = await get_vehicle_by_relation(client, relation_id)
    return await get_vehicle_info(client, vehicle)


async def get_vehicles(client: VocClient) -> list[Vehicle]:
    account = client.account
    if account is None:
        raise VocError("Not logged in. Call 'await client.login()' first.")
    return list(
        await asyncio.gather(
            *(get_vehicle_by_relation(client, relation_id) for relation_id in account.account_vehicle_relations)
        )
    )


async def get_status(client: VocClient, vehicle: Vehicle) -> VehicleStatus:
    return await fetch_status(client._require_transport(), vehicle.id)


async def get_attributes(client: VocClient, vehicle: Vehicle) -> VehicleAttributes:
    return await fetch_attributes(client._require_transport(), vehicle.id)


async def get_vehicle_info(client: VocClient, vehicle: Vehicle) -> VehicleInfo:
    """Fetch attributes, then status. Sends no update request."""
    attributes = await get_attributes(client, vehicle)
    status = await get_status(client, vehicle)
    return VehicleInfo(vehicle=vehicle, attributes=attributes, status=status)


async def get_service_operation(client: VocClient, vehicle: Vehicle, operation_id: str) -> ServiceOperation:
    return await fetch_service_operation(client._require_transport(), vehicle.id, operation_id)
