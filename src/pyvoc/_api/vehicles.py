"""Vehicle read endpoints.

Endpoints:
  - vehicle-account-relations/{relationId} (GET)
  - vehicles/{id}/status (GET)
  - vehicles/{id}/attributes (GET)
"""

from __future__ import annotations

from pyvoc._api._common import require_object
from pyvoc._transport import Transport
from pyvoc.models.vehicle import VehicleAttributes, VehicleRelation, VehicleStatus


def relation_path(relation_id: int) -> str:
    return f"vehicle-account-relations/{relation_id}"


async def fetch_relation(transport: Transport, relation_id: int) -> VehicleRelation:
    path = relation_path(relation_id)
    payload = await transport.request(path, "GET")
    return VehicleRelation.model_validate(require_object(payload, path))


async def fetch_status(transport: Transport, vehicle_id: str) -> VehicleStatus:
    path = f"vehicles/{vehicle_id}/status"
    payload = await transport.request(path, "GET")
    return VehicleStatus.model_validate(require_object(payload, path))


async def fetch_attributes(transport: Transport, vehicle_id: str) -> VehicleAttributes:
    path = f"vehicles/{vehicle_id}/attributes"
    payload = await transport.request(path, "GET")
    return VehicleAttributes.model_validate(require_object(payload, path))
