"""Remote command and service operation endpoints.

Endpoints:
  - vehicles/{id}/{command} (POST, e.g. ``updatestatus``)
  - vehicles/{id}/services/{customerServiceId} (GET)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pyvoc._api._common import require_object
from pyvoc._transport import Transport
from pyvoc.models.operation import ServiceCommand, ServiceOperation


def command_path(vehicle_id: str, command: ServiceCommand) -> str:
    return f"vehicles/{vehicle_id}/{command.value}"


def service_path(vehicle_id: str, operation_id: str) -> str:
    return f"vehicles/{vehicle_id}/services/{operation_id}"


async def submit_command(
    transport: Transport,
    vehicle_id: str,
    command: ServiceCommand,
    body: Mapping[str, Any] | None = None,
) -> ServiceOperation:
    """POST *command* for the vehicle and return the created operation."""
    path = command_path(vehicle_id, command)
    payload = await transport.request(path, "POST", body=dict(body or {}))
    return ServiceOperation.model_validate(require_object(payload, path))


async def fetch_service_operation(transport: Transport, vehicle_id: str, operation_id: str) -> ServiceOperation:
    path = service_path(vehicle_id, operation_id)
    payload = await transport.request(path, "GET")
    return ServiceOperation.model_validate(require_object(payload, path))
