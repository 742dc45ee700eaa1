"""Remote command and service operation models.

A command POSTed to ``vehicles/{id}/{command}`` returns a
:class:`ServiceOperation` whose ``customerServiceId`` is then polled via
``vehicles/{id}/services/{customerServiceId}`` until a terminal state.
"""

from __future__ import annotations

import enum
from typing import Any

from pydantic import computed_field, field_validator

from pyvoc.models._base import VocBaseModel, VocEnum, VocTimestamp


class ServiceCommand(enum.StrEnum):
    """Remote commands, as path segments below ``vehicles/{id}/``."""

    UPDATE_STATUS = "updatestatus"
    LOCK = "lock"
    UNLOCK = "unlock"
    HEATER_START = "heater/start"
    HEATER_STOP = "heater/stop"
    PRECLIMATIZATION_START = "preclimatization/start"
    PRECLIMATIZATION_STOP = "preclimatization/stop"


class OperationState(VocEnum):
    """``status`` values reported for a service operation."""

    SUCCESSFUL = "Successful"
    MESSAGE_DELIVERED = "MessageDelivered"
    STARTED = "Started"
    QUEUED = "Queued"
    FAILED = "Failed"
    UNKNOWN = "Unknown"


class OperationBucket(enum.Enum):
    """Poll loop decision derived from an :class:`OperationState`."""

    SUCCESS = "success"
    RETRY = "retry"
    FAILURE = "failure"
    UNEXPECTED = "unexpected"


SUCCESS_STATES: frozenset[OperationState] = frozenset({OperationState.SUCCESSFUL, OperationState.MESSAGE_DELIVERED})
RETRYABLE_STATES: frozenset[OperationState] = frozenset({OperationState.STARTED, OperationState.QUEUED})
FAILURE_STATES: frozenset[OperationState] = frozenset({OperationState.FAILED})


def classify(status: Any) -> OperationBucket:
    """Map a reported status value to exactly one bucket.

    Only exact, case-sensitive matches of the known values are recognised.
    """
    if not isinstance(status, str):
        return OperationBucket.UNEXPECTED
    state = OperationState(status)
    if state.value != status:
        return OperationBucket.UNEXPECTED
    if state in SUCCESS_STATES:
        return OperationBucket.SUCCESS
    if state in RETRYABLE_STATES:
        return OperationBucket.RETRY
    if state in FAILURE_STATES:
        return OperationBucket.FAILURE
    return OperationBucket.UNEXPECTED


class ServiceOperation(VocBaseModel):
    """A server-side operation created by a remote command."""

    customer_service_id: str | None = None
    """Operation handle used to poll the operation status."""
    status: str | None = None
    """Status value exactly as reported by the server."""
    status_timestamp: VocTimestamp = None
    start_time: VocTimestamp = None
    service_type: str | None = None
    service: str | None = None
    vehicle_id: str | None = None
    failure_reason: Any = None
    """Opaque diagnostic payload, present when ``status`` is ``Failed``."""

    @field_validator("customer_service_id", mode="before")
    @classmethod
    def _coerce_handle(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @computed_field  # type: ignore[prop-decorator]
    @property
    def state(self) -> OperationState:
        return OperationState(self.status) if self.status is not None else OperationState.UNKNOWN

    @property
    def bucket(self) -> OperationBucket:
        return classify(self.status)

    @property
    def is_terminal(self) -> bool:
        return self.bucket is not OperationBucket.RETRY
