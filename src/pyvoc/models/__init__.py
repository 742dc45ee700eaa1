"""Data models for Volvo On Call API responses."""

from pyvoc.models._base import VocBaseModel, VocEnum, VocTimestamp, parse_voc_timestamp
from pyvoc.models.account import Account, parse_relation_id
from pyvoc.models.operation import (
    FAILURE_STATES,
    RETRYABLE_STATES,
    SUCCESS_STATES,
    OperationBucket,
    OperationState,
    ServiceCommand,
    ServiceOperation,
    classify,
)
from pyvoc.models.vehicle import (
    Doors,
    Vehicle,
    VehicleAttributes,
    VehicleInfo,
    VehicleRelation,
    VehicleStatus,
    Windows,
)

__all__ = [
    "FAILURE_STATES",
    "RETRYABLE_STATES",
    "SUCCESS_STATES",
    "Account",
    "Doors",
    "OperationBucket",
    "OperationState",
    "ServiceCommand",
    "ServiceOperation",
    "Vehicle",
    "VehicleAttributes",
    "VehicleInfo",
    "VehicleRelation",
    "VehicleStatus",
    "VocBaseModel",
    "VocEnum",
    "VocTimestamp",
    "Windows",
    "classify",
    "parse_relation_id",
    "parse_voc_timestamp",
]
