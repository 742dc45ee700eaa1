"""Vehicle, relation, status and attribute models."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from pyvoc.models._base import VocBaseModel, VocTimestamp

VERIFIED_STATUS = "Verified"


class VehicleRelation(VocBaseModel):
    """Link object connecting an account to a vehicle.

    Fetched from ``vehicle-account-relations/{relationId}``.
    """

    account: str = ""
    account_id: str = ""
    vehicle: str = ""
    account_vehicle_relation: str = ""
    vehicle_id: str = ""
    username: str = ""
    status: str = ""
    customer_vehicle_relation_id: int | None = None


class Vehicle(BaseModel):
    """A vehicle linked to the account.

    Identity only; status and attributes are fetched on demand.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: str = Field(validation_alias=AliasChoices("vehicleId", "id"))
    """Stable vendor-assigned identifier (the VIN)."""
    relation_id: int | None = Field(
        default=None,
        validation_alias=AliasChoices("customerVehicleRelationId", "relation_id", "relationId"),
    )
    """Numeric id of the account-to-vehicle link."""
    status: str = ""
    """Verification state of the link."""

    @classmethod
    def from_relation(cls, relation: VehicleRelation) -> Vehicle:
        return cls(id=relation.vehicle_id, relation_id=relation.customer_vehicle_relation_id, status=relation.status)

    @property
    def is_verified(self) -> bool:
        return self.status == VERIFIED_STATUS


class Doors(VocBaseModel):
    tailgate_open: bool | None = None
    rear_right_door_open: bool | None = None
    rear_left_door_open: bool | None = None
    front_right_door_open: bool | None = None
    front_left_door_open: bool | None = None
    hood_open: bool | None = None
    timestamp: VocTimestamp = None

    @property
    def any_open(self) -> bool:
        return any(
            (
                self.tailgate_open,
                self.rear_right_door_open,
                self.rear_left_door_open,
                self.front_right_door_open,
                self.front_left_door_open,
                self.hood_open,
            )
        )


class Windows(VocBaseModel):
    front_left_window_open: bool | None = None
    front_right_window_open: bool | None = None
    rear_right_window_open: bool | None = None
    rear_left_window_open: bool | None = None
    timestamp: VocTimestamp = None

    @property
    def any_open(self) -> bool:
        return any(
            (
                self.front_left_window_open,
                self.front_right_window_open,
                self.rear_right_window_open,
                self.rear_left_window_open,
            )
        )


class VehicleStatus(VocBaseModel):
    """Last telemetry snapshot reported by ``vehicles/{id}/status``.

    Only commonly used fields are typed; everything else stays in ``raw``.
    """

    average_fuel_consumption: float | None = None
    average_speed: float | None = None
    brake_fluid: str | None = None
    car_locked: bool | None = None
    car_locked_timestamp: VocTimestamp = None
    distance_to_empty: float | None = None
    fuel_amount: float | None = None
    fuel_amount_level: float | None = None
    odometer: float | None = None
    odometer_timestamp: VocTimestamp = None
    service_warning_status: str | None = None
    trip_meter1: float | None = None
    trip_meter2: float | None = None
    washer_fluid_level: str | None = None
    heater: dict[str, Any] = Field(default_factory=dict)
    doors: Doors | None = None
    windows: Windows | None = None
    time_fully_accessible_until: VocTimestamp = None
    time_partially_accessible_until: VocTimestamp = None


class VehicleAttributes(VocBaseModel):
    """Static vehicle capabilities from ``vehicles/{id}/attributes``."""

    vin: str = Field(default="", validation_alias=AliasChoices("VIN", "vin"))
    registration_number: str = ""
    model_year: int | None = None
    vehicle_type: str = ""
    vehicle_type_code: str = ""
    fuel_type: str = ""
    fuel_tank_volume: float | None = None
    number_of_doors: int | None = None
    vehicle_platform: str = ""
    subscription_type: str = ""
    subscription_end_date: VocTimestamp = None
    car_locator_supported: bool = False
    honk_and_blink_supported: bool = False
    remote_heater_supported: bool = False
    unlock_supported: bool = False
    lock_supported: bool = False
    preclimatization_supported: bool = False
    engine_start_supported: bool = False
    high_voltage_battery_supported: bool = False
    unlock_time_frame: int | None = None


class VehicleInfo(BaseModel):
    """Attributes and status fetched together."""

    model_config = ConfigDict(frozen=True)

    vehicle: Vehicle
    attributes: VehicleAttributes
    status: VehicleStatus
