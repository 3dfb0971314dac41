"""
Resource and Settings data models for the Clinic Unit Scheduler.

This module defines the 'Supply' side of the engine:
1. Units (homogeneous treatment chairs, generated from a count)
2. Clinic settings (the snapshot every engine call receives)
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from .hours import OperatingHoursConfig

MAX_UNITS = 50


class Unit(BaseModel):
    """A bookable treatment unit. Identity only, never persisted."""
    id: str = Field(description="Stable identifier, e.g. 'unit-1'")
    name: str = Field(min_length=1, description="Display name, e.g. 'Unit No.1'")

    model_config = ConfigDict(frozen=True)


class Patient(BaseModel):
    """Directory entry used to check patient ids and fill in display names."""
    id: str = Field(min_length=1)
    name: str = Field(default="", description="Display name shown on bookings")


class ClinicSettings(BaseModel):
    """
    Clinic-wide settings consumed by the engine.
    Passed explicitly into every call; the engine never caches it.
    """
    clinic_name: str = Field(default="", description="Shown in report headers")
    number_of_units: int = Field(
        default=1,
        ge=0,
        le=MAX_UNITS,
        description="How many treatment units the clinic operates"
    )
    hours: OperatingHoursConfig = Field(default_factory=OperatingHoursConfig)

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "clinic_name": "Sakura Dental",
            "number_of_units": 3,
            "hours": {
                "default_open": "09:00",
                "default_close": "18:00",
                "default_break_start": "12:00",
                "default_break_end": "13:00",
                "day_overrides": {"sunday": {"kind": "holiday"}}
            }
        }
    })

    @property
    def units(self) -> List[Unit]:
        return build_units(self.number_of_units)


def build_units(count: int) -> List[Unit]:
    """Regenerate the unit list from a count. Ids are 1-based and stable."""
    return [Unit(id=f"unit-{i}", name=f"Unit No.{i}") for i in range(1, count + 1)]
