"""
Booking data models for the Clinic Unit Scheduler.

This module defines the 'Output' of the engine:
committed unit bookings, the requests that produce them, and the
timeline geometry used to draw them.
"""

from datetime import date as date_type, time as time_type
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_serializer


def to_minutes(value: time_type) -> int:
    """Minutes since midnight."""
    return value.hour * 60 + value.minute


def format_minutes(minutes: int) -> str:
    """Minutes since midnight as 'HH:MM'."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def check_minute_precision(value: time_type) -> time_type:
    """
    Clock times are whole minutes in the clinic's local time. Seconds would
    be dropped by to_minutes() and an offset cannot be compared with a
    naive time, so both are rejected at the edge.
    """
    if value.tzinfo is not None:
        raise ValueError("time must not carry a UTC offset")
    if value.second or value.microsecond:
        raise ValueError("time must be whole minutes (HH:MM)")
    return value


ClockTime = Annotated[time_type, AfterValidator(check_minute_precision)]


class BookingRequest(BaseModel):
    """A proposed booking, not yet validated."""
    unit_id: str = Field(description="Target unit, e.g. 'unit-1'")
    patient_id: str = Field(min_length=1)
    patient_name: Optional[str] = Field(default=None, description="Resolved by the engine when omitted")
    date: date_type
    start: ClockTime
    end: ClockTime

    @property
    def start_minutes(self) -> int:
        return to_minutes(self.start)

    @property
    def end_minutes(self) -> int:
        return to_minutes(self.end)


class Booking(BaseModel):
    """
    A committed block of time on one unit.

    start < end is checked when the booking is placed, not here: persisted
    data that breaks the rule must still load so reports can sum it.
    """
    id: str = Field(description="Unique identifier")
    unit_id: str
    patient_id: str
    patient_name: str = Field(default="", description="Display name resolved at booking time")
    date: date_type = Field(description="Calendar date")
    start: ClockTime
    end: ClockTime

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "id": "b3c1f2a4",
            "unit_id": "unit-1",
            "patient_id": "P-0042",
            "patient_name": "Hanako Yamada",
            "date": "2024-06-03",
            "start": "10:00",
            "end": "11:00"
        }
    })

    @field_serializer("start", "end", when_used="json")
    def _serialize_time(self, value: time_type) -> str:
        return value.strftime("%H:%M")

    @property
    def start_minutes(self) -> int:
        return to_minutes(self.start)

    @property
    def end_minutes(self) -> int:
        return to_minutes(self.end)

    @property
    def duration_minutes(self) -> int:
        """Raw end - start; negative for anomalous records."""
        return self.end_minutes - self.start_minutes


class TimelineBlock(BaseModel):
    """Vertical placement of a booking on the day timeline."""
    top_px: float = Field(ge=0)
    height_px: float
