"""
Operating-hours data models for the Clinic Unit Scheduler.

This module defines the 'Calendar' side of the engine:
1. Clinic-wide default hours and break
2. Per-weekday overrides (default / holiday / custom hours)
3. Explicit dated closures
4. The resolved window for one calendar date (derived, never stored)
"""

from datetime import date as date_type
from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .schedule import ClockTime


class Weekday(str, Enum):
    """Weekday keys, Sunday first."""
    SUNDAY = "sunday"
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"

    @classmethod
    def from_date(cls, day: date_type) -> "Weekday":
        # date.weekday() is Monday=0, the keys are Sunday first
        return list(cls)[(day.weekday() + 1) % 7]


WEEKDAYS: List[Weekday] = list(Weekday)


class UseDefault(BaseModel):
    """The weekday follows the clinic's default hours."""
    kind: Literal["default"] = "default"


class Holiday(BaseModel):
    """The clinic is closed every week on this weekday."""
    kind: Literal["holiday"] = "holiday"


class Custom(BaseModel):
    """Weekday-specific hours replacing the defaults."""
    kind: Literal["custom"] = "custom"
    open: Optional[ClockTime] = Field(default=None, description="Opening time for this weekday")
    close: Optional[ClockTime] = Field(default=None, description="Closing time for this weekday")
    break_start: Optional[ClockTime] = None
    break_end: Optional[ClockTime] = None


DayOverride = Annotated[Union[UseDefault, Holiday, Custom], Field(discriminator="kind")]


class ClinicHoliday(BaseModel):
    """A single dated closure (national holiday, staff training day...)."""
    date: date_type
    name: str = Field(default="Closed", description="Label shown on the calendar")


class OperatingHoursConfig(BaseModel):
    """
    Layered operating-hours configuration.

    Values are not cross-validated here: a malformed config must still
    resolve (see scheduler.hours.resolve). Validity is checked when the
    settings are saved.
    """
    default_open: Optional[ClockTime] = Field(default=None, description="Default opening time")
    default_close: Optional[ClockTime] = Field(default=None, description="Default closing time")
    default_break_start: Optional[ClockTime] = None
    default_break_end: Optional[ClockTime] = None

    day_overrides: Dict[Weekday, DayOverride] = Field(
        default_factory=dict,
        description="Per-weekday rule; a missing weekday behaves like 'default'"
    )
    holidays: List[ClinicHoliday] = Field(
        default_factory=list,
        description="Explicit dated closures, checked before weekday rules"
    )

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "default_open": "09:00",
            "default_close": "18:00",
            "default_break_start": "12:00",
            "default_break_end": "13:00",
            "day_overrides": {
                "sunday": {"kind": "holiday"},
                "saturday": {"kind": "custom", "open": "09:00", "close": "13:00"}
            },
            "holidays": [{"date": "2024-01-01", "name": "New Year"}]
        }
    })

    def override_for(self, weekday: Weekday):
        return self.day_overrides.get(weekday, UseDefault())

    def holiday_on(self, day: date_type) -> Optional[ClinicHoliday]:
        for holiday in self.holidays:
            if holiday.date == day:
                return holiday
        return None


class ResolvedDayWindow(BaseModel):
    """
    Effective hours for one calendar date, in minutes since midnight.
    Derived on every query; never persisted.
    """
    open_minutes: int = Field(default=0, ge=0)
    close_minutes: int = Field(default=0, ge=0)
    break_minutes: int = Field(default=0, ge=0, description="Break length already clipped to [open, close]")
    is_holiday: bool = False

    # Clipped break bounds, None when the day has no break
    break_start_minutes: Optional[int] = None
    break_end_minutes: Optional[int] = None

    @classmethod
    def closed(cls) -> "ResolvedDayWindow":
        return cls(is_holiday=True)

    @property
    def has_break(self) -> bool:
        return self.break_minutes > 0 and self.break_start_minutes is not None

    @property
    def net_minutes(self) -> int:
        """Bookable minutes per unit: window length minus break."""
        if self.is_holiday:
            return 0
        return (self.close_minutes - self.open_minutes) - self.break_minutes
