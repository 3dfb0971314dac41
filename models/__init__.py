"""
Data models package for the Clinic Unit Scheduler.

This package exports the core pillars of the data architecture:
1. Calendar (OperatingHoursConfig, DayOverride, ResolvedDayWindow)
2. Supply (Unit, ClinicSettings)
3. Output (Booking, BookingRequest, TimelineBlock)
4. Reporting (UtilizationSample, MonthlyUtilizationReport)
"""

from .hours import (
    ClinicHoliday,
    Custom,
    DayOverride,
    Holiday,
    OperatingHoursConfig,
    ResolvedDayWindow,
    UseDefault,
    Weekday,
    WEEKDAYS
)

from .resource import (
    ClinicSettings,
    MAX_UNITS,
    Patient,
    Unit,
    build_units
)

from .schedule import (
    Booking,
    BookingRequest,
    ClockTime,
    TimelineBlock,
    check_minute_precision,
    format_minutes,
    to_minutes
)

from .utilization import (
    DailyUtilizationSummary,
    MonthlyUtilizationReport,
    UnitMonthlyUsage,
    UtilizationSample
)

__all__ = [
    # --- Calendar Models ---
    "ClinicHoliday",
    "Custom",
    "DayOverride",
    "Holiday",
    "OperatingHoursConfig",
    "ResolvedDayWindow",
    "UseDefault",
    "Weekday",
    "WEEKDAYS",

    # --- Supply Models ---
    "ClinicSettings",
    "MAX_UNITS",
    "Patient",
    "Unit",
    "build_units",

    # --- Output Models ---
    "Booking",
    "BookingRequest",
    "ClockTime",
    "TimelineBlock",
    "check_minute_precision",
    "format_minutes",
    "to_minutes",

    # --- Reporting Models ---
    "DailyUtilizationSummary",
    "MonthlyUtilizationReport",
    "UnitMonthlyUsage",
    "UtilizationSample",
]
