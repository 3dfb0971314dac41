"""
Monthly Utilization Reporting.

Rolls a month of resolved days and bookings up into per-unit and overall
utilization. Every unit shares the same calendar, so available minutes are
accumulated once per operating day and reused for each unit.
"""

import calendar
import logging
from collections import defaultdict
from datetime import date as date_type, datetime
from typing import Dict, Iterable, List, Tuple

from models import Booking, MonthlyUtilizationReport, OperatingHoursConfig, Unit, UnitMonthlyUsage
from .hours import resolve
from .utilization import booked_minutes, clamp_rate

logger = logging.getLogger(__name__)


def parse_month(month: str) -> Tuple[int, int]:
    """'YYYY-MM' -> (year, month). Raises ValueError on anything else."""
    parsed = datetime.strptime(month, "%Y-%m")
    return parsed.year, parsed.month


def month_dates(year: int, month: int) -> List[date_type]:
    _, days_in_month = calendar.monthrange(year, month)
    return [date_type(year, month, day) for day in range(1, days_in_month + 1)]


def operating_minutes_in_month(year: int, month: int, config: OperatingHoursConfig) -> Tuple[int, int]:
    """
    Returns (operating_days_count, available_minutes_per_unit).
    A day counts only when it is not a holiday and has positive net minutes.
    """
    operating_days = 0
    available_per_unit = 0

    for day in month_dates(year, month):
        window = resolve(day, config)
        if window.is_holiday:
            continue
        net = window.net_minutes
        if net > 0:
            operating_days += 1
            available_per_unit += net

    return operating_days, available_per_unit


def monthly_report(
    month: str,
    units: List[Unit],
    bookings: Iterable[Booking],
    config: OperatingHoursConfig
) -> MonthlyUtilizationReport:
    """
    Per-unit and overall utilization for a 'YYYY-MM' month.
    Bookings are filtered by unit id and month only; their validity against
    the day's hours is not re-checked.
    """
    year, month_num = parse_month(month)
    operating_days, available_per_unit = operating_minutes_in_month(year, month_num, config)

    # Group this month's bookings by unit
    by_unit: Dict[str, List[Booking]] = defaultdict(list)
    for booking in bookings:
        if booking.date.year == year and booking.date.month == month_num:
            by_unit[booking.unit_id].append(booking)

    per_unit = []
    total_booked = 0
    for unit in units:
        booked = booked_minutes(by_unit.get(unit.id, []))
        total_booked += booked
        per_unit.append(UnitMonthlyUsage(
            unit_id=unit.id,
            unit_name=unit.name,
            booked_minutes=booked,
            available_minutes=available_per_unit,
            rate=clamp_rate(booked, available_per_unit)
        ))

    overall = clamp_rate(total_booked, available_per_unit * len(units))

    if operating_days == 0:
        logger.info(f"{month}: no operating days, all rates are 0")

    return MonthlyUtilizationReport(
        month=f"{year:04d}-{month_num:02d}",
        operating_days_count=operating_days,
        per_unit=per_unit,
        overall_average_rate=overall
    )
