"""
Daily Utilization Aggregation.

Booked minutes as a share of bookable minutes, per unit and across units.
Bookings are summed as stored: nothing is clipped to the window and anomalous
records are not repaired, only logged. Rates are clamped to [0, 100].
"""

import logging
from datetime import date as date_type
from typing import Iterable, List, Sequence

from models import Booking, DailyUtilizationSummary, ResolvedDayWindow, UtilizationSample

logger = logging.getLogger(__name__)


def clamp_rate(booked: float, available: float) -> float:
    """Percentage of available time that is booked, within [0, 100]."""
    if available <= 0:
        return 0.0
    return max(0.0, min(100.0, booked / available * 100.0))


def booked_minutes(bookings: Iterable[Booking]) -> int:
    total = 0
    for booking in bookings:
        duration = booking.duration_minutes
        if duration <= 0:
            logger.warning(
                f"Booking {booking.id} on {booking.unit_id} {booking.date} has a non-positive "
                f"duration ({duration} min); summing as stored"
            )
        total += duration
    return total


def _matching(bookings: Iterable[Booking], unit_id: str, day: date_type) -> List[Booking]:
    return [b for b in bookings if b.unit_id == unit_id and b.date == day]


def daily_utilization(
    unit_id: str,
    day: date_type,
    bookings: Iterable[Booking],
    window: ResolvedDayWindow
) -> UtilizationSample:
    """Utilization of one unit on one date."""
    available = window.net_minutes
    booked = booked_minutes(_matching(bookings, unit_id, day))

    return UtilizationSample(
        unit_id=unit_id,
        date=day,
        booked_minutes=booked,
        available_minutes=max(0, available),
        rate=clamp_rate(booked, available)
    )


def daily_average_rate(
    unit_ids: Sequence[str],
    day: date_type,
    bookings: Iterable[Booking],
    window: ResolvedDayWindow
) -> float:
    """
    Cross-unit utilization for one date: all booked minutes over
    (available minutes x unit count). Not a mean of per-unit rates.
    """
    if not unit_ids:
        return 0.0

    wanted = set(unit_ids)
    todays = [b for b in bookings if b.unit_id in wanted and b.date == day]
    return clamp_rate(booked_minutes(todays), window.net_minutes * len(unit_ids))


def daily_summary(
    unit_ids: Sequence[str],
    day: date_type,
    bookings: Iterable[Booking],
    window: ResolvedDayWindow
) -> DailyUtilizationSummary:
    bookings = list(bookings)
    samples = [daily_utilization(unit_id, day, bookings, window) for unit_id in unit_ids]

    total_booked = sum(s.booked_minutes for s in samples)
    average = clamp_rate(total_booked, window.net_minutes * len(unit_ids)) if unit_ids else 0.0

    return DailyUtilizationSummary(date=day, window=window, samples=samples, average_rate=average)
