"""
Timeline layout math for the unit day view.

Pure geometry: a booking becomes a vertical block on a fixed-scale column.
Blocks that start before the visible range are pinned to the top but keep
their full height.
"""

from datetime import time as time_type
from typing import List

from models import Booking, ResolvedDayWindow, TimelineBlock, format_minutes, to_minutes

PIXELS_PER_HOUR = 50
TIME_SLOT_INTERVAL_MINUTES = 30


def layout(booking: Booking, day_view_start: time_type, pixels_per_hour: float = PIXELS_PER_HOUR) -> TimelineBlock:
    offset_minutes = booking.start_minutes - to_minutes(day_view_start)
    top = max(0.0, offset_minutes / 60 * pixels_per_hour)
    height = booking.duration_minutes / 60 * pixels_per_hour
    return TimelineBlock(top_px=top, height_px=height)


def hour_labels(start_hour: int, end_hour: int) -> List[str]:
    """
    'HH:00' labels, one per hour row of the day column. The end hour is
    the bottom edge of the last row and gets no label of its own.
    """
    return [f"{hour:02d}:00" for hour in range(start_hour, end_hour)]


def time_slot_options(window: ResolvedDayWindow, interval_minutes: int = TIME_SLOT_INTERVAL_MINUTES) -> List[str]:
    """
    'HH:MM' choices for the booking form, from opening to closing time
    inclusive. Empty on closed days.
    """
    if window.is_holiday or interval_minutes <= 0:
        return []
    return [
        format_minutes(minute)
        for minute in range(window.open_minutes, window.close_minutes + 1, interval_minutes)
    ]
