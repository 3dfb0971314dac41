"""
Hard Constraint Validation Logic.

This module answers the binary question: "Can this unit be booked at this time?"
It enforces opening hours, the break, and physical reality (a unit holds one
patient at a time). Rejections are returned, never raised.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from models import Booking, BookingRequest, ResolvedDayWindow, format_minutes


class RejectionReason(str, Enum):
    """Why a proposed booking was refused."""
    INVALID_INTERVAL = "InvalidInterval"
    CLINIC_CLOSED = "ClinicClosed"
    OUTSIDE_OPERATING_HOURS = "OutsideOperatingHours"
    OVERLAPS_BREAK = "OverlapsBreak"
    OVERLAPS_EXISTING_BOOKING = "OverlapsExistingBooking"
    # Pre-checks done by the engine before validate() runs
    UNKNOWN_UNIT = "UnknownUnit"
    UNKNOWN_PATIENT = "UnknownPatient"


@dataclass
class BookingRejection:
    """Detailed reason for rejection."""
    reason: RejectionReason
    message: str
    conflicting_booking_id: Optional[str] = None


def validate(
    proposed: BookingRequest,
    existing: Iterable[Booking],
    window: ResolvedDayWindow
) -> Optional[BookingRejection]:
    """
    Master validation function. Returns None if valid, a BookingRejection if not.

    `existing` must already be narrowed to the same unit and date.
    Checks run in order and the first failure wins.
    """
    start, end = proposed.start_minutes, proposed.end_minutes

    # 1. Interval sanity (also rules out zero-length bookings)
    if start >= end:
        return BookingRejection(RejectionReason.INVALID_INTERVAL, "End time must be after start time")

    # 2. Closed day
    if window.is_holiday:
        return BookingRejection(RejectionReason.CLINIC_CLOSED, "The clinic is closed on this date")

    # 3. Opening hours
    if start < window.open_minutes or end > window.close_minutes:
        return BookingRejection(
            RejectionReason.OUTSIDE_OPERATING_HOURS,
            f"Bookings must fall within opening hours "
            f"({format_minutes(window.open_minutes)} - {format_minutes(window.close_minutes)})"
        )

    # 4. Break
    if window.has_break and start < window.break_end_minutes and end > window.break_start_minutes:
        return BookingRejection(
            RejectionReason.OVERLAPS_BREAK,
            f"Booking overlaps the break "
            f"({format_minutes(window.break_start_minutes)} - {format_minutes(window.break_end_minutes)})"
        )

    # 5. Existing bookings. Standard overlap logic: StartA < EndB and StartB < EndA,
    # so back-to-back bookings are allowed.
    for booking in existing:
        if start < booking.end_minutes and end > booking.start_minutes:
            return BookingRejection(
                RejectionReason.OVERLAPS_EXISTING_BOOKING,
                f"Clash with booking {booking.id} "
                f"({format_minutes(booking.start_minutes)} - {format_minutes(booking.end_minutes)})",
                conflicting_booking_id=booking.id
            )

    return None  # All clear!
