"""
The Clinic Unit Scheduling Engine.

This module wires the pure pieces together around one settings snapshot and
one booking repository:
1. Placement (Resolve -> Validate -> Append), a single check-then-write.
2. Daily board (per-unit utilization and the cross-unit average).
3. Monthly report.
4. Timeline geometry for the day view.

Nothing here is cached: every query resolves hours and reloads bookings, so
a settings change is visible on the next call.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import date as date_type, time as time_type
from typing import Dict, List, Mapping, Optional, Protocol, Tuple

from models import (
    Booking,
    BookingRequest,
    ClinicSettings,
    DailyUtilizationSummary,
    MonthlyUtilizationReport,
    ResolvedDayWindow,
    TimelineBlock,
    Unit
)
from .constraints import BookingRejection, RejectionReason, validate
from .hours import DEFAULT_CLOSE_HOUR, DEFAULT_OPEN_HOUR, resolve
from .layout import PIXELS_PER_HOUR, hour_labels, layout, time_slot_options
from .reporting import monthly_report
from .utilization import daily_summary

logger = logging.getLogger(__name__)


class BookingStore(Protocol):
    def load_all(self) -> List[Booking]: ...

    def append(self, booking: Booking) -> None: ...


@dataclass
class PlacementResult:
    """Outcome of place_booking(): exactly one of booking / rejection is set."""
    booking: Optional[Booking] = None
    rejection: Optional[BookingRejection] = None

    @property
    def accepted(self) -> bool:
        return self.booking is not None


class UnitScheduler:
    """
    Main scheduling engine.
    Ingests Settings (Supply) and Booking Requests (Demand), outputs Bookings and Reports.

    Single-process, single-writer: place_booking() re-reads the store and
    appends without locking. A multi-client store would need to re-check
    overlaps at commit or lock per unit and date.
    """

    def __init__(
        self,
        settings: ClinicSettings,
        bookings: BookingStore,
        patients: Optional[Mapping[str, str]] = None
    ):
        self.settings = settings
        self.bookings = bookings
        # patient_id -> display name; None disables the patient check
        self.patients = patients

    @property
    def units(self) -> List[Unit]:
        return self.settings.units

    def resolve_day(self, day: date_type) -> ResolvedDayWindow:
        return resolve(day, self.settings.hours)

    # --- Writes ---

    def place_booking(self, request: BookingRequest) -> PlacementResult:
        """
        Validate a request against the day's hours and the unit's bookings,
        and append it to the store if it passes.
        """
        unit_ids = {u.id for u in self.units}
        if request.unit_id not in unit_ids:
            return self._reject(request, BookingRejection(
                RejectionReason.UNKNOWN_UNIT, f"Unit {request.unit_id} does not exist"
            ))

        patient_name = request.patient_name
        if self.patients is not None:
            if request.patient_id not in self.patients:
                return self._reject(request, BookingRejection(
                    RejectionReason.UNKNOWN_PATIENT, f"No patient with id {request.patient_id}"
                ))
            patient_name = patient_name or self.patients[request.patient_id]

        window = self.resolve_day(request.date)
        existing = self.bookings_for(request.unit_id, request.date)

        rejection = validate(request, existing, window)
        if rejection is not None:
            return self._reject(request, rejection)

        booking = Booking(
            id=uuid.uuid4().hex,
            unit_id=request.unit_id,
            patient_id=request.patient_id,
            patient_name=patient_name or "",
            date=request.date,
            start=request.start,
            end=request.end
        )
        self.bookings.append(booking)
        logger.info(
            f"Booked {booking.unit_id} on {booking.date} "
            f"{booking.start:%H:%M}-{booking.end:%H:%M} for {booking.patient_id} ({booking.id})"
        )
        return PlacementResult(booking=booking)

    def _reject(self, request: BookingRequest, rejection: BookingRejection) -> PlacementResult:
        logger.info(
            f"Rejected {request.unit_id} on {request.date} "
            f"{request.start:%H:%M}-{request.end:%H:%M}: {rejection.reason.value} - {rejection.message}"
        )
        return PlacementResult(rejection=rejection)

    # --- Queries ---

    def bookings_for(self, unit_id: str, day: date_type) -> List[Booking]:
        """All bookings of one unit on one date, ordered by start time."""
        matching = [b for b in self.bookings.load_all() if b.unit_id == unit_id and b.date == day]
        return sorted(matching, key=lambda b: b.start)

    def daily_summary(self, day: date_type) -> DailyUtilizationSummary:
        window = self.resolve_day(day)
        unit_ids = [u.id for u in self.units]
        return daily_summary(unit_ids, day, self.bookings.load_all(), window)

    def monthly_report(self, month: str) -> MonthlyUtilizationReport:
        """Report for a 'YYYY-MM' month."""
        return monthly_report(month, self.units, self.bookings.load_all(), self.settings.hours)

    def timeline(
        self,
        day: date_type,
        pixels_per_hour: float = PIXELS_PER_HOUR
    ) -> Dict[str, List[Tuple[Booking, TimelineBlock]]]:
        """
        Per-unit blocks for the day view. The axis is the fixed
        09:00-18:00 range, regardless of the day's hours.
        """
        axis_start = time_type(DEFAULT_OPEN_HOUR, 0)

        all_bookings = self.bookings.load_all()
        result: Dict[str, List[Tuple[Booking, TimelineBlock]]] = {}
        for unit in self.units:
            unit_bookings = sorted(
                (b for b in all_bookings if b.unit_id == unit.id and b.date == day),
                key=lambda b: b.start
            )
            result[unit.id] = [(b, layout(b, axis_start, pixels_per_hour)) for b in unit_bookings]
        return result

    @staticmethod
    def timeline_labels() -> List[str]:
        return hour_labels(DEFAULT_OPEN_HOUR, DEFAULT_CLOSE_HOUR)

    def slot_options(self, day: date_type) -> List[str]:
        """Start/end choices offered by the booking form for this date."""
        return time_slot_options(self.resolve_day(day))
