"""
Repositories over a KeyValueStore.

BookingRepository is append/read only: the engine never updates or deletes
bookings. SettingsRepository refuses to save operating hours that
check_hours_config() flags. PatientDirectory is read only; patients are
maintained elsewhere.
"""

import logging
from typing import Dict, List, Optional

from pydantic import ValidationError

from models import Booking, ClinicSettings, Patient
from scheduler.hours import ensure_valid_hours_config
from .store import KeyValueStore

logger = logging.getLogger(__name__)

BOOKINGS_KEY = "unitBookings"
SETTINGS_KEY = "clinicSettings"
PATIENTS_KEY = "patients"


class BookingRepository:
    """Persisted unit bookings, stored as one JSON list."""

    def __init__(self, store: KeyValueStore, key: str = BOOKINGS_KEY):
        self.store = store
        self.key = key

    def load_all(self) -> List[Booking]:
        raw = self.store.load(self.key, [])
        if not isinstance(raw, list):
            logger.warning(f"Expected a list under '{self.key}', got {type(raw).__name__}. Ignoring it.")
            return []

        bookings = []
        for item in raw:
            try:
                bookings.append(Booking.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping malformed booking record {item!r}: {e.error_count()} error(s)")
        return bookings

    def append(self, booking: Booking) -> None:
        raw = self.store.load(self.key, [])
        if not isinstance(raw, list):
            raw = []
        raw.append(booking.model_dump(mode="json"))
        self.store.save(self.key, raw)


class SettingsRepository:
    """Clinic settings snapshot."""

    def __init__(self, store: KeyValueStore, key: str = SETTINGS_KEY):
        self.store = store
        self.key = key

    def load(self) -> ClinicSettings:
        raw = self.store.load(self.key, None)
        if raw is None:
            return ClinicSettings()
        try:
            return ClinicSettings.model_validate(raw)
        except ValidationError as e:
            logger.warning(f"Stored settings are invalid ({e.error_count()} error(s)); using defaults.")
            return ClinicSettings()

    def save(self, settings: ClinicSettings) -> None:
        """Raises ConfigurationError without writing if the hours are malformed."""
        ensure_valid_hours_config(settings.hours)
        self.store.save(self.key, settings.model_dump(mode="json"))


class PatientDirectory:
    """Patient id -> display name lookup, stored as a JSON list of patient records."""

    def __init__(self, store: KeyValueStore, key: str = PATIENTS_KEY):
        self.store = store
        self.key = key

    def load(self) -> Optional[Dict[str, str]]:
        """
        None when no directory is stored, which turns the patient check off.
        Malformed records are skipped.
        """
        raw = self.store.load(self.key, None)
        if raw is None:
            return None
        if not isinstance(raw, list):
            logger.warning(f"Expected a list under '{self.key}', got {type(raw).__name__}. Ignoring it.")
            return None

        patients = {}
        for item in raw:
            try:
                patient = Patient.model_validate(item)
            except ValidationError as e:
                logger.warning(f"Skipping malformed patient record {item!r}: {e.error_count()} error(s)")
                continue
            patients[patient.id] = patient.name
        return patients
