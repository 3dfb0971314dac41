"""
Persistence collaborators: a key-value store and the repositories built on it.
"""

from .store import InMemoryStore, JsonFileStore, KeyValueStore
from .repositories import (
    BOOKINGS_KEY,
    PATIENTS_KEY,
    SETTINGS_KEY,
    BookingRepository,
    PatientDirectory,
    SettingsRepository
)

__all__ = [
    "InMemoryStore",
    "JsonFileStore",
    "KeyValueStore",
    "BOOKINGS_KEY",
    "PATIENTS_KEY",
    "SETTINGS_KEY",
    "BookingRepository",
    "PatientDirectory",
    "SettingsRepository",
]
