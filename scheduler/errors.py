"""
Exceptions raised by the scheduling engine.

Booking rejections are NOT exceptions; see scheduler.constraints.
"""

from typing import List


class ClinicSchedulingError(Exception):
    """Base class for engine errors."""


class ConfigurationError(ClinicSchedulingError):
    """Operating-hours settings that must not be saved."""

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        super().__init__("Invalid operating hours: " + "; ".join(self.problems))
