"""
Utilization result models. All derived, recomputed per query.
"""

from datetime import date as date_type
from typing import List

from pydantic import BaseModel, Field

from .hours import ResolvedDayWindow


class UtilizationSample(BaseModel):
    """Booked vs. available minutes for one unit on one date."""
    unit_id: str
    date: date_type
    booked_minutes: int
    available_minutes: int = Field(ge=0)
    rate: float = Field(ge=0.0, le=100.0, description="Percentage, clamped to [0, 100]")


class DailyUtilizationSummary(BaseModel):
    """Per-unit samples for one date plus the cross-unit average."""
    date: date_type
    window: ResolvedDayWindow
    samples: List[UtilizationSample] = Field(default_factory=list)
    average_rate: float = Field(ge=0.0, le=100.0)


class UnitMonthlyUsage(BaseModel):
    unit_id: str
    unit_name: str
    booked_minutes: int
    available_minutes: int = Field(ge=0, description="Available minutes for this single unit over the month")
    rate: float = Field(ge=0.0, le=100.0)


class MonthlyUtilizationReport(BaseModel):
    """
    Month rollup. overall_average_rate is total booked over total available
    across all units, not a mean of per-unit rates.
    """
    month: str = Field(pattern=r"^\d{4}-\d{2}$", description="YYYY-MM")
    operating_days_count: int = Field(ge=0)
    per_unit: List[UnitMonthlyUsage] = Field(default_factory=list)
    overall_average_rate: float = Field(ge=0.0, le=100.0)
