"""
Operating-Hours Resolution.

This module answers the question: "When is the clinic open on date D?"
Resolution order:
1. Explicit dated closures
2. Weekday override (Holiday / Custom / UseDefault)
3. Clinic defaults
4. Hard-coded 09:00-18:00 window

The resolver is total: malformed settings degrade to defaults or "no break"
instead of raising. The strict checks live in check_hours_config(), which the
settings-save path calls before persisting.
"""

from datetime import date as date_type, time as time_type
from typing import List, Optional, Tuple

from models import Custom, Holiday, OperatingHoursConfig, ResolvedDayWindow, Weekday, WEEKDAYS, to_minutes
from .errors import ConfigurationError

DEFAULT_OPEN_HOUR = 9
DEFAULT_CLOSE_HOUR = 18


def resolve(day: date_type, config: OperatingHoursConfig) -> ResolvedDayWindow:
    """Effective open/close/break for one calendar date. Pure."""
    if config.holiday_on(day) is not None:
        return ResolvedDayWindow.closed()

    override = config.override_for(Weekday.from_date(day))
    if isinstance(override, Holiday):
        return ResolvedDayWindow.closed()

    if isinstance(override, Custom):
        open_t, close_t = override.open, override.close
        break_start, break_end = override.break_start, override.break_end
    else:
        open_t, close_t = config.default_open, config.default_close
        break_start, break_end = config.default_break_start, config.default_break_end

    open_min, close_min = _resolve_window(open_t, close_t)
    clipped = _clip_break(break_start, break_end, open_min, close_min)

    if clipped is None:
        return ResolvedDayWindow(open_minutes=open_min, close_minutes=close_min)

    b_start, b_end = clipped
    return ResolvedDayWindow(
        open_minutes=open_min,
        close_minutes=close_min,
        break_minutes=b_end - b_start,
        break_start_minutes=b_start,
        break_end_minutes=b_end
    )


def _resolve_window(open_t: Optional[time_type], close_t: Optional[time_type]) -> Tuple[int, int]:
    open_min = to_minutes(open_t) if open_t is not None else DEFAULT_OPEN_HOUR * 60
    close_min = to_minutes(close_t) if close_t is not None else DEFAULT_CLOSE_HOUR * 60

    if open_min >= close_min:
        return DEFAULT_OPEN_HOUR * 60, DEFAULT_CLOSE_HOUR * 60
    return open_min, close_min


def _clip_break(
    start: Optional[time_type],
    end: Optional[time_type],
    open_min: int,
    close_min: int
) -> Optional[Tuple[int, int]]:
    """Break interval clipped to [open, close], or None when there is no usable break."""
    if start is None or end is None:
        return None

    b_start, b_end = to_minutes(start), to_minutes(end)
    if b_start >= b_end:
        return None

    b_start = max(b_start, open_min)
    b_end = min(b_end, close_min)
    if b_end <= b_start:
        return None
    return b_start, b_end


# --- Settings-save validation ---

def check_hours_config(config: OperatingHoursConfig) -> List[str]:
    """
    Lists every problem that should block saving these settings.
    An empty list means the config is valid.
    """
    problems = _check_hours(
        "default",
        config.default_open,
        config.default_close,
        config.default_break_start,
        config.default_break_end,
        require_window=False
    )

    # Sunday-first, whatever order the overrides were stored in
    for weekday in WEEKDAYS:
        override = config.override_for(weekday)
        if isinstance(override, Custom):
            problems.extend(_check_hours(
                weekday.value,
                override.open,
                override.close,
                override.break_start,
                override.break_end,
                require_window=True
            ))

    seen = set()
    for holiday in config.holidays:
        if holiday.date in seen:
            problems.append(f"holiday {holiday.date.isoformat()} is listed twice")
        seen.add(holiday.date)

    return problems


def ensure_valid_hours_config(config: OperatingHoursConfig) -> None:
    """Raises ConfigurationError if check_hours_config() finds anything."""
    problems = check_hours_config(config)
    if problems:
        raise ConfigurationError(problems)


def _check_hours(
    label: str,
    open_t: Optional[time_type],
    close_t: Optional[time_type],
    break_start: Optional[time_type],
    break_end: Optional[time_type],
    require_window: bool
) -> List[str]:
    problems = []

    if require_window and (open_t is None or close_t is None):
        problems.append(f"{label}: custom hours need both an opening and a closing time")

    if open_t is not None and close_t is not None and open_t >= close_t:
        problems.append(f"{label}: opening time must be before closing time")

    if (break_start is None) != (break_end is None):
        problems.append(f"{label}: break start and break end must be set together")
    elif break_start is not None and break_end is not None:
        if break_start >= break_end:
            problems.append(f"{label}: break start must be before break end")
        elif open_t is not None and close_t is not None and open_t < close_t:
            if break_start < open_t or break_end > close_t:
                problems.append(f"{label}: break must fall within operating hours")

    return problems
