from __future__ import annotations

from datetime import date, time, timedelta

import pytest

from pydantic import ValidationError

from models import ClinicHoliday, Custom, Holiday, OperatingHoursConfig, UseDefault, WEEKDAYS, Weekday
from scheduler.errors import ConfigurationError
from scheduler.hours import check_hours_config, ensure_valid_hours_config, resolve

MONDAY = date(2024, 6, 3)
SUNDAY = date(2024, 6, 2)
SATURDAY = date(2024, 6, 8)


def _config(**overrides) -> OperatingHoursConfig:
    values = dict(
        default_open=time(9, 0),
        default_close=time(18, 0),
        default_break_start=time(12, 0),
        default_break_end=time(13, 0),
        day_overrides={Weekday.MONDAY: UseDefault(), Weekday.SUNDAY: Holiday()},
    )
    values.update(overrides)
    return OperatingHoursConfig(**values)


def test_weekday_from_date_is_sunday_first() -> None:
    assert Weekday.from_date(SUNDAY) == Weekday.SUNDAY
    assert WEEKDAYS[0] == Weekday.SUNDAY
    assert WEEKDAYS[-1] == Weekday.SATURDAY
    assert Weekday.from_date(MONDAY) == Weekday.MONDAY
    assert Weekday.from_date(SATURDAY) == Weekday.SATURDAY


def test_default_weekday_uses_clinic_hours() -> None:
    window = resolve(MONDAY, _config())

    assert window.open_minutes == 540
    assert window.close_minutes == 1080
    assert window.break_minutes == 60
    assert window.is_holiday is False
    assert (window.break_start_minutes, window.break_end_minutes) == (720, 780)


def test_weekday_holiday_is_closed() -> None:
    window = resolve(SUNDAY, _config())

    assert window.is_holiday is True
    assert (window.open_minutes, window.close_minutes, window.break_minutes) == (0, 0, 0)
    assert window.net_minutes == 0


def test_missing_weekday_falls_back_to_defaults() -> None:
    # Tuesday has no override at all
    window = resolve(date(2024, 6, 4), _config())
    assert (window.open_minutes, window.close_minutes, window.break_minutes) == (540, 1080, 60)


def test_custom_override_replaces_defaults() -> None:
    config = _config(day_overrides={
        Weekday.SATURDAY: Custom(open=time(9, 30), close=time(13, 0)),
    })
    window = resolve(SATURDAY, config)

    assert (window.open_minutes, window.close_minutes) == (570, 780)
    # Custom days don't inherit the default break
    assert window.break_minutes == 0
    assert window.has_break is False


def test_explicit_dated_holiday_wins_over_weekday_rules() -> None:
    config = _config(holidays=[ClinicHoliday(date=MONDAY, name="Staff training")])

    assert resolve(MONDAY, config).is_holiday is True
    assert resolve(MONDAY + timedelta(days=7), config).is_holiday is False


def test_absent_hours_use_hard_coded_window() -> None:
    window = resolve(MONDAY, OperatingHoursConfig())
    assert (window.open_minutes, window.close_minutes, window.break_minutes) == (540, 1080, 0)


def test_inverted_window_falls_back_to_default_window() -> None:
    config = _config(default_open=time(19, 0), default_close=time(8, 0), default_break_start=None, default_break_end=None)
    window = resolve(MONDAY, config)
    assert (window.open_minutes, window.close_minutes) == (540, 1080)


def test_lone_break_bound_resolves_as_no_break() -> None:
    window = resolve(MONDAY, _config(default_break_end=None))
    assert window.break_minutes == 0
    assert window.break_start_minutes is None


def test_inverted_break_resolves_as_no_break() -> None:
    window = resolve(MONDAY, _config(default_break_start=time(14, 0), default_break_end=time(13, 0)))
    assert window.break_minutes == 0


def test_break_is_clipped_to_operating_window() -> None:
    config = _config(default_break_start=time(8, 0), default_break_end=time(10, 0))
    window = resolve(MONDAY, config)

    assert window.break_minutes == 60
    assert (window.break_start_minutes, window.break_end_minutes) == (540, 600)


def test_break_entirely_outside_window_is_ignored() -> None:
    window = resolve(MONDAY, _config(default_break_start=time(19, 0), default_break_end=time(20, 0)))
    assert window.break_minutes == 0


def test_resolve_is_deterministic() -> None:
    config = _config()
    assert resolve(MONDAY, config) == resolve(MONDAY, config)


@pytest.mark.parametrize("config", [
    OperatingHoursConfig(),
    OperatingHoursConfig(default_open=time(18, 0), default_close=time(9, 0)),
    OperatingHoursConfig(default_break_start=time(6, 0), default_break_end=time(23, 0)),
    OperatingHoursConfig(default_open=time(10, 0), default_break_start=time(10, 0)),
    OperatingHoursConfig(day_overrides={Weekday.MONDAY: Custom(close=time(8, 0), break_start=time(7, 0), break_end=time(7, 30))}),
])
def test_resolved_window_ordering_holds_for_malformed_configs(config: OperatingHoursConfig) -> None:
    for offset in range(7):
        window = resolve(MONDAY + timedelta(days=offset), config)
        if window.is_holiday:
            continue
        assert window.open_minutes <= window.close_minutes
        assert 0 <= window.break_minutes <= window.close_minutes - window.open_minutes


def test_config_parses_from_settings_json() -> None:
    config = OperatingHoursConfig.model_validate({
        "default_open": "09:00",
        "default_close": "18:00",
        "day_overrides": {
            "sunday": {"kind": "holiday"},
            "saturday": {"kind": "custom", "open": "09:00", "close": "13:00"},
        },
    })

    assert isinstance(config.override_for(Weekday.SUNDAY), Holiday)
    assert isinstance(config.override_for(Weekday.SATURDAY), Custom)
    assert isinstance(config.override_for(Weekday.MONDAY), UseDefault)


def test_valid_config_has_no_problems() -> None:
    assert check_hours_config(_config()) == []
    ensure_valid_hours_config(_config())  # should not raise


def test_lone_break_bound_is_a_configuration_error() -> None:
    problems = check_hours_config(_config(default_break_end=None))
    assert problems == ["default: break start and break end must be set together"]

    with pytest.raises(ConfigurationError, match=r"must be set together"):
        ensure_valid_hours_config(_config(default_break_end=None))


def test_inverted_break_is_a_configuration_error() -> None:
    problems = check_hours_config(_config(default_break_start=time(13, 0), default_break_end=time(12, 0)))
    assert problems == ["default: break start must be before break end"]


def test_break_outside_hours_is_a_configuration_error() -> None:
    problems = check_hours_config(_config(default_break_start=time(17, 30), default_break_end=time(18, 30)))
    assert problems == ["default: break must fall within operating hours"]


def test_custom_override_problems_are_labelled_by_weekday() -> None:
    config = _config(day_overrides={
        Weekday.SATURDAY: Custom(open=time(13, 0), close=time(9, 0)),
        Weekday.WEDNESDAY: Custom(open=time(9, 0)),
    })
    problems = check_hours_config(config)

    assert "saturday: opening time must be before closing time" in problems
    assert "wednesday: custom hours need both an opening and a closing time" in problems


def test_duplicate_dated_holiday_is_reported() -> None:
    config = _config(holidays=[ClinicHoliday(date=MONDAY), ClinicHoliday(date=MONDAY, name="Again")])
    assert check_hours_config(config) == ["holiday 2024-06-03 is listed twice"]


def test_configuration_error_carries_all_problems() -> None:
    config = _config(
        default_break_end=None,
        day_overrides={Weekday.FRIDAY: Custom(open=time(12, 0), close=time(11, 0))},
    )
    with pytest.raises(ConfigurationError) as excinfo:
        ensure_valid_hours_config(config)
    assert len(excinfo.value.problems) == 2


def test_custom_override_problems_are_listed_sunday_first() -> None:
    config = _config(day_overrides={
        Weekday.SATURDAY: Custom(open=time(13, 0), close=time(9, 0)),
        Weekday.MONDAY: Custom(open=time(13, 0), close=time(9, 0)),
        Weekday.SUNDAY: Custom(close=time(12, 0)),
    })

    assert [problem.split(":")[0] for problem in check_hours_config(config)] == ["sunday", "monday", "saturday"]


@pytest.mark.parametrize("value", ["09:00Z", "09:00+09:00", "09:00:30", "09:00:00.5"])
def test_hours_must_be_naive_whole_minutes(value: str) -> None:
    with pytest.raises(ValidationError, match="HH:MM|UTC offset"):
        OperatingHoursConfig(default_open=value, default_close="18:00")

    with pytest.raises(ValidationError):
        Custom(open="09:00", close=value.replace("09", "18", 1))


def test_offset_times_never_reach_the_save_checks() -> None:
    with pytest.raises(ValidationError):
        OperatingHoursConfig.model_validate({"default_open": "09:00Z", "default_close": "18:00"})

    # the same hours written plainly are fine
    config = OperatingHoursConfig.model_validate({"default_open": "09:00", "default_close": "18:00"})
    assert check_hours_config(config) == []
