"""
Main Execution Script for the Clinic Unit Scheduler.

Reads clinic settings and bookings from the JSON data directory and prints
the daily board, the monthly utilization report or the day timeline, or
places a new booking.
"""

import argparse
import logging
import os
import sys
from datetime import date, datetime
from typing import List, Optional

from pydantic import ValidationError

from models import BookingRequest, format_minutes
from scheduler.engine import UnitScheduler
from scheduler.hours import check_hours_config
from storage import BookingRepository, JsonFileStore, PatientDirectory, SettingsRepository

# --- CONFIGURATION ---
DATA_DIR = os.environ.get("CLINIC_DATA_DIR", "clinic_data")
LOG_LEVEL = os.environ.get("CLINIC_LOG_LEVEL", "INFO")
# ---------------------

logger = logging.getLogger("Main")


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date {value!r}, expected YYYY-MM-DD") from None


def _parse_month(value: str) -> str:
    try:
        datetime.strptime(value, "%Y-%m")
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid month {value!r}, expected YYYY-MM") from None
    return value


def build_scheduler(data_dir: str) -> UnitScheduler:
    store = JsonFileStore(data_dir)
    settings = SettingsRepository(store).load()
    patients = PatientDirectory(store).load()
    if patients is None:
        logger.debug("No patient directory stored; patient ids are not checked.")
    return UnitScheduler(settings, BookingRepository(store), patients=patients)


def cmd_day(scheduler: UnitScheduler, args) -> int:
    summary = scheduler.daily_summary(args.date)
    window = summary.window

    print(f"\n📅 {summary.date.isoformat()}")
    if window.is_holiday:
        print("   Closed")
    else:
        hours = f"{format_minutes(window.open_minutes)}-{format_minutes(window.close_minutes)}"
        print(f"   Hours: {hours}  (break {window.break_minutes} min, {window.net_minutes} min bookable per unit)")
        print(f"   Booking times: {', '.join(scheduler.slot_options(args.date))}")

    for sample in summary.samples:
        print(f"   {sample.unit_id:<10} {sample.booked_minutes:>5} / {sample.available_minutes:<5} min  {sample.rate:5.1f}%")
    print(f"   Average utilization: {summary.average_rate:.1f}%")
    return 0


def cmd_month(scheduler: UnitScheduler, args) -> int:
    report = scheduler.monthly_report(args.month)

    print("\n" + "=" * 50)
    print(f"📊 UNIT UTILIZATION REPORT {report.month}")
    print("=" * 50)
    print(f"Operating days: {report.operating_days_count}")
    for usage in report.per_unit:
        print(f"  {usage.unit_name:<12} {usage.booked_minutes:>6} / {usage.available_minutes:<6} min  {usage.rate:5.1f}%")
    print(f"Overall average: {report.overall_average_rate:.1f}%")
    return 0


def cmd_book(scheduler: UnitScheduler, args) -> int:
    try:
        request = BookingRequest(
            unit_id=args.unit,
            patient_id=args.patient,
            patient_name=args.name,
            date=args.date,
            start=args.start,
            end=args.end
        )
    except ValidationError as e:
        logger.error(f"❌ Invalid booking request: {e}")
        return 2

    result = scheduler.place_booking(request)
    if not result.accepted:
        print(f"❌ {result.rejection.reason.value}: {result.rejection.message}")
        return 1

    print(f"✅ Booked {result.booking.id}")
    return 0


def cmd_timeline(scheduler: UnitScheduler, args) -> int:
    blocks = scheduler.timeline(args.date)
    print("   " + " ".join(scheduler.timeline_labels()))
    for unit_id, entries in blocks.items():
        print(f"\n{unit_id}")
        for booking, block in entries:
            print(
                f"   {booking.start:%H:%M}-{booking.end:%H:%M} {booking.patient_name or booking.patient_id:<20} "
                f"top={block.top_px:.0f}px height={block.height_px:.0f}px"
            )
    return 0


def cmd_check_settings(scheduler: UnitScheduler, args) -> int:
    problems = check_hours_config(scheduler.settings.hours)
    if not problems:
        print("✅ Operating hours are valid.")
        return 0
    for problem in problems:
        print(f"❌ {problem}")
    return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Clinic unit scheduling and utilization")
    parser.add_argument("--data-dir", default=DATA_DIR, help="Directory holding the JSON data files")
    sub = parser.add_subparsers(dest="command", required=True)

    day = sub.add_parser("day", help="Daily unit utilization")
    day.add_argument("--date", type=_parse_date, default=date.today())
    day.set_defaults(func=cmd_day)

    month = sub.add_parser("month", help="Monthly unit utilization report")
    month.add_argument("--month", type=_parse_month, default=date.today().strftime("%Y-%m"))
    month.set_defaults(func=cmd_month)

    book = sub.add_parser("book", help="Book a unit")
    book.add_argument("--unit", required=True)
    book.add_argument("--patient", required=True)
    book.add_argument("--name", default=None, help="Patient display name; defaults to the name in the patient directory")
    book.add_argument("--date", type=_parse_date, required=True)
    book.add_argument("--start", required=True, help="HH:MM")
    book.add_argument("--end", required=True, help="HH:MM")
    book.set_defaults(func=cmd_book)

    timeline = sub.add_parser("timeline", help="Day timeline geometry")
    timeline.add_argument("--date", type=_parse_date, default=date.today())
    timeline.set_defaults(func=cmd_timeline)

    check = sub.add_parser("check-settings", help="Validate operating hours")
    check.set_defaults(func=cmd_check_settings)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(
        level=LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )
    args = build_parser().parse_args(argv)
    scheduler = build_scheduler(args.data_dir)
    return args.func(scheduler, args)


if __name__ == "__main__":
    sys.exit(main())
