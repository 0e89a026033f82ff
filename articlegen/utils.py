from __future__ import annotations

import datetime as dt
from pathlib import Path

from .errors import StatError

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def parse_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y", "on"}
    return False


def file_mtime(path: Path) -> dt.datetime:
    try:
        stamp = Path(path).stat().st_mtime
    except OSError as exc:
        raise StatError(path, exc) from exc
    return dt.datetime.fromtimestamp(stamp)


def month_name(value: dt.datetime) -> str:
    return MONTH_NAMES[value.month - 1]


def format_report_date(value: dt.datetime) -> str:
    # English names regardless of the process locale.
    hour = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    zone = value.astimezone().tzname() if value.tzinfo is None else value.tzname()
    return (
        f"{DAY_NAMES[value.weekday()]}, {month_name(value)} {value.day:02d}, {value.year}, "
        f"{hour}:{value.minute:02d} {meridiem} {zone}"
    )


def report_file_date(path: Path) -> str:
    formatted = format_report_date(file_mtime(path))
    print(f"File modification date: {formatted}")
    return formatted
