"""
Time helpers - day names, 12-hour clock parsing and 30-minute slot labels
"""
import re
from datetime import datetime, time
from types import MappingProxyType
from typing import List, Optional, Tuple

from config import SLOT_MINUTES


class TimeFormatError(ValueError):
    """Raised when a time string cannot be parsed."""


DAY_NAMES = MappingProxyType({
    "MON": "Monday",
    "TUE": "Tuesday",
    "WED": "Wednesday",
    "THU": "Thursday",
    "FRI": "Friday",
    "SAT": "Saturday",
    "SUN": "Sunday",
})

_TIME_12H = re.compile(r"^(\d{1,2}):(\d{2})(am|pm)$", re.IGNORECASE)


def day_abbreviation_to_full_name(abbrev: str) -> Optional[str]:
    """'TUE' -> 'Tuesday'. Case-sensitive; None for anything else."""
    return DAY_NAMES.get(abbrev)


def _to_24_hour(hours: int, modifier: str) -> int:
    modifier = modifier.lower()
    if modifier == "pm" and hours != 12:
        return hours + 12
    if modifier == "am" and hours == 12:
        return 0
    return hours


def time_to_24_hour(time12h: str) -> str:
    """
    Convert a 12-hour clock string to 24-hour format.
    '2:30pm' -> '14:30:00', '12:00am' -> '00:00:00'
    """
    match = _TIME_12H.match(time12h.strip())
    if not match:
        raise TimeFormatError(f"Invalid time format: {time12h}")

    hour_str, minute_str, modifier = match.groups()
    hours = _to_24_hour(int(hour_str), modifier)
    minutes = int(minute_str)
    return f"{hours:02d}:{minutes:02d}:00"


def parse_offering_time(time12h: str) -> time:
    """'2:30pm' -> datetime.time(14, 30)"""
    converted = time_to_24_hour(time12h)
    try:
        return datetime.strptime(converted, "%H:%M:%S").time()
    except ValueError:
        raise TimeFormatError(f"Time out of range: {time12h}") from None


def time_string_to_minutes(time_str: str) -> int:
    """
    Minutes since midnight for 'HH:MM', 'HH:MMam/pm' or 'Ham/pm'.
    Looser than time_to_24_hour, but non-numeric parts still raise
    TimeFormatError instead of producing garbage.
    """
    value = time_str.strip()
    modifier = ""
    if value.lower().endswith(("am", "pm")):
        modifier = value[-2:]
        value = value[:-2].strip()

    parts = value.split(":")
    hour_str = parts[0].strip()
    minute_str = parts[1].strip() if len(parts) > 1 else "0"
    if not hour_str.isdecimal() or not minute_str.isdecimal():
        raise TimeFormatError(f"Invalid time format: {time_str!r}")

    hours = int(hour_str)
    if modifier:
        hours = _to_24_hour(hours, modifier)
    return hours * 60 + int(minute_str)


def parse_range(range_str: str) -> Tuple[int, int]:
    """'9:00am - 10:30am' -> (540, 630). start < end is not checked."""
    if "-" not in range_str:
        raise TimeFormatError(f"Invalid time range: {range_str!r}")
    start_str, end_str = range_str.split("-", 1)
    return time_string_to_minutes(start_str), time_string_to_minutes(end_str)


def format_minutes(minutes: int) -> str:
    """Slot label: unpadded hour, zero-padded minute (90 -> '1:30')."""
    return f"{minutes // 60}:{minutes % 60:02d}"


def discretize(start: int, end: int, step: int = SLOT_MINUTES) -> List[str]:
    """
    Labels of every step-wide slot in [start, end), counted from start.
    The slot beginning at `end` is never included.
    """
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")
    return [format_minutes(m) for m in range(start, end, step)]
