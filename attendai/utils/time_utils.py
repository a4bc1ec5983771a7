import re
from datetime import date, datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from attendai.exceptions import ValidationError

WEEKDAYS = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]

# "9", "9:00", "09:00", "9:00am", "9:00 PM"
_TIME_PATTERN = re.compile(r"(\d{1,2})(?::(\d{2}))?\s*(am|pm)?")


def get_zone(tz: Optional[str] = None):
    """Resolve an IANA zone name ("Europe/Paris"); no name means UTC."""
    if not tz:
        return timezone.utc
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValidationError(f"Unknown time zone '{tz}'") from e


def get_current_time(tz: Optional[str] = None) -> datetime:
    return datetime.now(get_zone(tz))


def get_current_date(tz: Optional[str] = None) -> date:
    return get_current_time(tz).date()


def timestamp_ms() -> int:
    """Current instant as epoch milliseconds, the format records are stamped with."""
    return int(get_current_time().timestamp() * 1000)


def parse_time(time_str: str) -> int:
    """
    Convert a time-of-day string to minutes since midnight.

    Both 24-hour ("13:30") and 12-hour ("1:30 PM") forms are accepted.
    Empty or unparseable input yields 0 so that such items sort first
    instead of breaking a listing.
    """
    if not time_str:
        return 0

    match = _TIME_PATTERN.search(time_str.strip().lower())
    if not match:
        return 0

    hours = int(match.group(1))
    minutes = int(match.group(2)) if match.group(2) else 0
    meridian = match.group(3)

    if meridian == "pm" and hours < 12:
        hours += 12
    elif meridian == "am" and hours == 12:
        hours = 0

    return hours * 60 + minutes


def validate_time(time_str: str) -> str:
    """
    Check that ``time_str`` is a real time of day and return it stripped.

    Unlike ``parse_time`` nothing is guessed: the whole string must match,
    minutes must be below 60, and hours below 24 (1 to 12 with AM/PM).
    """
    cleaned = (time_str or "").strip()
    match = _TIME_PATTERN.fullmatch(cleaned.lower())
    if not match:
        raise ValidationError(f"Invalid time '{time_str}'")

    hours = int(match.group(1))
    minutes = int(match.group(2)) if match.group(2) else 0
    max_hours = 12 if match.group(3) else 23
    min_hours = 1 if match.group(3) else 0

    if not min_hours <= hours <= max_hours or minutes > 59:
        raise ValidationError(f"Invalid time '{time_str}'")
    return cleaned


def compare_times(time_a: str, time_b: str) -> int:
    return parse_time(time_a) - parse_time(time_b)


def to_24h(time_str: str) -> str:
    """Format any accepted time string as zero-padded "HH:MM"."""
    total = parse_time(time_str)
    return f"{total // 60:02d}:{total % 60:02d}"


def to_12h(time_str: str) -> str:
    """Format any accepted time string as "h:MM AM/PM", the stored form."""
    total = parse_time(time_str)
    hours, minutes = divmod(total, 60)
    modifier = "PM" if hours >= 12 else "AM"
    if hours == 0:
        hours = 12
    elif hours > 12:
        hours -= 12
    return f"{hours}:{minutes:02d} {modifier}"


def default_end_time(start_time: str) -> str:
    """One hour after ``start_time``, as "HH:MM"."""
    total = (parse_time(start_time) + 60) % (24 * 60)
    return f"{total // 60:02d}:{total % 60:02d}"


def weekday_name(day: date) -> str:
    return WEEKDAYS[day.weekday()]


DAY_ABBREVIATIONS = {
    "mon": "Monday",
    "tue": "Tuesday",
    "tues": "Tuesday",
    "wed": "Wednesday",
    "weds": "Wednesday",
    "thu": "Thursday",
    "thur": "Thursday",
    "thurs": "Thursday",
    "fri": "Friday",
    "sat": "Saturday",
    "sun": "Sunday",
}


def normalize_day(day: str) -> str:
    """
    Return the canonical weekday name for ``day``.

    Matching ignores case, and common abbreviations ("Mon", "Tues.",
    "Thurs") are accepted.
    """
    cleaned = (day or "").strip().lower().rstrip(".")
    for name in WEEKDAYS:
        if name.lower() == cleaned:
            return name
    if cleaned in DAY_ABBREVIATIONS:
        return DAY_ABBREVIATIONS[cleaned]
    raise ValidationError(f"Invalid day '{day}'. Expected one of: {', '.join(WEEKDAYS)}")
