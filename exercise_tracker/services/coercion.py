"""
Exercise Tracker: Input Coercion and Date Rendering
=====================================================

What:  Turns loosely typed form/query values into stored values, and stored
       values back into their JSON representation.
How:   Nothing here raises on bad input. Unparseable values degrade to None
       (or to the caller's default) so requests are never rejected for format.

Rules:
    Dates     ISO 8601: "2023-01-01", "2023-01-01T10:30:00", "...Z", "...+02:00".
              JSON numbers are milliseconds since 1970-01-01 UTC.
              Naive values are taken as UTC; aware values are converted to UTC.
              Everything is returned as naive UTC to match the storage column.
    Rendering "Sun Jan 01 2023" for the UTC calendar day; None → "Invalid Date".
    Duration  int/float or numeric string; anything else (or NaN/inf) → None.
    Limit     leading integer of the string, like "5", " 5", "5abc"; no digits → 0.
"""

import math
import re
from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional, Union

EPOCH = datetime(1970, 1, 1)

INVALID_DATE = "Invalid Date"

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def utcnow() -> datetime:
    """Current time as naive UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_date(value: Any) -> Optional[datetime]:
    """
    Parse a date or datetime string into naive UTC.

    Numbers (not numeric strings) are epoch milliseconds, so a JSON body may
    send `"date": 1672531200000`. Returns None when the value is missing,
    blank, out of range or not ISO 8601.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return _from_epoch_millis(value)
    text = str(value).strip()
    if not text:
        return None

    try:
        day = date.fromisoformat(text)
        return datetime(day.year, day.month, day.day)
    except ValueError:
        pass

    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _from_epoch_millis(millis: Union[int, float]) -> Optional[datetime]:
    try:
        if not math.isfinite(millis):
            return None
        return EPOCH + timedelta(milliseconds=millis)
    except OverflowError:
        return None


def format_date(value: Optional[datetime]) -> str:
    """Render like "Mon Jan 01 2024"; None renders as "Invalid Date"."""
    if value is None:
        return INVALID_DATE
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return (
        f"{_WEEKDAYS[value.weekday()]} {_MONTHS[value.month - 1]} "
        f"{value.day:02d} {value.year:04d}"
    )


def parse_duration(value: Any) -> Optional[float]:
    """Coerce a duration in minutes to float, or None if it is not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    return number if math.isfinite(number) else None


def render_number(value: Optional[float]) -> Optional[Union[int, float]]:
    """30.0 → 30, 12.5 → 12.5, None → None."""
    if value is None:
        return None
    if float(value).is_integer():
        return int(value)
    return value


def parse_limit(value: Any) -> int:
    """Leading integer of the value; 0 (meaning "no limit") when there is none."""
    if value is None:
        return 0
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    match = _LEADING_INT.match(str(value))
    if not match:
        return 0
    return int(match.group(1))
