"""Date and time parsing for header fields."""

from datetime import date, datetime, time
from typing import Iterable, Tuple, Union

from .exceptions import ParseError


DateLike = Union[str, date, datetime]
TimeLike = Union[str, time, datetime]

TIME_FORMATS = ("%H:%M:%S", "%H:%M")


def parse_date(value: DateLike, formats: Iterable[str] = ("%Y-%m-%d",)) -> Tuple[int, int, int]:
    """
    Parse a calendar date into ISHNE (day, month, year) order.

    Args:
        value: ``date``/``datetime`` object or string
        formats: strptime formats tried in order for strings

    Returns:
        (day, month, year)

    Raises:
        ParseError: If no format matches
    """
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return value.day, value.month, value.year
    if not isinstance(value, str):
        raise ParseError(f"Cannot parse date from {type(value).__name__}")

    text = value.strip()
    for fmt in formats:
        try:
            parsed = datetime.strptime(text, fmt).date()
        except ValueError:
            continue
        return parsed.day, parsed.month, parsed.year
    raise ParseError(f"Unrecognized date: {value!r}")


def parse_time(value: TimeLike) -> Tuple[int, int, int]:
    """
    Parse a time of day into (hour, minute, second).

    Raises:
        ParseError: If the value is not a time
    """
    if isinstance(value, datetime):
        value = value.time()
    if isinstance(value, time):
        return value.hour, value.minute, value.second
    if not isinstance(value, str):
        raise ParseError(f"Cannot parse time from {type(value).__name__}")

    text = value.strip()
    for fmt in TIME_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt).time()
        except ValueError:
            continue
        return parsed.hour, parsed.minute, parsed.second
    raise ParseError(f"Unrecognized time: {value!r}")
