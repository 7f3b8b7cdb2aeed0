"""
Date Utilities

The Intrinio API exchanges calendar dates as plain `YYYY-MM-DD` strings,
both in query parameters (e.g. the `date` of standardized fundamentals)
and in response bodies.

Request descriptors hold real `date`/`datetime` objects; the parameter
encoder calls `format_wire_date` at encode time to produce the wire string.
"""

from datetime import date, datetime, timezone
from typing import Union


WIRE_DATE_FORMAT = "%Y-%m-%d"


def format_wire_date(value: Union[date, datetime]) -> str:
    """
    Format a date for the wire as `YYYY-MM-DD`.

    Timezone-aware datetimes are converted to UTC before the calendar date
    is taken; naive datetimes are used as-is.

    Args:
        value: date or datetime to format

    Returns:
        str: The calendar date, e.g. "2020-01-02"

    Raises:
        TypeError: If value is not a date or datetime

    Examples:
        >>> format_wire_date(date(2020, 1, 2))
        '2020-01-02'

        >>> format_wire_date(datetime(2020, 1, 2, 23, 30))
        '2020-01-02'
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        value = value.date()
    elif not isinstance(value, date):
        raise TypeError(f"Expected date or datetime, got {type(value).__name__}")

    return value.strftime(WIRE_DATE_FORMAT)


def parse_wire_date(text: str) -> date:
    """
    Parse a `YYYY-MM-DD` string into a date.

    Raises:
        ValueError: If text is not a valid wire date
    """
    try:
        return datetime.strptime(text, WIRE_DATE_FORMAT).date()
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid wire date: {text!r}. Error: {e}")
