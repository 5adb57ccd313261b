"""Time calculation utilities for the service charges engine.

This module provides low-level utilities for time calculations including:
- Parsing HH:MM clock times and YYYY-MM-DD dates from form values
- Converting time to minutes
- Calculating durations between times on the same day
- Converting minutes to decimal hours and rounding money/hours

These utilities are timezone-agnostic: dates are local calendar dates.
"""

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

CENT = Decimal("0.01")

_TIME_FORMATS = ("%H:%M", "%H:%M:%S")


def parse_clock_time(value: Optional[str]) -> Optional[dt.time]:
    """Parse a clock time entered on the form.

    Args:
        value: Time string in HH:MM (or HH:MM:SS) format

    Returns:
        Parsed time, or None if the value is missing or malformed

    Example:
        >>> parse_clock_time("08:30")
        datetime.time(8, 30)
        >>> parse_clock_time("8am") is None
        True
    """
    if not value:
        return None
    for fmt in _TIME_FORMATS:
        try:
            return dt.datetime.strptime(value.strip(), fmt).time()
        except ValueError:
            continue
    return None


def parse_record_date(value: Union[dt.date, str, None]) -> Optional[dt.date]:
    """Parse a record date as a local calendar date.

    Args:
        value: A dt.date or a YYYY-MM-DD string

    Returns:
        Parsed date, or None if the value is missing or malformed

    Example:
        >>> parse_record_date("2024-03-09")
        datetime.date(2024, 3, 9)
        >>> parse_record_date("2024-02-30") is None
        True
    """
    if isinstance(value, dt.date):
        return value
    if not value:
        return None
    try:
        return dt.datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        return None


def convert_time_to_minutes(time: dt.time) -> int:
    """Convert a dt.time object to minutes since midnight.

    Example:
        >>> convert_time_to_minutes(dt.time(9, 30))
        570
        >>> convert_time_to_minutes(dt.time(23, 59))
        1439
    """
    return time.hour * 60 + time.minute


def calculate_duration_minutes(start_time: dt.time, end_time: dt.time) -> int:
    """Calculate minutes between two times on the same day.

    Windows never span midnight, so an end before the start yields a
    negative duration; callers clamp it.

    Example:
        >>> calculate_duration_minutes(dt.time(8, 0), dt.time(18, 0))
        600
        >>> calculate_duration_minutes(dt.time(18, 0), dt.time(8, 0))
        -600
    """
    return convert_time_to_minutes(end_time) - convert_time_to_minutes(start_time)


def minutes_to_decimal_hours(minutes: int) -> Decimal:
    """Convert minutes to decimal hours without rounding.

    Example:
        >>> minutes_to_decimal_hours(90)
        Decimal('1.5')
    """
    return Decimal(minutes) / Decimal(60)


def quantize_money(amount: Decimal) -> Decimal:
    """Round a currency amount to cents (ROUND_HALF_UP).

    Example:
        >>> quantize_money(Decimal("63.0"))
        Decimal('63.00')
    """
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def quantize_hours(hours: Decimal) -> Decimal:
    """Round hours to 2 decimal places for display (ROUND_HALF_UP).

    Example:
        >>> quantize_hours(Decimal(20) / Decimal(60))
        Decimal('0.33')
    """
    return hours.quantize(CENT, rounding=ROUND_HALF_UP)
