"""Day type classification.

A record's day type is computed once and shared by the labor tier and
travel-transit tier calculations, so the two can never disagree.
"""

import datetime as dt
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional

from service_charges.models.tiers import DayType

SATURDAY = 5
SUNDAY = 6


@dataclass(frozen=True)
class ReferenceCalendar:
    """Calendar of dates billed at the Sunday/Holiday tier.

    A record's own ``holiday`` flag always applies; the calendar adds
    company holidays so they need not be flagged on every record.

    Attributes:
        holidays: Dates billed as holidays

    Example:
        >>> calendar = ReferenceCalendar.from_dates([dt.date(2024, 7, 4)])
        >>> calendar.is_holiday(dt.date(2024, 7, 4))
        True
    """

    holidays: FrozenSet[dt.date] = frozenset()

    @classmethod
    def from_dates(cls, dates: Iterable[dt.date]) -> "ReferenceCalendar":
        return cls(holidays=frozenset(dates))

    def is_holiday(self, date: dt.date) -> bool:
        return date in self.holidays


def classify_day_type(
    date: dt.date,
    holiday: bool = False,
    calendar: Optional[ReferenceCalendar] = None,
) -> DayType:
    """Classify a local calendar date into a day type.

    The holiday flag (or a holiday listed in the calendar) overrides the
    literal weekday.

    Args:
        date: Local calendar date of the record
        holiday: The record's holiday flag
        calendar: Optional reference calendar of holidays

    Returns:
        WEEKDAY for Monday-Friday, SATURDAY, or SUNDAY_OR_HOLIDAY

    Example:
        >>> classify_day_type(dt.date(2024, 3, 6))
        <DayType.WEEKDAY: 'weekday'>
        >>> classify_day_type(dt.date(2024, 3, 6), holiday=True)
        <DayType.SUNDAY_OR_HOLIDAY: 'sunday_or_holiday'>
    """
    if holiday or (calendar is not None and calendar.is_holiday(date)):
        return DayType.SUNDAY_OR_HOLIDAY

    weekday = date.weekday()
    if weekday == SUNDAY:
        return DayType.SUNDAY_OR_HOLIDAY
    if weekday == SATURDAY:
        return DayType.SATURDAY
    return DayType.WEEKDAY
