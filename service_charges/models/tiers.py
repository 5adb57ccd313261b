"""Day type and labor tier enumerations."""

from enum import Enum


class DayType(str, Enum):
    """Effective calendar classification of a record.

    A holiday overrides the literal weekday to SUNDAY_OR_HOLIDAY.
    """

    WEEKDAY = "weekday"
    SATURDAY = "saturday"
    SUNDAY_OR_HOLIDAY = "sunday_or_holiday"


class LaborTier(str, Enum):
    """Labor rate tier for on-site work hours."""

    STRAIGHT = "straight"
    OVERTIME = "overtime"
    DOUBLE = "double"
