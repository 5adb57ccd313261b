"""Daily record data model for the service charges engine.

This module defines the DailyRecord model which represents one workday
of a service visit: optional outbound/return travel windows, the on-site
work window, lunch, and the flags that drive tier classification.
"""

import datetime as dt
from decimal import Decimal
from typing import Any, ClassVar, Optional, Tuple, Union

from pydantic import Field, field_validator, model_validator

from service_charges.models.base import BaseDataModel, coerce_decimal


class TimeWindow(BaseDataModel):
    """A start/end window on a single day.

    Start and end are kept as raw ``HH:MM`` strings so that a malformed
    value degrades to zero hours during classification instead of
    rejecting the whole record.

    Attributes:
        active: Whether the window was used on this day
        start: Start time (HH:MM)
        end: End time (HH:MM)

    Example:
        >>> window = TimeWindow(active=True, start=dt.time(8, 0), end="12:30")
        >>> window.start, window.end
        ('08:00', '12:30')
    """

    active: bool = Field(False, description="Whether the window is in use")
    start: Optional[str] = Field(None, description="Start time (HH:MM)")
    end: Optional[str] = Field(None, description="End time (HH:MM)")

    @field_validator("active", mode="before")
    @classmethod
    def default_inactive(cls, v: Any) -> Any:
        """Treat a missing flag as inactive."""
        return False if v is None else v

    @field_validator("start", "end", mode="before")
    @classmethod
    def normalize_time(cls, v: Any) -> Optional[str]:
        """Normalize time inputs to strings.

        Args:
            v: A dt.time, a string, or None

        Returns:
            HH:MM string for dt.time input, stripped string otherwise
        """
        if v is None:
            return None
        if isinstance(v, dt.time):
            return v.strftime("%H:%M")
        return str(v).strip()


class DailyRecord(BaseDataModel):
    """Represents one workday of a service visit.

    Input may use the camelCase keys of the entry form (``travelTo``,
    ``lunchDuration``, ``travelOnly``, ...) or the nested form shape
    ``travel: {to: {...}, home: {...}}``.

    Attributes:
        date: Local calendar date (dt.date or YYYY-MM-DD string)
        travel_to: Outbound travel window
        travel_home: Return travel window
        onsite: On-site work window
        lunch: Whether a lunch break was taken
        lunch_duration: Lunch length in decimal hours (used only if lunch)
        holiday: Forces the Sunday/Holiday tier regardless of weekday
        travel_only: Suppresses labor tiers while still counting travel
        service_work: Free-text description carried through for reporting

    Example:
        >>> record = DailyRecord(
        ...     date="2024-03-06",
        ...     onsite={"active": True, "start": "08:00", "end": "18:00"},
        ...     lunch=True,
        ...     lunchDuration=0.5,
        ... )
        >>> record.lunch_duration
        Decimal('0.5')
    """

    date: Union[dt.date, str, None] = Field(..., description="Local date of work")
    travel_to: TimeWindow = Field(default_factory=TimeWindow)
    travel_home: TimeWindow = Field(default_factory=TimeWindow)
    onsite: TimeWindow = Field(default_factory=TimeWindow)
    lunch: bool = Field(False, description="Whether a lunch break was taken")
    lunch_duration: Decimal = Field(
        Decimal("0"), description="Lunch duration in decimal hours"
    )
    holiday: bool = Field(False, description="Bill as Sunday/Holiday")
    travel_only: bool = Field(False, description="Travel-only day")
    service_work: str = Field("", description="Description of work performed")

    decimal_input_fields: ClassVar[Tuple[str, ...]] = ("lunch_duration",)

    @model_validator(mode="before")
    @classmethod
    def lift_nested_travel(cls, data: Any) -> Any:
        """Accept the nested ``travel: {to, home}`` shape of the entry form."""
        if not isinstance(data, dict) or not isinstance(data.get("travel"), dict):
            return data
        data = dict(data)
        travel = data.pop("travel")
        if "travelTo" not in data and "travel_to" not in data:
            data["travelTo"] = travel.get("to") or {}
        if "travelHome" not in data and "travel_home" not in data:
            data["travelHome"] = travel.get("home") or {}
        return data

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, v: Any) -> Union[dt.date, str, None]:
        """Keep real dates, reduce datetimes to dates, stringify the rest.

        Unparseable strings are not rejected here; classification degrades
        them to zero hours with a warning.
        """
        if v is None or isinstance(v, str):
            return v.strip() if isinstance(v, str) else None
        if isinstance(v, dt.datetime):
            return v.date()
        if isinstance(v, dt.date):
            return v
        return str(v)

    @field_validator("travel_to", "travel_home", "onsite", mode="before")
    @classmethod
    def default_window(cls, v: Any) -> Any:
        """Treat a missing window as inactive."""
        return {} if v is None else v

    @field_validator("lunch", "holiday", "travel_only", mode="before")
    @classmethod
    def default_flag(cls, v: Any) -> Any:
        """Treat a missing flag as False."""
        return False if v is None else v

    @field_validator("lunch_duration", mode="before")
    @classmethod
    def parse_lunch_duration(cls, v: Any) -> Decimal:
        """Coerce lunch duration, defaulting invalid input to zero."""
        return coerce_decimal(v, "lunch_duration")

    @field_validator("service_work", mode="before")
    @classmethod
    def default_service_work(cls, v: Any) -> str:
        """Treat a missing description as empty."""
        return "" if v is None else str(v)
