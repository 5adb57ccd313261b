"""Entry classifier for daily service records.

This module classifies one DailyRecord into hour buckets:
- Travel hours (outbound + return windows)
- Labor hours split into straight / overtime / double tiers
- Total hours (travel + on-site)

Tier rules by day type:
- Sunday/Holiday: all on-site hours are double time
- Saturday: all on-site hours are overtime
- Weekday: first 8 hours straight time, the remainder overtime

Classification never raises. Malformed times, an unparseable date, an
unusable lunch duration, or a lunch longer than the on-site window
degrade to zero and are reported as warnings on the returned result.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional

from service_charges.calculators.day_type import ReferenceCalendar, classify_day_type
from service_charges.calculators.time_utils import (
    calculate_duration_minutes,
    minutes_to_decimal_hours,
    parse_clock_time,
    parse_record_date,
)
from service_charges.models.daily_record import DailyRecord, TimeWindow
from service_charges.models.tiers import DayType
from service_charges.validators.validation_report import (
    ValidationIssue,
    ValidationReport,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
DEFAULT_STRAIGHT_TIME_THRESHOLD = Decimal("8")


@dataclass(frozen=True)
class ClassifiedDay:
    """Hour buckets for a single day.

    Attributes:
        travel_hours: Outbound plus return travel hours
        straight_hours: Straight-time labor hours
        overtime_hours: Overtime labor hours
        double_hours: Double-time labor hours
        total_hours: Travel hours plus on-site hours
    """

    travel_hours: Decimal = ZERO
    straight_hours: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    double_hours: Decimal = ZERO
    total_hours: Decimal = ZERO

    @property
    def labor_hours(self) -> Decimal:
        return self.straight_hours + self.overtime_hours + self.double_hours


@dataclass
class ClassificationResult:
    """Classified hours for one record plus any diagnostics.

    Attributes:
        day: The classified hour buckets
        day_type: Effective day type, or None if the date was unparseable
        onsite_hours: On-site hours after the lunch deduction
        report: Warnings raised while classifying
    """

    day: ClassifiedDay
    day_type: Optional[DayType]
    onsite_hours: Decimal = ZERO
    report: ValidationReport = field(default_factory=ValidationReport)

    @property
    def warnings(self) -> List[ValidationIssue]:
        return self.report.get_warnings()


def _warn(
    report: ValidationReport,
    field_name: str,
    message: str,
    value: Any,
    context: Optional[Dict[str, Any]],
) -> None:
    logger.warning(f"{field_name}: {message} ({value!r})")
    report.add_warning(field_name, message, value, context)


def calculate_window_hours(
    window: TimeWindow,
    field_name: str,
    report: ValidationReport,
    context: Optional[Dict[str, Any]] = None,
) -> Decimal:
    """Calculate the hours spanned by an active window.

    Args:
        window: Time window to measure
        field_name: Name used in warnings (e.g. "travel_to")
        report: Report collecting warnings
        context: Optional context attached to warnings

    Returns:
        Hours between start and end, clamped to >= 0. Inactive windows
        and windows with a missing or malformed time contribute 0.
    """
    if not window.active:
        return ZERO

    start = parse_clock_time(window.start)
    end = parse_clock_time(window.end)
    if not window.start or not window.end:
        _warn(
            report,
            field_name,
            "Missing start or end time",
            {"start": window.start, "end": window.end},
            context,
        )
        return ZERO
    if start is None or end is None:
        _warn(
            report,
            field_name,
            "Invalid time format",
            {"start": window.start, "end": window.end},
            context,
        )
        return ZERO

    minutes = calculate_duration_minutes(start, end)
    if minutes < 0:
        logger.debug(f"{field_name} ends before it starts, counting 0 hours")
        return ZERO
    return minutes_to_decimal_hours(minutes)


def split_labor_hours(
    onsite_hours: Decimal,
    day_type: DayType,
    straight_time_threshold: Decimal = DEFAULT_STRAIGHT_TIME_THRESHOLD,
) -> Dict[str, Decimal]:
    """Split on-site hours into labor tiers for a day type.

    Example:
        >>> split_labor_hours(Decimal("10"), DayType.WEEKDAY)
        {'straight': Decimal('8'), 'overtime': Decimal('2'), 'double': Decimal('0')}
    """
    straight = overtime = double = ZERO
    if day_type == DayType.SUNDAY_OR_HOLIDAY:
        double = onsite_hours
    elif day_type == DayType.SATURDAY:
        overtime = onsite_hours
    elif onsite_hours > straight_time_threshold:
        straight = straight_time_threshold
        overtime = onsite_hours - straight_time_threshold
    else:
        straight = onsite_hours
    return {"straight": straight, "overtime": overtime, "double": double}


def classify_entry(
    record: DailyRecord,
    calendar: Optional[ReferenceCalendar] = None,
    straight_time_threshold: Decimal = DEFAULT_STRAIGHT_TIME_THRESHOLD,
    context: Optional[Dict[str, Any]] = None,
) -> ClassificationResult:
    """Classify one daily record into hour buckets.

    Args:
        record: The daily record to classify
        calendar: Optional reference calendar of holidays
        straight_time_threshold: Weekday hours billed at straight time
        context: Optional context attached to warnings (e.g. entry index)

    Returns:
        ClassificationResult with the ClassifiedDay, the effective day type
        and any warnings

    Example:
        >>> record = DailyRecord(
        ...     date="2024-03-06",
        ...     onsite={"active": True, "start": "08:00", "end": "18:00"},
        ... )
        >>> result = classify_entry(record)
        >>> result.day.straight_hours, result.day.overtime_hours
        (Decimal('8'), Decimal('2'))
    """
    report = ValidationReport()
    if context is None:
        context = {"date": str(record.date)}
    for issue in record.input_issues:
        report.add_warning(issue.field, issue.message, issue.value, context)

    travel_hours = calculate_window_hours(
        record.travel_to, "travel_to", report, context
    ) + calculate_window_hours(record.travel_home, "travel_home", report, context)

    lunch_deduction = record.lunch_duration if record.lunch else ZERO
    onsite_span = calculate_window_hours(record.onsite, "onsite", report, context)
    onsite_hours = onsite_span - lunch_deduction if record.onsite.active else ZERO

    date = parse_record_date(record.date)
    day_type = None
    if date is None:
        _warn(report, "date", "Invalid date, record counts 0 hours", record.date, context)
    else:
        day_type = classify_day_type(date, record.holiday, calendar)

    if onsite_hours < 0:
        _warn(
            report,
            "lunch_duration",
            "Lunch exceeds on-site window, record counts 0 hours",
            {"onsite_hours": onsite_span, "lunch_duration": lunch_deduction},
            context,
        )
        return ClassificationResult(
            day=ClassifiedDay(), day_type=day_type, onsite_hours=ZERO, report=report
        )

    if day_type is None:
        return ClassificationResult(
            day=ClassifiedDay(), day_type=None, onsite_hours=ZERO, report=report
        )

    if record.onsite.active and onsite_hours > 0 and not record.travel_only:
        tiers = split_labor_hours(onsite_hours, day_type, straight_time_threshold)
    else:
        logger.debug("No on-site hours, onsite inactive, or travel-only day")
        tiers = {"straight": ZERO, "overtime": ZERO, "double": ZERO}

    day = ClassifiedDay(
        travel_hours=travel_hours,
        straight_hours=tiers["straight"],
        overtime_hours=tiers["overtime"],
        double_hours=tiers["double"],
        total_hours=travel_hours + onsite_hours,
    )
    logger.debug(f"Classified {record.date} as {day_type.value}: {day}")
    return ClassificationResult(
        day=day, day_type=day_type, onsite_hours=onsite_hours, report=report
    )
