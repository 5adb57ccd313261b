"""Charge calculator for service visits.

This module aggregates classified daily records into charges:
- Labor charges by tier (straight / overtime / double)
- Travel-transit charges by day type (weekday / Saturday / Sunday-Holiday)
- Travel expenses (per diem, mileage, other, airfare) from configuration

The grand total is not part of the summary; callers add the three
subtotals.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from service_charges.calculators.day_type import ReferenceCalendar
from service_charges.calculators.entry_classifier import (
    ZERO,
    ClassifiedDay,
    classify_entry,
)
from service_charges.calculators.time_utils import quantize_money
from service_charges.models.daily_record import DailyRecord
from service_charges.models.rates import RateSchedule
from service_charges.models.tiers import DayType, LaborTier
from service_charges.models.travel_config import TravelExpenseConfig
from service_charges.utils.logging_utils import LogContext, log_function_call
from service_charges.validators.validation_report import ValidationReport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TierCharge:
    """Hours and charge for one rate tier.

    Attributes:
        hours: Total hours in the tier (unrounded)
        rate: Hourly rate of the tier
        charge: hours × rate, rounded to cents

    Example:
        >>> calculate_tier_charge(Decimal("8"), Decimal("120"))
        TierCharge(hours=Decimal('8'), rate=Decimal('120'), charge=Decimal('960.00'))
    """

    hours: Decimal
    rate: Decimal
    charge: Decimal


@dataclass(frozen=True)
class TravelExpenses:
    """Travel expense reimbursements for a visit.

    Attributes:
        per_diem: per diem days × daily rate
        mileage: miles × mileage rate
        other: Flat incidental amount
        airfare: Flat airfare amount
        subtotal: Sum of the four amounts
    """

    per_diem: Decimal
    mileage: Decimal
    other: Decimal
    airfare: Decimal
    subtotal: Decimal


@dataclass(frozen=True)
class ProcessedEntry:
    """A daily record together with its classification.

    Attributes:
        record: The input record
        day_type: Effective day type, None if the date was unparseable
        day: Classified hour buckets
        onsite_hours: On-site hours after the lunch deduction
    """

    record: DailyRecord
    day_type: Optional[DayType]
    day: ClassifiedDay
    onsite_hours: Decimal


@dataclass
class ChargeSummary:
    """Charges for a set of daily records and one travel configuration.

    Attributes:
        straight: Straight-time labor tier
        overtime: Overtime labor tier
        double: Double-time labor tier
        labor_subtotal: Sum of the labor tier charges
        weekday_travel: Weekday travel-transit tier
        saturday_travel: Saturday travel-transit tier
        sunday_travel: Sunday/Holiday travel-transit tier
        travel_charges_subtotal: Sum of the travel-transit tier charges
        travel_expenses: Travel expense breakdown with its own subtotal
        entries: Processed entries in input order
        report: Warnings raised while classifying the records and reading
            the travel amounts
    """

    straight: TierCharge
    overtime: TierCharge
    double: TierCharge
    labor_subtotal: Decimal
    weekday_travel: TierCharge
    saturday_travel: TierCharge
    sunday_travel: TierCharge
    travel_charges_subtotal: Decimal
    travel_expenses: TravelExpenses
    entries: List[ProcessedEntry] = field(default_factory=list)
    report: ValidationReport = field(default_factory=ValidationReport)

    def labor_tier(self, tier: LaborTier) -> TierCharge:
        return {
            LaborTier.STRAIGHT: self.straight,
            LaborTier.OVERTIME: self.overtime,
            LaborTier.DOUBLE: self.double,
        }[tier]

    def travel_tier(self, day_type: DayType) -> TierCharge:
        return {
            DayType.WEEKDAY: self.weekday_travel,
            DayType.SATURDAY: self.saturday_travel,
            DayType.SUNDAY_OR_HOLIDAY: self.sunday_travel,
        }[day_type]

    def to_dict(self) -> Dict[str, Any]:
        """Convert the summary to a plain dictionary (Decimals kept)."""

        def tier(charge: TierCharge) -> Dict[str, Decimal]:
            return {"hours": charge.hours, "rate": charge.rate, "charge": charge.charge}

        return {
            "straight": tier(self.straight),
            "overtime": tier(self.overtime),
            "double": tier(self.double),
            "labor_subtotal": self.labor_subtotal,
            "weekday_travel": tier(self.weekday_travel),
            "saturday_travel": tier(self.saturday_travel),
            "sunday_travel": tier(self.sunday_travel),
            "travel_charges_subtotal": self.travel_charges_subtotal,
            "travel_expenses": {
                "per_diem": self.travel_expenses.per_diem,
                "mileage": self.travel_expenses.mileage,
                "other": self.travel_expenses.other,
                "airfare": self.travel_expenses.airfare,
                "subtotal": self.travel_expenses.subtotal,
            },
            "warnings": [str(issue) for issue in self.report.issues],
        }


def calculate_tier_charge(hours: Decimal, rate: Decimal) -> TierCharge:
    """Calculate the charge for a tier (hours × rate, rounded to cents)."""
    return TierCharge(hours=hours, rate=rate, charge=quantize_money(hours * rate))


def calculate_travel_expenses(
    travel_config: TravelExpenseConfig, rates: RateSchedule
) -> TravelExpenses:
    """Calculate travel expenses from the configuration alone.

    Args:
        travel_config: Per diem, mileage, incidental and airfare inputs
        rates: Rate schedule with per diem and mileage rates

    Returns:
        TravelExpenses with each amount and the subtotal

    Example:
        >>> config = TravelExpenseConfig(
        ...     perDiemType="nonLocal",
        ...     perDiemDays=3,
        ...     mileage=100,
        ...     otherTravel=20,
        ...     airTravel={"cost": 300},
        ... )
        >>> calculate_travel_expenses(config, RateSchedule()).subtotal
        Decimal('1043.00')
    """
    per_diem = quantize_money(
        travel_config.per_diem_days * rates.per_diem_rate(travel_config.per_diem_type)
    )
    mileage = quantize_money(travel_config.mileage * rates.mileage_rate)
    other = quantize_money(travel_config.other_travel)
    airfare = quantize_money(travel_config.air_travel.cost)

    return TravelExpenses(
        per_diem=per_diem,
        mileage=mileage,
        other=other,
        airfare=airfare,
        subtotal=per_diem + mileage + other + airfare,
    )


@log_function_call
def calculate_charges(
    records: Iterable[DailyRecord],
    travel_config: Optional[TravelExpenseConfig] = None,
    calendar: Optional[ReferenceCalendar] = None,
    rates: Optional[RateSchedule] = None,
) -> ChargeSummary:
    """Calculate labor, travel-transit and travel expense charges.

    Every record is classified independently; a malformed record counts
    zero hours and adds warnings to the summary's report without stopping
    the rest of the batch.

    Args:
        records: Daily records of the visit
        travel_config: Travel expenses (defaults to no expenses)
        calendar: Optional reference calendar of holidays
        rates: Rate schedule (defaults to the published rates)

    Returns:
        ChargeSummary with per-tier hours and charges and all subtotals

    Example:
        >>> record = DailyRecord(
        ...     date="2024-03-06",
        ...     onsite={"active": True, "start": "08:00", "end": "18:00"},
        ... )
        >>> summary = calculate_charges([record])
        >>> summary.labor_subtotal
        Decimal('1320.00')
    """
    rates = rates or RateSchedule()
    travel_config = travel_config or TravelExpenseConfig()
    report = ValidationReport()
    entries: List[ProcessedEntry] = []

    labor_hours = {tier: ZERO for tier in LaborTier}
    travel_hours = {day_type: ZERO for day_type in DayType}

    for idx, record in enumerate(records, start=1):
        with LogContext(entry_index=idx, record_date=str(record.date)):
            result = classify_entry(
                record,
                calendar=calendar,
                straight_time_threshold=rates.straight_time_threshold_hours,
                context={"entry": idx, "date": str(record.date)},
            )
        report.merge(result.report)
        entries.append(
            ProcessedEntry(
                record=record,
                day_type=result.day_type,
                day=result.day,
                onsite_hours=result.onsite_hours,
            )
        )

        labor_hours[LaborTier.STRAIGHT] += result.day.straight_hours
        labor_hours[LaborTier.OVERTIME] += result.day.overtime_hours
        labor_hours[LaborTier.DOUBLE] += result.day.double_hours
        if result.day_type is not None:
            travel_hours[result.day_type] += result.day.travel_hours

    for issue in travel_config.input_issues:
        report.add_warning(issue.field, issue.message, issue.value, {"section": "travel"})

    labor = {
        tier: calculate_tier_charge(hours, rates.labor_rate(tier))
        for tier, hours in labor_hours.items()
    }
    travel = {
        day_type: calculate_tier_charge(hours, rates.travel_rate(day_type))
        for day_type, hours in travel_hours.items()
    }

    summary = ChargeSummary(
        straight=labor[LaborTier.STRAIGHT],
        overtime=labor[LaborTier.OVERTIME],
        double=labor[LaborTier.DOUBLE],
        labor_subtotal=sum((c.charge for c in labor.values()), Decimal("0.00")),
        weekday_travel=travel[DayType.WEEKDAY],
        saturday_travel=travel[DayType.SATURDAY],
        sunday_travel=travel[DayType.SUNDAY_OR_HOLIDAY],
        travel_charges_subtotal=sum(
            (c.charge for c in travel.values()), Decimal("0.00")
        ),
        travel_expenses=calculate_travel_expenses(travel_config, rates),
        entries=entries,
        report=report,
    )

    logger.info(
        f"Calculated charges for {len(entries)} record(s): "
        f"labor ${summary.labor_subtotal}, "
        f"travel ${summary.travel_charges_subtotal}, "
        f"expenses ${summary.travel_expenses.subtotal}"
    )
    if report.warning_count:
        logger.warning(f"{report.warning_count} warning(s) during calculation")

    return summary
