"""Unit tests for the charge calculator.

This module tests aggregation of classified records into labor charges,
travel-transit charges and travel expenses.
"""

import datetime as dt
from decimal import Decimal

from service_charges.calculators.charge_calculator import (
    calculate_charges,
    calculate_tier_charge,
    calculate_travel_expenses,
)
from service_charges.calculators.day_type import ReferenceCalendar
from service_charges.models.daily_record import DailyRecord
from service_charges.models.rates import RateSchedule
from service_charges.models.tiers import DayType, LaborTier
from service_charges.models.travel_config import TravelExpenseConfig

WEDNESDAY = dt.date(2024, 3, 6)
THURSDAY = dt.date(2024, 3, 7)
SATURDAY = dt.date(2024, 3, 9)
SUNDAY = dt.date(2024, 3, 10)


class TestCalculateTierCharge:
    """Test single-tier charge calculation."""

    def test_whole_hours(self):
        """Test 8 hours at $120 is $960.00."""
        charge = calculate_tier_charge(Decimal("8"), Decimal("120"))

        assert charge.hours == Decimal("8")
        assert charge.rate == Decimal("120")
        assert charge.charge == Decimal("960.00")

    def test_rounds_to_cents(self):
        """Test a third of an hour at $80 rounds to $26.67."""
        charge = calculate_tier_charge(Decimal(20) / Decimal(60), Decimal("80"))

        assert charge.charge == Decimal("26.67")

    def test_zero_hours(self):
        """Test zero hours yields a zero charge."""
        assert calculate_tier_charge(Decimal("0"), Decimal("240")).charge == 0


class TestCalculateTravelExpenses:
    """Test travel expense calculation."""

    def test_non_local_visit(self, sample_travel_config):
        """Test 3 non-local days, 100 miles, $20 other and $300 airfare."""
        expenses = calculate_travel_expenses(sample_travel_config, RateSchedule())

        assert expenses.per_diem == Decimal("660.00")
        assert expenses.mileage == Decimal("63.00")
        assert expenses.other == Decimal("20.00")
        assert expenses.airfare == Decimal("300.00")
        assert expenses.subtotal == Decimal("1043.00")

    def test_local_per_diem(self):
        """Test the local per diem rate is $65 per day."""
        config = TravelExpenseConfig(perDiemType="local", perDiemDays=2)

        expenses = calculate_travel_expenses(config, RateSchedule())

        assert expenses.per_diem == Decimal("130.00")
        assert expenses.subtotal == Decimal("130.00")

    def test_empty_config_is_zero(self):
        """Test a default configuration has no expenses."""
        expenses = calculate_travel_expenses(TravelExpenseConfig(), RateSchedule())

        assert expenses.subtotal == 0

    def test_custom_mileage_rate(self):
        """Test mileage uses the rate schedule's mileage rate."""
        config = TravelExpenseConfig(mileage="100")
        rates = RateSchedule(mileage_rate=Decimal("0.67"))

        assert calculate_travel_expenses(config, rates).mileage == Decimal("67.00")


class TestCalculateCharges:
    """Test charge aggregation over a batch of records."""

    def test_single_weekday_ten_hours(self, make_record):
        """Test 08:00-18:00 on a weekday bills 8 straight and 2 overtime."""
        summary = calculate_charges([make_record(onsite=("08:00", "18:00"))])

        assert summary.straight.charge == Decimal("960.00")
        assert summary.overtime.charge == Decimal("360.00")
        assert summary.double.charge == Decimal("0.00")
        assert summary.labor_subtotal == Decimal("1320.00")
        assert summary.travel_charges_subtotal == Decimal("0.00")
        assert summary.travel_expenses.subtotal == 0

    def test_sunday_is_double_time(self, make_record):
        """Test 4 Sunday hours bill at the double-time rate."""
        summary = calculate_charges([make_record(date=SUNDAY, onsite=("08:00", "12:00"))])

        assert summary.double.hours == Decimal("4")
        assert summary.double.charge == Decimal("960.00")
        assert summary.labor_subtotal == Decimal("960.00")

    def test_tier_hours_accumulate_across_records(self, make_record):
        """Test each record's weekday threshold applies per day, not per batch."""
        records = [
            make_record(date=WEDNESDAY, onsite=("08:00", "18:00")),
            make_record(date=THURSDAY, onsite=("08:00", "17:00")),
        ]

        summary = calculate_charges(records)

        assert summary.straight.hours == Decimal("16")
        assert summary.overtime.hours == Decimal("3")
        assert summary.labor_subtotal == Decimal("2460.00")

    def test_travel_buckets_follow_record_day_type(self, sample_timesheet_document):
        """Test travel hours bill at the rate of their record's day type."""
        records = [DailyRecord(**entry) for entry in sample_timesheet_document["entries"]]

        summary = calculate_charges(records)

        assert summary.weekday_travel.hours == Decimal("4")
        assert summary.weekday_travel.charge == Decimal("320.00")
        assert summary.saturday_travel.hours == Decimal("2")
        assert summary.saturday_travel.charge == Decimal("240.00")
        assert summary.sunday_travel.charge == Decimal("0.00")
        assert summary.travel_charges_subtotal == Decimal("560.00")

    def test_full_visit(self, sample_timesheet_document, sample_travel_config):
        """Test labor, travel and expenses for a two-day visit."""
        records = [DailyRecord(**entry) for entry in sample_timesheet_document["entries"]]

        summary = calculate_charges(records, sample_travel_config)

        assert summary.straight.hours == Decimal("8")
        assert summary.overtime.hours == Decimal("6")
        assert summary.labor_subtotal == Decimal("2040.00")
        assert summary.travel_charges_subtotal == Decimal("560.00")
        assert summary.travel_expenses.subtotal == Decimal("1043.00")
        assert len(summary.entries) == 2
        assert summary.report.warning_count == 0

    def test_holiday_travel_uses_sunday_bucket(self, make_record):
        """Test travel on a flagged holiday bills at the Sunday/Holiday rate."""
        record = make_record(
            date=WEDNESDAY,
            onsite=None,
            travel_to=("08:00", "10:00"),
            holiday=True,
        )

        summary = calculate_charges([record])

        assert summary.weekday_travel.hours == 0
        assert summary.sunday_travel.hours == Decimal("2")
        assert summary.sunday_travel.charge == Decimal("320.00")

    def test_calendar_holiday_moves_labor_and_travel(self, make_record):
        """Test a calendar holiday changes both labor and travel tiers."""
        record = make_record(
            date=WEDNESDAY, onsite=("08:00", "12:00"), travel_to=("07:00", "08:00")
        )
        calendar = ReferenceCalendar.from_dates([WEDNESDAY])

        summary = calculate_charges([record], calendar=calendar)

        assert summary.double.hours == Decimal("4")
        assert summary.straight.hours == 0
        assert summary.sunday_travel.hours == Decimal("1")

    def test_bad_record_does_not_stop_batch(self, make_record):
        """Test an invalid record counts zero while the rest are billed."""
        records = [
            make_record(date=WEDNESDAY, onsite=("08:00", "16:00")),
            make_record(date="not-a-date", onsite=("08:00", "16:00")),
            make_record(date=THURSDAY, onsite=("08:00", "25:00")),
        ]

        summary = calculate_charges(records)

        assert summary.labor_subtotal == Decimal("960.00")
        assert summary.report.warning_count == 2
        assert summary.entries[1].day_type is None
        assert summary.entries[2].day.labor_hours == 0
        assert {issue.context["entry"] for issue in summary.report.issues} == {2, 3}

    def test_huge_lunch_duration_does_not_stop_batch(self, make_record):
        """Test a record with an unusable lunch duration is reported, not fatal."""
        records = [
            make_record(date=WEDNESDAY, onsite=("08:00", "16:00")),
            make_record(
                date=THURSDAY,
                onsite=("08:00", "12:00"),
                lunch=True,
                lunchDuration="1e999999999",
            ),
        ]

        summary = calculate_charges(records)

        assert summary.straight.hours == Decimal("12")
        assert summary.labor_subtotal == Decimal("1440.00")
        warning = summary.report.get_warnings()[0]
        assert warning.field == "lunch_duration"
        assert warning.context == {"entry": 2, "date": "2024-03-07"}

    def test_unusable_travel_amounts_reported(self, make_record):
        """Test huge or invalid travel amounts count zero and are reported."""
        config = TravelExpenseConfig(mileage="1e27", otherTravel="lots", perDiemDays=2)

        summary = calculate_charges([make_record()], config)

        assert summary.travel_expenses.mileage == Decimal("0.00")
        assert summary.travel_expenses.other == Decimal("0.00")
        assert summary.travel_expenses.subtotal == Decimal("440.00")
        assert [(i.field, i.context) for i in summary.report.get_warnings()] == [
            ("mileage", {"section": "travel"}),
            ("other_travel", {"section": "travel"}),
        ]
        assert len(summary.to_dict()["warnings"]) == 2

    def test_fractional_hours_rounded_once(self, make_record):
        """Test charges round the summed hours, not each record."""
        records = [
            make_record(date=WEDNESDAY, onsite=("08:00", "08:20")),
            make_record(date=THURSDAY, onsite=("08:00", "08:20")),
            make_record(date=dt.date(2024, 3, 8), onsite=("08:00", "08:20")),
        ]

        summary = calculate_charges(records)

        assert summary.straight.charge == Decimal("120.00")

    def test_empty_batch(self):
        """Test an empty batch has zero charges."""
        summary = calculate_charges([])

        assert summary.labor_subtotal == Decimal("0.00")
        assert summary.travel_charges_subtotal == Decimal("0.00")
        assert summary.entries == []

    def test_custom_rates(self, make_record):
        """Test a custom rate schedule is applied."""
        rates = RateSchedule(straight_rate=Decimal("100"))

        summary = calculate_charges([make_record()], rates=rates)

        assert summary.straight.rate == Decimal("100")
        assert summary.labor_subtotal == Decimal("800.00")

    def test_idempotent(self, sample_timesheet_document, sample_travel_config):
        """Test the same inputs always produce the same summary."""
        records = [DailyRecord(**entry) for entry in sample_timesheet_document["entries"]]

        first = calculate_charges(records, sample_travel_config)
        second = calculate_charges(records, sample_travel_config)

        assert first.to_dict() == second.to_dict()

    def test_tier_accessors(self, make_record):
        """Test labor_tier and travel_tier look up the matching tier."""
        summary = calculate_charges([make_record()])

        assert summary.labor_tier(LaborTier.STRAIGHT) is summary.straight
        assert summary.travel_tier(DayType.SATURDAY) is summary.saturday_travel

    def test_to_dict(self, make_record):
        """Test the dictionary form of the summary."""
        data = calculate_charges([make_record()]).to_dict()

        assert data["straight"] == {
            "hours": Decimal("8"),
            "rate": Decimal("120"),
            "charge": Decimal("960.00"),
        }
        assert data["labor_subtotal"] == Decimal("960.00")
        assert data["travel_expenses"]["subtotal"] == 0
        assert data["warnings"] == []
        assert "grand_total" not in data
