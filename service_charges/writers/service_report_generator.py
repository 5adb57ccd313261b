"""Service report generator for creating formatted output DataFrames.

This module turns a ChargeSummary into the tables of the printed service
report: the per-day breakdown, service (labor) charges, travel charges,
travel expenses, and the total charges including the grand total.
"""

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Optional

import pandas as pd

from service_charges.calculators.charge_calculator import (
    ChargeSummary,
    ProcessedEntry,
    TierCharge,
)
from service_charges.calculators.time_utils import parse_record_date, quantize_hours
from service_charges.models.daily_record import TimeWindow
from service_charges.models.rates import RateSchedule
from service_charges.models.tiers import DayType
from service_charges.models.travel_config import PerDiemType, TravelExpenseConfig

DAY_TYPE_LABELS = {
    DayType.WEEKDAY: "Weekday",
    DayType.SATURDAY: "Saturday",
    DayType.SUNDAY_OR_HOLIDAY: "Sun/Hol",
}

CHARGE_COLUMNS = ["Category", "Hours", "Rate", "Charge"]


def calculate_grand_total(summary: ChargeSummary) -> Decimal:
    """Add the labor, travel-transit and travel-expense subtotals.

    Example:
        >>> calculate_grand_total(summary)
        Decimal('3320.00')
    """
    return (
        summary.labor_subtotal
        + summary.travel_charges_subtotal
        + summary.travel_expenses.subtotal
    )


def format_window(window: TimeWindow) -> str:
    """Format an active window as HH:MM-HH:MM, or blank if inactive.

    Example:
        >>> format_window(TimeWindow(active=True, start="08:00", end="12:00"))
        '08:00-12:00'
    """
    if not window.active:
        return ""
    return f"{window.start or '?'}-{window.end or '?'}"


@dataclass
class ServiceReportData:
    """Container for all service report tables.

    Attributes:
        daily_breakdown: One row per record with hours by tier
        service_charges: Labor tiers with subtotal row
        travel_charges: Travel-transit tiers with subtotal row
        travel_expenses: Per diem, mileage, other, airfare with subtotal row
        total_charges: Three subtotals and the grand total
    """

    daily_breakdown: pd.DataFrame
    service_charges: pd.DataFrame
    travel_charges: pd.DataFrame
    travel_expenses: pd.DataFrame
    total_charges: pd.DataFrame


class ServiceReportGenerator:
    """Generate service report DataFrames from a charge summary.

    Example:
        >>> generator = ServiceReportGenerator(summary, travel_config)
        >>> report = generator.generate()
        >>> report.total_charges["Total"].iloc[-1]
        '$3320.00'
    """

    def __init__(
        self,
        summary: ChargeSummary,
        travel_config: Optional[TravelExpenseConfig] = None,
        rates: Optional[RateSchedule] = None,
    ):
        self.summary = summary
        self.travel_config = travel_config or TravelExpenseConfig()
        self.rates = rates or RateSchedule()

    def generate(self) -> ServiceReportData:
        return ServiceReportData(
            daily_breakdown=self.generate_daily_breakdown(),
            service_charges=self._generate_service_charges(),
            travel_charges=self._generate_travel_charges(),
            travel_expenses=self._generate_travel_expenses(),
            total_charges=self._generate_total_charges(),
        )

    def generate_daily_breakdown(self) -> pd.DataFrame:
        """Generate the per-day breakdown, sorted by date.

        Records with an unparseable date sort last.
        """
        if not self.summary.entries:
            return pd.DataFrame(columns=self._get_daily_columns())

        entries = sorted(
            self.summary.entries,
            key=lambda e: parse_record_date(e.record.date) or dt.date.max,
        )
        rows = [self._build_daily_row(entry) for entry in entries]
        return pd.DataFrame(rows, columns=self._get_daily_columns())

    def _build_daily_row(self, entry: ProcessedEntry) -> Dict:
        record = entry.record
        day = entry.day
        return {
            "Date": str(record.date),
            "Day Type": DAY_TYPE_LABELS.get(entry.day_type, "Invalid"),
            "Travel To": format_window(record.travel_to),
            "On-site": format_window(record.onsite),
            "Travel Home": format_window(record.travel_home),
            "Lunch": f"{record.lunch_duration}h" if record.lunch else "",
            "Travel Hrs": float(quantize_hours(day.travel_hours)),
            "Work Hrs": float(quantize_hours(day.labor_hours)),
            "Straight": float(quantize_hours(day.straight_hours)),
            "Overtime": float(quantize_hours(day.overtime_hours)),
            "Double": float(quantize_hours(day.double_hours)),
            "Total Hrs": float(quantize_hours(day.total_hours)),
            "Service Work": record.service_work,
        }

    def _get_daily_columns(self) -> List[str]:
        return [
            "Date",
            "Day Type",
            "Travel To",
            "On-site",
            "Travel Home",
            "Lunch",
            "Travel Hrs",
            "Work Hrs",
            "Straight",
            "Overtime",
            "Double",
            "Total Hrs",
            "Service Work",
        ]

    def _generate_service_charges(self) -> pd.DataFrame:
        rows = [
            self._tier_row("Straight", self.summary.straight),
            self._tier_row("Sat/OT", self.summary.overtime),
            self._tier_row("Sun/Hol", self.summary.double),
            self._subtotal_row(self.summary.labor_subtotal),
        ]
        return pd.DataFrame(rows, columns=CHARGE_COLUMNS)

    def _generate_travel_charges(self) -> pd.DataFrame:
        rows = [
            self._tier_row("Weekday", self.summary.weekday_travel),
            self._tier_row("Saturday", self.summary.saturday_travel),
            self._tier_row("Sun/Hol", self.summary.sunday_travel),
            self._subtotal_row(self.summary.travel_charges_subtotal),
        ]
        return pd.DataFrame(rows, columns=CHARGE_COLUMNS)

    def _generate_travel_expenses(self) -> pd.DataFrame:
        expenses = self.summary.travel_expenses
        config = self.travel_config
        per_diem_rate = self.rates.per_diem_rate(config.per_diem_type)
        per_diem_label = "local" if config.per_diem_type == PerDiemType.LOCAL else "non-local"

        rows = [
            {
                "Category": "Per Diem",
                "Amount": self._format_money(expenses.per_diem),
                "Details": (
                    f"{self._format_money(per_diem_rate)}/day ({per_diem_label}) "
                    f"x {config.per_diem_days}"
                ),
            },
            {
                "Category": "Mileage",
                "Amount": self._format_money(expenses.mileage),
                "Details": f"{config.mileage} miles at ${self.rates.mileage_rate}",
            },
            {
                "Category": "Other Travel",
                "Amount": self._format_money(expenses.other),
                "Details": "",
            },
            {
                "Category": "Air Travel",
                "Amount": self._format_money(expenses.airfare),
                "Details": self._format_route(),
            },
            {
                "Category": "Subtotal",
                "Amount": self._format_money(expenses.subtotal),
                "Details": "",
            },
        ]
        return pd.DataFrame(rows, columns=["Category", "Amount", "Details"])

    def _generate_total_charges(self) -> pd.DataFrame:
        rows = [
            ("Service Charges", self.summary.labor_subtotal),
            ("Travel Charges", self.summary.travel_charges_subtotal),
            ("Travel Expenses", self.summary.travel_expenses.subtotal),
            ("Grand Total", calculate_grand_total(self.summary)),
        ]
        return pd.DataFrame(
            [{"Category": name, "Total": self._format_money(value)} for name, value in rows],
            columns=["Category", "Total"],
        )

    def _tier_row(self, category: str, tier: TierCharge) -> Dict:
        return {
            "Category": category,
            "Hours": f"{quantize_hours(tier.hours)}",
            "Rate": self._format_money(tier.rate, cents=False),
            "Charge": self._format_money(tier.charge),
        }

    def _subtotal_row(self, subtotal: Decimal) -> Dict:
        return {
            "Category": "Subtotal",
            "Hours": "",
            "Rate": "",
            "Charge": self._format_money(subtotal),
        }

    def _format_route(self) -> str:
        air = self.travel_config.air_travel
        if not air.origin and not air.destination:
            return ""
        return f"{air.origin} -> {air.destination}"

    def _format_money(self, amount: Decimal, cents: bool = True) -> str:
        """Format a currency amount as $1234.00 (or $120 without cents)."""
        if cents:
            return f"${amount:.2f}"
        return f"${amount.normalize():f}"
