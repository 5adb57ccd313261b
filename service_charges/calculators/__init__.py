"""Calculator modules for the service charges engine."""

from service_charges.calculators.charge_calculator import (
    ChargeSummary,
    ProcessedEntry,
    TierCharge,
    TravelExpenses,
    calculate_charges,
    calculate_tier_charge,
    calculate_travel_expenses,
)
from service_charges.calculators.day_type import ReferenceCalendar, classify_day_type
from service_charges.calculators.entry_classifier import (
    ClassificationResult,
    ClassifiedDay,
    calculate_window_hours,
    classify_entry,
    split_labor_hours,
)

__all__ = [
    # charge_calculator
    "ChargeSummary",
    "ProcessedEntry",
    "TierCharge",
    "TravelExpenses",
    "calculate_charges",
    "calculate_tier_charge",
    "calculate_travel_expenses",
    # day_type
    "ReferenceCalendar",
    "classify_day_type",
    # entry_classifier
    "ClassificationResult",
    "ClassifiedDay",
    "calculate_window_hours",
    "classify_entry",
    "split_labor_hours",
]
