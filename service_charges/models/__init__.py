"""Data models for the service charges engine.

This package contains Pydantic models for all business entities:
- BaseDataModel: Base class with common configuration
- DailyRecord / TimeWindow: One workday of a service visit
- TravelExpenseConfig / AirTravel: Travel expenses for a calculation run
- RateSchedule: Hourly and reimbursement rates
- DayType / LaborTier: Tier enumerations
"""

from service_charges.models.base import BaseDataModel, coerce_decimal
from service_charges.models.daily_record import DailyRecord, TimeWindow
from service_charges.models.rates import RateSchedule
from service_charges.models.tiers import DayType, LaborTier
from service_charges.models.travel_config import (
    AirTravel,
    PerDiemType,
    TravelExpenseConfig,
)

__all__ = [
    "BaseDataModel",
    "coerce_decimal",
    "DailyRecord",
    "TimeWindow",
    "TravelExpenseConfig",
    "AirTravel",
    "PerDiemType",
    "RateSchedule",
    "DayType",
    "LaborTier",
]
