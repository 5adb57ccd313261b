"""Rate schedule model.

The RateSchedule holds every hourly rate and reimbursement rate the
charge calculation uses. Its defaults are the published service rates,
so the engine can be called without any configuration.
"""

from decimal import Decimal

from pydantic import ConfigDict, Field

from service_charges.models.base import BaseDataModel
from service_charges.models.tiers import DayType, LaborTier
from service_charges.models.travel_config import PerDiemType


class RateSchedule(BaseDataModel):
    """Hourly and reimbursement rates for a charge calculation.

    Attributes:
        straight_rate: Straight-time labor rate per hour
        overtime_rate: Overtime (and Saturday) labor rate per hour
        double_rate: Sunday/Holiday labor rate per hour
        weekday_travel_rate: Weekday travel rate per hour
        saturday_travel_rate: Saturday travel rate per hour
        sunday_travel_rate: Sunday/Holiday travel rate per hour
        local_per_diem_rate: Per diem per day, local visits
        non_local_per_diem_rate: Per diem per day, non-local visits
        mileage_rate: Reimbursement per mile
        straight_time_threshold_hours: Weekday hours billed at straight time

    Example:
        >>> rates = RateSchedule()
        >>> rates.labor_rate(LaborTier.OVERTIME)
        Decimal('180')
        >>> rates.travel_rate(DayType.SATURDAY)
        Decimal('120')
    """

    model_config = ConfigDict(frozen=True)

    straight_rate: Decimal = Field(Decimal("120"), ge=0)
    overtime_rate: Decimal = Field(Decimal("180"), ge=0)
    double_rate: Decimal = Field(Decimal("240"), ge=0)
    weekday_travel_rate: Decimal = Field(Decimal("80"), ge=0)
    saturday_travel_rate: Decimal = Field(Decimal("120"), ge=0)
    sunday_travel_rate: Decimal = Field(Decimal("160"), ge=0)
    local_per_diem_rate: Decimal = Field(Decimal("65"), ge=0)
    non_local_per_diem_rate: Decimal = Field(Decimal("220"), ge=0)
    mileage_rate: Decimal = Field(Decimal("0.63"), ge=0)
    straight_time_threshold_hours: Decimal = Field(Decimal("8"), gt=0)

    def labor_rate(self, tier: LaborTier) -> Decimal:
        """Get the hourly rate for a labor tier."""
        return {
            LaborTier.STRAIGHT: self.straight_rate,
            LaborTier.OVERTIME: self.overtime_rate,
            LaborTier.DOUBLE: self.double_rate,
        }[tier]

    def travel_rate(self, day_type: DayType) -> Decimal:
        """Get the hourly travel-transit rate for a day type."""
        return {
            DayType.WEEKDAY: self.weekday_travel_rate,
            DayType.SATURDAY: self.saturday_travel_rate,
            DayType.SUNDAY_OR_HOLIDAY: self.sunday_travel_rate,
        }[day_type]

    def per_diem_rate(self, per_diem_type: PerDiemType) -> Decimal:
        """Get the daily per diem rate."""
        if per_diem_type == PerDiemType.LOCAL:
            return self.local_per_diem_rate
        return self.non_local_per_diem_rate
