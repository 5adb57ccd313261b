"""Travel expense configuration model.

One TravelExpenseConfig accompanies each charge calculation. Its amounts
are reimbursed independently of the daily records.
"""

from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar, List, Tuple

from pydantic import Field, field_validator

from service_charges.models.base import BaseDataModel, InputIssue, coerce_decimal


class PerDiemType(str, Enum):
    """Per diem rate category."""

    LOCAL = "local"
    NON_LOCAL = "nonLocal"


class AirTravel(BaseDataModel):
    """Airfare for the visit.

    Only ``cost`` takes part in the charge calculation; the route fields
    are carried for reporting.

    Attributes:
        cost: Flat airfare amount
        origin: Departure airport or city
        destination: Arrival airport or city
        return_date: Return flight description as entered on the form
    """

    cost: Decimal = Field(Decimal("0"), description="Flat airfare amount")
    origin: str = ""
    destination: str = ""
    return_date: str = Field("", alias="return")

    decimal_input_fields: ClassVar[Tuple[str, ...]] = ("cost",)

    @field_validator("cost", mode="before")
    @classmethod
    def parse_cost(cls, v: Any) -> Decimal:
        return coerce_decimal(v, "air_travel.cost")

    @field_validator("origin", "destination", "return_date", mode="before")
    @classmethod
    def default_text(cls, v: Any) -> str:
        return "" if v is None else str(v)


class TravelExpenseConfig(BaseDataModel):
    """Travel expenses for one charge calculation run.

    Numeric fields accept numbers or numeric strings; missing or invalid
    values become zero.

    Attributes:
        per_diem_type: Local or non-local per diem rate
        per_diem_days: Number of per diem days
        mileage: Miles driven
        other_travel: Flat incidental travel amount
        air_travel: Airfare details

    Example:
        >>> config = TravelExpenseConfig(
        ...     perDiemType="nonLocal",
        ...     perDiemDays=3,
        ...     mileage="100",
        ...     airTravel={"cost": 300},
        ... )
        >>> config.per_diem_type
        <PerDiemType.NON_LOCAL: 'nonLocal'>
        >>> config.air_travel.cost
        Decimal('300')
    """

    per_diem_type: PerDiemType = Field(PerDiemType.NON_LOCAL)
    per_diem_days: Decimal = Field(Decimal("0"), description="Per diem days")
    mileage: Decimal = Field(Decimal("0"), description="Miles driven")
    other_travel: Decimal = Field(Decimal("0"), description="Incidental amount")
    air_travel: AirTravel = Field(default_factory=AirTravel)

    decimal_input_fields: ClassVar[Tuple[str, ...]] = (
        "per_diem_days",
        "mileage",
        "other_travel",
    )

    @property
    def input_issues(self) -> List[InputIssue]:
        """Unusable amounts, including the airfare's, that counted as zero."""
        airfare_issues = [
            issue._replace(field=f"air_travel.{issue.field}")
            for issue in self.air_travel.input_issues
        ]
        return list(self._input_issues) + airfare_issues

    @field_validator("per_diem_type", mode="before")
    @classmethod
    def parse_per_diem_type(cls, v: Any) -> PerDiemType:
        """Only an explicit "local" selects the local rate.

        Every other value (``nonLocal``, ``non-local``, missing) selects
        the non-local rate.
        """
        if isinstance(v, PerDiemType):
            return v
        if isinstance(v, str) and v.strip().lower() == PerDiemType.LOCAL.value:
            return PerDiemType.LOCAL
        return PerDiemType.NON_LOCAL

    @field_validator("per_diem_days", "mileage", "other_travel", mode="before")
    @classmethod
    def parse_amount(cls, v: Any, info) -> Decimal:
        return coerce_decimal(v, info.field_name)

    @field_validator("air_travel", mode="before")
    @classmethod
    def default_air_travel(cls, v: Any) -> Any:
        return {} if v is None else v
