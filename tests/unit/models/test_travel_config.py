"""Unit tests for travel expense configuration models."""

from decimal import Decimal

import pytest

from service_charges.models.base import InputIssue
from service_charges.models.travel_config import (
    AirTravel,
    PerDiemType,
    TravelExpenseConfig,
)


class TestAirTravel:
    """Test AirTravel model."""

    def test_route_fields(self):
        """Test route fields are carried for reporting."""
        air = AirTravel(cost="450.50", origin="SEA", destination="PHX", **{"return": "Fri"})

        assert air.cost == Decimal("450.50")
        assert air.origin == "SEA"
        assert air.return_date == "Fri"

    def test_invalid_cost_is_zero(self):
        """Test a non-numeric cost becomes zero and is kept as an input issue."""
        air = AirTravel(cost="TBD")

        assert air.cost == Decimal("0")
        assert air.input_issues == [
            InputIssue("cost", "Invalid number, counted as 0", "TBD")
        ]


class TestTravelExpenseConfig:
    """Test TravelExpenseConfig model."""

    def test_defaults(self):
        """Test an empty configuration has no expenses."""
        config = TravelExpenseConfig()

        assert config.per_diem_type == PerDiemType.NON_LOCAL
        assert config.per_diem_days == 0
        assert config.mileage == 0
        assert config.other_travel == 0
        assert config.air_travel.cost == 0

    @pytest.mark.parametrize("value", ["local", "Local", " LOCAL ", PerDiemType.LOCAL])
    def test_local_per_diem(self, value):
        """Test only "local" selects the local rate."""
        assert TravelExpenseConfig(perDiemType=value).per_diem_type == PerDiemType.LOCAL

    @pytest.mark.parametrize("value", ["nonLocal", "non-local", "", None, "remote"])
    def test_everything_else_is_non_local(self, value):
        """Test any other value selects the non-local rate."""
        config = TravelExpenseConfig(perDiemType=value)

        assert config.per_diem_type == PerDiemType.NON_LOCAL

    def test_numeric_strings(self):
        """Test numeric strings from the form are parsed."""
        config = TravelExpenseConfig(perDiemDays="3", mileage="120.5", otherTravel="")

        assert config.per_diem_days == Decimal("3")
        assert config.mileage == Decimal("120.5")
        assert config.other_travel == Decimal("0")

    def test_snake_case_keys(self):
        """Test snake_case keys are accepted."""
        config = TravelExpenseConfig(per_diem_days=2, air_travel={"cost": 99})

        assert config.per_diem_days == Decimal("2")
        assert config.air_travel.cost == Decimal("99")

    def test_null_air_travel(self):
        """Test a null airTravel section means no airfare."""
        assert TravelExpenseConfig(airTravel=None).air_travel.cost == 0

    def test_input_issues_collected(self):
        """Test unusable amounts are listed with their raw values."""
        config = TravelExpenseConfig(
            perDiemDays="three", mileage="1e27", otherTravel=20, airTravel={"cost": "n/a"}
        )

        assert config.mileage == Decimal("0")
        assert [(i.field, i.value) for i in config.input_issues] == [
            ("per_diem_days", "three"),
            ("mileage", "1e27"),
            ("air_travel.cost", "n/a"),
        ]
        assert config.input_issues[1].message == "Number out of range, counted as 0"

    def test_clean_config_has_no_input_issues(self, sample_travel_config):
        """Test valid amounts leave no input issues."""
        assert sample_travel_config.input_issues == []
