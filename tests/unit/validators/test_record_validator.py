"""Tests for the record validator."""

import datetime as dt
from decimal import Decimal

import pytest

from service_charges.models.travel_config import TravelExpenseConfig
from service_charges.validators.record_validator import RecordValidator
from service_charges.validators.validation_report import ValidationSeverity

WEDNESDAY = dt.date(2024, 3, 6)


@pytest.fixture
def validator():
    return RecordValidator()


class TestValidateRecord:
    """Tests for single-record validation."""

    def test_valid_record(self, validator, make_record):
        """Test a clean weekday record has no issues."""
        report = validator.validate_record(
            make_record(travel_to=("06:00", "08:00"), lunch=True, lunch_duration="0.5")
        )

        assert len(report) == 0

    def test_invalid_date(self, validator, make_record):
        """Test an unparsable date is an error."""
        report = validator.validate_record(make_record(date="2024-13-01"))

        assert report.error_count == 1
        assert report.get_errors()[0].field == "date"

    def test_missing_time_on_active_window(self, validator, make_record):
        """Test an active window without a start time is an error."""
        report = validator.validate_record(make_record(onsite=(None, "16:00")))

        errors = report.get_errors()
        assert len(errors) == 1
        assert errors[0].field == "onsite.start"
        assert errors[0].message == "Time is required (HH:MM)"

    def test_malformed_time(self, validator, make_record):
        """Test a malformed time is an error naming the field."""
        report = validator.validate_record(make_record(travel_home=("17:00", "7pm")))

        errors = report.get_errors()
        assert [e.field for e in errors] == ["travel_home.end"]
        assert errors[0].message == "Time must be HH:MM"

    def test_end_before_start(self, validator, make_record):
        """Test an end before the start is a warning."""
        report = validator.validate_record(make_record(onsite=("16:00", "08:00")))

        assert report.error_count == 0
        assert report.warning_count == 1
        assert report.get_warnings()[0].field == "onsite.end"

    def test_inactive_window_not_checked(self, validator, make_record):
        """Test bad times on an inactive window are ignored."""
        record = make_record(travel_to=None)
        record.travel_to.start = "garbage"

        assert validator.validate_record(record).error_count == 0

    def test_lunch_exceeds_onsite(self, validator, make_record):
        """Test lunch longer than on-site time is a warning."""
        report = validator.validate_record(
            make_record(onsite=("08:00", "09:00"), lunch=True, lunch_duration=2)
        )

        warnings = report.get_warnings()
        assert len(warnings) == 1
        assert warnings[0].field == "lunch_duration"
        assert "0 hours" in warnings[0].message

    def test_negative_lunch(self, validator, make_record):
        """Test a negative lunch duration is a warning."""
        report = validator.validate_record(make_record(lunch=True, lunch_duration=-1))

        assert report.get_warnings()[0].message == "Lunch duration is negative"

    def test_unusable_lunch_duration(self, validator, make_record):
        """Test a lunch duration that could not be read is a warning."""
        report = validator.validate_record(
            make_record(lunch=True, lunchDuration="half an hour"), entry_number=1
        )

        warnings = report.get_warnings()
        assert len(warnings) == 1
        assert warnings[0].field == "lunch_duration"
        assert warnings[0].value == "half an hour"
        assert warnings[0].context == {"entry": 1, "date": "2024-03-06"}

    def test_lunch_without_onsite(self, validator, make_record):
        """Test lunch on a travel day is informational."""
        report = validator.validate_record(
            make_record(onsite=None, travel_to=("06:00", "10:00"), lunch=True, lunch_duration=1)
        )

        assert report.error_count == 0
        assert report.warning_count == 0
        assert report.get_issues(ValidationSeverity.INFO)[0].field == "lunch"

    def test_travel_only_with_onsite_hours(self, validator, make_record):
        """Test a travel-only day with on-site hours is informational."""
        report = validator.validate_record(make_record(travel_only=True))

        infos = report.get_issues(ValidationSeverity.INFO)
        assert [i.field for i in infos] == ["travel_only"]

    def test_nothing_recorded(self, validator, make_record):
        """Test a record with no active windows is informational."""
        report = validator.validate_record(make_record(onsite=None))

        assert report.info_count == 1
        assert report.issues[0].message == "No travel or on-site time recorded"

    def test_entry_number_in_context(self, validator, make_record):
        """Test the entry number is included in issue context."""
        report = validator.validate_record(make_record(date="bad"), entry_number=4)

        assert report.issues[0].context == {"entry": 4, "date": "bad"}


class TestValidateRecords:
    """Tests for batch validation."""

    def test_duplicate_dates(self, validator, make_record):
        """Test two records on the same date are flagged."""
        records = [make_record(date=WEDNESDAY), make_record(date="2024-03-06")]

        report = validator.validate_records(records)

        warnings = report.get_warnings()
        assert len(warnings) == 1
        assert warnings[0].message == "Date appears in 2 records"
        assert warnings[0].value == "2024-03-06"

    def test_issues_numbered_by_entry(self, validator, make_record):
        """Test issues from each record carry their 1-based position."""
        records = [make_record(), make_record(date="bad")]

        report = validator.validate_records(records)

        assert report.get_errors()[0].context["entry"] == 2

    def test_includes_travel_config(self, validator, make_record):
        """Test travel configuration issues are merged in."""
        config = TravelExpenseConfig(mileage=-10)

        report = validator.validate_records([make_record()], config)

        assert report.get_warnings()[0].field == "mileage"


class TestValidateTravelConfig:
    """Tests for travel configuration validation."""

    def test_valid_config(self, validator, sample_travel_config):
        """Test the sample configuration has no issues."""
        assert len(validator.validate_travel_config(sample_travel_config)) == 0

    def test_negative_amounts(self, validator):
        """Test every negative amount is a warning."""
        config = TravelExpenseConfig(
            perDiemDays=-1, mileage=-5, otherTravel=-20, airTravel={"cost": -300}
        )

        report = validator.validate_travel_config(config)

        assert [i.field for i in report.get_warnings()] == [
            "per_diem_days",
            "mileage",
            "other_travel",
            "air_travel.cost",
        ]
        assert report.issues[0].context == {"section": "travel"}

    def test_fractional_per_diem_days(self, validator):
        """Test fractional per diem days are informational."""
        config = TravelExpenseConfig(perDiemDays="2.5")

        report = validator.validate_travel_config(config)

        assert report.info_count == 1
        assert report.issues[0].value == Decimal("2.5")

    def test_unusable_amounts(self, validator):
        """Test amounts that could not be read are warnings with their raw value."""
        config = TravelExpenseConfig(mileage="1e27", airTravel={"cost": "TBD"})

        report = validator.validate_travel_config(config)

        assert [(i.field, i.value) for i in report.get_warnings()] == [
            ("mileage", "1e27"),
            ("air_travel.cost", "TBD"),
        ]
