"""Pre-flight validator for daily records and travel configuration.

The charge engine tolerates bad data by counting it as zero hours. This
validator finds the same problems up front, with severities, so a user
can fix a timesheet before charges are calculated from it.
"""

from collections import Counter
from decimal import Decimal
from typing import Any, Dict, List, Optional

from service_charges.calculators.time_utils import (
    calculate_duration_minutes,
    minutes_to_decimal_hours,
    parse_clock_time,
    parse_record_date,
)
from service_charges.models.daily_record import DailyRecord, TimeWindow
from service_charges.models.travel_config import TravelExpenseConfig
from service_charges.validators.validation_report import ValidationReport

WINDOW_FIELDS = ("travel_to", "onsite", "travel_home")


class RecordValidator:
    """Validator for daily records and travel expense configuration.

    Example:
        >>> validator = RecordValidator()
        >>> report = validator.validate_records(records, travel_config)
        >>> if not report.is_valid():
        ...     print(report.format())
    """

    def validate_record(
        self, record: DailyRecord, entry_number: Optional[int] = None
    ) -> ValidationReport:
        """Validate a single daily record.

        Args:
            record: The record to validate
            entry_number: Optional 1-based position for context in messages

        Returns:
            ValidationReport with any issues found
        """
        report = ValidationReport()
        context: Dict[str, Any] = {"date": str(record.date)}
        if entry_number is not None:
            context = {"entry": entry_number, **context}

        if parse_record_date(record.date) is None:
            report.add_error("date", "Date must be YYYY-MM-DD", record.date, context)

        for issue in record.input_issues:
            report.add_warning(issue.field, issue.message, issue.value, context)

        spans = {
            name: self._validate_window(getattr(record, name), name, report, context)
            for name in WINDOW_FIELDS
        }
        self._validate_lunch(record, spans["onsite"], report, context)

        if record.travel_only and spans["onsite"]:
            report.add_info(
                "travel_only",
                "Travel-only day has on-site hours; they will not be billed as labor",
                spans["onsite"],
                context,
            )

        if not any(getattr(record, name).active for name in WINDOW_FIELDS):
            report.add_info("onsite", "No travel or on-site time recorded", None, context)

        return report

    def validate_records(
        self,
        records: List[DailyRecord],
        travel_config: Optional[TravelExpenseConfig] = None,
    ) -> ValidationReport:
        """Validate a set of records and, optionally, the travel configuration.

        Args:
            records: Daily records of a visit
            travel_config: Optional travel expense configuration

        Returns:
            ValidationReport with all issues found
        """
        combined_report = ValidationReport()

        for idx, record in enumerate(records, start=1):
            combined_report.merge(self.validate_record(record, entry_number=idx))

        dates = Counter(
            parse_record_date(record.date)
            for record in records
            if parse_record_date(record.date) is not None
        )
        for date, count in sorted(dates.items()):
            if count > 1:
                combined_report.add_warning(
                    "date",
                    f"Date appears in {count} records",
                    date.isoformat(),
                )

        if travel_config is not None:
            combined_report.merge(self.validate_travel_config(travel_config))

        return combined_report

    def validate_travel_config(
        self, travel_config: TravelExpenseConfig
    ) -> ValidationReport:
        """Validate travel expense amounts.

        Args:
            travel_config: Travel expense configuration

        Returns:
            ValidationReport with any issues found
        """
        report = ValidationReport()
        for issue in travel_config.input_issues:
            report.add_warning(
                issue.field, issue.message, issue.value, {"section": "travel"}
            )

        amounts = {
            "per_diem_days": travel_config.per_diem_days,
            "mileage": travel_config.mileage,
            "other_travel": travel_config.other_travel,
            "air_travel.cost": travel_config.air_travel.cost,
        }
        for name, value in amounts.items():
            if value < 0:
                report.add_warning(name, "Amount is negative", value, {"section": "travel"})

        if travel_config.per_diem_days != travel_config.per_diem_days.to_integral_value():
            report.add_info(
                "per_diem_days",
                "Per diem days is not a whole number",
                travel_config.per_diem_days,
                {"section": "travel"},
            )
        return report

    @staticmethod
    def _validate_window(
        window: TimeWindow,
        field_prefix: str,
        report: ValidationReport,
        context: Dict[str, Any],
    ) -> Decimal:
        """Validate an active window and return its span in hours."""
        if not window.active:
            return Decimal("0")

        start = parse_clock_time(window.start)
        end = parse_clock_time(window.end)
        for name, raw, parsed in (("start", window.start, start), ("end", window.end, end)):
            if parsed is None:
                report.add_error(
                    f"{field_prefix}.{name}",
                    "Time is required (HH:MM)" if not raw else "Time must be HH:MM",
                    raw,
                    context,
                )
        if start is None or end is None:
            return Decimal("0")

        minutes = calculate_duration_minutes(start, end)
        if minutes < 0:
            report.add_warning(
                f"{field_prefix}.end",
                f"End time ({window.end}) is before start time ({window.start}); "
                "window counts 0 hours",
                window.end,
                context,
            )
            return Decimal("0")
        return minutes_to_decimal_hours(minutes)

    @staticmethod
    def _validate_lunch(
        record: DailyRecord,
        onsite_hours: Decimal,
        report: ValidationReport,
        context: Dict[str, Any],
    ) -> None:
        if not record.lunch:
            return

        if record.lunch_duration < 0:
            report.add_warning(
                "lunch_duration",
                "Lunch duration is negative",
                record.lunch_duration,
                context,
            )
        elif record.onsite.active and record.lunch_duration > onsite_hours:
            report.add_warning(
                "lunch_duration",
                f"Lunch ({record.lunch_duration}h) exceeds on-site time "
                f"({onsite_hours:.2f}h); the whole day counts 0 hours",
                record.lunch_duration,
                context,
            )
        elif not record.onsite.active:
            report.add_info(
                "lunch",
                "Lunch recorded without on-site time; it is ignored",
                record.lunch_duration,
                context,
            )
