"""Calculate charges command."""

import datetime as dt
import json
from pathlib import Path
from typing import List, Optional, Tuple

import click

from service_charges.calculators.charge_calculator import calculate_charges
from service_charges.cli.error_handlers import (
    DataValidationError,
    ProcessingError,
    with_error_handling,
)
from service_charges.cli.utils.formatters import (
    format_dataframe,
    format_info,
    format_success,
    format_warning,
)
from service_charges.config.settings import get_config
from service_charges.readers.timesheet_file_reader import TimesheetFileReader
from service_charges.utils.logging_utils import LogContext, generate_run_id
from service_charges.writers.service_report_generator import (
    ServiceReportGenerator,
    calculate_grand_total,
)


def parse_holiday_dates(values: Tuple[str, ...]) -> List[dt.date]:
    """Parse --holiday values in YYYY-MM-DD format.

    Raises:
        DataValidationError: If a value is not a valid date
    """
    holidays = []
    for value in values:
        try:
            holidays.append(dt.datetime.strptime(value, "%Y-%m-%d").date())
        except ValueError:
            raise DataValidationError(
                f"Invalid holiday date: {value}",
                recovery_hint="Use YYYY-MM-DD, e.g. --holiday 2024-07-04",
            )
    return holidays


@click.command(name="calculate")
@click.argument("timesheet_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--holiday",
    "holidays",
    multiple=True,
    help="Bill this date (YYYY-MM-DD) at the Sunday/Holiday tier. Repeatable.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    help="Output format (default: table)",
)
@click.option(
    "--export-csv",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the per-day breakdown to a CSV file",
)
@click.option("--debug", is_flag=True, help="Show full stack traces on error")
def calculate(
    timesheet_file: Path,
    holidays: Tuple[str, ...],
    output_format: str,
    export_csv: Optional[Path],
    debug: bool,
):
    """Calculate service charges for a timesheet file.

    Prints service (labor) charges, travel charges, travel expenses and the
    grand total. Records with bad times or dates count zero hours and are
    listed as warnings.

    Example:
        service-charges calculate visit.json
        service-charges calculate visit.json --holiday 2024-07-04
        service-charges calculate visit.json --format json
        service-charges calculate visit.json --export-csv breakdown.csv
    """
    with with_error_handling(debug):
        extra_holidays = parse_holiday_dates(holidays)
        rates = get_config().to_rate_schedule()
        timesheet = TimesheetFileReader().read(timesheet_file)

        with LogContext(run_id=generate_run_id()):
            summary = calculate_charges(
                timesheet.records,
                timesheet.travel,
                calendar=timesheet.calendar(extra_holidays),
                rates=rates,
            )

        report = ServiceReportGenerator(summary, timesheet.travel, rates).generate()

        if output_format.lower() == "json":
            payload = summary.to_dict()
            payload["grand_total"] = calculate_grand_total(summary)
            click.echo(json.dumps(payload, indent=2, default=str))
        else:
            click.echo(format_info(f"Timesheet: {timesheet_file}"))
            click.echo(f"Records:   {len(timesheet.records)}")
            for title, table in (
                ("Daily Breakdown", report.daily_breakdown),
                ("Service Charges", report.service_charges),
                ("Travel Charges", report.travel_charges),
                ("Travel Expenses", report.travel_expenses),
                ("Total Charges", report.total_charges),
            ):
                click.echo()
                click.echo(title)
                click.echo(format_dataframe(table))

            if summary.report.issues:
                click.echo()
                click.echo(format_warning(summary.report.summary()))
                click.echo(summary.report.format())

        if export_csv:
            try:
                report.daily_breakdown.to_csv(export_csv, index=False)
            except OSError as e:
                raise ProcessingError(
                    f"Failed to write {export_csv}: {e}",
                    recovery_hint="Check that the directory exists and is writable",
                )
            if output_format.lower() != "json":
                click.echo()
                click.echo(format_success(f"Daily breakdown written to {export_csv}"))
