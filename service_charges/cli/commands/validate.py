"""Validate timesheet command."""

from pathlib import Path

import click

from service_charges.cli.error_handlers import with_error_handling
from service_charges.cli.utils.formatters import (
    format_error,
    format_info,
    format_success,
    format_warning,
)
from service_charges.readers.timesheet_file_reader import TimesheetFileReader
from service_charges.validators.record_validator import RecordValidator
from service_charges.validators.validation_report import ValidationSeverity

MAX_ISSUES_PER_SEVERITY = 20

SEVERITY_FORMATTERS = {
    ValidationSeverity.ERROR: format_error,
    ValidationSeverity.WARNING: format_warning,
    ValidationSeverity.INFO: format_info,
}


@click.command(name="validate")
@click.argument("timesheet_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--severity",
    type=click.Choice(["error", "warning", "info"], case_sensitive=False),
    default="warning",
    help="Minimum severity level to display (default: warning)",
)
@click.option("--debug", is_flag=True, help="Show full stack traces on error")
def validate(timesheet_file: Path, severity: str, debug: bool):
    """Validate a timesheet file before calculating charges.

    Checks for:
    - Invalid dates and malformed times on active windows
    - End times before start times
    - Lunch breaks longer than the on-site window
    - Duplicate dates and negative travel expenses
    - Numbers that could not be read (counted as 0)

    Returns non-zero exit code if errors are found.

    Example:
        service-charges validate visit.json
        service-charges validate visit.json --severity info
    """
    with with_error_handling(debug):
        click.echo(format_info(f"Validating {timesheet_file}..."))

        severity_level = ValidationSeverity[severity.upper()]
        timesheet = TimesheetFileReader().read(timesheet_file)
        report = RecordValidator().validate_records(timesheet.records, timesheet.travel)

        click.echo()
        click.echo("=" * 60)
        click.echo("Validation Summary")
        click.echo("=" * 60)
        click.echo(f"Records:          {len(timesheet.records)}")
        click.echo(f"Errors:           {report.error_count}")
        click.echo(f"Warnings:         {report.warning_count}")
        click.echo(f"Info:             {report.info_count}")

        if report.at_least(severity_level):
            click.echo()
            click.echo(f"Issues (showing {severity.upper()} and above):")
            click.echo("-" * 60)

            for sev in (
                ValidationSeverity.ERROR,
                ValidationSeverity.WARNING,
                ValidationSeverity.INFO,
            ):
                if sev < severity_level:
                    continue
                sev_issues = report.get_issues(sev)
                if not sev_issues:
                    continue

                click.echo()
                click.echo(f"{sev.name}S ({len(sev_issues)}):")
                for issue in sev_issues[:MAX_ISSUES_PER_SEVERITY]:
                    if issue.context:
                        ctx_items = ", ".join(f"{k}={v}" for k, v in issue.context.items())
                        context_str = f" [{ctx_items}]"
                    else:
                        context_str = ""
                    click.echo(
                        SEVERITY_FORMATTERS[sev](
                            f"  {issue.field}: {issue.message}{context_str}"
                        )
                    )

                if len(sev_issues) > MAX_ISSUES_PER_SEVERITY:
                    click.echo(
                        f"  ... and {len(sev_issues) - MAX_ISSUES_PER_SEVERITY} more"
                    )

        click.echo()
        click.echo("=" * 60)
        click.echo()

        if report.has_errors():
            click.echo(
                format_error(f"Validation failed with {report.error_count} error(s)")
            )
            click.get_current_context().exit(1)
        elif report.warning_count > 0:
            click.echo(
                format_warning(
                    f"Validation completed with {report.warning_count} warning(s)"
                )
            )
        else:
            click.echo(format_success("Validation passed! No issues found."))
