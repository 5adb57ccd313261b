"""Error handling for CLI commands."""

import sys
import traceback
from typing import Optional

import click
from pydantic import ValidationError

from service_charges.cli.utils.formatters import format_error, format_warning
from service_charges.readers.timesheet_file_reader import TimesheetFileError


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""

    def __init__(self, message: str, recovery_hint: Optional[str] = None):
        """
        Initialize CLI error.

        Args:
            message: Error message to display
            recovery_hint: Optional hint for recovering from the error
        """
        self.message = message
        self.recovery_hint = recovery_hint
        super().__init__(message)


class ConfigurationError(CLIError):
    """Error related to configuration issues."""

    pass


class DataValidationError(CLIError):
    """Error related to data validation."""

    pass


class ProcessingError(CLIError):
    """Error related to charge calculation or report output."""

    pass


EXIT_CODES = {
    ConfigurationError: (1, "Configuration Error"),
    DataValidationError: (3, "Data Validation Error"),
    ProcessingError: (4, "Processing Error"),
}


def _echo_hint(recovery_hint: Optional[str]) -> None:
    if recovery_hint:
        click.echo(format_warning(f"Hint: {recovery_hint}"))


def handle_cli_error(error: Exception, debug: bool = False) -> int:
    """
    Handle CLI errors with user-friendly messages.

    Args:
        error: The exception that occurred
        debug: Whether to show full stack trace

    Returns:
        Exit code (1 configuration, 3 data validation, 4 processing,
        5 timesheet file, 130 cancelled, 255 unexpected)
    """
    for error_type, (exit_code, label) in EXIT_CODES.items():
        if isinstance(error, error_type):
            click.echo(format_error(f"{label}: {error.message}"))
            _echo_hint(error.recovery_hint)
            return exit_code

    if isinstance(error, TimesheetFileError):
        click.echo(format_error(f"Timesheet File Error: {error.message}"))
        _echo_hint(error.recovery_hint)
        return 5

    # Settings validation fails with a pydantic ValidationError
    if isinstance(error, ValidationError):
        click.echo(format_error("Configuration Error: invalid settings"))
        click.echo(str(error))
        _echo_hint("Check the rate and logging variables in your .env file")
        return 1

    if isinstance(error, click.Abort):
        click.echo(format_warning("\nOperation cancelled by user"))
        return 130  # Standard exit code for SIGINT

    click.echo(format_error(f"Unexpected Error: {type(error).__name__}"))
    click.echo(str(error))

    if debug:
        click.echo("\nFull stack trace:")
        click.echo(traceback.format_exc())
    else:
        click.echo(format_warning("\nRun with --debug flag for full stack trace"))

    return 255


def with_error_handling(debug: bool = False):
    """
    Context manager adding standardized error handling to CLI commands.

    Args:
        debug: Whether to show full stack traces

    Returns:
        Context manager that exits with the mapped exit code on error

    Example:
        @click.command()
        @click.option('--debug', is_flag=True)
        def my_command(debug):
            with with_error_handling(debug):
                # Command implementation
                pass
    """

    class ErrorHandler:
        """Context manager for error handling."""

        def __init__(self, show_debug: bool):
            self.show_debug = show_debug

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc_val, exc_tb):
            if exc_val is not None and not isinstance(
                exc_val, (click.exceptions.Exit, SystemExit)
            ):
                exit_code = handle_cli_error(exc_val, self.show_debug)
                sys.exit(exit_code)
            return False  # Don't suppress exceptions

    return ErrorHandler(debug)
