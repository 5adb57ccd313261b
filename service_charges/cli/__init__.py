"""Service Charges CLI.

This module provides a command-line interface for the service charges
engine. It includes commands for calculating charges from a timesheet
file and validating timesheet data.
"""

from typing import Optional

import click

from service_charges import __version__
from service_charges.cli.commands.calculate import calculate
from service_charges.cli.commands.validate import validate
from service_charges.cli.error_handlers import with_error_handling
from service_charges.config.logging_config import configure_logging
from service_charges.config.settings import get_config


@click.group(
    help="Service Charges CLI - Calculate labor, travel and expense charges"
)
@click.version_option(version=__version__)
@click.option(
    "--log-level",
    type=click.Choice(
        ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False
    ),
    default=None,
    help="Override LOG_LEVEL for this run",
)
def cli(log_level: Optional[str]):
    """Service Charges CLI main entry point."""
    with with_error_handling():
        configure_logging(get_config(), log_level)


# Register commands
cli.add_command(calculate)
cli.add_command(validate)


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
