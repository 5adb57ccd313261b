"""Readers for timesheet input files."""

from service_charges.readers.timesheet_file_reader import (
    TimesheetFile,
    TimesheetFileError,
    TimesheetFileReader,
)

__all__ = ["TimesheetFile", "TimesheetFileError", "TimesheetFileReader"]
