"""Timesheet file reader for exported service visit data.

This module reads a JSON export of the time entry form and converts it
into validated DailyRecord and TravelExpenseConfig objects.

Expected document format:

    {
        "entries": [
            {
                "date": "2024-03-06",
                "travel": {"to": {"active": true, "start": "06:00", "end": "08:00"},
                           "home": {"active": false}},
                "onsite": {"active": true, "start": "08:00", "end": "18:00"},
                "lunch": true,
                "lunchDuration": 0.5,
                "holiday": false,
                "travelOnly": false,
                "serviceWork": "Replaced pump seal"
            }
        ],
        "travel": {"perDiemType": "nonLocal", "perDiemDays": 3, "mileage": 100,
                   "otherTravel": 20, "airTravel": {"cost": 300}},
        "holidays": ["2024-07-04"]
    }

A bare JSON list is read as the entries with no travel expenses.
"""

import datetime as dt
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Union

from pydantic import ValidationError

from service_charges.calculators.day_type import ReferenceCalendar
from service_charges.calculators.time_utils import parse_record_date
from service_charges.models.daily_record import DailyRecord
from service_charges.models.travel_config import TravelExpenseConfig

logger = logging.getLogger(__name__)


class TimesheetFileError(Exception):
    """Raised when a timesheet file cannot be read or has the wrong shape."""

    def __init__(self, message: str, recovery_hint: Optional[str] = None):
        self.message = message
        self.recovery_hint = recovery_hint
        super().__init__(message)


@dataclass
class TimesheetFile:
    """Contents of a timesheet file.

    Attributes:
        records: Daily records in file order
        travel: Travel expense configuration
        holidays: Company holidays listed in the file
    """

    records: List[DailyRecord]
    travel: TravelExpenseConfig = field(default_factory=TravelExpenseConfig)
    holidays: List[dt.date] = field(default_factory=list)

    def calendar(self, extra_holidays: Optional[List[dt.date]] = None) -> ReferenceCalendar:
        """Build a reference calendar from the file's and extra holidays."""
        return ReferenceCalendar.from_dates([*self.holidays, *(extra_holidays or [])])


class TimesheetFileReader:
    """Reader for JSON timesheet exports.

    Example:
        >>> reader = TimesheetFileReader()
        >>> timesheet = reader.read("visit-2024-03.json")
        >>> len(timesheet.records)
        5
    """

    def read(self, path: Union[str, Path]) -> TimesheetFile:
        """Read and parse a timesheet file.

        Args:
            path: Path to the JSON file

        Returns:
            TimesheetFile with records, travel configuration and holidays

        Raises:
            TimesheetFileError: If the file is missing, is not valid JSON,
                or an entry is not a record object
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise TimesheetFileError(
                f"Timesheet file not found: {path}",
                recovery_hint="Check the path or export the timesheet again",
            )
        except OSError as e:
            raise TimesheetFileError(f"Failed to read {path}: {e}")

        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise TimesheetFileError(
                f"{path} is not valid JSON: {e.msg} (line {e.lineno})",
                recovery_hint="Export the timesheet again from the entry form",
            )

        timesheet = self.parse(document)
        logger.info(
            f"Read {len(timesheet.records)} record(s) from {path}"
            + (f" with {len(timesheet.holidays)} holiday(s)" if timesheet.holidays else "")
        )
        return timesheet

    def parse(self, document: Any) -> TimesheetFile:
        """Parse an already-decoded timesheet document.

        Args:
            document: Decoded JSON (object with "entries", or a list)

        Returns:
            TimesheetFile

        Raises:
            TimesheetFileError: If the document has the wrong shape
        """
        if isinstance(document, list):
            document = {"entries": document}
        if not isinstance(document, dict):
            raise TimesheetFileError(
                "Timesheet must be a JSON object with an 'entries' list"
            )

        entries = document.get("entries", [])
        if not isinstance(entries, list):
            raise TimesheetFileError("'entries' must be a list")

        records = [self._parse_record(entry, idx) for idx, entry in enumerate(entries, start=1)]

        try:
            travel = TravelExpenseConfig.model_validate(document.get("travel") or {})
        except ValidationError as e:
            raise TimesheetFileError(f"Invalid travel section: {e}")

        return TimesheetFile(
            records=records,
            travel=travel,
            holidays=self._parse_holidays(document.get("holidays") or []),
        )

    def _parse_record(self, entry: Any, index: int) -> DailyRecord:
        if not isinstance(entry, dict):
            raise TimesheetFileError(f"Entry {index} must be an object")
        try:
            return DailyRecord.model_validate(entry)
        except ValidationError as e:
            raise TimesheetFileError(
                f"Entry {index} is not a valid record: {e}",
                recovery_hint="Every entry needs at least a 'date'",
            )

    def _parse_holidays(self, values: Any) -> List[dt.date]:
        if not isinstance(values, list):
            raise TimesheetFileError("'holidays' must be a list of YYYY-MM-DD dates")

        holidays = []
        for value in values:
            parsed = parse_record_date(value) if isinstance(value, str) else None
            if parsed is None:
                logger.warning(f"Skipping invalid holiday date {value!r}")
                continue
            holidays.append(parsed)
        return holidays
