"""Report for collecting calculation and validation issues.

The charge engine never raises on bad record data. Every anomaly it
degrades to zero is recorded here instead, so callers can surface the
diagnostics next to the computed charges.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, List, Optional


class ValidationSeverity(IntEnum):
    """Severity levels for issues."""

    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass
class ValidationIssue:
    """Represents a single issue found in a record.

    Attributes:
        severity: The severity level of the issue
        field: The field name that has the issue (e.g. "onsite.start")
        message: Human-readable description of the issue
        value: The value that caused the issue
        context: Optional context information (e.g. entry index, date)
    """

    severity: ValidationSeverity
    field: str
    message: str
    value: Any
    context: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        context_str = ""
        if self.context:
            context_parts = [f"{k}={v}" for k, v in self.context.items()]
            context_str = f" ({', '.join(context_parts)})"

        return f"[{self.severity.name}] {self.field}: {self.message}{context_str}"


class ValidationReport:
    """Collects issues across one or more records.

    Example:
        >>> report = ValidationReport()
        >>> report.add_warning("onsite.start", "Invalid time format", "8am")
        >>> report.is_valid()
        True
        >>> report.summary()
        '1 warning(s)'
    """

    def __init__(self) -> None:
        self.issues: List[ValidationIssue] = []

    def __len__(self) -> int:
        return len(self.issues)

    def _count(self, severity: ValidationSeverity) -> int:
        return sum(1 for issue in self.issues if issue.severity == severity)

    @property
    def error_count(self) -> int:
        return self._count(ValidationSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return self._count(ValidationSeverity.WARNING)

    @property
    def info_count(self) -> int:
        return self._count(ValidationSeverity.INFO)

    def is_valid(self) -> bool:
        """Check whether the report holds no errors.

        Warnings and info messages do not affect validity.
        """
        return self.error_count == 0

    def has_errors(self) -> bool:
        return self.error_count > 0

    def add(
        self,
        severity: ValidationSeverity,
        field: str,
        message: str,
        value: Any,
        context: Optional[Dict[str, Any]] = None,
    ) -> ValidationIssue:
        """Add an issue to the report.

        Args:
            severity: Severity of the issue
            field: The field name with the issue
            message: Human-readable description
            value: The value that caused the issue
            context: Optional context information

        Returns:
            The issue that was added
        """
        issue = ValidationIssue(
            severity=severity,
            field=field,
            message=message,
            value=value,
            context=context,
        )
        self.issues.append(issue)
        return issue

    def add_error(
        self,
        field: str,
        message: str,
        value: Any,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.add(ValidationSeverity.ERROR, field, message, value, context)

    def add_warning(
        self,
        field: str,
        message: str,
        value: Any,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.add(ValidationSeverity.WARNING, field, message, value, context)

    def add_info(
        self,
        field: str,
        message: str,
        value: Any,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.add(ValidationSeverity.INFO, field, message, value, context)

    def get_issues(self, severity: ValidationSeverity) -> List[ValidationIssue]:
        """Get all issues of exactly the given severity."""
        return [issue for issue in self.issues if issue.severity == severity]

    def get_errors(self) -> List[ValidationIssue]:
        return self.get_issues(ValidationSeverity.ERROR)

    def get_warnings(self) -> List[ValidationIssue]:
        return self.get_issues(ValidationSeverity.WARNING)

    def at_least(self, severity: ValidationSeverity) -> List[ValidationIssue]:
        """Get all issues at or above the given severity, in insertion order."""
        return [issue for issue in self.issues if issue.severity >= severity]

    def merge(self, other: "ValidationReport") -> None:
        """Merge another report into this one.

        Args:
            other: Another ValidationReport to merge
        """
        self.issues.extend(other.issues)

    def summary(self) -> str:
        """Get a summary with counts of errors, warnings and info messages."""
        parts = []
        if self.error_count > 0:
            parts.append(f"{self.error_count} error(s)")
        if self.warning_count > 0:
            parts.append(f"{self.warning_count} warning(s)")
        if self.info_count > 0:
            parts.append(f"{self.info_count} info message(s)")

        if not parts:
            return "No issues found"

        return ", ".join(parts)

    def format(self) -> str:
        """Format the report for display, grouped by severity."""
        if not self.issues:
            return "No issues found"

        lines = [f"Issues - {self.summary()}", "=" * 60]

        for severity in (
            ValidationSeverity.ERROR,
            ValidationSeverity.WARNING,
            ValidationSeverity.INFO,
        ):
            grouped = self.get_issues(severity)
            if grouped:
                lines.append(f"\n{severity.name}S:")
                for issue in grouped:
                    lines.append(f"  - {issue}")

        return "\n".join(lines)
