"""Validation and diagnostics for daily records."""

from service_charges.validators.validation_report import (
    ValidationIssue,
    ValidationReport,
    ValidationSeverity,
)

__all__ = [
    "ValidationIssue",
    "ValidationReport",
    "ValidationSeverity",
]
