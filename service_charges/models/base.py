"""Base model for all data models in the service charges engine.

This module provides a base Pydantic model with common configuration
and helpers for coercing loosely typed numeric form values.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, ClassVar, List, NamedTuple, Optional, Tuple

from pydantic import BaseModel, ConfigDict, PrivateAttr, model_validator
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

# Form amounts must stay below 1e10; larger values overflow Decimal arithmetic
MAX_ADJUSTED_EXPONENT = 9


class InputIssue(NamedTuple):
    """A numeric form value that was replaced by zero while parsing."""

    field: str
    message: str
    value: Any


def parse_decimal(value: Any) -> Tuple[Decimal, Optional[str]]:
    """Parse a loosely typed numeric form value.

    Args:
        value: Raw value from the entry form

    Returns:
        Tuple of the parsed Decimal (zero for unusable input) and a
        description of the problem, or None if the value was usable

    Example:
        >>> parse_decimal("1.5")
        (Decimal('1.5'), None)
        >>> parse_decimal("1e12")
        (Decimal('0'), 'Number out of range, counted as 0')
    """
    if value is None or value == "":
        return Decimal("0"), None
    if isinstance(value, bool):
        return Decimal(int(value)), None
    if isinstance(value, Decimal):
        parsed = value
    else:
        try:
            parsed = Decimal(str(value).strip())
        except InvalidOperation:
            return Decimal("0"), "Invalid number, counted as 0"
    if not parsed.is_finite():
        return Decimal("0"), "Number is not finite, counted as 0"
    if parsed and parsed.adjusted() > MAX_ADJUSTED_EXPONENT:
        return Decimal("0"), "Number out of range, counted as 0"
    return parsed, None


def coerce_decimal(value: Any, field_name: str) -> Decimal:
    """Coerce a loosely typed numeric form value to Decimal.

    Form inputs arrive as numbers, numeric strings, empty strings or None.
    Anything that is not a finite number below 1e10 becomes
    ``Decimal("0")`` and is logged, so one bad field never rejects a
    whole record.

    Args:
        value: Raw value from the entry form
        field_name: Name of the field, used in the log message

    Returns:
        Parsed Decimal, or Decimal("0") for missing/invalid input

    Example:
        >>> coerce_decimal("1.5", "lunch_duration")
        Decimal('1.5')
        >>> coerce_decimal("", "mileage")
        Decimal('0')
    """
    parsed, problem = parse_decimal(value)
    if problem:
        logger.warning(f"{field_name}: {problem} ({value!r})")
    return parsed


class BaseDataModel(BaseModel):
    """Base class for all data models.

    Provides common configuration for:
    - Validation with lenient type coercion
    - camelCase input keys as produced by the entry forms
    - Ignoring unknown keys (form state carries ids, timestamps, etc.)

    Models that list fields in ``decimal_input_fields`` keep a record of
    the raw values those fields could not use, exposed as
    ``input_issues``.

    Example:
        >>> class Visit(BaseDataModel):
        ...     service_work: str
        >>> visit = Visit(serviceWork="Replaced pump seal")
        >>> visit.service_work
        'Replaced pump seal'
        >>> visit.model_dump(by_alias=True)
        {'serviceWork': 'Replaced pump seal'}
    """

    model_config = ConfigDict(
        # Allow arbitrary types like Decimal, date, time
        arbitrary_types_allowed=True,
        # Validate on assignment to catch errors early
        validate_assignment=True,
        strict=False,
        # Accept both serviceWork and service_work
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=False,
    )

    decimal_input_fields: ClassVar[Tuple[str, ...]] = ()

    _input_issues: List[InputIssue] = PrivateAttr(default_factory=list)

    @model_validator(mode="wrap")
    @classmethod
    def collect_input_issues(cls, data: Any, handler: Callable[[Any], Any]) -> Any:
        """Remember numeric inputs that the field validators replace by zero."""
        issues = []
        if cls.decimal_input_fields and isinstance(data, dict):
            for name in cls.decimal_input_fields:
                key = next((k for k in (to_camel(name), name) if k in data), None)
                if key is None:
                    continue
                _, problem = parse_decimal(data[key])
                if problem:
                    issues.append(InputIssue(name, problem, data[key]))

        model = handler(data)
        # On assignment the handler returns field data, not a model
        if issues and isinstance(model, cls):
            model._input_issues = issues
        return model

    @property
    def input_issues(self) -> List[InputIssue]:
        """Numeric inputs that were unusable and counted as zero."""
        return list(self._input_issues)
