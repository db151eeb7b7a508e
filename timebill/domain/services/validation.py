"""
Field validators for user input.

Every validator returns a ValidationResult instead of raising, so callers
can run several of them and report all failing fields at once.
"""

import math
import re
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

from timebill.domain.models.base import utcnow
from timebill.domain.models.client import EMAIL_PATTERN

MAX_DURATION_HOURS = 24
MAX_ACTIVITY_DATE_AGE_DAYS = 30

# Surrogates and the two non-characters have no XML 1.0 encoding
NON_XML_CHARACTERS_RE = re.compile("[\ud800-\udfff\ufffe\uffff]")


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a single field check."""

    valid: bool
    error: Optional[str] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def fail(cls, error: str) -> "ValidationResult":
        return cls(valid=False, error=error)


@dataclass(frozen=True)
class FormValidationResult:
    """Outcome of a multi-field check. Fields without errors are absent."""

    valid: bool
    errors: Dict[str, List[str]] = field(default_factory=dict)


def is_numeric(value: Any) -> bool:
    """True for finite int, float or Decimal values. Booleans are not numbers here."""
    if isinstance(value, bool):
        return False
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, (int, float)):
        return math.isfinite(value)
    return False


def validate_rate(value: Any) -> ValidationResult:
    """Rate must be a number greater than zero."""
    if not is_numeric(value):
        return ValidationResult.fail("Rate must be a numeric value")
    if value <= 0:
        return ValidationResult.fail("Rate must be a positive number")
    return ValidationResult.ok()


def validate_duration(value: Any) -> ValidationResult:
    """Duration is in hours and must fall in (0, 24]."""
    if not is_numeric(value):
        return ValidationResult.fail("Duration must be a numeric value")
    if value <= 0:
        return ValidationResult.fail("Duration must be a positive number")
    if value > MAX_DURATION_HOURS:
        return ValidationResult.fail(f"Duration cannot exceed {MAX_DURATION_HOURS} hours")
    return ValidationResult.ok()


def parse_date(value: Any) -> Optional[date]:
    """
    Coerce a date, datetime or ISO-8601 string into a calendar date.
    Returns None when the value does not describe a real date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            return None
    return None


def validate_activity_date(
    value: Any,
    reference_date: Optional[Any] = None,
    max_age_days: int = MAX_ACTIVITY_DATE_AGE_DAYS
) -> ValidationResult:
    """
    Activity dates must be real dates, not in the future, and not older
    than ``max_age_days`` before the reference date. Time of day is ignored.
    """
    if not isinstance(value, (date, str)):
        return ValidationResult.fail("Date must be a valid date value")

    activity_date = parse_date(value)
    if activity_date is None:
        return ValidationResult.fail("Date must be a valid calendar date")

    reference = parse_date(reference_date) if reference_date is not None else utcnow().date()
    if reference is None:
        reference = utcnow().date()

    if activity_date > reference:
        return ValidationResult.fail("Date cannot be in the future")
    if activity_date < reference - timedelta(days=max_age_days):
        return ValidationResult.fail(f"Date cannot be more than {max_age_days} days in the past")
    return ValidationResult.ok()


def validate_allocation_percentage(value: Any) -> ValidationResult:
    """Allocation percentage must be a number in [0, 100]."""
    if not is_numeric(value):
        return ValidationResult.fail("Allocation percentage must be a numeric value")
    if value < 0 or value > 100:
        return ValidationResult.fail("Allocation percentage must be between 0 and 100")
    return ValidationResult.ok()


def validate_memo(value: Any) -> ValidationResult:
    """Memo must be text that a worksheet cell can hold unchanged."""
    if value is None:
        return ValidationResult.ok()
    if not isinstance(value, str):
        return ValidationResult.fail("Memo must be text")
    if ILLEGAL_CHARACTERS_RE.search(value) or NON_XML_CHARACTERS_RE.search(value):
        return ValidationResult.fail("Memo contains control characters")
    return ValidationResult.ok()


def normalize_memo(value: Optional[str]) -> Optional[str]:
    """Unix line endings, no surrounding whitespace, and None for blank memos."""
    if value is None:
        return None
    value = value.replace("\r\n", "\n").replace("\r", "\n").strip()
    return value or None


def aggregate_validation_errors(
    results: Iterable[Tuple[str, ValidationResult]]
) -> FormValidationResult:
    """Collect per-field results into a field -> messages mapping."""
    errors: Dict[str, List[str]] = {}
    for field_name, result in results:
        if not result.valid and result.error:
            errors.setdefault(field_name, []).append(result.error)
    return FormValidationResult(valid=not errors, errors=errors)


def validate_time_entry_form(
    data: Mapping[str, Any],
    reference_date: Optional[Any] = None,
    max_age_days: int = MAX_ACTIVITY_DATE_AGE_DAYS
) -> FormValidationResult:
    """
    Validate the rate, duration and activity_date keys present in ``data``.
    Keys that are absent are not checked.
    """
    results = []
    if "rate" in data:
        results.append(("rate", validate_rate(data["rate"])))
    if "duration" in data:
        results.append(("duration", validate_duration(data["duration"])))
    if "activity_date" in data:
        results.append((
            "activity_date",
            validate_activity_date(data["activity_date"], reference_date, max_age_days)
        ))
    return aggregate_validation_errors(results)


def validate_client_input(data: Mapping[str, Any]) -> FormValidationResult:
    """Client name and a well-formed contact email are required."""
    results = []
    name = data.get("name")
    if not name or not str(name).strip():
        results.append(("name", ValidationResult.fail("Client name is required")))

    email = data.get("contact_email")
    if not email or not str(email).strip():
        results.append(("contact_email", ValidationResult.fail("Contact email is required")))
    elif not EMAIL_PATTERN.match(str(email).strip()):
        results.append(("contact_email", ValidationResult.fail("Invalid email format")))
    return aggregate_validation_errors(results)


def generate_field_error_messages(errors: Mapping[str, List[str]]) -> List[str]:
    """Flatten a field error mapping into ``"field: message"`` lines."""
    return [
        f"{field_name}: {message}"
        for field_name, messages in errors.items()
        for message in messages
    ]
