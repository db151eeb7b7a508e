"""
Unit tests for field validators.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from timebill.domain.services.validation import (
    ValidationResult,
    aggregate_validation_errors,
    generate_field_error_messages,
    is_numeric,
    normalize_memo,
    parse_date,
    validate_activity_date,
    validate_allocation_percentage,
    validate_client_input,
    validate_duration,
    validate_memo,
    validate_rate,
    validate_time_entry_form,
)

REFERENCE = date(2024, 3, 20)


class TestIsNumeric:
    @pytest.mark.parametrize("value", [1, 1.5, Decimal("2.25"), 0, -3])
    def test_numbers(self, value):
        assert is_numeric(value)

    @pytest.mark.parametrize("value", [
        True, False, None, "5", float("nan"), float("inf"), Decimal("NaN"), [1],
    ])
    def test_non_numbers(self, value):
        assert not is_numeric(value)


class TestValidateRate:
    def test_positive_rate_is_valid(self):
        assert validate_rate(150).valid

    @pytest.mark.parametrize("value", [0, -1, -0.01])
    def test_non_positive_rejected(self, value):
        result = validate_rate(value)
        assert not result.valid
        assert result.error == "Rate must be a positive number"

    def test_non_numeric_rejected(self):
        assert validate_rate("150").error == "Rate must be a numeric value"


class TestValidateDuration:
    @pytest.mark.parametrize("value", [0.01, 1, 24])
    def test_in_range(self, value):
        assert validate_duration(value).valid

    def test_upper_bound_exclusive_above_24(self):
        assert validate_duration(24.01).error == "Duration cannot exceed 24 hours"

    def test_zero_rejected(self):
        assert validate_duration(0).error == "Duration must be a positive number"

    def test_boolean_rejected(self):
        assert not validate_duration(True).valid


class TestParseDate:
    def test_accepts_date_datetime_and_iso_strings(self):
        assert parse_date(date(2024, 3, 1)) == date(2024, 3, 1)
        assert parse_date(datetime(2024, 3, 1, 23, 59)) == date(2024, 3, 1)
        assert parse_date("2024-03-01") == date(2024, 3, 1)
        assert parse_date("2024-03-01T10:00:00Z") == date(2024, 3, 1)

    @pytest.mark.parametrize("value", ["2024-02-30", "yesterday", "", 20240301, None])
    def test_rejects_invalid(self, value):
        assert parse_date(value) is None


class TestValidateActivityDate:
    def test_today_and_boundary_are_valid(self):
        assert validate_activity_date(REFERENCE, REFERENCE).valid
        assert validate_activity_date(REFERENCE - timedelta(days=30), REFERENCE).valid

    def test_future_rejected(self):
        result = validate_activity_date(REFERENCE + timedelta(days=1), REFERENCE)
        assert result.error == "Date cannot be in the future"

    def test_too_old_rejected(self):
        result = validate_activity_date(REFERENCE - timedelta(days=31), REFERENCE)
        assert result.error == "Date cannot be more than 30 days in the past"

    def test_impossible_date_rejected(self):
        assert validate_activity_date("2024-02-30", REFERENCE).error == "Date must be a valid calendar date"

    def test_wrong_type_rejected(self):
        assert validate_activity_date(12345, REFERENCE).error == "Date must be a valid date value"

    def test_time_of_day_ignored(self):
        assert validate_activity_date(datetime(2024, 3, 20, 23, 59), datetime(2024, 3, 20, 0, 1)).valid


class TestAllocationPercentage:
    @pytest.mark.parametrize("value", [0, 20, 100])
    def test_valid(self, value):
        assert validate_allocation_percentage(value).valid

    @pytest.mark.parametrize("value", [-1, 100.5, "20", None])
    def test_invalid(self, value):
        assert not validate_allocation_percentage(value).valid


class TestFormValidation:
    def test_aggregate_keeps_only_failures(self):
        result = aggregate_validation_errors([
            ("rate", ValidationResult.ok()),
            ("duration", ValidationResult.fail("bad")),
        ])
        assert not result.valid
        assert result.errors == {"duration": ["bad"]}

    def test_time_entry_form_reports_every_field(self):
        result = validate_time_entry_form(
            {"rate": -5, "duration": 30, "activity_date": "2099-01-01"},
            reference_date=REFERENCE,
        )
        assert set(result.errors) == {"rate", "duration", "activity_date"}

    def test_time_entry_form_skips_absent_keys(self):
        assert validate_time_entry_form({"duration": 2}, reference_date=REFERENCE).valid

    def test_client_input(self):
        assert validate_client_input({"name": "Acme", "contact_email": "a@acme.test"}).valid
        result = validate_client_input({"name": " ", "contact_email": "nope"})
        assert result.errors == {
            "name": ["Client name is required"],
            "contact_email": ["Invalid email format"],
        }

    def test_field_error_messages(self):
        messages = generate_field_error_messages({"rate": ["a", "b"], "duration": ["c"]})
        assert messages == ["rate: a", "rate: b", "duration: c"]


class TestMemo:
    @pytest.mark.parametrize("value", [None, "", "Plain text", "two\nlines", "tab\tseparated", "café \U0001f600"])
    def test_accepted(self, value):
        assert validate_memo(value).valid

    @pytest.mark.parametrize("value", ["nul\x00", "bell\x07", "vtab\x0b", "esc\x1b[1m", "\x1f", "odd\ufffe", "\ud800"])
    def test_control_characters_rejected(self, value):
        result = validate_memo(value)
        assert not result.valid
        assert result.error == "Memo contains control characters"

    def test_non_text_rejected(self):
        assert validate_memo(42).error == "Memo must be text"

    @pytest.mark.parametrize("value,expected", [
        ("a\r\nb", "a\nb"),
        ("a\rb", "a\nb"),
        ("  padded  ", "padded"),
        ("\r\n", None),
        ("   ", None),
        (None, None),
    ])
    def test_normalize(self, value, expected):
        assert normalize_memo(value) == expected
