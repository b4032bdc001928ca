"""
Unit tests for field-level validation rules.

Tests cover Australian phone and ABN checks, award minimum rates, shift
times, working-hour break requirements and apprentice status transitions.
"""

from datetime import date

import pytest

from gto_workforce.core.validation import (
    validate_abn,
    validate_australian_phone,
    validate_award_rate,
    validate_business_hours,
    validate_status_transition,
    validate_working_hours,
)
from gto_workforce.core.validation.rules import (
    calculate_age,
    format_phone_number,
    get_award_minimum_rate,
    parse_time,
    sanitize_email,
    sanitize_string,
    validate_apprentice_age,
    validate_email,
    validate_pay_rate,
)


class TestStatusTransitions:
    """Test the apprentice status workflow table."""

    @pytest.mark.parametrize(
        "current,new",
        [
            ("applicant", "recruitment"),
            ("recruitment", "pre-commencement"),
            ("pre-commencement", "active"),
            ("active", "suspended"),
            ("active", "completed"),
            ("suspended", "active"),
            ("applicant", "withdrawn"),
        ],
    )
    def test_allowed_transitions(self, current, new):
        """Test every forward step in the workflow is accepted."""
        assert validate_status_transition(current, new) is True

    @pytest.mark.parametrize(
        "current,new",
        [
            ("applicant", "active"),
            ("completed", "active"),
            ("withdrawn", "applicant"),
            ("active", "applicant"),
            ("unknown", "active"),
        ],
    )
    def test_rejected_transitions(self, current, new):
        """Test skipped steps and moves out of terminal states are rejected."""
        assert validate_status_transition(current, new) is False


class TestBusinessHours:
    """Test shift start/end validation."""

    def test_day_shift(self):
        assert validate_business_hours("09:00", "17:00") is True

    def test_overnight_shift_ending_in_the_morning(self):
        """Test an overnight shift is accepted when it ends before noon."""
        assert validate_business_hours("22:00", "06:00") is True

    def test_end_before_start_in_afternoon(self):
        assert validate_business_hours("18:00", "14:00") is False

    def test_same_start_and_end(self):
        assert validate_business_hours("09:00", "09:00") is False

    def test_invalid_time_format_raises(self):
        with pytest.raises(ValueError):
            parse_time("25:00")


class TestWorkingHours:
    """Test daily hour limits and break requirements."""

    def test_short_shift_without_break(self):
        assert validate_working_hours(4, 0) == (True, None)

    def test_eight_hours_with_half_hour_break(self):
        assert validate_working_hours(8, 0.5) == (True, None)

    def test_over_twelve_hours_including_breaks(self):
        valid, message = validate_working_hours(11, 2)
        assert valid is False
        assert "12 hours" in message

    def test_over_eight_hours_requires_one_hour_break(self):
        valid, message = validate_working_hours(9, 0.5)
        assert valid is False
        assert "1 hour" in message

    def test_over_five_hours_requires_half_hour_break(self):
        valid, message = validate_working_hours(6, 0)
        assert valid is False
        assert "30 minute" in message


class TestAwardRate:
    """Test award minimum hourly rates."""

    @pytest.mark.parametrize(
        "code,minimum",
        [("MA000003", 23.23), ("MA000010", 24.00), ("MA000020", 25.41), ("MA999999", 21.38), (None, 21.38)],
    )
    def test_minimum_rate_lookup(self, code, minimum):
        assert get_award_minimum_rate(code) == minimum

    def test_rate_at_minimum_is_valid(self):
        assert validate_award_rate(23.23, "MA000003") is True

    def test_rate_below_minimum_is_invalid(self):
        assert validate_award_rate(23.00, "MA000003") is False

    def test_unknown_award_uses_national_minimum(self):
        assert validate_award_rate(21.38, "MA123456") is True
        assert validate_award_rate(21.00, "MA123456") is False


class TestAustralianIdentifiers:
    """Test phone and ABN validation."""

    @pytest.mark.parametrize("phone", ["0412 345 678", "+61412345678", "(02) 9876 5432", "+61 2 9876-5432"])
    def test_valid_phone_numbers(self, phone):
        assert validate_australian_phone(phone) is True

    @pytest.mark.parametrize("phone", ["12345", "0112345678", "+1 555 123 4567", ""])
    def test_invalid_phone_numbers(self, phone):
        assert validate_australian_phone(phone) is False

    def test_valid_abn(self):
        assert validate_abn("51 824 753 556") is True

    def test_abn_with_bad_checksum(self):
        assert validate_abn("51 824 753 557") is False

    @pytest.mark.parametrize("abn", ["1234567890", "518247535561", "51a24753556"])
    def test_abn_with_wrong_shape(self, abn):
        assert validate_abn(abn) is False

    def test_format_phone_number(self):
        assert format_phone_number("0412 345 678") == "+61412345678"
        assert format_phone_number("+61412345678") == "+61412345678"


class TestMiscellaneousRules:
    """Test email, age, pay rate and sanitizer helpers."""

    def test_email(self):
        assert validate_email("jane@example.com") is True
        assert validate_email("not-an-email") is False

    def test_age_counts_birthday(self):
        assert calculate_age(date(2000, 6, 15), on=date(2020, 6, 14)) == 19
        assert calculate_age(date(2000, 6, 15), on=date(2020, 6, 15)) == 20

    def test_apprentice_age_bounds(self):
        assert validate_apprentice_age(date(2005, 1, 1), on=date(2025, 1, 1)) is True
        assert validate_apprentice_age(date(2015, 1, 1), on=date(2025, 1, 1)) is False

    def test_pay_rate_collects_every_error(self):
        errors = validate_pay_rate(
            classification_id=0,
            hourly_rate=0,
            effective_from=date(2025, 7, 1),
            effective_to=date(2025, 1, 1),
            pay_rate_type="other",
            is_apprentice_rate=True,
        )
        assert len(errors) == 5

    def test_pay_rate_valid(self):
        assert validate_pay_rate(classification_id=1, hourly_rate=25.0, effective_from=date(2025, 7, 1)) == []

    def test_sanitizers(self):
        assert sanitize_string("  <b>hi</b> ") == "bhi/b"
        assert sanitize_email("  Jane@Example.COM ") == "jane@example.com"
