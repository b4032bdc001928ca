"""
Field-level validation rules.

Pure functions used by the I/O schemas and services to check Australian
business identifiers, award minimums, working hours and status transitions.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Dict, List, Optional, Tuple

# =====================================================================
# Enumerations
# =====================================================================

APPRENTICE_STATUSES = (
    "applicant",
    "recruitment",
    "pre-commencement",
    "active",
    "suspended",
    "withdrawn",
    "completed",
)
TIMESHEET_STATUSES = ("pending", "approved", "rejected")
TASK_PRIORITIES = ("low", "medium", "high", "urgent")
TASK_STATUSES = ("pending", "in_progress", "completed")
COMPLIANCE_STATUSES = ("compliant", "non-compliant", "pending")
HOST_EMPLOYER_STATUSES = ("active", "inactive", "suspended")
PLACEMENT_STATUSES = ("active", "completed", "terminated")
PAY_RATE_TYPES = ("award", "EBA", "individual_agreement")

# Allowed apprentice status changes; withdrawn and completed are terminal.
APPRENTICE_STATUS_TRANSITIONS: Dict[str, Tuple[str, ...]] = {
    "applicant": ("recruitment", "withdrawn"),
    "recruitment": ("pre-commencement", "withdrawn"),
    "pre-commencement": ("active", "withdrawn"),
    "active": ("suspended", "completed", "withdrawn"),
    "suspended": ("active", "withdrawn"),
    "withdrawn": (),
    "completed": (),
}

# =====================================================================
# Bounds
# =====================================================================

MIN_HOURLY_RATE = 0.01
MAX_HOURLY_RATE = 1000.0
MIN_APPRENTICE_AGE = 15
MAX_APPRENTICE_AGE = 65
MIN_DETAIL_HOURS = 0.1
MAX_DAILY_HOURS = 12.0
MAX_BREAK_HOURS = 4.0
MIN_DESCRIPTION_LENGTH = 5
MIN_NAME_LENGTH = 2
MIN_ADDRESS_LENGTH = 10

# Hourly minimums for the awards we check locally; anything else falls back
# to the national minimum wage.
AWARD_MINIMUM_RATES: Dict[str, float] = {
    "MA000003": 23.23,  # Fast Food Industry
    "MA000010": 24.00,  # Manufacturing and Associated Industries
    "MA000020": 25.41,  # Building and Construction General
}
NATIONAL_MINIMUM_RATE = 21.38

ABN_WEIGHTS = (10, 1, 3, 5, 7, 9, 11, 13, 15, 17, 19)

TIME_PATTERN = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MOBILE_PATTERN = re.compile(r"^(\+61|0)[4-5]\d{8}$")
LANDLINE_PATTERN = re.compile(r"^(\+61|0)[2-8]\d{8}$")
_PHONE_STRIP = re.compile(r"[\s\-\(\)]")


# =====================================================================
# Status transitions
# =====================================================================


def validate_status_transition(current: str, new: str) -> bool:
    """Return True when an apprentice may move from ``current`` to ``new``."""
    return new in APPRENTICE_STATUS_TRANSITIONS.get(current, ())


# =====================================================================
# Times and hours
# =====================================================================


def parse_time(value: str) -> Tuple[int, int]:
    """Parse an ``HH:MM`` string into ``(hour, minute)``.

    Raises:
        ValueError: If the value is not a valid 24-hour time.
    """
    if not TIME_PATTERN.match(value):
        raise ValueError(f"Invalid time format: {value!r} (expected HH:MM)")
    hour, minute = value.split(":")
    return int(hour), int(minute)


def validate_business_hours(start_time: str, end_time: str) -> bool:
    """Check that a shift ends after it starts.

    Overnight shifts are accepted when the end time is before noon.
    """
    start_h, start_m = parse_time(start_time)
    end_h, end_m = parse_time(end_time)
    start = start_h * 60 + start_m
    end = end_h * 60 + end_m
    if end > start:
        return True
    return end < start and end_h < 12


def validate_working_hours(hours: float, break_hours: float = 0.0) -> Tuple[bool, Optional[str]]:
    """Check daily working hours against break requirements.

    Returns:
        ``(valid, message)`` where message explains the first violated rule.
    """
    if hours + break_hours > MAX_DAILY_HOURS:
        return False, "Total hours including breaks cannot exceed 12 hours"
    if hours > 8 and break_hours < 1:
        return False, "Shifts over 8 hours require at least a 1 hour break"
    if hours > 5 and break_hours < 0.5:
        return False, "Shifts over 5 hours require at least a 30 minute break"
    return True, None


# =====================================================================
# Rates
# =====================================================================


def get_award_minimum_rate(award_code: Optional[str]) -> float:
    return AWARD_MINIMUM_RATES.get(award_code or "", NATIONAL_MINIMUM_RATE)


def validate_award_rate(rate: float, award_code: Optional[str]) -> bool:
    """Return True when ``rate`` meets the minimum for ``award_code``."""
    return rate >= get_award_minimum_rate(award_code)


def validate_hourly_rate(rate: float) -> bool:
    return MIN_HOURLY_RATE <= rate <= MAX_HOURLY_RATE


def validate_percentage(value: float) -> bool:
    return 0 <= value <= 100


def validate_pay_rate(
    *,
    classification_id: int,
    hourly_rate: float,
    effective_from: date,
    effective_to: Optional[date] = None,
    pay_rate_type: str = "award",
    is_apprentice_rate: bool = False,
    apprenticeship_year: Optional[int] = None,
) -> List[str]:
    """Validate a pay rate record. Returns a list of errors, empty when valid."""
    errors: List[str] = []
    if classification_id <= 0:
        errors.append("Classification ID must be a positive integer")
    if not validate_hourly_rate(hourly_rate):
        errors.append(f"Hourly rate must be between {MIN_HOURLY_RATE} and {MAX_HOURLY_RATE}")
    if effective_to is not None and effective_to < effective_from:
        errors.append("Effective to date must be after effective from date")
    if pay_rate_type not in PAY_RATE_TYPES:
        errors.append(f"Pay rate type must be one of: {', '.join(PAY_RATE_TYPES)}")
    if is_apprentice_rate and (apprenticeship_year is None or not 1 <= apprenticeship_year <= 4):
        errors.append("Apprenticeship year (1-4) is required for apprentice rates")
    return errors


# =====================================================================
# Australian identifiers
# =====================================================================


def validate_australian_phone(phone: str) -> bool:
    """Accept Australian mobile and landline numbers in local or +61 form."""
    cleaned = _PHONE_STRIP.sub("", phone)
    return bool(MOBILE_PATTERN.match(cleaned) or LANDLINE_PATTERN.match(cleaned))


def validate_abn(abn: str) -> bool:
    """Validate an Australian Business Number with the ATO checksum."""
    digits = re.sub(r"\s", "", abn)
    if len(digits) != 11 or not digits.isdigit():
        return False
    values = [int(d) for d in digits]
    values[0] -= 1
    total = sum(v * w for v, w in zip(values, ABN_WEIGHTS))
    return total % 89 == 0


def validate_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email.strip()))


def calculate_age(date_of_birth: date, on: Optional[date] = None) -> int:
    on = on or datetime.utcnow().date()
    years = on.year - date_of_birth.year
    if (on.month, on.day) < (date_of_birth.month, date_of_birth.day):
        years -= 1
    return years


def validate_apprentice_age(date_of_birth: date, on: Optional[date] = None) -> bool:
    return MIN_APPRENTICE_AGE <= calculate_age(date_of_birth, on) <= MAX_APPRENTICE_AGE


# =====================================================================
# Sanitizers
# =====================================================================


def sanitize_string(value: str) -> str:
    return value.strip().replace("<", "").replace(">", "")


def sanitize_email(email: str) -> str:
    return email.strip().lower()


def format_phone_number(phone: str) -> str:
    """Normalise an Australian phone number to ``+61`` form."""
    cleaned = re.sub(r"[^\d+]", "", phone)
    if cleaned.startswith("+61"):
        return cleaned
    if cleaned.startswith("0"):
        return "+61" + cleaned[1:]
    return "+61" + cleaned.lstrip("+")
