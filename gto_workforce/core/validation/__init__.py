"""
Validation rules for GTO Workforce.

- rules: field validators (phone, ABN, award minimums, hours, transitions)
- business_rules: cross-entity checks for approvals, placements and reviews
"""

from .business_rules import BusinessRuleValidator, RuleResult, has_permission, permissions_for_role
from .rules import (
    validate_abn,
    validate_australian_phone,
    validate_award_rate,
    validate_business_hours,
    validate_status_transition,
    validate_working_hours,
)

__all__ = [
    "BusinessRuleValidator",
    "RuleResult",
    "has_permission",
    "permissions_for_role",
    "validate_abn",
    "validate_australian_phone",
    "validate_award_rate",
    "validate_business_hours",
    "validate_status_transition",
    "validate_working_hours",
]
