"""
Cross-entity business rules.

Each check collects every violated rule instead of failing on the first one,
so API clients can show all problems at once.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, FrozenSet, Iterable, List, Union

ALL_PERMISSIONS = "*"

ROLE_PERMISSIONS: Dict[str, FrozenSet[str]] = {
    "admin": frozenset({ALL_PERMISSIONS}),
    "field_officer": frozenset({"timesheet.approve", "placement.create", "review.schedule"}),
    "payroll": frozenset({"timesheet.approve"}),
    "host_employer": frozenset(),
    "apprentice": frozenset(),
}


def permissions_for_role(role: str) -> FrozenSet[str]:
    return ROLE_PERMISSIONS.get(role, frozenset())


def has_permission(permissions: Iterable[str], permission: str) -> bool:
    granted = set(permissions)
    return ALL_PERMISSIONS in granted or permission in granted


@dataclass
class RuleResult:
    """Outcome of a business rule check."""

    valid: bool = True
    errors: List[str] = field(default_factory=list)

    def fail(self, message: str) -> None:
        self.valid = False
        self.errors.append(message)


def _get(obj: Any, name: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


class BusinessRuleValidator:
    """Validates workflow actions that span more than one record."""

    @staticmethod
    def validate_timesheet_approval(timesheet: Any, approver_permissions: Iterable[str]) -> RuleResult:
        result = RuleResult()
        if _get(timesheet, "status") != "pending":
            result.fail("Only pending timesheets can be approved")
        if not (_get(timesheet, "total_hours") or 0) > 0:
            result.fail("Timesheet must have hours recorded")
        if not has_permission(approver_permissions, "timesheet.approve"):
            result.fail("Insufficient permissions to approve timesheets")
        return result

    @staticmethod
    def validate_placement_creation(apprentice: Any, host_employer: Any) -> RuleResult:
        result = RuleResult()
        if _get(apprentice, "status") != "active":
            result.fail("Apprentice must be active to create placement")
        if _get(host_employer, "status") != "active":
            result.fail("Host employer must be active")
        if _get(host_employer, "compliance_status") != "compliant":
            result.fail("Host employer must be compliant")
        return result

    @staticmethod
    def validate_progress_review_scheduling(apprentice: Any, review_date: Union[date, datetime]) -> RuleResult:
        result = RuleResult()
        if _get(apprentice, "status") != "active":
            result.fail("Can only schedule reviews for active apprentices")
        if isinstance(review_date, datetime):
            in_future = review_date > datetime.utcnow()
        else:
            in_future = review_date > datetime.utcnow().date()
        if not in_future:
            result.fail("Review date must be in the future")
        return result
