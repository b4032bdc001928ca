"""
Unit tests for cross-entity business rules.
"""

from datetime import date, datetime, timedelta

from gto_workforce.core.validation import BusinessRuleValidator, has_permission, permissions_for_role


class TestPermissions:
    def test_admin_has_every_permission(self):
        assert has_permission(permissions_for_role("admin"), "timesheet.approve") is True
        assert has_permission(permissions_for_role("admin"), "anything.at.all") is True

    def test_field_officer_can_approve_timesheets(self):
        assert has_permission(permissions_for_role("field_officer"), "timesheet.approve") is True

    def test_apprentice_cannot_approve_timesheets(self):
        assert has_permission(permissions_for_role("apprentice"), "timesheet.approve") is False

    def test_unknown_role_has_no_permissions(self):
        assert permissions_for_role("visitor") == frozenset()


class TestTimesheetApproval:
    """Test the rules for approving a timesheet."""

    def test_pending_timesheet_with_hours_and_permission(self):
        result = BusinessRuleValidator.validate_timesheet_approval(
            {"status": "pending", "total_hours": 38}, ["timesheet.approve"]
        )
        assert result.valid is True
        assert result.errors == []

    def test_collects_all_violations(self):
        """Test that every violated rule is reported, not just the first."""
        result = BusinessRuleValidator.validate_timesheet_approval({"status": "approved", "total_hours": 0}, [])
        assert result.valid is False
        assert result.errors == [
            "Only pending timesheets can be approved",
            "Timesheet must have hours recorded",
            "Insufficient permissions to approve timesheets",
        ]


class TestPlacementCreation:
    """Test the rules for placing an apprentice with a host employer."""

    def test_active_apprentice_with_compliant_host(self):
        result = BusinessRuleValidator.validate_placement_creation(
            {"status": "active"}, {"status": "active", "compliance_status": "compliant"}
        )
        assert result.valid is True

    def test_inactive_apprentice_and_non_compliant_host(self):
        result = BusinessRuleValidator.validate_placement_creation(
            {"status": "applicant"}, {"status": "active", "compliance_status": "pending"}
        )
        assert result.valid is False
        assert "Apprentice must be active to create placement" in result.errors
        assert "Host employer must be compliant" in result.errors

    def test_works_with_objects(self):
        class Obj:
            def __init__(self, **kwargs):
                self.__dict__.update(kwargs)

        result = BusinessRuleValidator.validate_placement_creation(
            Obj(status="active"), Obj(status="inactive", compliance_status="compliant")
        )
        assert result.errors == ["Host employer must be active"]


class TestProgressReviewScheduling:
    def test_future_review_for_active_apprentice(self):
        result = BusinessRuleValidator.validate_progress_review_scheduling(
            {"status": "active"}, datetime.utcnow() + timedelta(days=7)
        )
        assert result.valid is True

    def test_past_review_date(self):
        result = BusinessRuleValidator.validate_progress_review_scheduling(
            {"status": "active"}, date.today() - timedelta(days=1)
        )
        assert result.errors == ["Review date must be in the future"]

    def test_inactive_apprentice(self):
        result = BusinessRuleValidator.validate_progress_review_scheduling(
            {"status": "suspended"}, date.today() + timedelta(days=30)
        )
        assert result.errors == ["Can only schedule reviews for active apprentices"]
