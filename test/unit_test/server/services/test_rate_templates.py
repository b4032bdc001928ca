"""
Unit tests for rate templates.

Tests cover the rate breakdown, template validation, versioned updates with
change history, soft deletion, comparison and analytics.
"""

from datetime import date

import pytest

from gto_workforce.core.errors import NotFoundError, ValidationError
from gto_workforce.core.models.io.rate_templates import RateAdjustments, RateTemplateCreate, RateTemplateUpdate
from gto_workforce.server.services.rate_templates import RateTemplateService, calculate_rate, validate_template


def _template(**overrides) -> RateTemplateCreate:
    data = {
        "org_id": "org-1",
        "name": "Carpentry standard",
        "base_rate": 30.0,
        "base_margin": 0.2,
        "super_rate": 0.115,
        "workers_comp_rate": 0.05,
        "funding_offset": 2.0,
        "effective_from": date(2026, 1, 1),
    }
    data.update(overrides)
    return RateTemplateCreate(**data)


class TestCalculateRate:
    def test_breakdown(self):
        breakdown = calculate_rate(_template())
        assert breakdown.base_rate == 30.0
        assert breakdown.super_amount == 3.45
        assert breakdown.workers_comp_amount == 1.5
        assert breakdown.funding_offset == 2.0
        assert breakdown.total_rate == 32.95
        assert breakdown.final_rate == 39.54
        assert breakdown.margin_amount == 6.59

    def test_adjustments_added_before_on_costs(self):
        breakdown = calculate_rate(_template(), RateAdjustments(location=1.0, skill=1.0))
        assert breakdown.base_rate == 32.0
        assert breakdown.super_amount == 3.68
        assert breakdown.final_rate == 42.34


class TestValidateTemplate:
    def test_valid_template(self):
        result = validate_template(_template())
        assert result.is_valid is True
        assert result.warnings == []

    def test_fraction_out_of_range(self):
        result = validate_template(_template(base_margin=1.5))
        assert result.is_valid is False
        assert "base_margin must be between 0 and 1" in result.errors

    def test_below_award_minimum(self):
        result = validate_template(_template(base_rate=20.0, award_code="MA000020"))
        assert result.is_valid is False
        assert any("MA000020 minimum of 25.41" in e for e in result.errors)

    def test_effective_dates_out_of_order(self):
        result = validate_template(_template(effective_to=date(2025, 1, 1)))
        assert "Effective to date must be after effective from date" in result.errors

    def test_warnings_do_not_invalidate(self):
        result = validate_template(_template(base_margin=0.02, super_rate=0.1))
        assert result.is_valid is True
        assert result.warnings == ["Margin is below 5%", "Superannuation rate is below the 11.5% guarantee"]


@pytest.mark.asyncio
class TestRateTemplateService:
    async def test_create_records_history(self, session):
        service = RateTemplateService(session)
        template = await service.create(_template(created_by="alice"))

        assert template.version == 1
        assert template.status == "draft"
        history = await service.history(template.id)
        assert [h.action for h in history] == ["created"]
        assert history[0].performed_by == "alice"

    async def test_update_bumps_version_and_records_changes(self, session):
        service = RateTemplateService(session)
        template = await service.create(_template())

        updated = await service.update(template.id, RateTemplateUpdate(base_rate=32.0, updated_by="bob"))

        assert updated.version == 2
        assert updated.updated_by == "bob"
        history = await service.history(template.id)
        update_entry = next(h for h in history if h.action == "updated")
        assert update_entry.changes == {"base_rate": {"from": 30.0, "to": 32.0}}

    async def test_update_without_changes_keeps_version(self, session):
        service = RateTemplateService(session)
        template = await service.create(_template())
        unchanged = await service.update(template.id, RateTemplateUpdate(base_rate=30.0))
        assert unchanged.version == 1

    async def test_status_change_recorded_separately(self, session):
        service = RateTemplateService(session)
        template = await service.create(_template())
        await service.update(template.id, RateTemplateUpdate(status="active"))
        actions = [h.action for h in await service.history(template.id)]
        assert "status_changed" in actions
        assert "updated" not in actions

    async def test_delete_is_soft(self, session):
        service = RateTemplateService(session)
        template = await service.create(_template())
        await service.delete(template.id, performed_by="carol")

        with pytest.raises(NotFoundError):
            await service.get(template.id)
        stored = await service.repo.get_by_id(template.id)
        assert stored.status == "deleted"

    async def test_compare(self, session):
        service = RateTemplateService(session)
        base = await service.create(_template())
        other = await service.create(_template(name="Premium", base_rate=35.0))

        comparison = await service.compare(base.id, other.id)

        assert [d.field for d in comparison.differences] == ["base_rate"]
        assert comparison.differences[0].difference == 5.0
        assert comparison.final_rate_difference == round(
            comparison.compare_final_rate - comparison.base_final_rate, 2
        )

    async def test_compare_with_itself_rejected(self, session):
        service = RateTemplateService(session)
        template = await service.create(_template())
        with pytest.raises(ValidationError):
            await service.compare(template.id, template.id)

    async def test_analytics(self, session):
        service = RateTemplateService(session)
        await service.create(_template(status="active", base_rate=30.0))
        await service.create(_template(status="active", base_rate=40.0))
        await service.create(_template(status="draft", base_rate=50.0))
        await service.create(_template(org_id="org-2", status="active"))

        analytics = await service.analytics("org-1")

        assert analytics.totalTemplates == 3
        assert analytics.activeTemplates == 2
        assert analytics.averageRate == 35.0
        assert len(analytics.recentChanges) == 3
