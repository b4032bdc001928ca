"""
Rate template service.

Rate templates are reusable on-cost and margin settings. Every change bumps
the version and is written to ``rate_template_history``; deletion is soft.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from gto_workforce.core.database.entities.rate_templates import RateTemplate, RateTemplateHistory
from gto_workforce.core.database.repositories import RateTemplateRepository
from gto_workforce.core.errors import NotFoundError, ValidationError
from gto_workforce.core.models.io.rate_templates import (
    RATE_FIELDS,
    FieldDifference,
    RateAdjustments,
    RateBreakdown,
    RateTemplateCreate,
    RateTemplateHistoryRead,
    RateTemplateUpdate,
    TemplateAnalytics,
    TemplateComparison,
    TemplateValidation,
)
from gto_workforce.core.validation import rules

logger = logging.getLogger(__name__)

# Fractional rates that must sit between 0 and 1.
FRACTION_FIELDS = (
    "base_margin",
    "super_rate",
    "leave_loading",
    "workers_comp_rate",
    "payroll_tax_rate",
    "training_cost_rate",
    "other_costs_rate",
    "casual_loading",
)
MIN_MARGIN_WARNING = 0.05
MIN_SUPER_RATE = 0.115


def calculate_rate(template: Any, adjustments: Optional[RateAdjustments] = None) -> RateBreakdown:
    """Apply a template's on-costs and margin to its base rate.

    ``funding_offset`` is a fixed amount per hour and is subtracted after the
    on-costs; ``total_rate`` is the rate before margin.
    """
    adjustments = adjustments or RateAdjustments()
    base = template.base_rate + adjustments.location + adjustments.skill

    amounts = {
        "super_amount": base * template.super_rate,
        "leave_loading_amount": base * template.leave_loading,
        "workers_comp_amount": base * template.workers_comp_rate,
        "payroll_tax_amount": base * template.payroll_tax_rate,
        "training_cost_amount": base * template.training_cost_rate,
        "other_costs_amount": base * template.other_costs_rate,
        "casual_loading_amount": base * template.casual_loading,
    }
    total_rate = base + sum(amounts.values()) - template.funding_offset
    final_rate = total_rate * (1 + template.base_margin)

    return RateBreakdown(
        base_rate=round(base, 2),
        **{k: round(v, 2) for k, v in amounts.items()},
        funding_offset=round(template.funding_offset, 2),
        total_rate=round(total_rate, 2),
        margin_amount=round(final_rate - total_rate, 2),
        final_rate=round(final_rate, 2),
    )


def validate_template(template: Any) -> TemplateValidation:
    errors: List[str] = []
    warnings: List[str] = []

    if template.base_rate is None or template.base_rate <= 0:
        errors.append("Base rate must be greater than zero")
    elif not rules.validate_hourly_rate(template.base_rate):
        errors.append(f"Base rate must be between {rules.MIN_HOURLY_RATE} and {rules.MAX_HOURLY_RATE}")

    for field in FRACTION_FIELDS:
        value = getattr(template, field, 0) or 0
        if not 0 <= value <= 1:
            errors.append(f"{field} must be between 0 and 1")

    effective_to = getattr(template, "effective_to", None)
    if effective_to is not None and effective_to < template.effective_from:
        errors.append("Effective to date must be after effective from date")

    award_code = getattr(template, "award_code", None)
    if award_code and template.base_rate and not rules.validate_award_rate(template.base_rate, award_code):
        minimum = rules.get_award_minimum_rate(award_code)
        errors.append(f"Base rate {template.base_rate:.2f} is below the {award_code} minimum of {minimum:.2f}")

    if (template.base_margin or 0) < MIN_MARGIN_WARNING:
        warnings.append("Margin is below 5%")
    if (template.super_rate or 0) < MIN_SUPER_RATE:
        warnings.append("Superannuation rate is below the 11.5% guarantee")

    return TemplateValidation(is_valid=not errors, errors=errors, warnings=warnings)


class RateTemplateService:
    """CRUD, calculation, validation and analytics for rate templates."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = RateTemplateRepository(session)

    async def get(self, template_id: int) -> RateTemplate:
        template = await self.repo.get_by_id(template_id)
        if template is None or template.status == "deleted":
            raise NotFoundError("Rate template", template_id)
        return template

    async def list(
        self, org_id: Optional[str] = None, status: Optional[str] = None, limit: int = 100, offset: int = 0
    ) -> List[RateTemplate]:
        return await self.repo.list(limit=limit, offset=offset, filters={"org_id": org_id, "status": status})

    async def create(self, data: RateTemplateCreate) -> RateTemplate:
        template = RateTemplate(**data.model_dump())
        self.session.add(template)
        await self.session.flush()
        await self.repo.add_history(
            template, "created", {"name": template.name, "base_rate": template.base_rate}, data.created_by
        )
        await self.session.commit()
        await self.session.refresh(template)
        logger.info(f"Created rate template {template.id} ({template.name}) for org {template.org_id}")
        return template

    async def update(self, template_id: int, data: RateTemplateUpdate) -> RateTemplate:
        template = await self.get(template_id)
        updates = data.model_dump(exclude_unset=True)
        performed_by = updates.pop("updated_by", None)
        self.repo.reject_null_fields(updates)
        if updates.get("status") == "deleted":
            raise ValidationError("Rate templates are deleted with DELETE, not by setting the status")

        changes: Dict[str, Dict[str, Any]] = {}
        for key, value in updates.items():
            current = getattr(template, key)
            if current != value:
                changes[key] = {"from": _jsonable(current), "to": _jsonable(value)}
                setattr(template, key, value)
        if not changes:
            return template

        status_change = changes.pop("status", None)
        template.version += 1
        template.updated_by = performed_by
        self.session.add(template)
        if changes:
            await self.repo.add_history(template, "updated", changes, performed_by)
        if status_change:
            await self.repo.add_history(template, "status_changed", {"status": status_change}, performed_by)
        await self.session.commit()
        await self.session.refresh(template)
        logger.info(f"Updated rate template {template_id} to version {template.version}")
        return template

    async def delete(self, template_id: int, performed_by: Optional[str] = None) -> None:
        template = await self.get(template_id)
        previous = template.status
        template.status = "deleted"
        template.updated_by = performed_by
        self.session.add(template)
        await self.repo.add_history(
            template, "status_changed", {"status": {"from": previous, "to": "deleted"}}, performed_by
        )
        await self.session.commit()
        logger.info(f"Soft-deleted rate template {template_id}")

    async def history(self, template_id: int) -> List[RateTemplateHistory]:
        await self.get(template_id)
        return await self.repo.get_history(template_id)

    async def calculate(self, template_id: int, adjustments: Optional[RateAdjustments] = None) -> RateBreakdown:
        return calculate_rate(await self.get(template_id), adjustments)

    async def validate(self, template_id: int) -> TemplateValidation:
        return validate_template(await self.get(template_id))

    async def compare(self, base_id: int, compare_id: int) -> TemplateComparison:
        if base_id == compare_id:
            raise ValidationError("Cannot compare a template with itself")
        base = await self.get(base_id)
        other = await self.get(compare_id)

        differences = [
            FieldDifference(
                field=field,
                base_value=getattr(base, field),
                compare_value=getattr(other, field),
                difference=round(getattr(other, field) - getattr(base, field), 4),
            )
            for field in RATE_FIELDS
            if getattr(base, field) != getattr(other, field)
        ]
        base_final = calculate_rate(base).final_rate
        compare_final = calculate_rate(other).final_rate
        return TemplateComparison(
            base_template_id=base_id,
            compare_template_id=compare_id,
            differences=differences,
            base_final_rate=base_final,
            compare_final_rate=compare_final,
            final_rate_difference=round(compare_final - base_final, 2),
        )

    async def analytics(self, org_id: str) -> TemplateAnalytics:
        templates = await self.repo.list(filters={"org_id": org_id})
        active = [t for t in templates if t.status == "active"]
        average = round(sum(t.base_rate for t in active) / len(active), 2) if active else 0.0
        recent = await self.repo.recent_history(org_id, limit=10)
        return TemplateAnalytics(
            totalTemplates=len(templates),
            activeTemplates=len(active),
            averageRate=average,
            recentChanges=[RateTemplateHistoryRead.model_validate(h) for h in recent],
        )


def _jsonable(value: Any) -> Any:
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return value
