"""
API endpoints for organisation rate templates.

Templates are versioned: every update bumps ``version`` and appends to the
template history. Deleted templates are hidden but kept.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from gto_workforce.core.database import get_session
from gto_workforce.core.models.io.rate_templates import (
    RateAdjustments,
    RateBreakdown,
    RateTemplateCreate,
    RateTemplateHistoryRead,
    RateTemplateRead,
    RateTemplateUpdate,
    TemplateAnalytics,
    TemplateCompareRequest,
    TemplateComparison,
    TemplateValidation,
)
from gto_workforce.server.services.rate_templates import RateTemplateService

router = APIRouter(tags=["rate-templates"])


@router.get("", response_model=List[RateTemplateRead], summary="List Rate Templates")
async def list_templates(
    org_id: Optional[str] = None,
    status_filter: Optional[str] = Query(None, alias="status"),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_session),
) -> List[RateTemplateRead]:
    templates = await RateTemplateService(session).list(org_id, status_filter, limit, offset)
    return [RateTemplateRead.model_validate(t) for t in templates]


@router.post(
    "",
    response_model=RateTemplateRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Rate Template",
)
async def create_template(
    template: RateTemplateCreate, session: AsyncSession = Depends(get_session)
) -> RateTemplateRead:
    return RateTemplateRead.model_validate(await RateTemplateService(session).create(template))


@router.get(
    "/analytics",
    response_model=TemplateAnalytics,
    summary="Rate Template Analytics",
    description="Template counts, the average active base rate and the ten most recent changes for an organisation.",
)
async def template_analytics(org_id: str, session: AsyncSession = Depends(get_session)) -> TemplateAnalytics:
    return await RateTemplateService(session).analytics(org_id)


@router.post(
    "/compare",
    response_model=TemplateComparison,
    summary="Compare Rate Templates",
    responses={400: {"description": "Both ids refer to the same template"}},
)
async def compare_templates(
    request: TemplateCompareRequest, session: AsyncSession = Depends(get_session)
) -> TemplateComparison:
    return await RateTemplateService(session).compare(request.base_template_id, request.compare_template_id)


@router.get("/{template_id}", response_model=RateTemplateRead, summary="Get Rate Template")
async def get_template(template_id: int, session: AsyncSession = Depends(get_session)) -> RateTemplateRead:
    return RateTemplateRead.model_validate(await RateTemplateService(session).get(template_id))


@router.put("/{template_id}", response_model=RateTemplateRead, summary="Update Rate Template")
async def update_template(
    template_id: int,
    template_update: RateTemplateUpdate,
    session: AsyncSession = Depends(get_session),
) -> RateTemplateRead:
    return RateTemplateRead.model_validate(await RateTemplateService(session).update(template_id, template_update))


@router.delete(
    "/{template_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Rate Template",
    description="Soft-delete a template by setting its status to deleted.",
)
async def delete_template(
    template_id: int,
    performed_by: Optional[str] = None,
    session: AsyncSession = Depends(get_session),
) -> None:
    await RateTemplateService(session).delete(template_id, performed_by)


@router.get(
    "/{template_id}/history",
    response_model=List[RateTemplateHistoryRead],
    summary="Rate Template History",
)
async def template_history(
    template_id: int, session: AsyncSession = Depends(get_session)
) -> List[RateTemplateHistoryRead]:
    history = await RateTemplateService(session).history(template_id)
    return [RateTemplateHistoryRead.model_validate(h) for h in history]


@router.post(
    "/{template_id}/calculate",
    response_model=RateBreakdown,
    summary="Calculate Template Rate",
    description="Apply the template's on-costs and margin, with optional location and skill adjustments.",
)
async def calculate_template_rate(
    template_id: int,
    adjustments: Optional[RateAdjustments] = Body(default=None),
    session: AsyncSession = Depends(get_session),
) -> RateBreakdown:
    return await RateTemplateService(session).calculate(template_id, adjustments)


@router.get("/{template_id}/validate", response_model=TemplateValidation, summary="Validate Rate Template")
async def validate_template(template_id: int, session: AsyncSession = Depends(get_session)) -> TemplateValidation:
    return await RateTemplateService(session).validate(template_id)
