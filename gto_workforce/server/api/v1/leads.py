"""
API endpoints for website leads.

The website calls ``POST /leads/webhook`` with ``{"event_type": ..., "lead_data": {...}}``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from gto_workforce.core.database import get_session
from gto_workforce.core.database.repositories import LeadRepository
from gto_workforce.core.logging_config import get_logger
from gto_workforce.core.models.io.leads import LeadRead, WebhookLeadData, WebhookResponse
from gto_workforce.server.services.leads import LeadWebhookService

logger = get_logger(__name__)

router = APIRouter(tags=["leads"])


@router.post(
    "/webhook",
    response_model=WebhookResponse,
    summary="Website Lead Webhook",
    description="Receive lead_created, lead_updated and lead_deleted events from the website.",
    responses={
        200: {"description": "Lead updated, archived or already known"},
        201: {"description": "Lead created"},
        400: {"description": "Missing event_type or lead_data, or unsupported event"},
        404: {"description": "Lead to update or delete not found"},
    },
)
async def lead_webhook(
    payload: Dict[str, Any] = Body(...),
    session: AsyncSession = Depends(get_session),
):
    event_type = payload.get("event_type")
    raw_lead = payload.get("lead_data")
    if not event_type or not raw_lead:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Missing required fields: event_type, lead_data"
        )
    try:
        lead_data = WebhookLeadData.model_validate(raw_lead)
    except PydanticValidationError as e:
        logger.warning(f"Rejected {event_type} webhook with invalid lead_data")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid lead_data: {e}") from e

    message, lead, created = await LeadWebhookService(session).handle(event_type, lead_data)
    body = WebhookResponse(message=message, lead=LeadRead.model_validate(lead) if lead else None)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        content=body.model_dump(mode="json"),
    )


@router.get("", response_model=List[LeadRead], summary="List Leads")
async def list_leads(
    status_filter: Optional[str] = Query(None, alias="status"),
    source: Optional[str] = None,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_session),
) -> List[LeadRead]:
    leads = await LeadRepository(session).list(
        limit=limit, offset=offset, filters={"status": status_filter, "source": source}
    )
    return [LeadRead.model_validate(lead) for lead in leads]


@router.get("/{lead_id}", response_model=LeadRead, summary="Get Lead")
async def get_lead(lead_id: int, session: AsyncSession = Depends(get_session)) -> LeadRead:
    lead = await LeadRepository(session).get_by_id(lead_id)
    if not lead:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Lead not found")
    return LeadRead.model_validate(lead)
