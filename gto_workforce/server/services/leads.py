"""
Website lead webhook handling.

The public website posts ``{"event_type": ..., "lead_data": {...}}`` whenever a
lead is created, updated or deleted. Leads are matched on the website's lead
id (kept in ``lead_metadata``) and then on email.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from gto_workforce.core.database.entities.leads import Lead
from gto_workforce.core.database.entities.tasks import Task
from gto_workforce.core.database.repositories import LeadRepository, TaskRepository
from gto_workforce.core.errors import NotFoundError, ValidationError
from gto_workforce.core.models.io.leads import WebhookLeadData
from gto_workforce.core.validation import rules

logger = logging.getLogger(__name__)

SUPPORTED_EVENTS = ("lead_created", "lead_updated", "lead_deleted")
FOLLOW_UP_HOURS = 24

# Plain columns a webhook may set directly.
LEAD_FIELDS = (
    "first_name",
    "last_name",
    "phone",
    "company",
    "job_title",
    "message",
    "service_interest",
    "source",
    "status",
    "tags",
)


class LeadWebhookService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.leads = LeadRepository(session)
        self.tasks = TaskRepository(session)

    async def handle(self, event_type: str, lead_data: WebhookLeadData) -> Tuple[str, Optional[Lead], bool]:
        """Dispatch a webhook event.

        Returns:
            ``(message, lead, created)`` where ``created`` is True only when a
            new lead row was inserted

        Raises:
            ValidationError: For unsupported events or incomplete lead data
            NotFoundError: When an update or delete matches no lead
        """
        logger.info(f"Lead webhook received: {event_type}")
        if event_type == "lead_created":
            return await self._created(lead_data)
        if event_type == "lead_updated":
            lead = await self._updated(lead_data)
            return "Lead updated", lead, False
        if event_type == "lead_deleted":
            lead = await self._deleted(lead_data)
            return "Lead archived", lead, False
        raise ValidationError(
            f"Unsupported event type: {event_type}", details={"supported_events": list(SUPPORTED_EVENTS)}
        )

    async def _find(self, data: WebhookLeadData) -> Lead:
        lead = None
        if data.id is not None:
            lead = await self.leads.get_by_website_id(str(data.id))
        if lead is None and data.email:
            lead = await self.leads.get_by_email(rules.sanitize_email(data.email))
        if lead is None:
            raise NotFoundError("Lead", data.id if data.id is not None else data.email)
        return lead

    async def _created(self, data: WebhookLeadData) -> Tuple[str, Optional[Lead], bool]:
        if data.id is not None:
            existing = await self.leads.get_by_website_id(str(data.id))
            if existing is not None:
                logger.info(f"Lead with website id {data.id} already exists (id={existing.id})")
                return "Lead already exists", existing, False

        missing = [f for f in ("first_name", "last_name", "email") if not getattr(data, f)]
        if missing:
            raise ValidationError("Lead data is incomplete", [f"{f} is required" for f in missing])

        metadata: Dict[str, Any] = dict(data.metadata or {})
        if data.id is not None:
            metadata["website_lead_id"] = str(data.id)
        lead = Lead(
            first_name=rules.sanitize_string(data.first_name),
            last_name=rules.sanitize_string(data.last_name),
            email=rules.sanitize_email(data.email),
            phone=data.phone,
            company=data.company,
            job_title=data.job_title,
            message=data.message,
            service_interest=data.service_interest or [],
            source=data.source or "website",
            status=data.status or "new",
            tags=data.tags or [],
            lead_metadata=metadata,
        )
        self.session.add(lead)
        await self.session.flush()
        self.session.add(
            Task(
                title=f"Follow up with {lead.first_name} {lead.last_name}",
                description=f"Initial follow-up for new lead from {lead.source}",
                priority="medium",
                status="pending",
                due_date=datetime.utcnow() + timedelta(hours=FOLLOW_UP_HOURS),
                related_to="lead",
                related_id=lead.id,
            )
        )
        await self.session.commit()
        await self.session.refresh(lead)
        logger.info(f"Created lead {lead.id} from {lead.source}")
        return "Lead created", lead, True

    async def _updated(self, data: WebhookLeadData) -> Lead:
        lead = await self._find(data)
        changes = {f: getattr(data, f) for f in LEAD_FIELDS if getattr(data, f) is not None}
        if data.email:
            changes["email"] = rules.sanitize_email(data.email)
        if data.metadata:
            changes["lead_metadata"] = {**(lead.lead_metadata or {}), **data.metadata}
        return await self.leads.update_fields(lead, changes)

    async def _deleted(self, data: WebhookLeadData) -> Lead:
        lead = await self._find(data)
        return await self.leads.update_fields(lead, {"status": "archived"})
