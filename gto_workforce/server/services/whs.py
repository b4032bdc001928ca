"""
WHS services: incident reporting and metrics, risk assessments and policies.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from gto_workforce.core.database.entities.whs import WhsIncident, WhsPolicy, WhsRiskAssessment, WhsWitness
from gto_workforce.core.database.repositories import (
    WhsIncidentRepository,
    WhsPolicyRepository,
    WhsRiskAssessmentRepository,
)
from gto_workforce.core.errors import NotFoundError, ValidationError
from gto_workforce.core.models.io.common import Pagination
from gto_workforce.core.models.io.whs import (
    CLOSED_STATUSES,
    IncidentCreate,
    IncidentPage,
    IncidentRead,
    IncidentUpdate,
    PolicyCreate,
    PolicyPage,
    PolicyRead,
    PolicyUpdate,
    RiskAssessmentApproval,
    RiskAssessmentCreate,
    RiskAssessmentPage,
    RiskAssessmentRead,
    RiskAssessmentUpdate,
    WhsMetrics,
    WitnessCreate,
)

logger = logging.getLogger(__name__)


class WhsService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = WhsIncidentRepository(session)

    async def report(self, data: IncidentCreate) -> Tuple[WhsIncident, List[WhsWitness]]:
        """Record a new incident with status ``reported`` and its witnesses."""
        incident = WhsIncident(
            **data.model_dump(exclude={"witnesses"}),
            status="reported",
            date_reported=datetime.utcnow(),
        )
        witnesses = [WhsWitness(**w.model_dump()) for w in data.witnesses]
        incident = await self.repo.create_with_witnesses(incident, witnesses)
        logger.info(f"WHS {incident.type} reported: id={incident.id} severity={incident.severity}")
        if incident.notifiable_incident:
            logger.warning(f"Notifiable WHS incident {incident.id} reported")
        return incident, await self.repo.get_witnesses(incident.id)

    async def get(self, incident_id: int) -> WhsIncident:
        incident = await self.repo.get_by_id(incident_id)
        if incident is None:
            raise NotFoundError("Incident", incident_id)
        return incident

    async def get_with_witnesses(self, incident_id: int) -> Tuple[WhsIncident, List[WhsWitness]]:
        incident = await self.get(incident_id)
        return incident, await self.repo.get_witnesses(incident_id)

    async def list(
        self,
        page: int = 1,
        limit: int = 10,
        type: Optional[str] = None,
        severity: Optional[str] = None,
        status: Optional[str] = None,
    ) -> IncidentPage:
        incidents, total = await self.repo.page(
            page, limit, filters={"type": type, "severity": severity, "status": status}
        )
        return IncidentPage(
            incidents=[IncidentRead.model_validate(i) for i in incidents],
            pagination=Pagination.build(total, page, limit),
        )

    async def update(self, incident_id: int, data: IncidentUpdate) -> WhsIncident:
        incident = await self.get(incident_id)
        changes = data.model_dump(exclude_unset=True)
        if changes.get("status") in CLOSED_STATUSES and incident.resolution_date is None:
            changes.setdefault("resolution_date", datetime.utcnow())
        return await self.repo.update_fields(incident, changes)

    async def add_witness(self, incident_id: int, data: WitnessCreate) -> WhsWitness:
        await self.get(incident_id)
        return await self.repo.add_witness(WhsWitness(incident_id=incident_id, **data.model_dump()))

    async def delete(self, incident_id: int) -> None:
        if not await self.repo.delete(incident_id):
            raise NotFoundError("Incident", incident_id)
        logger.info(f"Deleted WHS incident {incident_id}")

    async def metrics(self) -> WhsMetrics:
        by_status = await self.repo.count_by("status")
        total = sum(by_status.values())
        resolved = sum(count for status, count in by_status.items() if status in CLOSED_STATUSES)
        return WhsMetrics(
            total=total,
            byType=await self.repo.count_by("type"),
            bySeverity=await self.repo.count_by("severity"),
            byStatus=by_status,
            open=total - resolved,
            resolved=resolved,
            notifiable=await self.repo.count({"notifiable_incident": True}),
            followupRequired=await self.repo.count({"followup_required": True}),
        )


class RiskAssessmentService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = WhsRiskAssessmentRepository(session)

    async def get(self, assessment_id: int) -> WhsRiskAssessment:
        assessment = await self.repo.get_by_id(assessment_id)
        if assessment is None:
            raise NotFoundError("Risk assessment", assessment_id)
        return assessment

    async def list(
        self,
        page: int = 1,
        limit: int = 10,
        search: Optional[str] = None,
        status: Optional[str] = None,
        host_employer_id: Optional[int] = None,
    ) -> RiskAssessmentPage:
        assessments, total = await self.repo.search(
            page, limit, search=search, filters={"status": status, "host_employer_id": host_employer_id}
        )
        return RiskAssessmentPage(
            assessments=[RiskAssessmentRead.model_validate(a) for a in assessments],
            pagination=Pagination.build(total, page, limit),
        )

    async def create(self, data: RiskAssessmentCreate) -> WhsRiskAssessment:
        assessment = await self.repo.create(WhsRiskAssessment(**data.model_dump()))
        logger.info(f"Risk assessment {assessment.id} recorded for {assessment.location}")
        return assessment

    async def update(self, assessment_id: int, data: RiskAssessmentUpdate) -> WhsRiskAssessment:
        assessment = await self.get(assessment_id)
        return await self.repo.update_fields(assessment, data.model_dump(exclude_unset=True))

    async def approve(self, assessment_id: int, data: RiskAssessmentApproval) -> WhsRiskAssessment:
        """Sign off an assessment, marking it completed.

        Raises:
            ValidationError: If no approver name is given
            NotFoundError: If the assessment does not exist
        """
        if not data.approverName:
            raise ValidationError("Approver name is required")
        assessment = await self.get(assessment_id)
        changes = {
            "status": "completed",
            "approver_name": data.approverName,
            "approval_date": datetime.utcnow(),
            "approval_notes": data.approvalNotes,
        }
        assessment = await self.repo.update_fields(assessment, changes)
        logger.info(f"Risk assessment {assessment_id} approved by {data.approverName}")
        return assessment

    async def delete(self, assessment_id: int) -> None:
        if not await self.repo.delete(assessment_id):
            raise NotFoundError("Risk assessment", assessment_id)


class PolicyService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = WhsPolicyRepository(session)

    async def get(self, policy_id: int) -> WhsPolicy:
        policy = await self.repo.get_by_id(policy_id)
        if policy is None:
            raise NotFoundError("Policy", policy_id)
        return policy

    async def list(self, page: int = 1, limit: int = 10) -> PolicyPage:
        policies = await self.repo.list(limit=limit, offset=(page - 1) * limit)
        return PolicyPage(
            policies=[PolicyRead.model_validate(p) for p in policies],
            pagination=Pagination.build(await self.repo.count(), page, limit),
        )

    async def create(self, data: PolicyCreate) -> WhsPolicy:
        return await self.repo.create(WhsPolicy(**data.model_dump()))

    async def update(self, policy_id: int, data: PolicyUpdate) -> WhsPolicy:
        policy = await self.get(policy_id)
        return await self.repo.update_fields(policy, data.model_dump(exclude_unset=True))

    async def delete(self, policy_id: int) -> None:
        if not await self.repo.delete(policy_id):
            raise NotFoundError("Policy", policy_id)
