"""
API endpoints for Workplace Health and Safety: incidents, risk assessments
and policies.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from gto_workforce.core.database import get_session
from gto_workforce.core.models.io.whs import (
    IncidentCreate,
    IncidentDetail,
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
    WitnessRead,
)
from gto_workforce.server.services.whs import PolicyService, RiskAssessmentService, WhsService

router = APIRouter(tags=["whs"])


def _detail(incident, witnesses) -> IncidentDetail:
    return IncidentDetail(
        **IncidentRead.model_validate(incident).model_dump(),
        witnesses=[WitnessRead.model_validate(w) for w in witnesses],
    )


@router.post(
    "/incidents",
    response_model=IncidentDetail,
    status_code=status.HTTP_201_CREATED,
    summary="Report Incident",
    description="Report an incident, hazard or near miss. The incident starts as reported.",
)
async def report_incident(incident: IncidentCreate, session: AsyncSession = Depends(get_session)) -> IncidentDetail:
    created, witnesses = await WhsService(session).report(incident)
    return _detail(created, witnesses)


@router.get(
    "/incidents",
    response_model=IncidentPage,
    summary="List Incidents",
    description="Paginated incidents, most recent first, filtered by type, severity and status.",
)
async def list_incidents(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    type: Optional[str] = None,
    severity: Optional[str] = None,
    status_filter: Optional[str] = Query(None, alias="status"),
    session: AsyncSession = Depends(get_session),
) -> IncidentPage:
    return await WhsService(session).list(page, limit, type=type, severity=severity, status=status_filter)


@router.get("/metrics", response_model=WhsMetrics, summary="WHS Metrics")
async def whs_metrics(session: AsyncSession = Depends(get_session)) -> WhsMetrics:
    return await WhsService(session).metrics()


@router.get(
    "/incidents/{incident_id}",
    response_model=IncidentDetail,
    summary="Get Incident",
    responses={404: {"description": "Incident not found"}},
)
async def get_incident(incident_id: int, session: AsyncSession = Depends(get_session)) -> IncidentDetail:
    incident, witnesses = await WhsService(session).get_with_witnesses(incident_id)
    return _detail(incident, witnesses)


@router.patch(
    "/incidents/{incident_id}",
    response_model=IncidentRead,
    summary="Update Incident",
    description="Partially update an incident. Resolving or closing it stamps the resolution date.",
)
async def update_incident(
    incident_id: int,
    incident_update: IncidentUpdate,
    session: AsyncSession = Depends(get_session),
) -> IncidentRead:
    return IncidentRead.model_validate(await WhsService(session).update(incident_id, incident_update))


@router.post(
    "/incidents/{incident_id}/witnesses",
    response_model=WitnessRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add Witness",
)
async def add_witness(
    incident_id: int,
    witness: WitnessCreate,
    session: AsyncSession = Depends(get_session),
) -> WitnessRead:
    return WitnessRead.model_validate(await WhsService(session).add_witness(incident_id, witness))


@router.delete("/incidents/{incident_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Incident")
async def delete_incident(incident_id: int, session: AsyncSession = Depends(get_session)) -> None:
    await WhsService(session).delete(incident_id)


@router.get(
    "/risk-assessments",
    response_model=RiskAssessmentPage,
    summary="List Risk Assessments",
    description="Paginated risk assessments, latest assessment first. "
    "``search`` matches title, location, description and assessor.",
)
async def list_risk_assessments(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = None,
    status_filter: Optional[str] = Query(None, alias="status"),
    host_employer_id: Optional[int] = None,
    session: AsyncSession = Depends(get_session),
) -> RiskAssessmentPage:
    return await RiskAssessmentService(session).list(
        page, limit, search=search, status=status_filter, host_employer_id=host_employer_id
    )


@router.post(
    "/risk-assessments",
    response_model=RiskAssessmentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Risk Assessment",
)
async def create_risk_assessment(
    assessment: RiskAssessmentCreate, session: AsyncSession = Depends(get_session)
) -> RiskAssessmentRead:
    return RiskAssessmentRead.model_validate(await RiskAssessmentService(session).create(assessment))


@router.get("/risk-assessments/{assessment_id}", response_model=RiskAssessmentRead, summary="Get Risk Assessment")
async def get_risk_assessment(assessment_id: int, session: AsyncSession = Depends(get_session)) -> RiskAssessmentRead:
    return RiskAssessmentRead.model_validate(await RiskAssessmentService(session).get(assessment_id))


@router.patch("/risk-assessments/{assessment_id}", response_model=RiskAssessmentRead, summary="Update Risk Assessment")
async def update_risk_assessment(
    assessment_id: int,
    assessment_update: RiskAssessmentUpdate,
    session: AsyncSession = Depends(get_session),
) -> RiskAssessmentRead:
    assessment = await RiskAssessmentService(session).update(assessment_id, assessment_update)
    return RiskAssessmentRead.model_validate(assessment)


@router.post(
    "/risk-assessments/{assessment_id}/approve",
    response_model=RiskAssessmentRead,
    summary="Approve Risk Assessment",
    description="Record the approver and mark the assessment completed.",
    responses={400: {"description": "Approver name missing"}},
)
async def approve_risk_assessment(
    assessment_id: int,
    approval: RiskAssessmentApproval,
    session: AsyncSession = Depends(get_session),
) -> RiskAssessmentRead:
    return RiskAssessmentRead.model_validate(await RiskAssessmentService(session).approve(assessment_id, approval))


@router.delete(
    "/risk-assessments/{assessment_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Risk Assessment"
)
async def delete_risk_assessment(assessment_id: int, session: AsyncSession = Depends(get_session)) -> None:
    await RiskAssessmentService(session).delete(assessment_id)


@router.get("/policies", response_model=PolicyPage, summary="List Policies")
async def list_policies(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    session: AsyncSession = Depends(get_session),
) -> PolicyPage:
    return await PolicyService(session).list(page, limit)


@router.post("/policies", response_model=PolicyRead, status_code=status.HTTP_201_CREATED, summary="Create Policy")
async def create_policy(policy: PolicyCreate, session: AsyncSession = Depends(get_session)) -> PolicyRead:
    return PolicyRead.model_validate(await PolicyService(session).create(policy))


@router.get("/policies/{policy_id}", response_model=PolicyRead, summary="Get Policy")
async def get_policy(policy_id: int, session: AsyncSession = Depends(get_session)) -> PolicyRead:
    return PolicyRead.model_validate(await PolicyService(session).get(policy_id))


@router.patch("/policies/{policy_id}", response_model=PolicyRead, summary="Update Policy")
async def update_policy(
    policy_id: int, policy_update: PolicyUpdate, session: AsyncSession = Depends(get_session)
) -> PolicyRead:
    return PolicyRead.model_validate(await PolicyService(session).update(policy_id, policy_update))


@router.delete("/policies/{policy_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Policy")
async def delete_policy(policy_id: int, session: AsyncSession = Depends(get_session)) -> None:
    await PolicyService(session).delete(policy_id)
