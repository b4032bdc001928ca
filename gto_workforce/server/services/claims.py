"""
Government funding claim service.

Claims follow a fixed workflow::

    draft -> pending -> submitted -> in-review -> approved -> paid -> reconciled
                                             \\-> rejected -> pending

Any non-final status can also be cancelled. Each status change stamps the
relevant dates and appends a row to ``claim_history``. Submitting or approving
a claim also opens a follow-up task for staff (see ``CLAIM_REMINDERS``).
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from gto_workforce.core.database.entities.claims import ApprenticeEligibility, Claim, EligibilityCriteria
from gto_workforce.core.database.entities.tasks import Task
from gto_workforce.core.database.repositories import (
    ApprenticeEligibilityRepository,
    ApprenticeRepository,
    ClaimRepository,
    EligibilityCriteriaRepository,
)
from gto_workforce.core.errors import InvalidTransitionError, NotFoundError, ValidationError
from gto_workforce.core.models.io.claims import (
    ApprenticeEligibilityRead,
    ClaimChartData,
    ClaimCreate,
    ClaimDashboard,
    ClaimMetrics,
    ClaimPage,
    ClaimRead,
    ClaimStatusUpdate,
    ClaimUpdate,
    EligibilityCheckRequest,
    EligibilityCheckResult,
    EligibilityCriteriaCreate,
    EligibilityRequirements,
    StatusCount,
    TypeCount,
)
from gto_workforce.core.models.io.common import Pagination

logger = logging.getLogger(__name__)

CLAIM_STATUS_TRANSITIONS: Dict[str, Tuple[str, ...]] = {
    "draft": ("pending", "submitted", "cancelled"),
    "pending": ("submitted", "draft", "cancelled"),
    "submitted": ("in-review", "cancelled"),
    "in-review": ("approved", "rejected", "pending"),
    "approved": ("paid", "cancelled"),
    "rejected": ("pending", "cancelled"),
    "paid": ("reconciled",),
    "reconciled": (),
    "cancelled": (),
}
OPEN_STATUSES = ("draft", "pending", "submitted", "in-review")
TIMEFRAME_DAYS = {"7days": 7, "30days": 30, "90days": 90}

# status -> (task title, description template, days until due, priority)
CLAIM_REMINDERS: Dict[str, Tuple[str, str, int, str]] = {
    "submitted": ("Claim Review Required", "Claim {number} requires review", 7, "medium"),
    "approved": ("Payment Processing Required", "Approved claim {number} requires payment processing", 3, "high"),
}


def can_transition(current: str, new: str) -> bool:
    return new in CLAIM_STATUS_TRANSITIONS.get(current, ())


def format_claim_number(claim_type: str, year: int, sequence: int) -> str:
    return f"{claim_type[:3].upper()}-{year}-{sequence:04d}"


def percentage(part: int, whole: int) -> int:
    """Whole-number percentage, rounding halves up."""
    return math.floor(part / whole * 100 + 0.5) if whole else 0


class ClaimService:
    """Claim lifecycle, numbering and dashboard metrics."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = ClaimRepository(session)
        self.apprentices = ApprenticeRepository(session)

    async def get(self, claim_id: int) -> Claim:
        claim = await self.repo.get_by_id(claim_id)
        if claim is None:
            raise NotFoundError("Claim", claim_id)
        return claim

    async def list(
        self,
        page: int = 1,
        limit: int = 10,
        status: Optional[str] = None,
        claim_type: Optional[str] = None,
        apprentice_id: Optional[int] = None,
    ) -> ClaimPage:
        filters = {"status": status, "claim_type": claim_type, "apprentice_id": apprentice_id}
        claims = await self.repo.list(limit=limit, offset=(page - 1) * limit, filters=filters)
        total = await self.repo.count(filters)
        return ClaimPage(
            claims=[ClaimRead.model_validate(c) for c in claims],
            pagination=Pagination.build(total, page, limit),
        )

    async def next_claim_number(self, claim_type: str) -> str:
        year = datetime.utcnow().year
        prefix = f"{claim_type[:3].upper()}-{year}-"
        latest = await self.repo.latest_number_with_prefix(prefix)
        sequence = 1
        if latest:
            try:
                sequence = int(latest.rsplit("-", 1)[1]) + 1
            except ValueError:
                logger.warning(f"Unexpected claim number format: {latest}")
        return format_claim_number(claim_type, year, sequence)

    async def create(self, data: ClaimCreate) -> Claim:
        apprentice_name = data.apprentice_name
        if data.apprentice_id is not None:
            apprentice = await self.apprentices.get_by_id(data.apprentice_id)
            if apprentice is None:
                raise NotFoundError("Apprentice", data.apprentice_id)
            apprentice_name = apprentice_name or apprentice.full_name

        claim = Claim(
            claim_number=await self.next_claim_number(data.claim_type),
            apprentice_id=data.apprentice_id,
            apprentice_name=apprentice_name,
            claim_type=data.claim_type,
            status=data.status,
            amount_requested=data.amount_requested,
            funding_body=data.funding_body,
            jurisdiction=data.jurisdiction,
            notes=data.notes,
        )
        self.session.add(claim)
        await self.session.flush()
        self.repo.add_history(claim, "created", {"status": claim.status}, data.created_by)
        await self.session.commit()
        await self.session.refresh(claim)
        logger.info(f"Created claim {claim.claim_number} ({claim.claim_type})")
        return claim

    async def update(self, claim_id: int, data: ClaimUpdate) -> Claim:
        claim = await self.get(claim_id)
        updates = data.model_dump(exclude_unset=True)
        performed_by = updates.pop("updated_by", None)
        self.repo.reject_null_fields(updates)
        changes = {}
        for key, value in updates.items():
            if getattr(claim, key) != value:
                changes[key] = {"from": getattr(claim, key), "to": value}
                setattr(claim, key, value)
        if changes:
            claim.updated_at = datetime.utcnow()
            self.session.add(claim)
            self.repo.add_history(claim, "updated", changes, performed_by)
            await self.session.commit()
            await self.session.refresh(claim)
        return claim

    async def update_status(self, claim_id: int, data: ClaimStatusUpdate) -> Claim:
        """Move a claim to a new status, applying the status side effects.

        Raises:
            NotFoundError: If the claim does not exist
            InvalidTransitionError: If the workflow does not allow the move
        """
        claim = await self.get(claim_id)
        current, new = claim.status, data.status
        if not can_transition(current, new):
            raise InvalidTransitionError(current, new)

        now = datetime.utcnow()
        claim.status = new
        if new == "submitted":
            claim.submission_date = now
        if new in ("approved", "rejected"):
            claim.reviewer = data.reviewer or data.performed_by
            claim.review_date = now
        if data.notes:
            if new == "rejected":
                claim.rejection_reason = data.notes
            else:
                claim.notes = data.notes
        if new == "approved" and data.amount_approved is not None:
            claim.amount_approved = data.amount_approved
        if new == "paid":
            claim.payment_date = now
            if data.payment_reference:
                claim.payment_reference = data.payment_reference
        claim.updated_at = now

        self.session.add(claim)
        self.repo.add_history(claim, "status_changed", {"status": {"from": current, "to": new}}, data.performed_by)
        if new in CLAIM_REMINDERS:
            self.session.add(self._reminder(claim, new, now))
        await self.session.commit()
        await self.session.refresh(claim)
        logger.info(f"Claim {claim.claim_number} moved from {current} to {new}")
        return claim

    @staticmethod
    def _reminder(claim: Claim, status: str, now: datetime) -> Task:
        title, description, days, priority = CLAIM_REMINDERS[status]
        return Task(
            title=title,
            description=description.format(number=claim.claim_number),
            due_date=now + timedelta(days=days),
            priority=priority,
            related_to="claim",
            related_id=claim.id,
        )

    async def delete(self, claim_id: int) -> None:
        claim = await self.get(claim_id)
        if claim.status not in ("draft", "cancelled"):
            raise ValidationError(
                "Only draft or cancelled claims can be deleted", details={"current_status": claim.status}
            )
        for entry in await self.repo.get_history(claim_id):
            await self.session.delete(entry)
        await self.session.delete(claim)
        await self.session.commit()

    async def dashboard(self, timeframe: Optional[str] = "30days") -> ClaimDashboard:
        timeframe = timeframe if timeframe in TIMEFRAME_DAYS else "30days"
        since = datetime.utcnow() - timedelta(days=TIMEFRAME_DAYS[timeframe])
        claims = await self.repo.list_since(since)

        total = len(claims)
        approved = sum(1 for c in claims if c.status == "approved")
        paid = sum(1 for c in claims if c.status == "paid")
        metrics = ClaimMetrics(
            totalClaims=total,
            pendingClaims=sum(1 for c in claims if c.status in OPEN_STATUSES),
            approvedClaims=approved,
            paidClaims=paid,
            totalRequested=sum(c.amount_requested or 0 for c in claims),
            # a zero approval counts as missing
            totalApproved=sum(
                c.amount_approved or c.amount_requested or 0 for c in claims if c.status in ("approved", "paid")
            ),
            approvalRate=percentage(approved, total),
        )
        statuses = Counter(c.status for c in claims)
        types = Counter(c.claim_type for c in claims)
        return ClaimDashboard(
            timeframe=timeframe,
            metrics=metrics,
            chartData=ClaimChartData(
                statusDistribution=[StatusCount(status=s, count=n) for s, n in statuses.items()],
                typeDistribution=[TypeCount(type=t, count=n) for t, n in types.items()],
            ),
            recentActivity=[ClaimRead.model_validate(c) for c in claims[:10]],
        )


class EligibilityService:
    """Funding eligibility criteria and per-apprentice eligibility checks."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.criteria = EligibilityCriteriaRepository(session)
        self.records = ApprenticeEligibilityRepository(session)
        self.apprentices = ApprenticeRepository(session)

    async def list_criteria(
        self, claim_type: Optional[str] = None, jurisdiction: Optional[str] = None, active: bool = True
    ) -> List[EligibilityCriteria]:
        return await self.criteria.list(
            filters={"claim_type": claim_type, "jurisdiction": jurisdiction, "active": active}
        )

    async def create_criteria(self, data: EligibilityCriteriaCreate) -> EligibilityCriteria:
        return await self.criteria.create(EligibilityCriteria(**data.model_dump()))

    async def check(self, data: EligibilityCheckRequest) -> EligibilityCheckResult:
        """Check an apprentice against one set of criteria.

        An earlier outcome is returned as is. Otherwise the apprentice is
        recorded as eligible until the criteria expire, and the documents and
        extra checks the funding body asks for are listed.

        Raises:
            ValidationError: If either id is missing
            NotFoundError: If the criteria or apprentice does not exist
        """
        if data.apprentice_id is None or data.criteria_id is None:
            raise ValidationError("Apprentice ID and criteria ID are required")
        criteria = await self.criteria.get_by_id(data.criteria_id)
        if criteria is None:
            raise NotFoundError("Eligibility criteria", data.criteria_id)

        existing = await self.records.find(data.apprentice_id, data.criteria_id)
        if existing is not None:
            return EligibilityCheckResult(
                isEligible=existing.status == "eligible",
                eligibility=ApprenticeEligibilityRead.model_validate(existing),
                message=f"Existing eligibility record found with status: {existing.status}",
            )

        apprentice = await self.apprentices.get_by_id(data.apprentice_id)
        if apprentice is None:
            raise NotFoundError("Apprentice", data.apprentice_id)

        record = await self.records.create(
            ApprenticeEligibility(
                apprentice_id=apprentice.id,
                apprentice_name=apprentice.full_name,
                criteria_id=criteria.id,
                status="eligible",
                eligible_from_date=datetime.utcnow(),
                eligible_to_date=criteria.expiry_date,
                notes="Automatic eligibility check passed",
            )
        )
        logger.info(f"Apprentice {apprentice.id} marked eligible for criteria {criteria.id}")
        return EligibilityCheckResult(
            isEligible=True,
            eligibility=ApprenticeEligibilityRead.model_validate(record),
            requirements=EligibilityRequirements(
                documentsRequired=list(criteria.documentation_required or []),
                additionalChecks=list((criteria.eligibility_rules or {}).get("checks", [])),
            ),
            message="Apprentice meets eligibility criteria",
        )
