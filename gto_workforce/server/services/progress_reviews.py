"""
Progress review service: scheduling, participants, action items and stats.

Reviews are never removed; cancelling one keeps its history. Scheduling runs
``BusinessRuleValidator.validate_progress_review_scheduling`` so only active
apprentices get future-dated reviews.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from gto_workforce.core.database.entities.progress_reviews import (
    ProgressReview,
    ProgressReviewActionItem,
    ProgressReviewParticipant,
    ProgressReviewTemplate,
)
from gto_workforce.core.database.repositories import (
    ApprenticeRepository,
    ProgressReviewActionItemRepository,
    ProgressReviewParticipantRepository,
    ProgressReviewRepository,
    ProgressReviewTemplateRepository,
    UserRepository,
)
from gto_workforce.core.errors import NotFoundError, ValidationError
from gto_workforce.core.models.io.progress_reviews import (
    ActionItemCounts,
    ActionItemCreate,
    ActionItemRead,
    ActionItemUpdate,
    ParticipantCreate,
    ParticipantRead,
    ParticipantUpdate,
    ReviewCounts,
    ReviewCreate,
    ReviewDetail,
    ReviewRead,
    ReviewStats,
    ReviewUpdate,
    TemplateCreate,
    TemplateUpdate,
)
from gto_workforce.core.validation import BusinessRuleValidator

logger = logging.getLogger(__name__)


def as_naive_utc(value: datetime) -> datetime:
    """Stored datetimes are naive UTC; convert aware input before comparing."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class ProgressReviewService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.templates = ProgressReviewTemplateRepository(session)
        self.reviews = ProgressReviewRepository(session)
        self.participants = ProgressReviewParticipantRepository(session)
        self.action_items = ProgressReviewActionItemRepository(session)
        self.apprentices = ApprenticeRepository(session)
        self.users = UserRepository(session)

    # Templates

    async def get_template(self, template_id: int) -> ProgressReviewTemplate:
        template = await self.templates.get_by_id(template_id)
        if template is None:
            raise NotFoundError("Review template", template_id)
        return template

    async def list_templates(self, active_only: bool = True) -> List[ProgressReviewTemplate]:
        return await self.templates.list(filters={"is_active": True} if active_only else None)

    async def create_template(self, data: TemplateCreate) -> ProgressReviewTemplate:
        return await self.templates.create(ProgressReviewTemplate(**data.model_dump()))

    async def update_template(self, template_id: int, data: TemplateUpdate) -> ProgressReviewTemplate:
        template = await self.get_template(template_id)
        return await self.templates.update_fields(template, data.model_dump(exclude_unset=True))

    async def deactivate_template(self, template_id: int) -> ProgressReviewTemplate:
        template = await self.get_template(template_id)
        return await self.templates.update_fields(template, {"is_active": False})

    # Reviews

    async def get(self, review_id: int) -> ProgressReview:
        review = await self.reviews.get_by_id(review_id)
        if review is None:
            raise NotFoundError("Progress review", review_id)
        return review

    async def detail(self, review_id: int) -> ReviewDetail:
        review = await self.get(review_id)
        apprentice = await self.apprentices.get_by_id(review.apprentice_id)
        reviewer = await self.users.get_by_id(review.reviewer_id)
        return ReviewDetail(
            **ReviewRead.model_validate(review).model_dump(),
            apprentice_name=apprentice.full_name if apprentice else None,
            reviewer_name=reviewer.full_name if reviewer else None,
            participants=[ParticipantRead.model_validate(p) for p in await self.reviews.get_participants(review_id)],
            action_items=[ActionItemRead.model_validate(a) for a in await self.reviews.get_action_items(review_id)],
        )

    async def list(
        self,
        apprentice_id: Optional[int] = None,
        reviewer_id: Optional[int] = None,
        status: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[ProgressReview]:
        filters = {"apprentice_id": apprentice_id, "reviewer_id": reviewer_id, "status": status}
        return await self.reviews.list(limit=limit, offset=offset, filters=filters)

    async def schedule(self, data: ReviewCreate) -> ProgressReview:
        """Schedule a review and add the reviewer as a confirmed participant.

        Raises:
            NotFoundError: If the apprentice, template or reviewer does not exist
            ValidationError: If the apprentice is not active or the date is not in the future
        """
        apprentice = await self.apprentices.get_by_id(data.apprentice_id)
        if apprentice is None:
            raise NotFoundError("Apprentice", data.apprentice_id)
        await self.get_template(data.template_id)
        if await self.users.get_by_id(data.reviewer_id) is None:
            raise NotFoundError("User", data.reviewer_id)

        scheduled = as_naive_utc(data.scheduled_date)
        result = BusinessRuleValidator.validate_progress_review_scheduling(apprentice, scheduled)
        if not result.valid:
            raise ValidationError("Progress review cannot be scheduled", result.errors)

        review = ProgressReview(**data.model_dump(exclude={"scheduled_date"}), scheduled_date=scheduled)
        self.session.add(review)
        await self.session.flush()
        self.session.add(
            ProgressReviewParticipant(
                review_id=review.id, user_id=data.reviewer_id, role="reviewer", attendance_status="confirmed"
            )
        )
        await self.session.commit()
        await self.session.refresh(review)
        logger.info(f"Scheduled progress review {review.id} for apprentice {apprentice.id} on {scheduled:%Y-%m-%d}")
        return review

    async def update(self, review_id: int, data: ReviewUpdate) -> ProgressReview:
        review = await self.get(review_id)
        changes = data.model_dump(exclude_unset=True)
        if changes.get("scheduled_date") is not None:
            changes["scheduled_date"] = as_naive_utc(changes["scheduled_date"])
            apprentice = await self.apprentices.get_by_id(review.apprentice_id)
            result = BusinessRuleValidator.validate_progress_review_scheduling(apprentice, changes["scheduled_date"])
            if not result.valid:
                raise ValidationError("Progress review cannot be rescheduled", result.errors)
        if changes.get("status") == "completed" and review.review_date is None:
            changes.setdefault("review_date", datetime.utcnow())
        return await self.reviews.update_fields(review, changes)

    async def cancel(self, review_id: int) -> ProgressReview:
        review = await self.get(review_id)
        logger.info(f"Cancelled progress review {review_id}")
        return await self.reviews.update_fields(review, {"status": "cancelled"})

    async def upcoming(self, user_id: int, limit: int = 5) -> List[ProgressReview]:
        return await self.reviews.upcoming_for_user(user_id, datetime.utcnow(), limit)

    async def stats(self) -> ReviewStats:
        reviews = await self.reviews.count_by("status")
        actions = await self.action_items.count_by("status")
        return ReviewStats(
            reviews=ReviewCounts(
                scheduled=reviews.get("scheduled", 0),
                inProgress=reviews.get("in_progress", 0),
                completed=reviews.get("completed", 0),
                cancelled=reviews.get("cancelled", 0),
            ),
            actionItems=ActionItemCounts(
                pending=actions.get("pending", 0),
                inProgress=actions.get("in_progress", 0),
                completed=actions.get("completed", 0),
                cancelled=actions.get("cancelled", 0),
            ),
        )

    # Participants

    async def add_participant(self, review_id: int, data: ParticipantCreate) -> ProgressReviewParticipant:
        await self.get(review_id)
        if await self.users.get_by_id(data.user_id) is None:
            raise NotFoundError("User", data.user_id)
        return await self.participants.create(ProgressReviewParticipant(review_id=review_id, **data.model_dump()))

    async def _participant(self, review_id: int, participant_id: int) -> ProgressReviewParticipant:
        participant = await self.participants.get_by_id(participant_id)
        if participant is None or participant.review_id != review_id:
            raise NotFoundError("Participant", participant_id)
        return participant

    async def update_participant(
        self, review_id: int, participant_id: int, data: ParticipantUpdate
    ) -> ProgressReviewParticipant:
        participant = await self._participant(review_id, participant_id)
        return await self.participants.update_fields(participant, data.model_dump(exclude_unset=True))

    async def remove_participant(self, review_id: int, participant_id: int) -> None:
        await self._participant(review_id, participant_id)
        await self.participants.delete(participant_id)

    # Action items

    async def add_action_item(self, review_id: int, data: ActionItemCreate) -> ProgressReviewActionItem:
        await self.get(review_id)
        return await self.action_items.create(ProgressReviewActionItem(review_id=review_id, **data.model_dump()))

    async def _action_item(self, review_id: int, item_id: int) -> ProgressReviewActionItem:
        item = await self.action_items.get_by_id(item_id)
        if item is None or item.review_id != review_id:
            raise NotFoundError("Action item", item_id)
        return item

    async def update_action_item(self, review_id: int, item_id: int, data: ActionItemUpdate) -> ProgressReviewActionItem:
        item = await self._action_item(review_id, item_id)
        changes = data.model_dump(exclude_unset=True)
        if changes.get("status") == "completed" and item.status != "completed":
            changes["completion_date"] = datetime.utcnow()
        return await self.action_items.update_fields(item, changes)

    async def remove_action_item(self, review_id: int, item_id: int) -> None:
        await self._action_item(review_id, item_id)
        await self.action_items.delete(item_id)
