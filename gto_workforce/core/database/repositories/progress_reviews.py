"""
Progress review repositories.
"""

from __future__ import annotations

from datetime import datetime
from typing import List

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.progress_reviews import (
    ProgressReview,
    ProgressReviewActionItem,
    ProgressReviewParticipant,
    ProgressReviewTemplate,
)
from .base import SQLModelRepository


class ProgressReviewTemplateRepository(SQLModelRepository[ProgressReviewTemplate]):
    default_order = ("template_name", "id")

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ProgressReviewTemplate)


class ProgressReviewRepository(SQLModelRepository[ProgressReview]):
    """Reviews together with their participants and action items."""

    default_order = ("-review_date", "-scheduled_date", "-id")

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ProgressReview)

    async def get_participants(self, review_id: int) -> List[ProgressReviewParticipant]:
        stmt = (
            select(ProgressReviewParticipant)
            .where(ProgressReviewParticipant.review_id == review_id)
            .order_by(ProgressReviewParticipant.id.asc())  # type: ignore[union-attr]
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_action_items(self, review_id: int) -> List[ProgressReviewActionItem]:
        stmt = (
            select(ProgressReviewActionItem)
            .where(ProgressReviewActionItem.review_id == review_id)
            .order_by(ProgressReviewActionItem.id.asc())  # type: ignore[union-attr]
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def upcoming_for_user(self, user_id: int, after: datetime, limit: int = 5) -> List[ProgressReview]:
        """Scheduled reviews the user runs or takes part in, soonest first."""
        participating = select(ProgressReviewParticipant.review_id).where(
            ProgressReviewParticipant.user_id == user_id
        )
        stmt = (
            select(ProgressReview)
            .where(
                ProgressReview.status == "scheduled",
                ProgressReview.scheduled_date >= after,
                or_(ProgressReview.reviewer_id == user_id, ProgressReview.id.in_(participating)),  # type: ignore[union-attr]
            )
            .order_by(ProgressReview.scheduled_date.asc())  # type: ignore[attr-defined]
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())



class ProgressReviewParticipantRepository(SQLModelRepository[ProgressReviewParticipant]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ProgressReviewParticipant)


class ProgressReviewActionItemRepository(SQLModelRepository[ProgressReviewActionItem]):
    default_order = ("due_date", "id")

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ProgressReviewActionItem)
