"""
API endpoints for apprentice progress reviews, their templates, participants
and action items.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from gto_workforce.core.database import get_session
from gto_workforce.core.models.io.progress_reviews import (
    ActionItemCreate,
    ActionItemRead,
    ActionItemUpdate,
    ParticipantCreate,
    ParticipantRead,
    ParticipantUpdate,
    ReviewCreate,
    ReviewDetail,
    ReviewRead,
    ReviewStats,
    ReviewUpdate,
    TemplateCreate,
    TemplateRead,
    TemplateUpdate,
)
from gto_workforce.server.services.progress_reviews import ProgressReviewService

router = APIRouter(tags=["progress-reviews"])


@router.get("/templates", response_model=List[TemplateRead], summary="List Review Templates")
async def list_templates(
    active_only: bool = Query(True, description="Hide deactivated templates"),
    session: AsyncSession = Depends(get_session),
) -> List[TemplateRead]:
    return [TemplateRead.model_validate(t) for t in await ProgressReviewService(session).list_templates(active_only)]


@router.post(
    "/templates", response_model=TemplateRead, status_code=status.HTTP_201_CREATED, summary="Create Review Template"
)
async def create_template(template: TemplateCreate, session: AsyncSession = Depends(get_session)) -> TemplateRead:
    return TemplateRead.model_validate(await ProgressReviewService(session).create_template(template))


@router.get("/templates/{template_id}", response_model=TemplateRead, summary="Get Review Template")
async def get_template(template_id: int, session: AsyncSession = Depends(get_session)) -> TemplateRead:
    return TemplateRead.model_validate(await ProgressReviewService(session).get_template(template_id))


@router.put("/templates/{template_id}", response_model=TemplateRead, summary="Update Review Template")
async def update_template(
    template_id: int, template_update: TemplateUpdate, session: AsyncSession = Depends(get_session)
) -> TemplateRead:
    return TemplateRead.model_validate(await ProgressReviewService(session).update_template(template_id, template_update))


@router.delete(
    "/templates/{template_id}",
    response_model=TemplateRead,
    summary="Deactivate Review Template",
    description="Templates stay attached to past reviews, so deleting only deactivates them.",
)
async def deactivate_template(template_id: int, session: AsyncSession = Depends(get_session)) -> TemplateRead:
    return TemplateRead.model_validate(await ProgressReviewService(session).deactivate_template(template_id))


@router.get("/dashboard/upcoming", response_model=List[ReviewRead], summary="Upcoming Reviews")
async def upcoming_reviews(
    user_id: int = Query(..., description="Reviewer or participant"),
    limit: int = Query(5, ge=1, le=50),
    session: AsyncSession = Depends(get_session),
) -> List[ReviewRead]:
    return [ReviewRead.model_validate(r) for r in await ProgressReviewService(session).upcoming(user_id, limit)]


@router.get("/dashboard/stats", response_model=ReviewStats, summary="Review Statistics")
async def review_stats(session: AsyncSession = Depends(get_session)) -> ReviewStats:
    return await ProgressReviewService(session).stats()


@router.get(
    "",
    response_model=List[ReviewRead],
    summary="List Progress Reviews",
    description="Reviews ordered by review date, most recent first.",
)
async def list_reviews(
    apprentice_id: Optional[int] = None,
    reviewer_id: Optional[int] = None,
    status_filter: Optional[str] = Query(None, alias="status"),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_session),
) -> List[ReviewRead]:
    reviews = await ProgressReviewService(session).list(
        apprentice_id=apprentice_id, reviewer_id=reviewer_id, status=status_filter, limit=limit, offset=offset
    )
    return [ReviewRead.model_validate(r) for r in reviews]


@router.post(
    "",
    response_model=ReviewRead,
    status_code=status.HTTP_201_CREATED,
    summary="Schedule Progress Review",
    responses={
        400: {"description": "Apprentice not active or date not in the future"},
        404: {"description": "Apprentice, template or reviewer not found"},
    },
)
async def schedule_review(review: ReviewCreate, session: AsyncSession = Depends(get_session)) -> ReviewRead:
    return ReviewRead.model_validate(await ProgressReviewService(session).schedule(review))


@router.get("/{review_id}", response_model=ReviewDetail, summary="Get Progress Review")
async def get_review(review_id: int, session: AsyncSession = Depends(get_session)) -> ReviewDetail:
    return await ProgressReviewService(session).detail(review_id)


@router.put("/{review_id}", response_model=ReviewRead, summary="Update Progress Review")
async def update_review(
    review_id: int, review_update: ReviewUpdate, session: AsyncSession = Depends(get_session)
) -> ReviewRead:
    return ReviewRead.model_validate(await ProgressReviewService(session).update(review_id, review_update))


@router.delete("/{review_id}", response_model=ReviewRead, summary="Cancel Progress Review")
async def cancel_review(review_id: int, session: AsyncSession = Depends(get_session)) -> ReviewRead:
    return ReviewRead.model_validate(await ProgressReviewService(session).cancel(review_id))


@router.post(
    "/{review_id}/participants",
    response_model=ParticipantRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add Participant",
)
async def add_participant(
    review_id: int, participant: ParticipantCreate, session: AsyncSession = Depends(get_session)
) -> ParticipantRead:
    return ParticipantRead.model_validate(await ProgressReviewService(session).add_participant(review_id, participant))


@router.put("/{review_id}/participants/{participant_id}", response_model=ParticipantRead, summary="Update Participant")
async def update_participant(
    review_id: int,
    participant_id: int,
    participant_update: ParticipantUpdate,
    session: AsyncSession = Depends(get_session),
) -> ParticipantRead:
    participant = await ProgressReviewService(session).update_participant(review_id, participant_id, participant_update)
    return ParticipantRead.model_validate(participant)


@router.delete(
    "/{review_id}/participants/{participant_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Remove Participant"
)
async def remove_participant(review_id: int, participant_id: int, session: AsyncSession = Depends(get_session)) -> None:
    await ProgressReviewService(session).remove_participant(review_id, participant_id)


@router.post(
    "/{review_id}/action-items",
    response_model=ActionItemRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add Action Item",
)
async def add_action_item(
    review_id: int, item: ActionItemCreate, session: AsyncSession = Depends(get_session)
) -> ActionItemRead:
    return ActionItemRead.model_validate(await ProgressReviewService(session).add_action_item(review_id, item))


@router.put(
    "/{review_id}/action-items/{item_id}",
    response_model=ActionItemRead,
    summary="Update Action Item",
    description="Completing an action item stamps its completion date.",
)
async def update_action_item(
    review_id: int, item_id: int, item_update: ActionItemUpdate, session: AsyncSession = Depends(get_session)
) -> ActionItemRead:
    item = await ProgressReviewService(session).update_action_item(review_id, item_id, item_update)
    return ActionItemRead.model_validate(item)


@router.delete(
    "/{review_id}/action-items/{item_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Remove Action Item"
)
async def remove_action_item(review_id: int, item_id: int, session: AsyncSession = Depends(get_session)) -> None:
    await ProgressReviewService(session).remove_action_item(review_id, item_id)
