"""
API endpoints for staff user accounts.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from gto_workforce.core.database import get_session
from gto_workforce.core.database.entities.users import User
from gto_workforce.core.database.repositories import UserRepository
from gto_workforce.core.logging_config import get_logger
from gto_workforce.core.models.io.users import UserCreate, UserRead

logger = get_logger(__name__)

router = APIRouter(tags=["users"])


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create User",
    description="Create a staff user. Usernames are unique.",
    responses={
        201: {"description": "User created successfully"},
        409: {"description": "Username already taken"},
    },
)
async def create_user(user: UserCreate, session: AsyncSession = Depends(get_session)) -> UserRead:
    repo = UserRepository(session)
    if await repo.get_by_username(user.username) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=f"Username '{user.username}' already exists")
    db_user = await repo.create(User.model_validate(user))
    logger.info(f"Created user {db_user.username} with role {db_user.role}")
    return UserRead.model_validate(db_user)


@router.get(
    "",
    response_model=List[UserRead],
    summary="List Users",
    description="List staff users ordered by username.",
)
async def list_users(
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_session),
) -> List[UserRead]:
    users = await UserRepository(session).list(limit=limit, offset=offset)
    return [UserRead.model_validate(u) for u in users]


@router.get(
    "/{user_id}",
    response_model=UserRead,
    summary="Get User",
    responses={404: {"description": "User not found"}},
)
async def get_user(user_id: int, session: AsyncSession = Depends(get_session)) -> UserRead:
    user = await UserRepository(session).get_by_id(user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserRead.model_validate(user)
