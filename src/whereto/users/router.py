"""Account and profile endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from whereto.auth.dependencies import require_session
from whereto.auth.sessions import Session
from whereto.database import get_session
from whereto.errors import InvalidInputError
from whereto.users import service
from whereto.users.schemas import (
    ProfileOut,
    ProfileResponse,
    ProfileUpdate,
    UsernameAvailability,
    UserResponse,
)

router = APIRouter(prefix="/api", tags=["Users"])


@router.get("/user", response_model=UserResponse)
async def get_current_user(
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    user = await service.get_user(db, session.user_id)
    return UserResponse.model_validate(user)


@router.get("/profile/check-username", response_model=UsernameAvailability)
async def check_username(
    username: str | None = Query(default=None),
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    """Whether a username is free for the caller to claim."""
    if not username:
        raise InvalidInputError("Username is required")
    normalized = service.normalize_username(username)
    taken = await service.username_taken(db, normalized, exclude_user_id=session.user_id)
    return UsernameAvailability(available=not taken)


@router.patch("/profile", response_model=ProfileResponse)
async def update_profile(
    body: ProfileUpdate,
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    changes = body.model_dump(exclude_unset=True)
    user = await service.update_profile(db, session.user_id, changes)
    return ProfileResponse(user=ProfileOut.model_validate(user))
