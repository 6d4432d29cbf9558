"""Creator directory, creator profile and follow endpoints."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from whereto.auth.dependencies import optional_session, require_session
from whereto.auth.sessions import Session
from whereto.creators import service
from whereto.creators.schemas import (
    CreatorDetail,
    CreatorProfile,
    CreatorProfileResponse,
    CreatorProfileUpdate,
    CreatorSummary,
    FollowRequest,
    FollowResponse,
    IntentBoard,
)
from whereto.curated_lists.router import list_summary
from whereto.database import get_session
from whereto.places.service import saved_place

logger = structlog.get_logger(__name__)

RECENT_SAVES = 10

router = APIRouter(prefix="/api", tags=["Creators"])


@router.get("/creators", response_model=list[CreatorSummary])
async def list_creators(db: AsyncSession = Depends(get_session)):
    """Public creator directory ordered by follower count."""
    try:
        rows = await service.list_creators(db)
    except Exception as e:
        logger.exception("creators_fetch_failed")
        raise HTTPException(status_code=500, detail="Internal server error") from e
    return [
        CreatorSummary(
            id=user.id,
            name=user.name,
            image=user.image,
            creator_bio=user.creator_bio,
            follower_count=count,
        )
        for user, count in rows
    ]


@router.patch("/creators/me", response_model=CreatorProfileResponse)
async def update_creator_profile(
    body: CreatorProfileUpdate,
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    user = await service.update_creator_profile(db, session.user_id, body.model_dump(exclude_unset=True))
    return CreatorProfileResponse(creator_bio=user.creator_bio)


@router.get("/creators/{creator_id}", response_model=CreatorProfile)
async def get_creator(
    creator_id: str,
    session: Session | None = Depends(optional_session),
    db: AsyncSession = Depends(get_session),
):
    """Public creator page: counts, recent saves, saves by intent and lists."""
    viewer_id = session.user_id if session else None
    profile = await service.get_creator_profile(db, creator_id, viewer_id)
    user = profile.user
    return CreatorProfile(
        creator=CreatorDetail(
            id=user.id,
            name=user.name,
            image=user.image,
            creator_bio=user.creator_bio,
            instagram_handle=user.instagram_handle,
            tiktok_handle=user.tiktok_handle,
            followers=profile.followers,
            following=profile.following,
            saved_count=profile.saved_count,
            visited_count=profile.visited_count,
            is_following=profile.is_following,
        ),
        recent_saves=[saved_place(s, with_recommendation=False) for s in profile.saves[:RECENT_SAVES]],
        boards=[
            IntentBoard(intent=intent, items=[saved_place(s, with_recommendation=False) for s in saves])
            for intent, saves in profile.boards()
        ],
        lists=[list_summary(row) for row in profile.lists],
    )


@router.post("/follow", response_model=FollowResponse)
async def follow(
    body: FollowRequest,
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    count = await service.follow(db, session.user_id, body.user_id)
    return FollowResponse(follower_count=count)


@router.delete("/follow", response_model=FollowResponse)
async def unfollow(
    body: FollowRequest,
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    count = await service.unfollow(db, session.user_id, body.user_id)
    return FollowResponse(follower_count=count)
