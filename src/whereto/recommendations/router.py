"""Recommendation endpoints."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from whereto.auth.dependencies import optional_session, require_session
from whereto.auth.sessions import Session
from whereto.database import get_session
from whereto.errors import WhereToError
from whereto.places.service import place_card
from whereto.recommendations import service
from whereto.recommendations.schemas import (
    CountResponse,
    MarkSeenRequest,
    RecommendationCreated,
    RecommendationIn,
    RecommendationOut,
    SenderSummary,
)
from whereto.schemas import OkResponse

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/recommendations", tags=["Recommendations"])


@router.post("", response_model=RecommendationCreated, status_code=201)
async def create_recommendation(
    body: RecommendationIn,
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    rec = await service.recommend(db, session.user_id, body.receiver_id, body.google_place_id, body.note)
    return RecommendationCreated(recommendation_id=rec.id)


@router.get("", response_model=list[RecommendationOut])
async def list_recommendations(
    all_: bool = Query(default=False, alias="all"),
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    """Received recommendations; unseen only unless ``all=true``."""
    recs = await service.list_received(db, session.user_id, include_seen=all_)
    return [
        RecommendationOut(
            recommendation_id=r.id,
            note=r.note,
            seen=r.seen,
            created_at=r.created_at,
            sender=SenderSummary(name=r.sender.name, image=r.sender.image),
            place=place_card(r.place),
        )
        for r in recs
    ]


@router.patch("", response_model=OkResponse)
async def mark_recommendations_seen(
    body: MarkSeenRequest,
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    await service.mark_seen(db, session.user_id, body.ids)
    return OkResponse()


@router.get("/unseen-count", response_model=CountResponse)
async def get_unseen_count(
    session: Session | None = Depends(optional_session),
    db: AsyncSession = Depends(get_session),
):
    """Unseen recommendation count for the nav badge; 0 for anonymous callers."""
    if session is None:
        return CountResponse(count=0)
    return CountResponse(count=await service.unseen_count(db, session.user_id))


@router.delete("/{recommendation_id}", response_model=OkResponse)
async def delete_recommendation(
    recommendation_id: str,
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    try:
        await service.dismiss(db, session.user_id, recommendation_id)
    except WhereToError:
        raise
    except Exception as e:
        logger.exception("recommendation_delete_failed", recommendation_id=recommendation_id)
        raise HTTPException(status_code=500, detail="Internal server error") from e
    return OkResponse()
