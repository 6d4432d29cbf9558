"""Friends activity feed endpoint."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from whereto.activity import service
from whereto.activity.schemas import FeedItem
from whereto.auth.dependencies import require_session
from whereto.auth.sessions import Session
from whereto.database import get_session

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/activity", tags=["Activity"])


@router.get("", response_model=list[FeedItem])
async def get_activity(
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    try:
        return await service.activity_feed(db, session.user_id)
    except Exception as e:
        logger.exception("activity_feed_failed", user_id=session.user_id)
        raise HTTPException(status_code=500, detail="Internal server error") from e
