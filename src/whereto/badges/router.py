"""Badge endpoints: catalogue with progress, and on-demand evaluation."""

from __future__ import annotations

from dataclasses import asdict

import structlog
from fastapi import APIRouter, Depends, HTTPException
from redis.asyncio import Redis
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from whereto.auth.dependencies import require_session
from whereto.auth.sessions import Session
from whereto.badges.definitions import BADGE_DEFINITIONS, BadgeDefinition, find_definition
from whereto.badges.engine import check_and_award_badges
from whereto.badges.schemas import (
    BadgeCheckResponse,
    BadgeDefinitionResponse,
    BadgesResponse,
    EarnedBadgeResponse,
)
from whereto.badges.stats import compute_stats
from whereto.database import get_session
from whereto.db.models import EarnedBadge
from whereto.redis_client import get_optional_redis

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/badges", tags=["Badges"])


def _definition_response(d: BadgeDefinition) -> BadgeDefinitionResponse:
    return BadgeDefinitionResponse(**asdict(d))


@router.get("", response_model=BadgesResponse)
async def get_badges(
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    """Earned badges (newest first), the full catalogue and current progress."""
    try:
        result = await db.execute(
            select(EarnedBadge)
            .where(EarnedBadge.user_id == session.user_id)
            .order_by(EarnedBadge.earned_at.desc())
        )
        earned = result.scalars().all()
        stats = await compute_stats(db, session.user_id)
    except Exception as e:
        logger.exception("badges_fetch_failed", user_id=session.user_id)
        raise HTTPException(status_code=500, detail="Failed to fetch badges") from e

    return BadgesResponse(
        earned=[EarnedBadgeResponse(badge_type=b.badge_type, earned_at=b.earned_at) for b in earned],
        definitions=[_definition_response(d) for d in BADGE_DEFINITIONS],
        progress=stats.progress(),
    )


@router.post("/check", response_model=BadgeCheckResponse)
async def check_badges(
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
    redis: Redis | None = Depends(get_optional_redis),
):
    """Evaluate the caller's stats and return definitions of newly awarded badges."""
    try:
        new_types = await check_and_award_badges(db, session.user_id, redis)
    except Exception as e:
        logger.exception("badge_check_failed", user_id=session.user_id)
        raise HTTPException(status_code=500, detail="Failed to check badges") from e

    new_badges = [find_definition(t) for t in new_types]
    return BadgeCheckResponse(
        new_badges=[_definition_response(d) for d in new_badges if d is not None],
    )
