"""Neighbourhood exploration endpoints."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from whereto.auth.dependencies import require_session
from whereto.auth.sessions import Session
from whereto.database import get_session
from whereto.errors import InvalidInputError
from whereto.exploration import service
from whereto.exploration.schemas import (
    ExplorationStatsResponse,
    NeighborhoodProgress,
    NeighborhoodRef,
    NewNeighborhoodResponse,
)
from whereto.places.neighborhoods import NEIGHBORHOODS

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/exploration-stats", tags=["Exploration"])


@router.get("", response_model=ExplorationStatsResponse)
async def get_exploration_stats(
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    """Per-neighbourhood visit counts and the share of the city explored."""
    try:
        tallies = await service.exploration_stats(db, session.user_id)
    except Exception as e:
        logger.exception("exploration_stats_failed", user_id=session.user_id)
        raise HTTPException(status_code=500, detail="Internal server error") from e

    return ExplorationStatsResponse(
        total_neighborhoods=len(tallies),
        explored_count=sum(1 for t in tallies if t.explored),
        percentage=service.explored_percentage(tallies),
        neighborhoods=[
            NeighborhoodProgress(
                name=t.hood.name,
                area=t.hood.area,
                explored=t.explored,
                visit_count=t.visit_count,
                unique_place_count=len(t.place_ids),
                first_visit_date=t.first_visit,
            )
            for t in tallies
        ],
    )


@router.get("/check-new-neighborhood", response_model=NewNeighborhoodResponse)
async def check_new_neighborhood(
    place_id: str | None = Query(None, alias="placeId"),
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    """Whether the caller's latest visit to a place unlocked its neighbourhood."""
    if not place_id:
        raise InvalidInputError("Missing placeId parameter")
    hood, is_new, explored = await service.check_new_neighborhood(db, session.user_id, place_id)
    return NewNeighborhoodResponse(
        is_new_neighborhood=is_new,
        neighborhood=NeighborhoodRef(name=hood.name, area=hood.area) if hood else None,
        total_explored=explored,
        total_neighborhoods=len(NEIGHBORHOODS),
    )
