"""Save endpoints for signed-in users."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from whereto.auth.dependencies import require_session
from whereto.auth.sessions import Session
from whereto.database import get_session
from whereto.places.schemas import SavedPlaceOut
from whereto.places.service import saved_place
from whereto.saves.schemas import RemoveSaveRequest, SaveRequest, SaveResponse
from whereto.saves.service import list_saves, remove_place, save_place
from whereto.schemas import OkResponse

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/saves", tags=["Saves"])


@router.post("", response_model=SaveResponse)
async def create_save(
    body: SaveRequest,
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    """Save a place under an intent; saving it again is a no-op."""
    try:
        save_id = await save_place(
            db,
            session.user_id,
            body.place,
            body.intent,
            body.action,
            body.recommendation_id,
        )
    except Exception as e:
        logger.exception("save_failed", user_id=session.user_id, place_id=body.place.place_id)
        raise HTTPException(status_code=500, detail="Internal server error") from e
    return SaveResponse(save_id=save_id)


@router.get("", response_model=list[SavedPlaceOut])
async def get_saves(
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    """The caller's saved places, newest first."""
    saves = await list_saves(db, session.user_id)
    return [saved_place(s) for s in saves]


@router.delete("", response_model=OkResponse)
async def delete_save(
    body: RemoveSaveRequest,
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    """Remove a place from every board it was saved to."""
    await remove_place(db, session.user_id, body.place_id)
    return OkResponse()
