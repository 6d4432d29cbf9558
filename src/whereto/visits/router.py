"""Visit endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from whereto.auth.dependencies import require_session
from whereto.auth.sessions import Session
from whereto.config import get_settings
from whereto.database import get_session
from whereto.places.service import level_to_price
from whereto.visits.schemas import VisitCreatedResponse, VisitRequest, VisitResponse
from whereto.visits.service import TooFarError, list_visits, record_visit

router = APIRouter(prefix="/api/visits", tags=["Visits"])


@router.get("", response_model=list[VisitResponse])
async def get_visits(
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    """The caller's verified visits, most recent first."""
    visits = await list_visits(db, session.user_id)
    return [
        VisitResponse(
            visit_id=v.id,
            place_id=v.place.google_place_id,
            name=v.place.name,
            address=v.place.address,
            lat=v.place.lat,
            lng=v.place.lng,
            photo_ref=v.place.photo_url,
            rating=v.place.rating or 0,
            price=level_to_price(v.place.price_level),
            method=v.method,
            verified_at=v.verified_at,
        )
        for v in visits
    ]


@router.post("", response_model=VisitCreatedResponse)
async def create_visit(
    body: VisitRequest,
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    """Record a visit if the caller is within range of the place."""
    try:
        visit = await record_visit(
            db,
            session.user_id,
            body.place_id,
            body.lat,
            body.lng,
            body.method,
            max_distance=get_settings().visit_max_distance_meters,
        )
    except TooFarError as e:
        return JSONResponse(
            status_code=400,
            content={"error": e.message, "distance": round(e.distance), "required": e.required},
        )
    return VisitCreatedResponse(visit_id=visit.id, name=visit.place.name, verified_at=visit.verified_at)
