"""GPS-verified visits."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import select

from whereto.db.conflicts import commit_unless_conflict
from whereto.db.models import Visit
from whereto.errors import InvalidInputError, NotFoundError
from whereto.places.neighborhoods import haversine_meters
from whereto.places.service import get_place_by_google_id

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


class TooFarError(InvalidInputError):
    """The caller's position is outside the verification radius."""

    def __init__(self, distance: float, required: float) -> None:
        super().__init__("Too far away")
        self.distance = distance
        self.required = required


async def _find_visit(db: AsyncSession, user_id: str, place_id: str) -> Visit | None:
    result = await db.execute(
        select(Visit).where(Visit.user_id == user_id, Visit.place_id == place_id)
    )
    return result.scalar_one_or_none()


async def record_visit(
    db: AsyncSession,
    user_id: str,
    google_place_id: str,
    lat: float,
    lng: float,
    method: str,
    *,
    max_distance: float,
) -> Visit:
    """Verify the caller is at the place and record (or refresh) the visit."""
    place = await get_place_by_google_id(db, google_place_id)
    if place is None:
        raise NotFoundError("Place not found")
    if place.lat is None or place.lng is None:
        raise InvalidInputError("Place has no location")

    distance = haversine_meters(lat, lng, place.lat, place.lng)
    if distance > max_distance:
        raise TooFarError(distance, max_distance)

    place_id = place.id
    visit = await _find_visit(db, user_id, place_id)
    if visit is None:
        now = datetime.now(timezone.utc)
        visit = Visit(user_id=user_id, place_id=place_id, method=method, verified_at=now, created_at=now)
        visit.place = place
        db.add(visit)
        if await commit_unless_conflict(db):
            return visit
        visit = await _find_visit(db, user_id, place_id)
        if visit is None:
            msg = f"Visit to {place_id} vanished after conflicting insert"
            raise RuntimeError(msg)

    visit.method = method
    visit.verified_at = datetime.now(timezone.utc)
    await db.commit()
    return visit


async def list_visits(db: AsyncSession, user_id: str) -> list[Visit]:
    result = await db.execute(
        select(Visit).where(Visit.user_id == user_id).order_by(Visit.verified_at.desc())
    )
    return list(result.scalars().all())
