"""Friend-to-friend place recommendations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, select, update

from whereto.db.models import Recommendation
from whereto.errors import ForbiddenError, InvalidInputError, NotFoundError
from whereto.friends.service import are_friends
from whereto.places.service import get_place_by_google_id

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


async def recommend(
    db: AsyncSession,
    sender_id: str,
    receiver_id: str,
    google_place_id: str,
    note: str | None = None,
) -> Recommendation:
    if receiver_id == sender_id:
        raise InvalidInputError("Cannot recommend to yourself")
    if not await are_friends(db, sender_id, receiver_id):
        raise ForbiddenError("Not friends")
    place = await get_place_by_google_id(db, google_place_id)
    if place is None:
        raise NotFoundError("Place not found")

    rec = Recommendation(
        sender_id=sender_id,
        receiver_id=receiver_id,
        place_id=place.id,
        note=(note or "").strip() or None,
    )
    db.add(rec)
    await db.commit()
    return rec


async def list_received(db: AsyncSession, user_id: str, *, include_seen: bool = False) -> list[Recommendation]:
    query = select(Recommendation).where(Recommendation.receiver_id == user_id)
    if not include_seen:
        query = query.where(Recommendation.seen.is_(False))
    result = await db.execute(query.order_by(Recommendation.created_at.desc()))
    return list(result.scalars().all())


async def mark_seen(db: AsyncSession, user_id: str, ids: list[str]) -> None:
    """Mark the caller's own recommendations as seen; other ids are ignored."""
    await db.execute(
        update(Recommendation)
        .where(Recommendation.id.in_(ids), Recommendation.receiver_id == user_id)
        .values(seen=True)
    )
    await db.commit()


async def dismiss(db: AsyncSession, user_id: str, recommendation_id: str) -> None:
    """Delete a received recommendation; only its receiver may do so."""
    rec = await db.get(Recommendation, recommendation_id)
    if rec is None:
        raise NotFoundError("Not found")
    if rec.receiver_id != user_id:
        raise ForbiddenError("Forbidden")
    await db.delete(rec)
    await db.commit()


async def unseen_count(db: AsyncSession, user_id: str) -> int:
    result = await db.execute(
        select(func.count())
        .select_from(Recommendation)
        .where(Recommendation.receiver_id == user_id, Recommendation.seen.is_(False))
    )
    return result.scalar_one()
