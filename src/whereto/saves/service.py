"""Authenticated saves: one row per (user, place, intent)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import delete, select

from whereto.db.conflicts import commit_unless_conflict
from whereto.db.models import Save, new_id
from whereto.errors import NotFoundError
from whereto.places.service import get_place_by_google_id, upsert_place

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from whereto.places.schemas import PlaceIn

logger = logging.getLogger(__name__)

RECS_INTENT = "recs_from_friends"


async def _find_save(db: AsyncSession, user_id: str, place_id: str, intent: str) -> Save | None:
    result = await db.execute(
        select(Save).where(
            Save.user_id == user_id,
            Save.place_id == place_id,
            Save.intent == intent,
        )
    )
    return result.scalar_one_or_none()


async def save_once(
    db: AsyncSession,
    user_id: str,
    place_id: str,
    intent: str,
    action: str,
    recommendation_id: str | None = None,
) -> str:
    """Insert a save and return its id; an existing save is kept and its id returned.

    A duplicate is never an error: the unique (user, place, intent) key is
    the only guard against concurrent saves of the same place.
    """
    existing = await _find_save(db, user_id, place_id, intent)
    if existing is not None:
        return existing.id

    save_id = new_id()
    db.add(Save(
        id=save_id,
        user_id=user_id,
        place_id=place_id,
        intent=intent,
        action=action,
        recommendation_id=recommendation_id,
    ))
    if await commit_unless_conflict(db):
        return save_id

    logger.info("Concurrent save of place %s by %s under %s", place_id, user_id, intent)
    existing = await _find_save(db, user_id, place_id, intent)
    if existing is None:
        msg = f"Save for place {place_id} vanished after conflicting insert"
        raise RuntimeError(msg)
    return existing.id


async def save_place(
    db: AsyncSession,
    user_id: str,
    card: PlaceIn,
    intent: str,
    action: str = "save",
    recommendation_id: str | None = None,
) -> str:
    """Cache the place, save it under ``intent`` and return the save id.

    Saves that came from a friend's recommendation are also filed under the
    ``recs_from_friends`` board.
    """
    place = await upsert_place(db, card)
    place_id = place.id
    save_id = await save_once(db, user_id, place_id, intent, action, recommendation_id)
    if recommendation_id and intent != RECS_INTENT:
        await save_once(db, user_id, place_id, RECS_INTENT, action, recommendation_id)
    return save_id


async def list_saves(db: AsyncSession, user_id: str) -> list[Save]:
    result = await db.execute(
        select(Save).where(Save.user_id == user_id).order_by(Save.created_at.desc())
    )
    return list(result.unique().scalars().all())


async def remove_place(db: AsyncSession, user_id: str, google_place_id: str) -> int:
    """Delete every save of a place for the user; returns the number removed."""
    place = await get_place_by_google_id(db, google_place_id)
    if place is None:
        raise NotFoundError("Not found")
    result = await db.execute(
        delete(Save).where(Save.user_id == user_id, Save.place_id == place.id)
    )
    await db.commit()
    return result.rowcount or 0
