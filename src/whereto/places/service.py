"""Place cache: upsert from UI cards and rebuild cards from rows."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from sqlalchemy import select

from whereto.db.conflicts import commit_unless_conflict
from whereto.db.models import Place, Save
from whereto.places.schemas import Location, PlaceCard, PlaceIn, SavedPlaceOut
from whereto.timeutil import as_utc, epoch_ms

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger(__name__)

MAX_PRICE_LEVEL = 4


def price_to_level(price: str) -> int | None:
    """'$$' -> 2; empty -> None."""
    if not price:
        return None
    return len(price)


def level_to_price(level: int | None) -> str:
    """2 -> '$$'; unknown levels render as '$'."""
    if not level:
        return "$"
    return "$" * min(level, MAX_PRICE_LEVEL)


async def get_place_by_google_id(db: AsyncSession, google_place_id: str) -> Place | None:
    result = await db.execute(select(Place).where(Place.google_place_id == google_place_id))
    return result.scalar_one_or_none()


def _apply_card(place: Place, card: PlaceIn) -> None:
    place.name = card.name
    place.address = card.address
    place.lat = card.location.lat
    place.lng = card.location.lng
    place.place_type = card.type
    place.price_level = price_to_level(card.price)
    place.rating = card.rating
    place.photo_url = card.photo_ref
    place.vibe_tags = list(card.tags)


async def upsert_place(db: AsyncSession, card: PlaceIn) -> Place:
    """Insert or refresh the cached row for a Google place and commit it.

    A concurrent insert of the same place loses the race on the unique
    google_place_id; the winner's row is then refreshed instead.
    """
    place = await get_place_by_google_id(db, card.place_id)
    if place is None:
        place = Place(google_place_id=card.place_id)
        _apply_card(place, card)
        db.add(place)
        if await commit_unless_conflict(db):
            return place
        logger.info("place_insert_raced", google_place_id=card.place_id)
        place = await get_place_by_google_id(db, card.place_id)
        if place is None:
            msg = f"Place {card.place_id} vanished after conflicting insert"
            raise RuntimeError(msg)

    _apply_card(place, card)
    await db.commit()
    return place


def place_card(place: Place) -> PlaceCard:
    has_location = place.lat is not None and place.lng is not None
    return PlaceCard(
        place_id=place.google_place_id,
        name=place.name,
        address=place.address,
        location=Location(lat=place.lat, lng=place.lng) if has_location else None,
        price=level_to_price(place.price_level),
        rating=place.rating or 0,
        photo_ref=place.photo_url,
        photo_refs=[place.photo_url] if place.photo_url else [],
        type=place.place_type,
        tags=list(place.vibe_tags or []),
    )


def saved_place(save: Save, *, with_recommendation: bool = True) -> SavedPlaceOut:
    """Serialize a save row (with its place) into the client's SavedPlace shape."""
    card = place_card(save.place)
    rec = save.recommendation if with_recommendation else None
    return SavedPlaceOut(
        **card.model_dump(),
        save_id=save.id,
        intent=save.intent,
        saved_at=epoch_ms(save.created_at),
        recommender_note=rec.note if rec else None,
        recommended_by_name=rec.sender.name if rec else None,
        recommended_by_image=rec.sender.image if rec else None,
        recommended_at=as_utc(rec.created_at).isoformat() if rec else None,
    )
