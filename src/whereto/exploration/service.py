"""Neighbourhood exploration progress derived from verified visits."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import select

from whereto.db.models import Place, Visit
from whereto.errors import NotFoundError
from whereto.places.neighborhoods import NEIGHBORHOODS, Neighborhood, neighborhood_for
from whereto.places.service import get_place_by_google_id
from whereto.timeutil import as_utc

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


@dataclass
class HoodTally:
    hood: Neighborhood
    visit_count: int = 0
    place_ids: set[str] = field(default_factory=set)
    first_visit: datetime | None = None

    @property
    def explored(self) -> bool:
        return self.visit_count > 0


async def _visited_hoods(db: AsyncSession, user_id: str) -> list[tuple[Neighborhood, str, datetime]]:
    """(neighbourhood, place id, verified_at) per visit, oldest first; untracked spots are skipped."""
    rows = (
        await db.execute(
            select(Visit.place_id, Visit.verified_at, Place.lat, Place.lng)
            .join(Place, Place.id == Visit.place_id)
            .where(Visit.user_id == user_id)
            .order_by(Visit.verified_at)
        )
    ).all()
    visits = []
    for row in rows:
        if row.lat is None or row.lng is None:
            continue
        hood = neighborhood_for(row.lat, row.lng)
        if hood is not None:
            visits.append((hood, row.place_id, as_utc(row.verified_at)))
    return visits


async def exploration_stats(db: AsyncSession, user_id: str) -> list[HoodTally]:
    """One tally per known neighbourhood, in catalogue order."""
    tallies = {hood.name: HoodTally(hood) for hood in NEIGHBORHOODS}
    for hood, place_id, verified_at in await _visited_hoods(db, user_id):
        tally = tallies[hood.name]
        tally.visit_count += 1
        tally.place_ids.add(place_id)
        if tally.first_visit is None or verified_at < tally.first_visit:
            tally.first_visit = verified_at
    return list(tallies.values())


def explored_percentage(tallies: list[HoodTally]) -> int:
    explored = sum(1 for t in tallies if t.explored)
    return round(explored / len(tallies) * 100) if tallies else 0


async def check_new_neighborhood(
    db: AsyncSession, user_id: str, google_place_id: str
) -> tuple[Neighborhood | None, bool, int]:
    """(neighbourhood, is first visit there, explored count) for a just-visited place.

    Meant to be called after the visit is recorded: exactly one visit in the
    place's neighbourhood means it was unlocked by that visit.
    """
    place = await get_place_by_google_id(db, google_place_id)
    if place is None:
        raise NotFoundError("Place not found in database")
    if place.lat is None or place.lng is None:
        return None, False, 0
    neighborhood = neighborhood_for(place.lat, place.lng)
    if neighborhood is None:
        return None, False, 0

    visits = await _visited_hoods(db, user_id)
    explored = {hood.name for hood, _, _ in visits}
    in_this_hood = sum(1 for hood, _, _ in visits if hood.name == neighborhood.name)
    return neighborhood, in_this_hood == 1, len(explored)
