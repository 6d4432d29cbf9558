"""Per-user activity counters that badge thresholds are checked against."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import TYPE_CHECKING

from sqlalchemy import func, or_, select

from whereto.badges.definitions import Metric
from whereto.db.models import Friendship, Place, Recommendation, Save, Visit
from whereto.places.neighborhoods import neighborhood_for
from whereto.timeutil import utc_day

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


@dataclass(frozen=True)
class StatsSnapshot:
    visited_places_count: int = 0
    neighborhoods_explored_count: int = 0
    friends_count: int = 0
    saves_count: int = 0
    recommendations_sent_count: int = 0
    current_streak: int = 0
    all_intents_count: int = 0

    def value(self, metric: Metric) -> int:
        return {
            Metric.VISITS: self.visited_places_count,
            Metric.NEIGHBORHOODS: self.neighborhoods_explored_count,
            Metric.FRIENDS: self.friends_count,
            Metric.SAVES: self.saves_count,
            Metric.RECOMMENDATIONS: self.recommendations_sent_count,
            Metric.STREAK: self.current_streak,
            Metric.UNIQUE_INTENTS: self.all_intents_count,
        }[metric]

    def progress(self) -> dict[str, int]:
        """Counters keyed by metric name, as shown on the badges page."""
        return {metric.value: self.value(metric) for metric in Metric}


def compute_streak(days: Iterable[date], today: date) -> int:
    """Count consecutive active days ending today or yesterday.

    A most recent active day older than yesterday means the streak is broken.
    """
    active = set(days)
    if today in active:
        cursor = today
    elif today - timedelta(days=1) in active:
        cursor = today - timedelta(days=1)
    else:
        return 0

    streak = 0
    while cursor in active:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


async def compute_stats(db: AsyncSession, user_id: str, *, today: date | None = None) -> StatsSnapshot:
    """Read-only snapshot of a user's activity; users with no activity get zeros."""
    visit_rows = (
        await db.execute(
            select(Visit.place_id, Visit.created_at, Place.lat, Place.lng)
            .join(Place, Place.id == Visit.place_id)
            .where(Visit.user_id == user_id)
        )
    ).all()

    neighborhoods: set[str] = set()
    for row in visit_rows:
        if row.lat is None or row.lng is None:
            continue
        hood = neighborhood_for(row.lat, row.lng)
        if hood is not None:
            neighborhoods.add(hood.name)

    friends_count = (
        await db.execute(
            select(func.count())
            .select_from(Friendship)
            .where(
                Friendship.status == "accepted",
                or_(Friendship.sender_id == user_id, Friendship.receiver_id == user_id),
            )
        )
    ).scalar_one()

    recs_sent = (
        await db.execute(
            select(func.count()).select_from(Recommendation).where(Recommendation.sender_id == user_id)
        )
    ).scalar_one()

    save_rows = (
        await db.execute(select(Save.intent, Save.created_at).where(Save.user_id == user_id))
    ).all()

    activity_days = {utc_day(r.created_at) for r in save_rows}
    activity_days.update(utc_day(r.created_at) for r in visit_rows)
    if today is None:
        today = datetime.now(timezone.utc).date()

    return StatsSnapshot(
        visited_places_count=len({r.place_id for r in visit_rows}),
        neighborhoods_explored_count=len(neighborhoods),
        friends_count=friends_count,
        saves_count=len(save_rows),
        recommendations_sent_count=recs_sent,
        current_streak=compute_streak(activity_days, today),
        all_intents_count=len({r.intent for r in save_rows}),
    )
