"""Friends activity feed: recent friend saves grouped per day, plus received recommendations."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

from sqlalchemy import or_, select

from whereto.activity.schemas import FeedItem, RecommendationItem, SaveGroupItem
from whereto.db.models import Friendship, Recommendation, Save, User
from whereto.places.service import place_card
from whereto.timeutil import as_utc, utc_day

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

WINDOW = timedelta(days=30)
FEED_LIMIT = 25
SAVE_SCAN_LIMIT = 200
RECS_FROM_FRIENDS = "recs_from_friends"


async def friend_ids(db: AsyncSession, user_id: str) -> list[str]:
    result = await db.execute(
        select(Friendship.sender_id, Friendship.receiver_id).where(
            Friendship.status == "accepted",
            or_(Friendship.sender_id == user_id, Friendship.receiver_id == user_id),
        )
    )
    return [receiver if sender == user_id else sender for sender, receiver in result.all()]


def group_saves(rows: list[tuple[Save, User]]) -> list[SaveGroupItem]:
    """One item per (actor, UTC day); places deduplicated within a group.

    `rows` must be newest first, so each group's first save is its latest.
    """
    groups: dict[str, SaveGroupItem] = {}
    for save, actor in rows:
        created_at = as_utc(save.created_at)
        day = utc_day(created_at)
        key = f"{actor.id}_{day.isoformat()}"
        group = groups.get(key)
        if group is None:
            group = SaveGroupItem(
                id=f"save_group_{key}",
                actor_id=actor.id,
                actor_name=actor.name,
                actor_image=actor.image,
                created_at=created_at,
                day=day,
                places=[],
            )
            groups[key] = group
        card = place_card(save.place)
        if all(p.place_id != card.place_id for p in group.places):
            group.places.append(card)
        if created_at > group.created_at:
            group.created_at = created_at
    return list(groups.values())


async def activity_feed(db: AsyncSession, user_id: str, *, now: datetime | None = None) -> list[FeedItem]:
    """Latest friend activity from the last 30 days, newest first."""
    friends = await friend_ids(db, user_id)
    if not friends:
        return []
    since = (now or datetime.now(timezone.utc)) - WINDOW

    save_rows = (
        await db.execute(
            select(Save, User)
            .join(User, User.id == Save.user_id)
            .where(
                Save.user_id.in_(friends),
                Save.created_at >= since,
                Save.intent != RECS_FROM_FRIENDS,
            )
            .order_by(Save.created_at.desc())
            .limit(SAVE_SCAN_LIMIT)
        )
    ).unique().all()

    recs = (
        await db.execute(
            select(Recommendation)
            .where(Recommendation.receiver_id == user_id, Recommendation.created_at >= since)
            .order_by(Recommendation.created_at.desc())
            .limit(FEED_LIMIT)
        )
    ).scalars().all()

    items: list[FeedItem] = list(group_saves([(save, actor) for save, actor in save_rows]))
    items.extend(
        RecommendationItem(
            id=f"rec_{rec.id}",
            actor_id=rec.sender.id,
            actor_name=rec.sender.name,
            actor_image=rec.sender.image,
            place=place_card(rec.place),
            note=rec.note,
            created_at=as_utc(rec.created_at),
        )
        for rec in recs
    )
    items.sort(key=lambda item: item.created_at, reverse=True)
    return items[:FEED_LIMIT]
