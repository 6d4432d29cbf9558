"""Badge evaluation: award every newly qualified badge exactly once."""

from __future__ import annotations

import json
import logging
from collections.abc import Collection, Sequence
from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import select

from whereto.badges.definitions import BADGE_DEFINITIONS, BadgeDefinition
from whereto.badges.stats import StatsSnapshot, compute_stats
from whereto.db.conflicts import commit_unless_conflict
from whereto.db.models import EarnedBadge

if TYPE_CHECKING:
    from redis.asyncio import Redis
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

BADGE_EARNED_CHANNEL = "pubsub:badge_earned"


def qualifying_badges(
    stats: StatsSnapshot,
    earned: Collection[str],
    definitions: Sequence[BadgeDefinition] = BADGE_DEFINITIONS,
) -> list[BadgeDefinition]:
    """Definitions not yet earned whose metric meets the requirement, in table order."""
    return [
        d for d in definitions
        if d.type not in earned and stats.value(d.metric) >= d.requirement
    ]


async def get_earned_types(db: AsyncSession, user_id: str) -> set[str]:
    result = await db.execute(select(EarnedBadge.badge_type).where(EarnedBadge.user_id == user_id))
    return set(result.scalars().all())


async def check_and_award_badges(
    db: AsyncSession,
    user_id: str,
    redis: Redis | None = None,
    definitions: Sequence[BadgeDefinition] = BADGE_DEFINITIONS,
    *,
    today: date | None = None,
) -> list[str]:
    """Award newly qualified badges and return the types persisted by this call.

    Each award is committed on its own. A uniqueness conflict means a
    concurrent evaluation got there first: it is skipped, not reported.
    Any other database error propagates; awards committed before it stay.
    """
    earned = await get_earned_types(db, user_id)
    stats = await compute_stats(db, user_id, today=today)

    awarded: list[str] = []
    for definition in qualifying_badges(stats, earned, definitions):
        db.add(EarnedBadge(user_id=user_id, badge_type=definition.type))
        if not await commit_unless_conflict(db):
            logger.info("Badge %s already awarded to %s", definition.type, user_id)
            continue
        awarded.append(definition.type)
        await _publish_badge_earned(redis, user_id, definition)

    return awarded


async def _publish_badge_earned(redis: Redis | None, user_id: str, definition: BadgeDefinition) -> None:
    if redis is None:
        return
    try:
        await redis.publish(
            BADGE_EARNED_CHANNEL,
            json.dumps({
                "user_id": user_id,
                "badge_type": definition.type,
                "badge_name": definition.name,
                "category": definition.category.value,
            }),
        )
    except Exception:
        logger.warning("Failed to publish badge_earned notification", exc_info=True)
