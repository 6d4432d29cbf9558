"""Creator directory, creator profile and follows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy import delete, func, select

from whereto.curated_lists.service import ListRow, lists_by_creator
from whereto.db.conflicts import commit_unless_conflict
from whereto.db.models import Follow, Save, User, Visit
from whereto.errors import InvalidInputError, NotFoundError
from whereto.users.service import get_user

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


def normalize_handle(handle: str | None) -> str | None:
    """'name' -> '@name'; empty -> None."""
    if not handle:
        return None
    return handle if handle.startswith("@") else f"@{handle}"


async def list_creators(db: AsyncSession) -> list[tuple[User, int]]:
    """Creators with their follower counts, most followed first."""
    follower_count = func.count(Follow.id).label("follower_count")
    result = await db.execute(
        select(User, follower_count)
        .outerjoin(Follow, Follow.following_id == User.id)
        .where(User.is_creator.is_(True))
        .group_by(User.id)
        .order_by(follower_count.desc(), User.created_at)
    )
    return [(user, count) for user, count in result.all()]


async def update_creator_profile(db: AsyncSession, user_id: str, changes: dict) -> User:
    """Apply a partial profile update.

    The bio is only touched when present in `changes`; handles are always
    rewritten, so an omitted handle clears it.
    """
    user = await get_user(db, user_id)
    if "creator_bio" in changes:
        user.creator_bio = changes["creator_bio"]
    user.instagram_handle = normalize_handle(changes.get("instagram_handle"))
    user.tiktok_handle = normalize_handle(changes.get("tiktok_handle"))
    await db.commit()
    return user


async def follower_count(db: AsyncSession, user_id: str) -> int:
    result = await db.execute(
        select(func.count()).select_from(Follow).where(Follow.following_id == user_id)
    )
    return result.scalar_one()


async def follow(db: AsyncSession, follower_id: str, following_id: str) -> int:
    """Follow a user (idempotent) and return their follower count."""
    if follower_id == following_id:
        raise InvalidInputError("Cannot follow yourself")
    existing = await db.execute(
        select(Follow.id).where(Follow.follower_id == follower_id, Follow.following_id == following_id)
    )
    if existing.scalar_one_or_none() is None:
        db.add(Follow(follower_id=follower_id, following_id=following_id))
        await commit_unless_conflict(db)
    return await follower_count(db, following_id)


async def unfollow(db: AsyncSession, follower_id: str, following_id: str) -> int:
    await db.execute(
        delete(Follow).where(Follow.follower_id == follower_id, Follow.following_id == following_id)
    )
    await db.commit()
    return await follower_count(db, following_id)


@dataclass
class CreatorProfile:
    user: User
    followers: int
    following: int
    saved_count: int
    visited_count: int
    is_following: bool
    saves: list[Save]
    lists: list[ListRow]

    def boards(self) -> list[tuple[str, list[Save]]]:
        """Saves grouped by intent, largest board first."""
        grouped: dict[str, list[Save]] = {}
        for save in self.saves:
            grouped.setdefault(save.intent or "uncategorized", []).append(save)
        return sorted(grouped.items(), key=lambda board: len(board[1]), reverse=True)


async def _count(db: AsyncSession, model, column, user_id: str) -> int:
    result = await db.execute(select(func.count()).select_from(model).where(column == user_id))
    return result.scalar_one()


async def get_creator_profile(db: AsyncSession, creator_id: str, viewer_id: str | None) -> CreatorProfile:
    """Public profile of a creator; drafts are only included for the creator."""
    user = await db.get(User, creator_id)
    if user is None or not user.is_creator:
        raise NotFoundError("Creator not found")

    is_following = False
    if viewer_id is not None:
        result = await db.execute(
            select(Follow.id).where(Follow.follower_id == viewer_id, Follow.following_id == creator_id)
        )
        is_following = result.scalar_one_or_none() is not None

    result = await db.execute(
        select(Save).where(Save.user_id == creator_id).order_by(Save.created_at.desc())
    )
    saves = list(result.unique().scalars().all())

    lists = await lists_by_creator(db, creator_id)
    if viewer_id != creator_id:
        lists = [row for row in lists if row.list.is_public]

    return CreatorProfile(
        user=user,
        followers=await follower_count(db, creator_id),
        following=await _count(db, Follow, Follow.follower_id, creator_id),
        saved_count=len(saves),
        visited_count=await _count(db, Visit, Visit.user_id, creator_id),
        is_following=is_following,
        saves=saves,
        lists=lists,
    )
