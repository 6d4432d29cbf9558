"""User lookups and profile updates."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from sqlalchemy import select

from whereto.db.conflicts import commit_unless_conflict
from whereto.db.models import User
from whereto.errors import ConflictError, InvalidInputError, NotFoundError

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

USERNAME_RE = re.compile(r"^[a-z0-9_]{3,20}$")
USERNAME_RULES = "Username must be 3-20 characters, lowercase alphanumeric and underscores only."


def normalize_username(raw: str) -> str:
    """Lower-case and trim; raises InvalidInputError if the result is malformed."""
    username = raw.strip().lower()
    if not USERNAME_RE.fullmatch(username):
        raise InvalidInputError(USERNAME_RULES)
    return username


async def get_user(db: AsyncSession, user_id: str) -> User:
    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError("Not found")
    return user


async def username_taken(db: AsyncSession, username: str, *, exclude_user_id: str) -> bool:
    """True when another user holds ``username``; the caller's own never counts."""
    result = await db.execute(
        select(User.id).where(User.username == username, User.id != exclude_user_id).limit(1)
    )
    return result.scalar_one_or_none() is not None


async def update_profile(db: AsyncSession, user_id: str, changes: dict[str, str | None]) -> User:
    """Apply a partial profile update.

    ``changes`` holds only the fields the caller sent. An empty username
    clears it.
    """
    user = await get_user(db, user_id)

    if "username" in changes:
        raw = changes["username"]
        if not raw:
            user.username = None
        else:
            username = normalize_username(raw)
            if await username_taken(db, username, exclude_user_id=user_id):
                raise ConflictError("Username is already taken")
            user.username = username
    if "display_name" in changes:
        user.display_name = changes["display_name"]
    if "bio" in changes:
        user.creator_bio = changes["bio"]
    if "custom_avatar" in changes:
        user.custom_avatar = changes["custom_avatar"]

    if not await commit_unless_conflict(db):
        # lost a race for the same username
        raise ConflictError("Username is already taken")
    return user
