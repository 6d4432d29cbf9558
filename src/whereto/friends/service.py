"""Friend requests and the accepted-friendship check."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import and_, or_, select

from whereto.db.models import Friendship, User
from whereto.errors import ConflictError, ForbiddenError, InvalidInputError, NotFoundError

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

PENDING = "pending"
ACCEPTED = "accepted"
DECLINED = "declined"


def _between(a: str, b: str):
    return or_(
        and_(Friendship.sender_id == a, Friendship.receiver_id == b),
        and_(Friendship.sender_id == b, Friendship.receiver_id == a),
    )


async def are_friends(db: AsyncSession, user_id: str, other_id: str) -> bool:
    """True when an accepted friendship exists in either direction."""
    result = await db.execute(
        select(Friendship.id).where(Friendship.status == ACCEPTED, _between(user_id, other_id)).limit(1)
    )
    return result.scalar_one_or_none() is not None


async def list_friendships(db: AsyncSession, user_id: str) -> tuple[list[Friendship], list[Friendship], list[Friendship]]:
    """(accepted, incoming pending, outgoing pending), newest first."""
    result = await db.execute(
        select(Friendship)
        .where(or_(Friendship.sender_id == user_id, Friendship.receiver_id == user_id))
        .order_by(Friendship.created_at.desc())
    )
    rows = result.scalars().all()
    accepted = [f for f in rows if f.status == ACCEPTED]
    incoming = [f for f in rows if f.status == PENDING and f.receiver_id == user_id]
    outgoing = [f for f in rows if f.status == PENDING and f.sender_id == user_id]
    return accepted, incoming, outgoing


async def send_request(db: AsyncSession, sender_id: str, email: str) -> tuple[Friendship, bool]:
    """Send a friend request by email.

    Returns the friendship and whether it was newly created. A previously
    declined request is reopened with the caller as sender.
    """
    result = await db.execute(select(User).where(User.email == email.strip().lower()))
    target = result.scalar_one_or_none()
    if target is None:
        raise NotFoundError("No user found with that email")
    if target.id == sender_id:
        raise InvalidInputError("You can't add yourself")

    result = await db.execute(select(Friendship).where(_between(sender_id, target.id)))
    existing = result.scalars().first()
    if existing is not None:
        if existing.status == ACCEPTED:
            raise ConflictError("Already friends")
        if existing.status == PENDING:
            raise ConflictError("Friend request already sent")
        existing.status = PENDING
        existing.sender_id = sender_id
        existing.receiver_id = target.id
        existing.created_at = datetime.now(timezone.utc)
        await db.commit()
        return existing, False

    friendship = Friendship(sender_id=sender_id, receiver_id=target.id, status=PENDING)
    db.add(friendship)
    await db.commit()
    return friendship, True


async def _get_friendship(db: AsyncSession, friendship_id: str) -> Friendship:
    friendship = await db.get(Friendship, friendship_id)
    if friendship is None:
        raise NotFoundError("Not found")
    return friendship


async def respond(db: AsyncSession, user_id: str, friendship_id: str, action: str) -> Friendship:
    """Accept or decline; only the receiver may respond."""
    friendship = await _get_friendship(db, friendship_id)
    if friendship.receiver_id != user_id:
        raise ForbiddenError("Forbidden")
    friendship.status = ACCEPTED if action == "accept" else DECLINED
    await db.commit()
    return friendship


async def remove(db: AsyncSession, user_id: str, friendship_id: str) -> None:
    """Unfriend, cancel or withdraw; either party may do so."""
    friendship = await _get_friendship(db, friendship_id)
    if user_id not in (friendship.sender_id, friendship.receiver_id):
        raise ForbiddenError("Forbidden")
    await db.delete(friendship)
    await db.commit()
