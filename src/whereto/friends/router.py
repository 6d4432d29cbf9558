"""Friendship endpoints and the friend's-saves view."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from whereto.auth.dependencies import require_session
from whereto.auth.sessions import Session
from whereto.database import get_session
from whereto.errors import ForbiddenError
from whereto.friends import service
from whereto.friends.schemas import (
    FriendEntry,
    FriendRequestIn,
    FriendshipAction,
    FriendshipRef,
    FriendshipResponse,
    FriendsResponse,
    PendingRequest,
)
from whereto.places.schemas import SavedPlaceOut
from whereto.places.service import saved_place
from whereto.saves.service import list_saves
from whereto.schemas import OkResponse

router = APIRouter(prefix="/api/friends", tags=["Friends"])


@router.get("", response_model=FriendsResponse)
async def get_friends(
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    """Accepted friends plus pending incoming and outgoing requests."""
    me = session.user_id
    accepted, incoming, outgoing = await service.list_friendships(db, me)

    friends = []
    for f in accepted:
        other = f.receiver if f.sender_id == me else f.sender
        friends.append(FriendEntry(
            friendship_id=f.id,
            user_id=other.id,
            name=other.name,
            email=other.email,
            image=other.image,
            friends_since=f.created_at,
        ))

    return FriendsResponse(
        friends=friends,
        incoming=[
            PendingRequest(
                friendship_id=f.id,
                user_id=f.sender.id,
                name=f.sender.name,
                email=f.sender.email,
                image=f.sender.image,
                sent_at=f.created_at,
            )
            for f in incoming
        ],
        outgoing=[
            PendingRequest(
                friendship_id=f.id,
                user_id=f.receiver.id,
                name=f.receiver.name,
                email=f.receiver.email,
                image=f.receiver.image,
                sent_at=f.created_at,
            )
            for f in outgoing
        ],
    )


@router.post("", response_model=FriendshipResponse)
async def send_friend_request(
    body: FriendRequestIn,
    response: Response,
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    friendship, created = await service.send_request(db, session.user_id, body.email)
    if created:
        response.status_code = 201
    return FriendshipResponse(friendship_id=friendship.id, status=friendship.status)


@router.patch("", response_model=FriendshipResponse)
async def respond_to_request(
    body: FriendshipAction,
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    friendship = await service.respond(db, session.user_id, body.friendship_id, body.action)
    return FriendshipResponse(friendship_id=friendship.id, status=friendship.status)


@router.delete("", response_model=OkResponse)
async def remove_friend(
    body: FriendshipRef,
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    await service.remove(db, session.user_id, body.friendship_id)
    return OkResponse()


@router.get("/{friend_id}/saves", response_model=list[SavedPlaceOut])
async def get_friend_saves(
    friend_id: str,
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    """A friend's saved places; only visible to accepted friends."""
    if not await service.are_friends(db, session.user_id, friend_id):
        raise ForbiddenError("Not friends")
    saves = await list_saves(db, friend_id)
    return [saved_place(s, with_recommendation=False) for s in saves]
