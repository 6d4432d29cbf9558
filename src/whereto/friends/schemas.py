"""Pydantic schemas for friendship endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from whereto.schemas import CamelModel


class FriendEntry(CamelModel):
    friendship_id: str
    user_id: str
    name: str | None = None
    email: str | None = None
    image: str | None = None
    friends_since: datetime


class PendingRequest(CamelModel):
    friendship_id: str
    user_id: str
    name: str | None = None
    email: str | None = None
    image: str | None = None
    sent_at: datetime


class FriendsResponse(CamelModel):
    friends: list[FriendEntry]
    incoming: list[PendingRequest]
    outgoing: list[PendingRequest]


class FriendRequestIn(CamelModel):
    email: str = Field(..., min_length=1)


class FriendshipRef(CamelModel):
    friendship_id: str


class FriendshipAction(FriendshipRef):
    action: Literal["accept", "decline"]


class FriendshipResponse(CamelModel):
    friendship_id: str
    status: str | None = None
