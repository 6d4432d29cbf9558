"""Pydantic schemas for creator and follow endpoints."""

from __future__ import annotations

from pydantic import Field

from whereto.curated_lists.schemas import CuratedListSummary
from whereto.places.schemas import SavedPlaceOut
from whereto.schemas import CamelModel


class CreatorSummary(CamelModel):
    id: str
    name: str | None = None
    image: str | None = None
    creator_bio: str | None = None
    follower_count: int


class CreatorProfileUpdate(CamelModel):
    creator_bio: str | None = None
    instagram_handle: str | None = None
    tiktok_handle: str | None = None


class CreatorProfileResponse(CamelModel):
    success: bool = True
    creator_bio: str | None = None


class FollowRequest(CamelModel):
    user_id: str = Field(..., min_length=1)


class FollowResponse(CamelModel):
    success: bool = True
    follower_count: int


class CreatorDetail(CamelModel):
    id: str
    name: str | None = None
    image: str | None = None
    creator_bio: str | None = None
    instagram_handle: str | None = None
    tiktok_handle: str | None = None
    followers: int
    following: int
    saved_count: int
    visited_count: int
    is_following: bool = False


class IntentBoard(CamelModel):
    intent: str
    items: list[SavedPlaceOut]


class CreatorProfile(CamelModel):
    creator: CreatorDetail
    recent_saves: list[SavedPlaceOut]
    boards: list[IntentBoard]
    lists: list[CuratedListSummary]
