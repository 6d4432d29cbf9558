"""Pydantic schemas for account and profile endpoints."""

from __future__ import annotations

from datetime import datetime

from whereto.schemas import CamelModel


class UserResponse(CamelModel):
    created_at: datetime
    is_creator: bool
    username: str | None = None
    display_name: str | None = None
    custom_avatar: str | None = None
    creator_bio: str | None = None


class UsernameAvailability(CamelModel):
    available: bool


class ProfileUpdate(CamelModel):
    """Only the fields present in the request are applied."""

    display_name: str | None = None
    username: str | None = None
    bio: str | None = None
    custom_avatar: str | None = None


class ProfileOut(CamelModel):
    id: str
    display_name: str | None = None
    username: str | None = None
    creator_bio: str | None = None
    custom_avatar: str | None = None


class ProfileResponse(CamelModel):
    user: ProfileOut
