"""Pydantic schemas for curated list endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from whereto.places.schemas import PlaceCard
from whereto.schemas import CamelModel


class CuratedListCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=128)
    description: str | None = None
    category: str = Field(..., min_length=1, max_length=64)


class CuratedListUpdate(CamelModel):
    title: str | None = Field(default=None, min_length=1, max_length=128)
    description: str | None = None
    category: str | None = Field(default=None, min_length=1, max_length=64)
    is_public: bool | None = None


class CreatorRef(CamelModel):
    id: str
    name: str | None = None
    image: str | None = None


class ListStats(CamelModel):
    places: int
    saves: int


class CuratedListOut(CamelModel):
    id: str
    title: str
    description: str | None = None
    category: str
    is_public: bool
    created_at: datetime
    updated_at: datetime


class CuratedListSummary(CamelModel):
    id: str
    title: str
    description: str | None = None
    category: str
    is_public: bool
    created_at: datetime
    creator: CreatorRef | None = None
    stats: ListStats
    hero_image: str | None = None


class ListItemOut(CamelModel):
    id: str
    list_id: str
    note: str | None = None
    position: int
    place: PlaceCard


class CuratedListDetail(CuratedListSummary):
    items: list[ListItemOut]
    has_saved: bool = False


class ListEnvelope(CamelModel):
    list: CuratedListOut


class ListsResponse(CamelModel):
    lists: list[CuratedListSummary]


class ListDetailResponse(CamelModel):
    list: CuratedListDetail


class AddItemRequest(CamelModel):
    place_id: str | None = None
    note: str | None = None


class ItemResponse(CamelModel):
    item: ListItemOut
