"""Pydantic schemas for the friends activity feed."""

from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, Literal

from pydantic import Field

from whereto.places.schemas import PlaceCard
from whereto.schemas import CamelModel


class SaveGroupItem(CamelModel):
    id: str
    type: Literal["save_group"] = "save_group"
    actor_id: str
    actor_name: str | None = None
    actor_image: str | None = None
    created_at: datetime
    day: date
    places: list[PlaceCard]


class RecommendationItem(CamelModel):
    id: str
    type: Literal["recommendation"] = "recommendation"
    actor_id: str
    actor_name: str | None = None
    actor_image: str | None = None
    place: PlaceCard
    note: str | None = None
    created_at: datetime


FeedItem = Annotated[SaveGroupItem | RecommendationItem, Field(discriminator="type")]
