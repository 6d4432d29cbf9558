"""Pydantic schemas for recommendation endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from whereto.places.schemas import PlaceCard
from whereto.schemas import CamelModel


class RecommendationIn(CamelModel):
    receiver_id: str = Field(..., min_length=1)
    google_place_id: str = Field(..., min_length=1)
    note: str | None = None


class RecommendationCreated(CamelModel):
    recommendation_id: str


class SenderSummary(CamelModel):
    name: str | None = None
    image: str | None = None


class RecommendationOut(CamelModel):
    recommendation_id: str
    note: str | None = None
    seen: bool
    created_at: datetime
    sender: SenderSummary
    place: PlaceCard


class MarkSeenRequest(CamelModel):
    ids: list[str] = Field(..., min_length=1)


class CountResponse(CamelModel):
    count: int
