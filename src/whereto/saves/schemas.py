"""Pydantic schemas for save endpoints."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from whereto.places.schemas import PlaceIn
from whereto.schemas import CamelModel

SaveAction = Literal["save", "go_now"]


class SaveRequest(CamelModel):
    place: PlaceIn
    intent: str = Field(..., min_length=1, max_length=64)
    action: SaveAction = "save"
    recommendation_id: str | None = None


class SaveResponse(CamelModel):
    save_id: str


class RemoveSaveRequest(CamelModel):
    place_id: str = Field(..., min_length=1)
