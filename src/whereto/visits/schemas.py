"""Pydantic schemas for visit endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from whereto.schemas import CamelModel


class VisitRequest(CamelModel):
    place_id: str = Field(..., min_length=1)
    lat: float
    lng: float
    method: Literal["go_now", "manual"] = "manual"


class VisitCreatedResponse(CamelModel):
    visit_id: str
    name: str
    verified_at: datetime


class VisitResponse(CamelModel):
    visit_id: str
    place_id: str
    name: str
    address: str | None = None
    lat: float | None = None
    lng: float | None = None
    photo_ref: str | None = None
    rating: float = 0
    price: str
    method: str
    verified_at: datetime
