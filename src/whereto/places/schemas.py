"""Place payloads shared by saves, friends and recommendations."""

from __future__ import annotations

from pydantic import Field

from whereto.schemas import CamelModel


class Location(CamelModel):
    lat: float
    lng: float


class PlaceIn(CamelModel):
    """Place card as sent by the discovery UI."""

    place_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    address: str = ""
    location: Location
    price: str = ""
    rating: float = 0
    photo_ref: str | None = None
    type: str = ""
    open_now: bool = False
    hours: list[str] = []
    distance: str = ""
    tags: list[str] = []


class PlaceCard(CamelModel):
    """Place card rebuilt from the local cache; live-only fields are blank."""

    place_id: str
    name: str
    address: str | None = None
    location: Location | None = None
    price: str = "$"
    rating: float = 0
    photo_ref: str | None = None
    photo_refs: list[str] = []
    type: str | None = None
    open_now: bool = False
    hours: list[str] = []
    distance: str = ""
    tags: list[str] = []


class SavedPlaceOut(PlaceCard):
    save_id: str
    intent: str
    saved_at: int  # epoch milliseconds
    recommender_note: str | None = None
    recommended_by_name: str | None = None
    recommended_by_image: str | None = None
    recommended_at: str | None = None


class PhotoResponse(CamelModel):
    photo_url: str | None = None
