"""One save interface over two stores.

Anonymous callers save to local storage; signed-in callers save through the
HTTP API. The backend is chosen per call from the current session token and
the two stores are never merged.
"""

from __future__ import annotations

from typing import Protocol

import httpx
import structlog
from pydantic import TypeAdapter

from whereto.client.saved_places import LocalSavedPlace, LocalSavedPlaces
from whereto.client.storage import KeyValueStorage
from whereto.places.schemas import PlaceIn, SavedPlaceOut

logger = structlog.get_logger(__name__)

INTENT_LABELS = {
    "study": "Study / Work",
    "date": "Date / Chill",
    "trending": "Trending Now",
    "quiet": "Quiet Cafes",
    "laptop": "Laptop-Friendly",
    "group": "Group Hangouts",
    "budget": "Budget Eats",
    "coffee": "Coffee & Catch-Up",
    "outdoor": "Outdoor / Patio",
}
RECS_LABEL = "Recs from Friends"

_remote_saves = TypeAdapter(list[SavedPlaceOut])


class SaveFailedError(Exception):
    """The server rejected or could not be reached for a save/remove."""


def saved_message(intent: str, recommendation_id: str | None = None) -> str:
    """Confirmation shown after a successful save."""
    label = RECS_LABEL if recommendation_id else INTENT_LABELS.get(intent, intent)
    return f"Saved to {label}"


class SaveBackend(Protocol):
    async def save(self, place: PlaceIn, intent: str, action: str, recommendation_id: str | None) -> None: ...

    async def remove(self, place_id: str) -> None: ...

    async def is_saved(self, place_id: str) -> bool: ...

    async def list_all(self) -> list[LocalSavedPlace] | list[SavedPlaceOut]: ...


class LocalSaveBackend:
    """Anonymous mode; never raises on corrupted storage."""

    def __init__(self, store: LocalSavedPlaces) -> None:
        self.store = store

    async def save(self, place: PlaceIn, intent: str, action: str, recommendation_id: str | None) -> None:
        self.store.save(place, intent)

    async def remove(self, place_id: str) -> None:
        self.store.remove(place_id)

    async def is_saved(self, place_id: str) -> bool:
        return self.store.is_saved(place_id)

    async def list_all(self) -> list[LocalSavedPlace]:
        return self.store.load()


class RemoteSaveBackend:
    """Signed-in mode; the server is the source of truth."""

    def __init__(self, http: httpx.AsyncClient, token: str) -> None:
        self.http = http
        self.headers = {"Authorization": f"Bearer {token}"}

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = await self.http.request(method, path, headers=self.headers, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("save_request_failed", method=method, path=path, error=str(e))
            raise SaveFailedError("Failed to reach the server") from e
        if response.is_error:
            logger.warning("save_request_rejected", method=method, path=path, status=response.status_code)
            raise SaveFailedError(f"Server answered {response.status_code}")
        return response

    async def save(self, place: PlaceIn, intent: str, action: str, recommendation_id: str | None) -> None:
        body = {
            "place": place.model_dump(mode="json", by_alias=True),
            "intent": intent,
            "action": action,
        }
        if recommendation_id:
            body["recommendationId"] = recommendation_id
        await self._request("POST", "/api/saves", json=body)

    async def remove(self, place_id: str) -> None:
        await self._request("DELETE", "/api/saves", json={"placeId": place_id})

    async def list_all(self) -> list[SavedPlaceOut]:
        response = await self._request("GET", "/api/saves")
        return _remote_saves.validate_python(response.json())

    async def is_saved(self, place_id: str) -> bool:
        return any(s.place_id == place_id for s in await self.list_all())


class SaveOrchestrator:
    def __init__(
        self,
        storage: KeyValueStorage,
        http: httpx.AsyncClient | None = None,
        token: str | None = None,
    ) -> None:
        self.local = LocalSaveBackend(LocalSavedPlaces(storage))
        self.http = http
        self.token = token

    @property
    def authenticated(self) -> bool:
        return bool(self.token)

    def backend(self) -> SaveBackend:
        if self.token:
            if self.http is None:
                raise RuntimeError("Signed-in saves need an HTTP client")
            return RemoteSaveBackend(self.http, self.token)
        return self.local

    def sign_in(self, token: str) -> None:
        self.token = token

    def sign_out(self) -> None:
        self.token = None

    async def save(
        self,
        place: PlaceIn,
        intent: str,
        action: str = "save",
        recommendation_id: str | None = None,
    ) -> str:
        """Save in the current mode and return the confirmation text.

        Saving an already-saved place is a no-op in both modes.
        """
        await self.backend().save(place, intent, action, recommendation_id)
        return saved_message(intent, recommendation_id)

    async def remove(self, place_id: str) -> None:
        await self.backend().remove(place_id)

    async def is_saved(self, place_id: str) -> bool:
        return await self.backend().is_saved(place_id)

    async def list_all(self) -> list[LocalSavedPlace] | list[SavedPlaceOut]:
        return await self.backend().list_all()
