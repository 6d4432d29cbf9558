"""Anonymous saved places, kept most-recent-first under one storage key.

Entries are deduplicated by place id alone; the intent is carried but is
not part of the key. Nothing here raises on bad storage: a malformed
payload reads as empty, malformed entries are dropped, and a failed write
is logged.
"""

from __future__ import annotations

import json
import logging
import time

from pydantic import ValidationError

from whereto.client.storage import KeyValueStorage
from whereto.places.schemas import PlaceIn

logger = logging.getLogger(__name__)

STORAGE_KEY = "whereto_saved_places"


class LocalSavedPlace(PlaceIn):
    intent: str
    saved_at: int  # epoch milliseconds


def _now_ms() -> int:
    return int(time.time() * 1000)


class LocalSavedPlaces:
    def __init__(self, storage: KeyValueStorage) -> None:
        self.storage = storage

    def load(self) -> list[LocalSavedPlace]:
        """Stored entries, skipping any that no longer validate."""
        raw = self.storage.get_item(STORAGE_KEY)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Discarding unparseable %s payload", STORAGE_KEY)
            return []
        if not isinstance(data, list):
            logger.warning("Discarding non-list %s payload", STORAGE_KEY)
            return []

        entries = []
        for item in data:
            try:
                entries.append(LocalSavedPlace.model_validate(item))
            except ValidationError:
                logger.warning("Dropping malformed saved place in %s", STORAGE_KEY)
        return entries

    def _write(self, entries: list[LocalSavedPlace]) -> bool:
        payload = [e.model_dump(mode="json", by_alias=True) for e in entries]
        try:
            self.storage.set_item(STORAGE_KEY, json.dumps(payload))
        except OSError:
            logger.warning("Could not persist %s", STORAGE_KEY, exc_info=True)
            return False
        return True

    def save(self, place: PlaceIn, intent: str) -> bool:
        """Prepend the place unless it is already saved; True if it was stored."""
        entries = self.load()
        if any(e.place_id == place.place_id for e in entries):
            return False
        entry = LocalSavedPlace(**place.model_dump(), intent=intent, saved_at=_now_ms())
        return self._write([entry, *entries])

    def remove(self, place_id: str) -> None:
        entries = self.load()
        self._write([e for e in entries if e.place_id != place_id])

    def is_saved(self, place_id: str) -> bool:
        return any(e.place_id == place_id for e in self.load())
