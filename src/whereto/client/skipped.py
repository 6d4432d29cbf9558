"""Per-intent sets of dismissed place ids, stored together under one key.

Reads degrade to an empty set and writes are best-effort.
"""

from __future__ import annotations

import json
import logging

from whereto.client.storage import KeyValueStorage

logger = logging.getLogger(__name__)

SKIPPED_KEY = "whereto_skipped"


class SkippedPlaces:
    def __init__(self, storage: KeyValueStorage) -> None:
        self.storage = storage

    def _read_all(self) -> dict[str, list[str]]:
        raw = self.storage.get_item(SKIPPED_KEY)
        if not raw:
            return {}
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError(f"{SKIPPED_KEY} is not an object")
        return data

    def load(self, intent_id: str) -> set[str]:
        try:
            ids = self._read_all().get(intent_id) or []
            return {i for i in ids if isinstance(i, str)}
        except (ValueError, TypeError):
            return set()

    def persist(self, intent_id: str, place_ids: set[str]) -> None:
        try:
            all_sets = self._read_all()
        except (ValueError, TypeError):
            all_sets = {}
        all_sets[intent_id] = sorted(place_ids)
        try:
            self.storage.set_item(SKIPPED_KEY, json.dumps(all_sets))
        except OSError:
            logger.warning("Could not persist skipped places for %s", intent_id, exc_info=True)

    def clear(self, intent_id: str) -> None:
        try:
            all_sets = self._read_all()
            if intent_id not in all_sets:
                return
            del all_sets[intent_id]
            self.storage.set_item(SKIPPED_KEY, json.dumps(all_sets))
        except (ValueError, TypeError, OSError):
            logger.warning("Could not clear skipped places for %s", intent_id, exc_info=True)
