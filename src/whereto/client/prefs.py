"""User preferences blob, read before first render to pick the colour scheme."""

from __future__ import annotations

import json
from typing import Literal

from whereto.client.storage import KeyValueStorage

PREFS_KEY = "whereto_prefs"

Theme = Literal["light", "dark", "system"]
_THEMES = ("light", "dark", "system")


class Preferences:
    def __init__(self, storage: KeyValueStorage) -> None:
        self.storage = storage

    def _load(self) -> dict:
        raw = self.storage.get_item(PREFS_KEY)
        if not raw:
            return {}
        try:
            data = json.loads(raw)
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}

    @property
    def theme(self) -> Theme:
        value = self._load().get("theme")
        return value if value in _THEMES else "system"

    def set_theme(self, theme: Theme) -> None:
        """Store the theme, keeping any other preference keys."""
        if theme not in _THEMES:
            raise ValueError(f"Unknown theme: {theme!r}")
        prefs = self._load()
        prefs["theme"] = theme
        self.storage.set_item(PREFS_KEY, json.dumps(prefs))

    def resolve_theme(self, system_prefers_dark: bool) -> Literal["light", "dark"]:
        theme = self.theme
        if theme == "system":
            return "dark" if system_prefers_dark else "light"
        return theme
