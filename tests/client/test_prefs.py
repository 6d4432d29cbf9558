"""Theme preference."""

from __future__ import annotations

import json

import pytest

from whereto.client.prefs import PREFS_KEY, Preferences
from whereto.client.storage import MemoryStorage


class TestPreferences:
    def test_defaults_to_system(self):
        prefs = Preferences(MemoryStorage())

        assert prefs.theme == "system"
        assert prefs.resolve_theme(system_prefers_dark=True) == "dark"
        assert prefs.resolve_theme(system_prefers_dark=False) == "light"

    def test_explicit_theme_wins(self):
        prefs = Preferences(MemoryStorage())
        prefs.set_theme("light")

        assert prefs.resolve_theme(system_prefers_dark=True) == "light"

    def test_other_keys_are_kept(self):
        storage = MemoryStorage({PREFS_KEY: json.dumps({"units": "km"})})

        Preferences(storage).set_theme("dark")

        assert json.loads(storage.get_item(PREFS_KEY)) == {"units": "km", "theme": "dark"}

    def test_rejects_unknown_theme(self):
        with pytest.raises(ValueError):
            Preferences(MemoryStorage()).set_theme("sepia")

    @pytest.mark.parametrize("raw", ["{broken", "[]", json.dumps({"theme": "neon"})])
    def test_bad_stored_value_falls_back(self, raw):
        assert Preferences(MemoryStorage({PREFS_KEY: raw})).theme == "system"
