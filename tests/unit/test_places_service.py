"""Place cache upsert and card serialization."""

from __future__ import annotations

import pytest
from sqlalchemy import func, select

from whereto.db.models import Place
from whereto.places.service import level_to_price, place_card, price_to_level, upsert_place


class TestPriceConversion:
    @pytest.mark.parametrize(("price", "level"), [("", None), ("$", 1), ("$$$", 3)])
    def test_price_to_level(self, price, level):
        assert price_to_level(price) == level

    @pytest.mark.parametrize(("level", "price"), [(None, "$"), (0, "$"), (2, "$$"), (4, "$$$$"), (7, "$$$$")])
    def test_level_to_price(self, level, price):
        assert level_to_price(level) == price


class TestUpsertPlace:
    @pytest.mark.asyncio
    async def test_inserts_then_refreshes(self, db_session, make_card):
        first = await upsert_place(db_session, make_card(name="Old Name"))
        second = await upsert_place(db_session, make_card(name="New Name", price="$$$"))

        assert first.id == second.id
        count = await db_session.execute(select(func.count()).select_from(Place))
        assert count.scalar_one() == 1
        row = await db_session.execute(select(Place.name, Place.price_level).where(Place.id == first.id))
        assert tuple(row.one()) == ("New Name", 3)

    @pytest.mark.asyncio
    async def test_card_round_trip_fields(self, db_session, make_card):
        place = await upsert_place(db_session, make_card())
        card = place_card(place)

        assert card.place_id == "ChIJ-cafe-1"
        assert card.price == "$$"
        assert card.location is not None
        assert card.location.lat == pytest.approx(43.6480)
        assert card.photo_refs == ["places/ChIJ-cafe-1/photos/abc"]
        assert card.tags == ["cozy", "wifi"]
        assert card.open_now is False
        assert card.hours == []
        assert card.distance == ""
