"""Authenticated save endpoints."""

from __future__ import annotations

import pytest
from sqlalchemy import func, select

from whereto.db.models import Recommendation, Save


def card_json(make_card, **overrides) -> dict:
    return make_card(**overrides).model_dump(mode="json", by_alias=True)


async def save_count(db_session) -> int:
    result = await db_session.execute(select(func.count()).select_from(Save))
    return result.scalar_one()


class TestSavesApi:
    @pytest.mark.asyncio
    async def test_requires_session(self, client, make_card):
        response = await client.post("/api/saves", json={"place": card_json(make_card), "intent": "study"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_duplicate_save_is_a_noop(self, authed_client, db_session, make_card):
        body = {"place": card_json(make_card), "intent": "study", "action": "save"}

        first = await authed_client.post("/api/saves", json=body)
        second = await authed_client.post("/api/saves", json=body)

        assert first.status_code == 200
        assert second.status_code == 200
        assert first.json()["saveId"] == second.json()["saveId"]
        assert await save_count(db_session) == 1

    @pytest.mark.asyncio
    async def test_same_place_under_two_intents(self, authed_client, db_session, make_card):
        await authed_client.post("/api/saves", json={"place": card_json(make_card), "intent": "study"})
        await authed_client.post("/api/saves", json={"place": card_json(make_card), "intent": "date"})

        assert await save_count(db_session) == 2
        listing = (await authed_client.get("/api/saves")).json()
        assert {s["intent"] for s in listing} == {"study", "date"}

    @pytest.mark.asyncio
    async def test_list_shape(self, authed_client, make_card):
        await authed_client.post("/api/saves", json={"place": card_json(make_card), "intent": "study"})

        response = await authed_client.get("/api/saves")

        assert response.status_code == 200
        [saved] = response.json()
        assert saved["placeId"] == "ChIJ-cafe-1"
        assert saved["price"] == "$$"
        assert saved["location"] == {"lat": 43.648, "lng": -79.3816}
        assert saved["openNow"] is False
        assert saved["hours"] == []
        assert isinstance(saved["savedAt"], int)
        assert saved["recommenderNote"] is None

    @pytest.mark.asyncio
    async def test_save_from_recommendation_files_under_recs(
        self, authed_client, db_session, user, make_user, make_place, make_card
    ):
        friend = await make_user(name="Bob", image="https://img/bob.png")
        place = await make_place(google_place_id="ChIJ-cafe-1")
        rec = Recommendation(sender_id=friend.id, receiver_id=user.id, place_id=place.id, note="Try the latte")
        db_session.add(rec)
        await db_session.commit()

        response = await authed_client.post(
            "/api/saves",
            json={"place": card_json(make_card), "intent": "study", "recommendationId": rec.id},
        )

        assert response.status_code == 200
        listing = (await authed_client.get("/api/saves")).json()
        assert {s["intent"] for s in listing} == {"study", "recs_from_friends"}
        assert all(s["recommenderNote"] == "Try the latte" for s in listing)
        assert all(s["recommendedByName"] == "Bob" for s in listing)

    @pytest.mark.asyncio
    async def test_delete_removes_every_board(self, authed_client, db_session, make_card):
        await authed_client.post("/api/saves", json={"place": card_json(make_card), "intent": "study"})
        await authed_client.post("/api/saves", json={"place": card_json(make_card), "intent": "date"})

        response = await authed_client.request("DELETE", "/api/saves", json={"placeId": "ChIJ-cafe-1"})

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        assert await save_count(db_session) == 0

    @pytest.mark.asyncio
    async def test_delete_unknown_place(self, authed_client):
        response = await authed_client.request("DELETE", "/api/saves", json={"placeId": "ChIJ-missing"})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_malformed_body_is_400(self, authed_client):
        response = await authed_client.post("/api/saves", json={"intent": "study"})
        assert response.status_code == 400
        assert response.json()["error"] == "Validation error"
