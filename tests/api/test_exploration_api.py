"""Neighbourhood exploration stats and the new-neighbourhood check."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from whereto.db.models import Visit
from whereto.places.neighborhoods import NEIGHBORHOODS

SCARBOROUGH = {"lat": 43.7764, "lng": -79.2578}
OUTSIDE_CITY = {"lat": 43.9, "lng": -79.0}


class TestExplorationStats:
    @pytest.mark.asyncio
    async def test_requires_session(self, client):
        response = await client.get("/api/exploration-stats")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_new_user_has_explored_nothing(self, authed_client):
        response = await authed_client.get("/api/exploration-stats")

        assert response.status_code == 200
        data = response.json()
        assert data["totalNeighborhoods"] == len(NEIGHBORHOODS)
        assert data["exploredCount"] == 0
        assert data["percentage"] == 0
        assert all(not n["explored"] and n["firstVisitDate"] is None for n in data["neighborhoods"])

    @pytest.mark.asyncio
    async def test_counts_visits_per_neighborhood(self, authed_client, db_session, user, make_place):
        cafe = await make_place()
        bar = await make_place()
        diner = await make_place(lat=43.6485, lng=-79.3810)
        mall = await make_place(**SCARBOROUGH)
        nowhere = await make_place(**OUTSIDE_CITY)
        first = datetime(2026, 3, 1, 12, tzinfo=timezone.utc)
        db_session.add_all([
            Visit(user_id=user.id, place_id=cafe.id, verified_at=first),
            Visit(user_id=user.id, place_id=diner.id, verified_at=first + timedelta(days=2)),
            Visit(user_id=user.id, place_id=bar.id, verified_at=first + timedelta(days=1)),
            Visit(user_id=user.id, place_id=mall.id, verified_at=first),
            Visit(user_id=user.id, place_id=nowhere.id, verified_at=first),
        ])
        await db_session.commit()

        data = (await authed_client.get("/api/exploration-stats")).json()

        assert data["exploredCount"] == 2
        assert data["percentage"] == round(2 / len(NEIGHBORHOODS) * 100)
        hoods = {n["name"]: n for n in data["neighborhoods"]}
        financial = hoods["Financial District"]
        assert financial["explored"] is True
        assert financial["area"] == "Downtown"
        assert financial["visitCount"] == 3
        assert financial["uniquePlaceCount"] == 3
        assert financial["firstVisitDate"].startswith("2026-03-01T12:00:00")
        assert hoods["Scarborough Town Centre"]["visitCount"] == 1


class TestCheckNewNeighborhood:
    @pytest.mark.asyncio
    async def test_missing_place_id(self, authed_client):
        response = await authed_client.get("/api/exploration-stats/check-new-neighborhood")

        assert response.status_code == 400
        assert response.json() == {"error": "Missing placeId parameter"}

    @pytest.mark.asyncio
    async def test_unknown_place(self, authed_client):
        response = await authed_client.get(
            "/api/exploration-stats/check-new-neighborhood", params={"placeId": "ChIJ-ghost"}
        )

        assert response.status_code == 404
        assert response.json() == {"error": "Place not found in database"}

    @pytest.mark.asyncio
    async def test_first_visit_unlocks_neighborhood(self, authed_client, db_session, user, make_place):
        mall = await make_place(**SCARBOROUGH)
        cafe = await make_place()
        db_session.add_all([
            Visit(user_id=user.id, place_id=cafe.id),
            Visit(user_id=user.id, place_id=mall.id),
        ])
        await db_session.commit()

        response = await authed_client.get(
            "/api/exploration-stats/check-new-neighborhood", params={"placeId": mall.google_place_id}
        )

        assert response.json() == {
            "isNewNeighborhood": True,
            "neighborhood": {"name": "Scarborough Town Centre", "area": "Scarborough"},
            "totalExplored": 2,
            "totalNeighborhoods": len(NEIGHBORHOODS),
        }

    @pytest.mark.asyncio
    async def test_repeat_visit_is_not_new(self, authed_client, db_session, user, make_place):
        cafe = await make_place()
        bar = await make_place()
        db_session.add_all([Visit(user_id=user.id, place_id=p.id) for p in (cafe, bar)])
        await db_session.commit()

        response = await authed_client.get(
            "/api/exploration-stats/check-new-neighborhood", params={"placeId": cafe.google_place_id}
        )

        assert response.json()["isNewNeighborhood"] is False
        assert response.json()["totalExplored"] == 1

    @pytest.mark.asyncio
    async def test_place_outside_tracked_neighborhoods(self, authed_client, make_place):
        nowhere = await make_place(**OUTSIDE_CITY)

        response = await authed_client.get(
            "/api/exploration-stats/check-new-neighborhood", params={"placeId": nowhere.google_place_id}
        )

        assert response.json() == {
            "isNewNeighborhood": False,
            "neighborhood": None,
            "totalExplored": 0,
            "totalNeighborhoods": len(NEIGHBORHOODS),
        }
