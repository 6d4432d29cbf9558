"""Friend-to-friend recommendations."""

from __future__ import annotations

import pytest
import pytest_asyncio

from whereto.db.models import Friendship, Recommendation


@pytest_asyncio.fixture
async def bob(db_session, user, make_user):
    bob = await make_user(email="bob@example.com", name="Bob")
    db_session.add(Friendship(sender_id=user.id, receiver_id=bob.id, status="accepted"))
    await db_session.commit()
    return bob


class TestRecommendationsApi:
    @pytest.mark.asyncio
    async def test_recommend_and_receive(self, client, user, bob, make_place, headers_for):
        await make_place(google_place_id="ChIJ-rec", name="Rec Spot")

        created = await client.post(
            "/api/recommendations",
            json={"receiverId": bob.id, "googlePlaceId": "ChIJ-rec", "note": "  try the tacos "},
            headers=headers_for(user.id),
        )
        assert created.status_code == 201

        received = (await client.get("/api/recommendations", headers=headers_for(bob.id))).json()
        assert len(received) == 1
        assert received[0]["recommendationId"] == created.json()["recommendationId"]
        assert received[0]["note"] == "try the tacos"
        assert received[0]["sender"]["name"] == "Alice"
        assert received[0]["place"]["placeId"] == "ChIJ-rec"

    @pytest.mark.asyncio
    async def test_recommend_errors(self, authed_client, user, make_user, make_place, bob):
        stranger = await make_user()
        await make_place(google_place_id="ChIJ-rec")

        own = await authed_client.post("/api/recommendations", json={"receiverId": user.id, "googlePlaceId": "ChIJ-rec"})
        not_friend = await authed_client.post(
            "/api/recommendations", json={"receiverId": stranger.id, "googlePlaceId": "ChIJ-rec"}
        )
        no_place = await authed_client.post("/api/recommendations", json={"receiverId": bob.id, "googlePlaceId": "ChIJ-none"})

        assert own.status_code == 400
        assert not_friend.status_code == 403
        assert no_place.status_code == 404

    @pytest.mark.asyncio
    async def test_mark_seen_and_unseen_count(self, client, db_session, user, bob, make_place, headers_for):
        place = await make_place()
        first = Recommendation(sender_id=user.id, receiver_id=bob.id, place_id=place.id)
        second = Recommendation(sender_id=user.id, receiver_id=bob.id, place_id=place.id)
        db_session.add_all([first, second])
        await db_session.commit()
        first_id = first.id
        bob_headers = headers_for(bob.id)

        assert (await client.get("/api/recommendations/unseen-count", headers=bob_headers)).json() == {"count": 2}

        await client.patch("/api/recommendations", json={"ids": [first_id]}, headers=bob_headers)

        assert (await client.get("/api/recommendations/unseen-count", headers=bob_headers)).json() == {"count": 1}
        unseen = (await client.get("/api/recommendations", headers=bob_headers)).json()
        everything = (await client.get("/api/recommendations?all=true", headers=bob_headers)).json()
        assert len(unseen) == 1
        assert len(everything) == 2

    @pytest.mark.asyncio
    async def test_unseen_count_anonymous(self, client):
        response = await client.get("/api/recommendations/unseen-count")
        assert response.status_code == 200
        assert response.json() == {"count": 0}

    @pytest.mark.asyncio
    async def test_dismiss(self, client, db_session, user, bob, make_place, headers_for):
        place = await make_place()
        rec = Recommendation(sender_id=user.id, receiver_id=bob.id, place_id=place.id)
        db_session.add(rec)
        await db_session.commit()
        rec_id = rec.id

        by_sender = await client.delete(f"/api/recommendations/{rec_id}", headers=headers_for(user.id))
        by_receiver = await client.delete(f"/api/recommendations/{rec_id}", headers=headers_for(bob.id))
        again = await client.delete(f"/api/recommendations/{rec_id}", headers=headers_for(bob.id))

        assert by_sender.status_code == 403
        assert by_receiver.json() == {"ok": True}
        assert again.status_code == 404
