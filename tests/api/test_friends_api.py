"""Friend requests and the friend's-saves view."""

from __future__ import annotations

import pytest

from whereto.db.models import Friendship, Save


class TestFriendRequests:
    @pytest.mark.asyncio
    async def test_request_accept_flow(self, client, user, make_user, headers_for):
        bob = await make_user(email="bob@example.com", name="Bob")

        sent = await client.post("/api/friends", json={"email": " BOB@example.com "}, headers=headers_for(user.id))
        assert sent.status_code == 201
        friendship_id = sent.json()["friendshipId"]

        incoming = (await client.get("/api/friends", headers=headers_for(bob.id))).json()["incoming"]
        assert [r["userId"] for r in incoming] == [user.id]

        accepted = await client.patch(
            "/api/friends",
            json={"friendshipId": friendship_id, "action": "accept"},
            headers=headers_for(bob.id),
        )
        assert accepted.json()["status"] == "accepted"

        friends = (await client.get("/api/friends", headers=headers_for(user.id))).json()["friends"]
        assert [f["name"] for f in friends] == ["Bob"]

    @pytest.mark.asyncio
    async def test_only_receiver_can_respond(self, client, user, make_user, headers_for):
        await make_user(email="bob@example.com")
        sent = await client.post("/api/friends", json={"email": "bob@example.com"}, headers=headers_for(user.id))

        response = await client.patch(
            "/api/friends",
            json={"friendshipId": sent.json()["friendshipId"], "action": "accept"},
            headers=headers_for(user.id),
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_errors(self, authed_client, make_user):
        await make_user(email="bob@example.com")

        assert (await authed_client.post("/api/friends", json={"email": "ghost@example.com"})).status_code == 404
        assert (await authed_client.post("/api/friends", json={"email": "alice@example.com"})).status_code == 400
        assert (await authed_client.post("/api/friends", json={"email": "bob@example.com"})).status_code == 201
        assert (await authed_client.post("/api/friends", json={"email": "bob@example.com"})).status_code == 409

    @pytest.mark.asyncio
    async def test_declined_request_can_be_resent(self, authed_client, db_session, user, make_user):
        bob = await make_user(email="bob@example.com")
        db_session.add(Friendship(sender_id=bob.id, receiver_id=user.id, status="declined"))
        await db_session.commit()

        response = await authed_client.post("/api/friends", json={"email": "bob@example.com"})

        assert response.status_code == 200
        assert response.json()["status"] == "pending"

    @pytest.mark.asyncio
    async def test_either_party_can_remove(self, client, user, make_user, headers_for):
        bob = await make_user(email="bob@example.com")
        carol = await make_user(email="carol@example.com")
        sent = await client.post("/api/friends", json={"email": "bob@example.com"}, headers=headers_for(user.id))
        body = {"friendshipId": sent.json()["friendshipId"]}

        outsider = await client.request("DELETE", "/api/friends", json=body, headers=headers_for(carol.id))
        removed = await client.request("DELETE", "/api/friends", json=body, headers=headers_for(bob.id))

        assert outsider.status_code == 403
        assert removed.json() == {"ok": True}


class TestFriendSaves:
    @pytest.mark.asyncio
    async def test_requires_accepted_friendship(self, authed_client, db_session, user, make_user):
        bob = await make_user()
        db_session.add(Friendship(sender_id=user.id, receiver_id=bob.id, status="pending"))
        await db_session.commit()

        response = await authed_client.get(f"/api/friends/{bob.id}/saves")

        assert response.status_code == 403
        assert response.json() == {"error": "Not friends"}

    @pytest.mark.asyncio
    async def test_lists_friend_saves(self, authed_client, db_session, user, make_user, make_place):
        bob = await make_user()
        place = await make_place(google_place_id="ChIJ-bob", price_level=3)
        db_session.add_all([
            Friendship(sender_id=bob.id, receiver_id=user.id, status="accepted"),
            Save(user_id=bob.id, place_id=place.id, intent="date"),
        ])
        await db_session.commit()

        response = await authed_client.get(f"/api/friends/{bob.id}/saves")

        assert response.status_code == 200
        [saved] = response.json()
        assert saved["placeId"] == "ChIJ-bob"
        assert saved["price"] == "$$$"
        assert saved["intent"] == "date"
