"""Curated lists: authoring, ordering, visibility and bookmarks."""

from __future__ import annotations

import pytest
import pytest_asyncio
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from whereto.curated_lists import service as lists_service
from whereto.db.models import CuratedListItem


@pytest_asyncio.fixture
async def creator(make_user):
    return await make_user(email="creator@example.com", name="Creator", is_creator=True)


@pytest_asyncio.fixture
async def creator_client(client, creator, headers_for):
    client.headers.update(headers_for(creator.id))
    return client


async def _new_list(client, **fields) -> str:
    body = {"title": "Best Brunch", "category": "Brunch", **fields}
    response = await client.post("/api/curated-lists", json=body)
    assert response.status_code == 201
    return response.json()["list"]["id"]


async def _fill(client, list_id: str, make_place, count: int) -> list[str]:
    item_ids = []
    for n in range(count):
        place = await make_place(google_place_id=f"ChIJ-list-{n}", photo_url=f"places/{n}/photos/p")
        response = await client.post(f"/api/curated-lists/{list_id}/items", json={"placeId": place.google_place_id})
        assert response.status_code == 201
        item_ids.append(response.json()["item"]["id"])
    return item_ids


class TestAuthoring:
    @pytest.mark.asyncio
    async def test_creators_only(self, authed_client):
        response = await authed_client.post("/api/curated-lists", json={"title": "Nope", "category": "Bars"})
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_new_list_is_draft(self, creator_client):
        response = await creator_client.post("/api/curated-lists", json={"title": "Tacos", "category": "Food"})

        assert response.json()["list"]["isPublic"] is False

    @pytest.mark.asyncio
    async def test_add_items_appends_positions(self, creator_client, make_place):
        list_id = await _new_list(creator_client)
        place = await make_place(google_place_id="ChIJ-first")
        other = await make_place(google_place_id="ChIJ-second")

        by_google_id = await creator_client.post(
            f"/api/curated-lists/{list_id}/items", json={"placeId": "ChIJ-first", "note": "Get the eggs"}
        )
        by_internal_id = await creator_client.post(f"/api/curated-lists/{list_id}/items", json={"placeId": other.id})

        assert by_google_id.json()["item"]["position"] == 0
        assert by_google_id.json()["item"]["note"] == "Get the eggs"
        assert by_google_id.json()["item"]["place"]["placeId"] == place.google_place_id
        assert by_internal_id.json()["item"]["position"] == 1

    @pytest.mark.asyncio
    async def test_add_item_errors(self, creator_client, client, make_place, headers_for, user):
        list_id = await _new_list(creator_client)
        await make_place(google_place_id="ChIJ-dup")
        await creator_client.post(f"/api/curated-lists/{list_id}/items", json={"placeId": "ChIJ-dup"})

        duplicate = await creator_client.post(f"/api/curated-lists/{list_id}/items", json={"placeId": "ChIJ-dup"})
        missing_id = await creator_client.post(f"/api/curated-lists/{list_id}/items", json={})
        unknown = await creator_client.post(f"/api/curated-lists/{list_id}/items", json={"placeId": "ChIJ-nope"})
        not_owner = await client.post(
            f"/api/curated-lists/{list_id}/items", json={"placeId": "ChIJ-dup"}, headers=headers_for(user.id)
        )

        assert duplicate.status_code == 409
        assert missing_id.status_code == 400
        assert unknown.status_code == 404
        assert not_owner.status_code == 403

    @pytest.mark.asyncio
    async def test_remove_item_closes_gap(self, creator_client, db_session, make_place):
        list_id = await _new_list(creator_client)
        first, middle, last = await _fill(creator_client, list_id, make_place, 3)

        response = await creator_client.delete(f"/api/curated-lists/{list_id}/items/{middle}")

        assert response.json() == {"success": True}
        rows = await db_session.execute(
            select(CuratedListItem.id, CuratedListItem.position)
            .where(CuratedListItem.list_id == list_id)
            .order_by(CuratedListItem.position)
        )
        assert [tuple(r) for r in rows.all()] == [(first, 0), (last, 1)]

    @pytest.mark.asyncio
    async def test_remove_unknown_item(self, creator_client):
        list_id = await _new_list(creator_client)
        response = await creator_client.delete(f"/api/curated-lists/{list_id}/items/missing")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_remove_first_of_many_shifts_everything_down(self, creator_client, db_session, make_place):
        list_id = await _new_list(creator_client)
        first, *rest = await _fill(creator_client, list_id, make_place, 4)

        await creator_client.delete(f"/api/curated-lists/{list_id}/items/{first}")

        rows = await db_session.execute(
            select(CuratedListItem.id, CuratedListItem.position)
            .where(CuratedListItem.list_id == list_id)
            .order_by(CuratedListItem.position)
        )
        assert [tuple(r) for r in rows.all()] == [(rest[0], 0), (rest[1], 1), (rest[2], 2)]

    @pytest.mark.asyncio
    async def test_append_retries_when_position_is_taken(self, creator_client, make_place, monkeypatch):
        list_id = await _new_list(creator_client)
        await _fill(creator_client, list_id, make_place, 1)
        late = await make_place(google_place_id="ChIJ-late")

        real_next_position = lists_service._next_position
        calls = []

        async def stale_then_real(db, lid):
            calls.append(lid)
            if len(calls) == 1:
                return 0
            return await real_next_position(db, lid)

        monkeypatch.setattr(lists_service, "_next_position", stale_then_real)

        response = await creator_client.post(
            f"/api/curated-lists/{list_id}/items", json={"placeId": late.google_place_id}
        )

        assert response.status_code == 201
        assert response.json()["item"]["position"] == 1
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_position_is_unique_per_list(self, creator_client, db_session, make_place):
        list_id = await _new_list(creator_client)
        a = await make_place()
        b = await make_place()
        db_session.add_all([
            CuratedListItem(list_id=list_id, place_id=a.id, position=0),
            CuratedListItem(list_id=list_id, place_id=b.id, position=0),
        ])

        with pytest.raises(IntegrityError):
            await db_session.commit()
        await db_session.rollback()

    @pytest.mark.asyncio
    async def test_publish_needs_three_places(self, creator_client, make_place):
        list_id = await _new_list(creator_client)
        await _fill(creator_client, list_id, make_place, 2)

        too_early = await creator_client.patch(f"/api/curated-lists/{list_id}", json={"isPublic": True})
        await creator_client.post(
            f"/api/curated-lists/{list_id}/items",
            json={"placeId": (await make_place(google_place_id="ChIJ-third")).id},
        )
        published = await creator_client.patch(f"/api/curated-lists/{list_id}", json={"isPublic": True})

        assert too_early.status_code == 400
        assert published.json()["list"]["isPublic"] is True

    @pytest.mark.asyncio
    async def test_mine_includes_drafts_with_stats(self, creator_client, make_place):
        list_id = await _new_list(creator_client)
        await _fill(creator_client, list_id, make_place, 2)

        lists = (await creator_client.get("/api/curated-lists/mine")).json()["lists"]

        assert len(lists) == 1
        assert lists[0]["stats"] == {"places": 2, "saves": 0}
        assert lists[0]["heroImage"] == "places/0/photos/p"
        assert lists[0]["creator"] is None

    @pytest.mark.asyncio
    async def test_delete_list(self, creator_client, client, user, headers_for):
        list_id = await _new_list(creator_client)

        not_owner = await client.delete(f"/api/curated-lists/{list_id}", headers=headers_for(user.id))
        deleted = await creator_client.delete(f"/api/curated-lists/{list_id}")
        gone = await creator_client.get(f"/api/curated-lists/{list_id}")

        assert not_owner.status_code == 403
        assert deleted.json() == {"success": True}
        assert gone.status_code == 404


class TestBrowsing:
    @pytest.mark.asyncio
    async def test_draft_hidden_from_others(self, creator_client, client, make_place):
        list_id = await _new_list(creator_client)
        await _fill(creator_client, list_id, make_place, 1)

        own_view = await creator_client.get(f"/api/curated-lists/{list_id}")
        anonymous = await client.get(f"/api/curated-lists/{list_id}", headers={"Authorization": ""})
        browse = await client.get("/api/curated-lists")

        assert own_view.status_code == 200
        assert [i["position"] for i in own_view.json()["list"]["items"]] == [0]
        assert anonymous.status_code == 403
        assert browse.json() == {"lists": []}

    @pytest.mark.asyncio
    async def test_browse_filters_by_category(self, creator_client, make_place):
        brunch = await _new_list(creator_client, title="Brunch", category="Brunch")
        await _fill(creator_client, brunch, make_place, 3)
        await creator_client.patch(f"/api/curated-lists/{brunch}", json={"isPublic": True})

        all_lists = (await creator_client.get("/api/curated-lists", params={"category": "All"})).json()["lists"]
        bars = (await creator_client.get("/api/curated-lists", params={"category": "Bars"})).json()["lists"]

        assert [lst["title"] for lst in all_lists] == ["Brunch"]
        assert all_lists[0]["creator"]["name"] == "Creator"
        assert bars == []


class TestBookmarks:
    @pytest.mark.asyncio
    async def test_save_and_unsave(self, creator_client, client, user, make_place, headers_for):
        list_id = await _new_list(creator_client)
        await _fill(creator_client, list_id, make_place, 3)
        await creator_client.patch(f"/api/curated-lists/{list_id}", json={"isPublic": True})
        reader = headers_for(user.id)

        saved = await client.post(f"/api/curated-lists/{list_id}/save", headers=reader)
        again = await client.post(f"/api/curated-lists/{list_id}/save", headers=reader)
        detail = (await client.get(f"/api/curated-lists/{list_id}", headers=reader)).json()["list"]
        bookmarks = (await client.get("/api/curated-lists/saved", headers=reader)).json()["lists"]
        removed = await client.request("DELETE", f"/api/curated-lists/{list_id}/save", headers=reader)
        removed_again = await client.request("DELETE", f"/api/curated-lists/{list_id}/save", headers=reader)

        assert saved.status_code == 201
        assert again.status_code == 409
        assert detail["hasSaved"] is True
        assert detail["stats"]["saves"] == 1
        assert [b["id"] for b in bookmarks] == [list_id]
        assert removed.json() == {"success": True}
        assert removed_again.status_code == 404

    @pytest.mark.asyncio
    async def test_save_unknown_list(self, authed_client):
        response = await authed_client.post("/api/curated-lists/missing/save")
        assert response.status_code == 404
