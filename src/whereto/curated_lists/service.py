"""Curated lists: creator-owned, ordered collections of places.

Item positions within a list are always 0..n-1. Removal and re-indexing are
committed together so no reader sees a gap.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import delete, func, or_, select, update

from whereto.db.conflicts import commit_unless_conflict
from whereto.db.models import CuratedList, CuratedListItem, CuratedListSave, Place
from whereto.errors import ConflictError, ForbiddenError, InvalidInputError, NotFoundError
from whereto.users.service import get_user

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

MIN_PUBLIC_ITEMS = 3
ADD_ITEM_ATTEMPTS = 3

_items_count = (
    select(func.count(CuratedListItem.id))
    .where(CuratedListItem.list_id == CuratedList.id)
    .correlate(CuratedList)
    .scalar_subquery()
)
_saves_count = (
    select(func.count(CuratedListSave.id))
    .where(CuratedListSave.list_id == CuratedList.id)
    .correlate(CuratedList)
    .scalar_subquery()
)
_hero_image = (
    select(Place.photo_url)
    .join(CuratedListItem, CuratedListItem.place_id == Place.id)
    .where(CuratedListItem.list_id == CuratedList.id)
    .order_by(CuratedListItem.position)
    .limit(1)
    .correlate(CuratedList)
    .scalar_subquery()
)


@dataclass
class ListRow:
    list: CuratedList
    places: int
    saves: int
    hero_image: str | None


def _summary_query():
    return select(CuratedList, _items_count, _saves_count, _hero_image)


def _rows(result) -> list[ListRow]:
    return [ListRow(lst, places, saves, hero) for lst, places, saves, hero in result.all()]


async def _get_list(db: AsyncSession, list_id: str) -> CuratedList:
    lst = await db.get(CuratedList, list_id)
    if lst is None:
        raise NotFoundError("List not found")
    return lst


async def _get_owned_list(db: AsyncSession, list_id: str, user_id: str) -> CuratedList:
    lst = await db.get(CuratedList, list_id)
    if lst is None or lst.creator_id != user_id:
        raise ForbiddenError("Forbidden")
    return lst


async def create_list(
    db: AsyncSession,
    user_id: str,
    title: str,
    category: str,
    description: str | None = None,
) -> CuratedList:
    """Create a draft list; only creators may author lists."""
    user = await get_user(db, user_id)
    if not user.is_creator:
        raise ForbiddenError("Forbidden: Creators only")
    lst = CuratedList(
        creator_id=user_id,
        title=title,
        description=description,
        category=category,
        is_public=False,
    )
    db.add(lst)
    await db.commit()
    return lst


async def browse_public(db: AsyncSession, category: str | None = None, sort: str = "recent") -> list[ListRow]:
    query = _summary_query().where(CuratedList.is_public.is_(True))
    if category and category != "All":
        query = query.where(CuratedList.category == category)
    if sort == "popular":
        query = query.order_by(_saves_count.desc(), CuratedList.created_at.desc())
    else:
        query = query.order_by(CuratedList.created_at.desc())
    return _rows(await db.execute(query))


async def lists_by_creator(db: AsyncSession, user_id: str) -> list[ListRow]:
    """All of a creator's lists, drafts included, newest first."""
    query = (
        _summary_query()
        .where(CuratedList.creator_id == user_id)
        .order_by(CuratedList.created_at.desc())
    )
    return _rows(await db.execute(query))


async def saved_lists(db: AsyncSession, user_id: str) -> list[ListRow]:
    """Lists the user bookmarked, most recently bookmarked first."""
    query = (
        _summary_query()
        .join(CuratedListSave, CuratedListSave.list_id == CuratedList.id)
        .where(CuratedListSave.user_id == user_id)
        .order_by(CuratedListSave.created_at.desc())
    )
    return _rows(await db.execute(query))


async def get_detail(
    db: AsyncSession, list_id: str, viewer_id: str | None
) -> tuple[ListRow, list[CuratedListItem], bool]:
    """List with ordered items and whether the viewer bookmarked it.

    Drafts are visible to their creator only.
    """
    result = await db.execute(_summary_query().where(CuratedList.id == list_id))
    rows = _rows(result)
    if not rows:
        raise NotFoundError("List not found")
    row = rows[0]
    if not row.list.is_public and row.list.creator_id != viewer_id:
        raise ForbiddenError("Forbidden")

    has_saved = False
    if viewer_id is not None:
        saved = await db.execute(
            select(CuratedListSave.id).where(
                CuratedListSave.list_id == list_id, CuratedListSave.user_id == viewer_id
            )
        )
        has_saved = saved.scalar_one_or_none() is not None
    return row, await list_items(db, list_id), has_saved


async def list_items(db: AsyncSession, list_id: str) -> list[CuratedListItem]:
    result = await db.execute(
        select(CuratedListItem)
        .where(CuratedListItem.list_id == list_id)
        .order_by(CuratedListItem.position)
    )
    return list(result.scalars().all())


async def update_list(db: AsyncSession, list_id: str, user_id: str, changes: dict) -> CuratedList:
    """Partial metadata update; publishing requires a minimum number of places."""
    lst = await _get_list(db, list_id)
    if lst.creator_id != user_id:
        raise ForbiddenError("Forbidden: Not the creator")

    if changes.get("is_public"):
        count = await db.execute(
            select(func.count()).select_from(CuratedListItem).where(CuratedListItem.list_id == list_id)
        )
        if count.scalar_one() < MIN_PUBLIC_ITEMS:
            raise InvalidInputError(f"List must have at least {MIN_PUBLIC_ITEMS} places to be public")

    for field in ("title", "description", "category", "is_public"):
        if field in changes:
            setattr(lst, field, changes[field])
    lst.updated_at = datetime.now(timezone.utc)
    await db.commit()
    return lst


async def delete_list(db: AsyncSession, list_id: str, user_id: str) -> None:
    lst = await _get_list(db, list_id)
    if lst.creator_id != user_id:
        raise ForbiddenError("Forbidden")
    await db.execute(delete(CuratedListItem).where(CuratedListItem.list_id == list_id))
    await db.execute(delete(CuratedListSave).where(CuratedListSave.list_id == list_id))
    await db.delete(lst)
    await db.commit()


async def _resolve_place(db: AsyncSession, place_ref: str) -> Place:
    """Accept either the internal place id or the Google place id."""
    result = await db.execute(
        select(Place).where(or_(Place.id == place_ref, Place.google_place_id == place_ref))
    )
    place = result.scalars().first()
    if place is None:
        raise NotFoundError("Place not found")
    return place


async def add_item(
    db: AsyncSession,
    list_id: str,
    user_id: str,
    place_ref: str | None,
    note: str | None = None,
) -> CuratedListItem:
    """Append a place to the end of the list.

    (list_id, position) is unique, so two concurrent appends cannot share a
    slot: the loser rolls back and retries at the next free position.
    """
    if not place_ref:
        await _get_owned_list(db, list_id, user_id)
        raise InvalidInputError("Place ID is required")

    for _ in range(ADD_ITEM_ATTEMPTS):
        lst = await _get_owned_list(db, list_id, user_id)
        place = await _resolve_place(db, place_ref)
        place_id = place.id
        position = await _next_position(db, list_id)

        item = CuratedListItem(list_id=list_id, place_id=place_id, note=note, position=position)
        item.place = place
        db.add(item)
        lst.updated_at = datetime.now(timezone.utc)
        if await commit_unless_conflict(db):
            return item

        if await _contains_place(db, list_id, place_id):
            raise ConflictError("Place is already in this list")
        logger.info("Position %d in list %s was taken; retrying", position, list_id)

    raise ConflictError("List is being edited concurrently, try again")


async def _next_position(db: AsyncSession, list_id: str) -> int:
    result = await db.execute(
        select(func.max(CuratedListItem.position)).where(CuratedListItem.list_id == list_id)
    )
    current = result.scalar_one_or_none()
    return 0 if current is None else current + 1


async def _contains_place(db: AsyncSession, list_id: str, place_id: str) -> bool:
    result = await db.execute(
        select(CuratedListItem.id).where(
            CuratedListItem.list_id == list_id, CuratedListItem.place_id == place_id
        )
    )
    return result.scalar_one_or_none() is not None


async def remove_item(db: AsyncSession, list_id: str, user_id: str, item_id: str) -> None:
    """Remove an item and close the gap, in one transaction."""
    lst = await _get_owned_list(db, list_id, user_id)
    item = await db.get(CuratedListItem, item_id)
    if item is None or item.list_id != list_id:
        raise NotFoundError("Item not found")

    await db.delete(item)
    await db.flush()

    # One statement per row, lowest position first, so each move lands on a
    # slot that is already free.
    remaining = await list_items(db, list_id)
    for index, other in enumerate(remaining):
        if other.position != index:
            await db.execute(
                update(CuratedListItem).where(CuratedListItem.id == other.id).values(position=index)
            )
    lst.updated_at = datetime.now(timezone.utc)
    await db.commit()
    logger.debug("Removed item %s from list %s; %d remain", item_id, list_id, len(remaining))


async def save_list(db: AsyncSession, list_id: str, user_id: str) -> CuratedListSave:
    await _get_list(db, list_id)
    bookmark = CuratedListSave(user_id=user_id, list_id=list_id)
    db.add(bookmark)
    if not await commit_unless_conflict(db):
        raise ConflictError("Already saved")
    return bookmark


async def unsave_list(db: AsyncSession, list_id: str, user_id: str) -> None:
    result = await db.execute(
        delete(CuratedListSave).where(
            CuratedListSave.list_id == list_id, CuratedListSave.user_id == user_id
        )
    )
    if not result.rowcount:
        raise NotFoundError("Not found or already unsaved")
    await db.commit()
