"""Curated list endpoints."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from whereto.auth.dependencies import optional_session, require_session
from whereto.auth.sessions import Session
from whereto.curated_lists import service
from whereto.curated_lists.schemas import (
    AddItemRequest,
    CreatorRef,
    CuratedListCreate,
    CuratedListDetail,
    CuratedListOut,
    CuratedListSummary,
    CuratedListUpdate,
    ItemResponse,
    ListDetailResponse,
    ListEnvelope,
    ListItemOut,
    ListsResponse,
    ListStats,
)
from whereto.database import get_session
from whereto.db.models import CuratedListItem
from whereto.places.service import place_card
from whereto.schemas import SuccessResponse

router = APIRouter(prefix="/api/curated-lists", tags=["Curated Lists"])


def list_summary(row: service.ListRow, *, with_creator: bool = True) -> CuratedListSummary:
    lst = row.list
    creator = None
    if with_creator:
        creator = CreatorRef(
            id=lst.creator.id,
            name=lst.creator.name,
            image=lst.creator.custom_avatar or lst.creator.image,
        )
    return CuratedListSummary(
        id=lst.id,
        title=lst.title,
        description=lst.description,
        category=lst.category,
        is_public=lst.is_public,
        created_at=lst.created_at,
        creator=creator,
        stats=ListStats(places=row.places, saves=row.saves),
        hero_image=row.hero_image or None,
    )


def _item(item: CuratedListItem) -> ListItemOut:
    return ListItemOut(
        id=item.id,
        list_id=item.list_id,
        note=item.note,
        position=item.position,
        place=place_card(item.place),
    )


@router.post("", response_model=ListEnvelope, status_code=201)
async def create_list(
    body: CuratedListCreate,
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    """Create a draft list (creators only)."""
    lst = await service.create_list(db, session.user_id, body.title, body.category, body.description)
    return ListEnvelope(list=CuratedListOut.model_validate(lst))


@router.get("", response_model=ListsResponse)
async def browse_lists(
    category: str | None = Query(default=None),
    sort: Literal["recent", "popular"] = Query(default="recent"),
    db: AsyncSession = Depends(get_session),
):
    rows = await service.browse_public(db, category, sort)
    return ListsResponse(lists=[list_summary(r) for r in rows])


@router.get("/mine", response_model=ListsResponse)
async def my_lists(
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    """The caller's own lists, drafts included."""
    rows = await service.lists_by_creator(db, session.user_id)
    return ListsResponse(lists=[list_summary(r, with_creator=False) for r in rows])


@router.get("/saved", response_model=ListsResponse)
async def my_saved_lists(
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    rows = await service.saved_lists(db, session.user_id)
    return ListsResponse(lists=[list_summary(r) for r in rows])


@router.get("/{list_id}", response_model=ListDetailResponse)
async def get_list(
    list_id: str,
    session: Session | None = Depends(optional_session),
    db: AsyncSession = Depends(get_session),
):
    viewer_id = session.user_id if session else None
    row, items, has_saved = await service.get_detail(db, list_id, viewer_id)
    summary = list_summary(row)
    detail = CuratedListDetail(
        **summary.model_dump(),
        items=[_item(i) for i in items],
        has_saved=has_saved,
    )
    return ListDetailResponse(list=detail)


@router.patch("/{list_id}", response_model=ListEnvelope)
async def update_list(
    list_id: str,
    body: CuratedListUpdate,
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    lst = await service.update_list(db, list_id, session.user_id, body.model_dump(exclude_unset=True))
    return ListEnvelope(list=CuratedListOut.model_validate(lst))


@router.delete("/{list_id}", response_model=SuccessResponse)
async def delete_list(
    list_id: str,
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    await service.delete_list(db, list_id, session.user_id)
    return SuccessResponse()


@router.post("/{list_id}/items", response_model=ItemResponse, status_code=201)
async def add_item(
    list_id: str,
    body: AddItemRequest,
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    """Append a place to one of the caller's lists."""
    item = await service.add_item(db, list_id, session.user_id, body.place_id, body.note)
    return ItemResponse(item=_item(item))


@router.delete("/{list_id}/items/{item_id}", response_model=SuccessResponse)
async def remove_item(
    list_id: str,
    item_id: str,
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    await service.remove_item(db, list_id, session.user_id, item_id)
    return SuccessResponse()


@router.post("/{list_id}/save", response_model=SuccessResponse, status_code=201)
async def save_list(
    list_id: str,
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    await service.save_list(db, list_id, session.user_id)
    return SuccessResponse()


@router.delete("/{list_id}/save", response_model=SuccessResponse)
async def unsave_list(
    list_id: str,
    session: Session = Depends(require_session),
    db: AsyncSession = Depends(get_session),
):
    await service.unsave_list(db, list_id, session.user_id)
    return SuccessResponse()
