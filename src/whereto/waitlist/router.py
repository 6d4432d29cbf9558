"""Pre-launch waitlist signup."""

from __future__ import annotations

import re
from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from whereto.database import get_session
from whereto.db.conflicts import commit_unless_conflict
from whereto.db.models import WaitlistEntry, new_id
from whereto.errors import ConflictError, InvalidInputError
from whereto.schemas import CamelModel

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/waitlist", tags=["Waitlist"])

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class WaitlistRequest(BaseModel):
    email: str | None = None


class WaitlistEntryOut(CamelModel):
    id: str
    email: str
    created_at: datetime


class WaitlistResponse(CamelModel):
    success: bool = True
    waitlist_entry: WaitlistEntryOut


@router.post("", response_model=WaitlistResponse)
async def join_waitlist(body: WaitlistRequest, db: AsyncSession = Depends(get_session)):
    """Add an email to the waitlist; each email may join once."""
    email = body.email
    if not email:
        raise InvalidInputError("Valid email is required")
    if not EMAIL_RE.match(email):
        raise InvalidInputError("Invalid email format")

    try:
        existing = await db.execute(select(WaitlistEntry.id).where(WaitlistEntry.email == email))
        if existing.scalar_one_or_none() is not None:
            raise ConflictError("Email is already on the waitlist")

        out = WaitlistEntryOut(id=new_id(), email=email, created_at=datetime.now(timezone.utc))
        db.add(WaitlistEntry(id=out.id, email=email, created_at=out.created_at))
        if not await commit_unless_conflict(db):
            raise ConflictError("Email is already on the waitlist")
    except ConflictError:
        raise
    except Exception as e:
        logger.exception("waitlist_failed")
        raise HTTPException(status_code=500, detail="Internal server error") from e
    return WaitlistResponse(waitlist_entry=out)
