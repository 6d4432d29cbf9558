"""Uniqueness-conflict classification shared by every "insert once" write path.

Badge awards and place saves treat a conflict as an idempotent success; the
waitlist and curated-list endpoints turn it into a 409.
"""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

_PG_UNIQUE_VIOLATION = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when the integrity error was raised by a UNIQUE constraint."""
    orig = exc.orig
    for source in (orig, getattr(orig, "__cause__", None)):
        code = getattr(source, "sqlstate", None) or getattr(source, "pgcode", None)
        if code:
            return code == _PG_UNIQUE_VIOLATION
    return "UNIQUE constraint failed" in str(orig)


async def commit_unless_conflict(db: AsyncSession) -> bool:
    """Commit pending work.

    Returns False (after rolling back) when the commit hit a uniqueness
    violation. Any other error is re-raised unchanged.
    """
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        if is_unique_violation(exc):
            return False
        raise
    return True
