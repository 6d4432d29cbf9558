"""Uniqueness-conflict classification."""

from __future__ import annotations

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from whereto.db.conflicts import commit_unless_conflict, is_unique_violation
from whereto.db.models import WaitlistEntry


class _PgError(Exception):
    def __init__(self, sqlstate: str) -> None:
        super().__init__("pg error")
        self.sqlstate = sqlstate


class _Wrapped(Exception):
    """asyncpg errors arrive wrapped; the original is the cause."""


def integrity_error(orig: Exception) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, orig)


class TestIsUniqueViolation:
    def test_postgres_unique_violation(self):
        assert is_unique_violation(integrity_error(_PgError("23505")))

    def test_postgres_foreign_key_violation(self):
        assert not is_unique_violation(integrity_error(_PgError("23503")))

    def test_wrapped_postgres_error(self):
        wrapped = _Wrapped("wrapped")
        wrapped.__cause__ = _PgError("23505")
        assert is_unique_violation(integrity_error(wrapped))

    def test_sqlite_unique_message(self):
        orig = Exception("UNIQUE constraint failed: waitlist.email")
        assert is_unique_violation(integrity_error(orig))

    def test_sqlite_not_null_message(self):
        orig = Exception("NOT NULL constraint failed: waitlist.email")
        assert not is_unique_violation(integrity_error(orig))


class TestCommitUnlessConflict:
    @pytest.mark.asyncio
    async def test_commits_new_row(self, db_session):
        db_session.add(WaitlistEntry(email="a@example.com"))
        assert await commit_unless_conflict(db_session) is True

    @pytest.mark.asyncio
    async def test_duplicate_rolls_back_and_returns_false(self, db_session):
        db_session.add(WaitlistEntry(email="a@example.com"))
        await db_session.commit()

        db_session.add(WaitlistEntry(email="a@example.com"))
        assert await commit_unless_conflict(db_session) is False

        count = await db_session.execute(select(func.count()).select_from(WaitlistEntry))
        assert count.scalar_one() == 1

    @pytest.mark.asyncio
    async def test_other_integrity_errors_propagate(self, db_session):
        db_session.add(WaitlistEntry(email=None))
        with pytest.raises(IntegrityError):
            await commit_unless_conflict(db_session)
