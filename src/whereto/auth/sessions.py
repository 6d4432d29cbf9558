"""
Session token verification.

Sessions are issued by the external auth provider as signed JWTs. This service
only verifies them: the ``sub`` claim is the user id and ``type`` must be
``"session"``. ``create_session_token`` mints compatible tokens for tests and
local tooling.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from whereto.config import get_settings


@dataclass(frozen=True)
class Session:
    """The authenticated caller."""

    user_id: str
    email: str | None = None


def create_session_token(user_id: str, email: str | None = None, *, expires_in: timedelta | None = None) -> str:
    """
    Create a signed session token.

    Args:
        user_id: The user's database ID.
        email: Optional email claim.
        expires_in: Lifetime override; defaults to ``session_expire_minutes``.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    lifetime = expires_in if expires_in is not None else timedelta(minutes=settings.session_expire_minutes)
    payload: dict[str, Any] = {
        "sub": user_id,
        "iat": now,
        "exp": now + lifetime,
        "iss": settings.session_issuer,
        "type": "session",
    }
    if email:
        payload["email"] = email
    return jwt.encode(payload, settings.session_secret, algorithm=settings.session_algorithm)


def verify_session_token(token: str) -> Session:
    """
    Verify and decode a session token.

    Raises:
        jwt.InvalidTokenError: If the token is invalid, expired, or of the wrong type.
    """
    settings = get_settings()
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.session_secret,
            algorithms=[settings.session_algorithm],
            issuer=settings.session_issuer,
        )
    except jwt.ExpiredSignatureError:
        msg = "Session has expired"
        raise jwt.InvalidTokenError(msg) from None

    if payload.get("type") != "session":
        msg = f"Expected token type 'session', got '{payload.get('type')}'"
        raise jwt.InvalidTokenError(msg)
    if not payload.get("sub"):
        msg = "Session has no subject"
        raise jwt.InvalidTokenError(msg)

    return Session(user_id=str(payload["sub"]), email=payload.get("email"))
