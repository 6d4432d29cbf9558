"""FastAPI authentication dependencies."""

from __future__ import annotations

import jwt
from fastapi import HTTPException, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from whereto.auth.sessions import Session, verify_session_token

# auto_error=False: a missing header must produce 401, not HTTPBearer's 403
_bearer = HTTPBearer(auto_error=False)


async def require_session(
    credentials: HTTPAuthorizationCredentials | None = Security(_bearer),
) -> Session:
    """Return the caller's session or raise 401."""
    if credentials is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    try:
        return verify_session_token(credentials.credentials)
    except jwt.InvalidTokenError as e:
        raise HTTPException(status_code=401, detail="Unauthorized") from e


async def optional_session(
    credentials: HTTPAuthorizationCredentials | None = Security(_bearer),
) -> Session | None:
    """Return the caller's session, or None for anonymous / invalid credentials."""
    if credentials is None:
        return None
    try:
        return verify_session_token(credentials.credentials)
    except jwt.InvalidTokenError:
        return None
