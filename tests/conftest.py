"""Shared test fixtures.

Tests run against a fresh in-memory SQLite database per test. Redis is never
initialized, so rate limiting and badge notifications are skipped.
"""

from __future__ import annotations

import os

os.environ["WHERETO_DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["WHERETO_SESSION_SECRET"] = "test-session-secret-with-at-least-32-bytes"
os.environ["WHERETO_GOOGLE_PLACES_API_KEY"] = "test-places-key"
os.environ["WHERETO_LOG_FORMAT"] = "console"
os.environ["WHERETO_LOG_LEVEL"] = "WARNING"

from collections.abc import AsyncGenerator, Awaitable, Callable  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from whereto.auth.sessions import create_session_token  # noqa: E402
from whereto.config import get_settings  # noqa: E402
from whereto.database import close_db, get_engine, init_db, init_models  # noqa: E402
from whereto.db.models import Place, User  # noqa: E402
from whereto.places.schemas import Location, PlaceIn  # noqa: E402

get_settings.cache_clear()

UserFactory = Callable[..., Awaitable[User]]
PlaceFactory = Callable[..., Awaitable[Place]]


def auth_headers(user_id: str) -> dict[str, str]:
    """Bearer header carrying a valid session for ``user_id``."""
    return {"Authorization": f"Bearer {create_session_token(user_id)}"}


def place_card(place_id: str = "ChIJ-cafe-1", **overrides) -> PlaceIn:
    """A discovery card located in the Financial District."""
    data = {
        "place_id": place_id,
        "name": "Cafe One",
        "address": "100 King St W",
        "location": Location(lat=43.6480, lng=-79.3816),
        "price": "$$",
        "rating": 4.5,
        "photo_ref": "places/ChIJ-cafe-1/photos/abc",
        "type": "cafe",
        "tags": ["cozy", "wifi"],
    }
    data.update(overrides)
    return PlaceIn(**data)


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[None, None]:
    """Fresh schema for every test."""
    get_settings.cache_clear()
    await init_db(get_settings().database_url)
    await init_models()
    yield
    await close_db()


@pytest_asyncio.fixture
async def db_session(database) -> AsyncGenerator[AsyncSession, None]:
    """Direct database session for setup and assertions."""
    async with AsyncSession(get_engine(), expire_on_commit=False) as session:
        yield session


@pytest_asyncio.fixture
async def make_user(db_session: AsyncSession) -> UserFactory:
    counter = 0

    async def _make(**fields) -> User:
        nonlocal counter
        counter += 1
        fields.setdefault("email", f"user{counter}@example.com")
        fields.setdefault("name", f"User {counter}")
        user = User(**fields)
        db_session.add(user)
        await db_session.commit()
        return user

    return _make


@pytest_asyncio.fixture
async def make_place(db_session: AsyncSession) -> PlaceFactory:
    counter = 0

    async def _make(**fields) -> Place:
        nonlocal counter
        counter += 1
        fields.setdefault("google_place_id", f"ChIJ-place-{counter}")
        fields.setdefault("name", f"Place {counter}")
        fields.setdefault("lat", 43.6480)
        fields.setdefault("lng", -79.3816)
        place = Place(**fields)
        db_session.add(place)
        await db_session.commit()
        return place

    return _make


@pytest_asyncio.fixture
async def user(make_user: UserFactory) -> User:
    return await make_user(email="alice@example.com", name="Alice")


@pytest.fixture
def app(database) -> FastAPI:
    from whereto.main import create_app

    return create_app()


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Unauthenticated HTTP client over the ASGI app (no lifespan)."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def authed_client(client: AsyncClient, user: User) -> AsyncClient:
    """Client carrying a session for the ``user`` fixture."""
    client.headers.update(auth_headers(user.id))
    return client


@pytest.fixture
def headers_for() -> Callable[[str], dict[str, str]]:
    return auth_headers


@pytest.fixture
def make_card() -> Callable[..., PlaceIn]:
    return place_card
