"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from whereto.activity.router import router as activity_router
from whereto.badges.router import router as badges_router
from whereto.config import get_settings
from whereto.creators.router import router as creators_router
from whereto.curated_lists.router import router as curated_lists_router
from whereto.database import close_db, init_db, init_models
from whereto.exploration.router import router as exploration_router
from whereto.friends.router import router as friends_router
from whereto.health.router import router as health_router
from whereto.middleware import setup_middleware
from whereto.places.router import router as places_router
from whereto.recommendations.router import router as recommendations_router
from whereto.redis_client import close_redis, init_redis
from whereto.saves.router import router as saves_router
from whereto.users.router import router as users_router
from whereto.visits.router import router as visits_router
from whereto.waitlist.router import router as waitlist_router


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle."""
    settings = get_settings()
    await init_db(settings.database_url)
    if settings.create_tables_on_startup:
        await init_models()
    await init_redis(settings.redis_url)

    yield

    await close_db()
    await close_redis()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="WhereTo API",
        description="Backend API for WhereTo: swipe, save and share places with friends",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)
    app.include_router(health_router, tags=["Health"])
    app.include_router(users_router)
    app.include_router(places_router)
    app.include_router(saves_router)
    app.include_router(visits_router)
    app.include_router(friends_router)
    app.include_router(recommendations_router)
    app.include_router(badges_router)
    app.include_router(exploration_router)
    app.include_router(activity_router)
    app.include_router(creators_router)
    app.include_router(curated_lists_router)
    app.include_router(waitlist_router)

    return app


app = create_app()
