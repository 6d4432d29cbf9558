"""Google Places photo pass-through."""

from __future__ import annotations

from collections.abc import AsyncGenerator

import httpx
import structlog
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from whereto.config import get_settings
from whereto.errors import UpstreamError
from whereto.places.schemas import PhotoResponse

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/places", tags=["Places"])

PHOTO_TIMEOUT_SECONDS = 10.0


async def get_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """Outbound HTTP client (FastAPI dependency, overridden in tests)."""
    async with httpx.AsyncClient(timeout=PHOTO_TIMEOUT_SECONDS) as client:
        yield client


@router.get("/photo", response_model=PhotoResponse)
async def get_photo(
    ref: str | None = Query(default=None),
    http: httpx.AsyncClient = Depends(get_http_client),
):
    """Resolve a photo reference to a short-lived media URL."""
    settings = get_settings()
    if not settings.google_places_api_key:
        logger.error("photo_api_key_missing")
        return JSONResponse(status_code=500, content={"error": "API key not configured"})
    if not ref:
        return JSONResponse(status_code=400, content={"error": "Missing photo reference"})

    url = f"{settings.google_places_base_url}/{ref}/media"
    params = {
        "maxWidthPx": settings.photo_max_width_px,
        "skipHttpRedirect": "true",
        "key": settings.google_places_api_key,
    }
    try:
        response = await http.get(url, params=params)
        if not response.is_success:
            logger.warning("photo_upstream_error", status=response.status_code)
            raise UpstreamError("Failed to fetch photo", status_code=response.status_code)
        data = response.json()
    except (httpx.HTTPError, ValueError):
        logger.exception("photo_fetch_failed")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    return PhotoResponse(photo_url=data.get("photoUri"))
