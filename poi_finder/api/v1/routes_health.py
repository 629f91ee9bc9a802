# poi_finder/api/v1/routes_health.py
from fastapi import APIRouter
from poi_finder.core.config import settings

router = APIRouter(
    prefix="/health",
    tags=["health"],
)


@router.get("/", summary="Health check")
async def health_check():
    """
    Health check plus the collaborators the nearest search will use,
    so a missing API key shows up before the first lookup does.
    """
    return {
        "status": "ok",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "places_provider": "google" if settings.MAPS_API_KEY else "static",
        "directions": bool(settings.MAPS_API_KEY and settings.USE_DIRECTIONS),
    }
