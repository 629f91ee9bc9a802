# poi_finder/api/v1/routes_nearest.py
from functools import lru_cache

from fastapi import APIRouter, Depends

from poi_finder.core.config import settings
from poi_finder.core.logger import logger
from poi_finder.models.nearest import NearestRequest, NearestResponse
from poi_finder.services.directions import GoogleRoutesProvider
from poi_finder.services.nearest_service import NearestService
from poi_finder.services.places import GooglePlacesProvider, StaticPlacesProvider

router = APIRouter(
    prefix="/nearest",
    tags=["nearest"],
)


@lru_cache(maxsize=1)
def get_nearest_service() -> NearestService:
    """
    Shared service wired from settings: Google providers when an API key
    is configured, otherwise the static places file without directions.
    """
    if settings.MAPS_API_KEY:
        places = GooglePlacesProvider(
            api_key=settings.MAPS_API_KEY,
            text_query=settings.PLACES_TEXT_QUERY,
            language=settings.PLACES_LANGUAGE,
            max_results=settings.PLACES_MAX_RESULTS,
            radii_m=settings.PLACES_SEARCH_RADII_M,
            timeout_s=settings.HTTP_TIMEOUT_S,
        )
        directions = None
        if settings.USE_DIRECTIONS:
            directions = GoogleRoutesProvider(
                api_key=settings.MAPS_API_KEY,
                language=settings.PLACES_LANGUAGE,
                timeout_s=settings.HTTP_TIMEOUT_S,
            )
        return NearestService(places=places, directions=directions)

    logger.warning("MAPS_API_KEY not set: using static places, directions disabled.")
    if settings.PLACES_FILE:
        places = StaticPlacesProvider.from_file(settings.PLACES_FILE)
    else:
        places = StaticPlacesProvider()
    return NearestService(places=places)


@router.post(
    "/",
    response_model=NearestResponse,
    summary="Find the nearest point of interest and a route to it",
)
def find_nearest(
    request: NearestRequest,
    service: NearestService = Depends(get_nearest_service),
) -> NearestResponse:
    """
    Find the nearest point of interest to the given coordinate.

    - Candidates come from the places lookup around the user.
    - The closest one is chosen by a search over a star graph rooted at the user.
    - 404 when nothing is found or reachable.
    """
    return service.find_nearest(request)
