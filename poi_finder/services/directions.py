# poi_finder/services/directions.py
from abc import ABC, abstractmethod
from typing import List, Optional

import httpx
from pydantic import BaseModel

from poi_finder.core.exceptions import DirectionsError
from poi_finder.core.logger import logger
from poi_finder.services.geo import decode_polyline

ROUTES_URL = "https://routes.googleapis.com/directions/v2:computeRoutes"
ROUTES_FIELD_MASK = (
    "routes.distanceMeters,routes.duration,routes.polyline.encodedPolyline,routes.legs"
)


class DrivingRoute(BaseModel):
    """
    Realistic route returned by a routing service.

    geometry is a list of [lat, lng] pairs decoded from the polyline.
    """
    distance_km: float
    duration_min: float
    polyline: Optional[str] = None
    geometry: List[List[float]]


class DirectionsProvider(ABC):
    """Port for computing a driving route between two coordinates."""

    @abstractmethod
    def route(
        self,
        origin_lat: float,
        origin_lng: float,
        dest_lat: float,
        dest_lng: float,
    ) -> DrivingRoute:
        """Return the route; raise DirectionsError when none can be computed."""


class GoogleRoutesProvider(DirectionsProvider):
    """
    Google Routes API v2 (computeRoutes) client, DRIVE mode.
    """

    def __init__(
        self,
        api_key: str,
        language: str = "pt-BR",
        timeout_s: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.api_key = api_key
        self.language = language
        self.timeout_s = timeout_s
        self._client = client

    def route(
        self,
        origin_lat: float,
        origin_lng: float,
        dest_lat: float,
        dest_lng: float,
    ) -> DrivingRoute:
        body = {
            "origin": {"location": {"latLng": {"latitude": origin_lat, "longitude": origin_lng}}},
            "destination": {"location": {"latLng": {"latitude": dest_lat, "longitude": dest_lng}}},
            "travelMode": "DRIVE",
            "languageCode": self.language,
        }
        headers = {
            "Content-Type": "application/json",
            "X-Goog-Api-Key": self.api_key,
            "X-Goog-FieldMask": ROUTES_FIELD_MASK,
        }

        try:
            if self._client is not None:
                response = self._client.post(ROUTES_URL, json=body, headers=headers)
            else:
                with httpx.Client(timeout=self.timeout_s) as client:
                    response = client.post(ROUTES_URL, json=body, headers=headers)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            raise DirectionsError(f"Routes request failed: {exc}") from exc
        except ValueError as exc:
            raise DirectionsError("Routes API returned invalid JSON") from exc

        if not isinstance(data, dict):
            raise DirectionsError("Routes API returned an unexpected payload")

        routes = data.get("routes") or []
        if not routes:
            raise DirectionsError("Routes API returned no routes")

        try:
            result = _to_driving_route(routes[0])
        except (TypeError, ValueError, AttributeError, LookupError) as exc:
            raise DirectionsError(f"Routes API returned a malformed route: {exc}") from exc

        logger.info(
            f"Routes API: {result.distance_km:.2f} km, {result.duration_min:.1f} min, "
            f"{len(result.geometry)} polyline point(s)"
        )
        return result


def _parse_duration_s(value: object) -> float:
    """
    Routes API durations are strings such as "754s".
    """
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip()
    if text.endswith("s"):
        text = text[:-1]
    try:
        return float(text)
    except ValueError as exc:
        raise DirectionsError(f"Unexpected duration format: {value!r}") from exc


def _to_driving_route(route: dict) -> DrivingRoute:
    encoded = (route.get("polyline") or {}).get("encodedPolyline")
    distance_m = route.get("distanceMeters")
    if distance_m is None:
        # Some responses only carry the per-leg figure
        legs = route.get("legs") or [{}]
        distance_m = legs[0].get("distanceMeters", 0)

    try:
        geometry = decode_polyline(encoded) if encoded else []
    except ValueError as exc:
        raise DirectionsError(f"Could not decode route polyline: {exc}") from exc

    return DrivingRoute(
        distance_km=float(distance_m) / 1000.0,
        duration_min=_parse_duration_s(route.get("duration")) / 60.0,
        polyline=encoded,
        geometry=geometry,
    )
