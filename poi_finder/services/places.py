# poi_finder/services/places.py
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, Optional, Sequence

import httpx
from pydantic import TypeAdapter

from poi_finder.core.exceptions import PlacesLookupError
from poi_finder.core.logger import logger
from poi_finder.models.location import Place

PLACES_TEXT_SEARCH_URL = "https://places.googleapis.com/v1/places:searchText"
PLACES_FIELD_MASK = (
    "places.id,places.displayName,places.location,places.formattedAddress,places.types"
)


class PlacesProvider(ABC):
    """Port for looking up candidate points of interest around a coordinate."""

    @abstractmethod
    def search(self, lat: float, lng: float) -> List[Place]:
        """Return candidates near (lat, lng); an empty list when nothing is found."""


class GooglePlacesProvider(PlacesProvider):
    """
    Google Places API (New) Text Search client.

    Searches are biased to a circle around the user. Radii are tried in
    order and the first answer with at least one located place wins.
    """

    def __init__(
        self,
        api_key: str,
        text_query: str = "McDonald's",
        language: str = "pt-BR",
        max_results: int = 10,
        radii_m: Sequence[float] = (5_000.0, 10_000.0, 20_000.0),
        timeout_s: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.api_key = api_key
        self.text_query = text_query
        self.language = language
        self.max_results = max_results
        self.radii_m = list(radii_m)
        self.timeout_s = timeout_s
        self._client = client

    def search(self, lat: float, lng: float) -> List[Place]:
        for radius_m in self.radii_m:
            places = self._search_text(lat, lng, radius_m)
            if any(p.lat is not None and p.lng is not None for p in places):
                logger.info(
                    f"Places lookup found {len(places)} result(s) for {self.text_query!r} "
                    f"within {radius_m:.0f} m"
                )
                return places
            logger.info(
                f"No {self.text_query!r} with coordinates within {radius_m:.0f} m, widening search"
            )

        logger.warning(
            f"Places lookup returned nothing around ({lat:.6f}, {lng:.6f}) "
            f"up to {max(self.radii_m, default=0):.0f} m"
        )
        return []

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _search_text(self, lat: float, lng: float, radius_m: float) -> List[Place]:
        body = {
            "textQuery": self.text_query,
            "locationBias": {
                "circle": {
                    "center": {"latitude": lat, "longitude": lng},
                    "radius": radius_m,
                },
            },
            "languageCode": self.language,
            "maxResultCount": self.max_results,
        }
        headers = {
            "Content-Type": "application/json",
            "X-Goog-Api-Key": self.api_key,
            "X-Goog-FieldMask": PLACES_FIELD_MASK,
        }

        try:
            if self._client is not None:
                response = self._client.post(PLACES_TEXT_SEARCH_URL, json=body, headers=headers)
            else:
                with httpx.Client(timeout=self.timeout_s) as client:
                    response = client.post(PLACES_TEXT_SEARCH_URL, json=body, headers=headers)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            logger.error(f"Places lookup failed: {exc}")
            raise PlacesLookupError(f"Places lookup failed: {exc}") from exc
        except ValueError as exc:
            raise PlacesLookupError("Places lookup returned invalid JSON") from exc

        if not isinstance(data, dict):
            raise PlacesLookupError("Places lookup returned an unexpected payload")

        return [p for p in (self._to_place(raw) for raw in data.get("places") or []) if p]

    def _to_place(self, raw: Any) -> Optional[Place]:
        if not isinstance(raw, dict) or not raw.get("id"):
            return None

        location = raw.get("location")
        if not isinstance(location, dict):
            location = {}
        display_name = raw.get("displayName")
        if not isinstance(display_name, dict):
            display_name = {}

        # Non-numeric coordinates become None so the graph builder drops the place
        return Place(
            id=str(raw["id"]),
            name=str(display_name.get("text") or self.text_query),
            lat=_coordinate(location.get("latitude")),
            lng=_coordinate(location.get("longitude")),
            address=str(raw.get("formattedAddress") or ""),
        )


class StaticPlacesProvider(PlacesProvider):
    """
    Fixed candidate list, e.g. loaded from a JSON file for offline runs.

    Every place is returned regardless of the user's position; distance
    filtering happens when the graph is built.
    """

    def __init__(self, places: Sequence[Place] = ()) -> None:
        self.places = list(places)

    @classmethod
    def from_file(cls, path: str) -> "StaticPlacesProvider":
        raw = Path(path).read_bytes()
        places = TypeAdapter(List[Place]).validate_json(raw)
        logger.info(f"Loaded {len(places)} static place(s) from {path}")
        return cls(places)

    def search(self, lat: float, lng: float) -> List[Place]:
        return list(self.places)


def _coordinate(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)
