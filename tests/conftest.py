# tests/conftest.py
import math
import os
import sys
from typing import List, Optional

import pytest

# Add the project root directory to sys.path so that "import poi_finder" works
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from poi_finder.core.exceptions import DirectionsError  # noqa: E402
from poi_finder.models.location import Place  # noqa: E402
from poi_finder.services.geo import EARTH_RADIUS_KM  # noqa: E402
from poi_finder.services.directions import DirectionsProvider, DrivingRoute  # noqa: E402
from poi_finder.services.places import PlacesProvider  # noqa: E402

# User in São Luís; candidates lie on the same meridian, offset in latitude
# by d / R radians, so their great-circle distances are 2.1, 4.8 and 0.9 km
# up to floating-point rounding.
USER_LAT = -2.5297
USER_LNG = -44.3028


def lat_offset(distance_km: float) -> float:
    return USER_LAT + math.degrees(distance_km / EARTH_RADIUS_KM)


class FakePlaces(PlacesProvider):
    def __init__(self, places: List[Place]) -> None:
        self.places = places
        self.calls = []

    def search(self, lat: float, lng: float) -> List[Place]:
        self.calls.append((lat, lng))
        return list(self.places)


class FakeDirections(DirectionsProvider):
    def __init__(self, route: Optional[DrivingRoute] = None, error: Optional[str] = None) -> None:
        self._route = route
        self._error = error
        self.calls = []

    def route(self, origin_lat, origin_lng, dest_lat, dest_lng) -> DrivingRoute:
        self.calls.append((origin_lat, origin_lng, dest_lat, dest_lng))
        if self._error is not None:
            raise DirectionsError(self._error)
        return self._route


@pytest.fixture
def sao_luis_places() -> List[Place]:
    return [
        Place(id="mc-1", name="McDonald's Centro", lat=lat_offset(2.1), lng=USER_LNG,
              address="Rua Grande, 100"),
        Place(id="mc-2", name="McDonald's Cohama", lat=lat_offset(-4.8), lng=USER_LNG,
              address="Av. Daniel de La Touche, 200"),
        Place(id="mc-3", name="McDonald's Renascença", lat=lat_offset(0.9), lng=USER_LNG,
              address="Av. Colares Moreira, 300"),
    ]
