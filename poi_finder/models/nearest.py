# poi_finder/models/nearest.py

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from poi_finder.models.location import Location, Place


class NearestRequest(BaseModel):
    """
    Request body for the /nearest endpoint.
    """
    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)
    algorithm: Literal["dijkstra", "bfs"] = "dijkstra"
    # Only connect candidates closer than this (km). Falls back to settings.
    radius_km: Optional[float] = Field(default=None, gt=0)
    # Ask the routing service for a realistic driving route when configured.
    directions: bool = True


class RouteStep(BaseModel):
    """
    One hop of the route, from one path node to the next.
    """
    instruction: str
    distance_km: float
    duration_min: float


class NearestResponse(BaseModel):
    """
    Response for the /nearest endpoint.

    - `path` holds the graph nodes (user first, destination last).
    - `geometry` is a plain list of [lat, lng] pairs for the map polyline.
      It follows the road when `source` is "directions", otherwise it is the
      straight line through the path nodes.
    """
    success: bool = True
    algorithm: str
    nearest: Location
    candidates: List[Place]
    distance_km: float
    estimated_time_min: int
    path: List[Location]
    geometry: List[List[float]]
    steps: List[RouteStep]
    polyline: Optional[str] = None
    source: Literal["graph", "directions"] = "graph"
    warnings: List[str] = []
