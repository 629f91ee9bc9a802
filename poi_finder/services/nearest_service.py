# poi_finder/services/nearest_service.py

from time import perf_counter
from typing import List, Optional

from poi_finder.core.config import settings
from poi_finder.core.exceptions import DirectionsError, NearestNotFoundError
from poi_finder.core.logger import logger
from poi_finder.models.location import Category, Location
from poi_finder.models.nearest import NearestRequest, NearestResponse, RouteStep
from poi_finder.services.directions import DirectionsProvider
from poi_finder.services.graph import Graph
from poi_finder.services.graph_builder import USER_NODE_ID, build_star_graph
from poi_finder.services.places import PlacesProvider
from poi_finder.services.shortest_path import bfs_to_category, shortest_path_to_category

SEARCHES = {
    "dijkstra": shortest_path_to_category,
    "bfs": bfs_to_category,
}


class NearestService:
    """
    High-level "nearest point of interest" service:
    - looks up candidates around the user
    - builds the per-request star graph
    - runs the selected search from the user node
    - optionally replaces the straight-line route with a driving route
    """

    def __init__(
        self,
        places: PlacesProvider,
        directions: Optional[DirectionsProvider] = None,
        speed_kmh: float = settings.AVERAGE_SPEED_KMH,
        default_radius_km: Optional[float] = settings.GRAPH_RADIUS_KM,
    ) -> None:
        if speed_kmh <= 0:
            raise ValueError(f"Average speed must be positive, got {speed_kmh}")
        self.places = places
        self.directions = directions
        self.speed_kmh = speed_kmh
        self.default_radius_km = default_radius_km

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def find_nearest(self, request: NearestRequest) -> NearestResponse:
        """
        Main entry point for the /nearest endpoint.

        Raises NearestNotFoundError when nothing is found or reachable.
        """
        t0 = perf_counter()
        logger.info(
            f"Received nearest request at ({request.lat:.6f}, {request.lng:.6f}), "
            f"algorithm={request.algorithm}"
        )

        # 1) Candidates
        candidates = self.places.search(request.lat, request.lng)
        if not candidates:
            raise NearestNotFoundError("No points of interest found in the region")

        # 2) Graph
        radius_km = request.radius_km if request.radius_km is not None else self.default_radius_km
        graph = build_star_graph(request.lat, request.lng, candidates, radius_km=radius_km)

        # 3) Search
        t_sp0 = perf_counter()
        result = SEARCHES[request.algorithm](graph, USER_NODE_ID, Category.POINT_OF_INTEREST)
        t_sp1 = perf_counter()
        logger.info(f"{request.algorithm} search finished in {(t_sp1 - t_sp0) * 1000.0:.2f} ms")

        if result is None:
            limit = "" if radius_km is None else f" within {radius_km:g} km"
            raise NearestNotFoundError(f"No point of interest reachable{limit}")

        nearest = result.destination
        logger.info(f"Nearest: {nearest.name!r} ({nearest.id}) at {result.total_distance:.3f} km")

        # 4) Response from the graph path
        distance_km = result.total_distance
        estimated_time_min = self.estimate_minutes(distance_km)
        geometry = [[node.lat, node.lng] for node in result.path]
        steps = self._build_steps(graph, result.path)
        polyline = None
        source = "graph"
        warnings: List[str] = []

        # 5) Driving route, when available
        if request.directions and self.directions is not None:
            try:
                route = self.directions.route(request.lat, request.lng, nearest.lat, nearest.lng)
            except DirectionsError as exc:
                logger.warning(f"Directions unavailable, keeping straight-line route: {exc}")
                warnings.append(f"Directions unavailable: {exc}")
            else:
                distance_km = route.distance_km
                estimated_time_min = int(round(route.duration_min))
                geometry = route.geometry or geometry
                polyline = route.polyline
                source = "directions"

        logger.info(f"Total request time: {(perf_counter() - t0) * 1000.0:.2f} ms")

        return NearestResponse(
            algorithm=request.algorithm,
            nearest=nearest,
            candidates=candidates,
            distance_km=distance_km,
            estimated_time_min=estimated_time_min,
            path=result.path,
            geometry=geometry,
            steps=steps,
            polyline=polyline,
            source=source,
            warnings=warnings,
        )

    def estimate_minutes(self, distance_km: float) -> int:
        """
        Travel time in whole minutes at the configured average speed.
        """
        if distance_km <= 0:
            return 0
        return int(round(distance_km / self.speed_kmh * 60))

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _build_steps(self, graph: Graph, path: List[Location]) -> List[RouteStep]:
        """
        One step per hop of the path, then an arrival step.
        """
        steps: List[RouteStep] = []
        if len(path) < 2:
            return steps

        for a, b in zip(path[:-1], path[1:]):
            dist = graph.edge_weight(a.id, b.id) or 0.0
            steps.append(
                RouteStep(
                    instruction=f"Head from {a.name} toward {b.name}",
                    distance_km=dist,
                    duration_min=dist / self.speed_kmh * 60,
                )
            )

        last = path[-1]
        arrival = f"Arrive at {last.name}"
        if last.address:
            arrival += f", {last.address}"
        steps.append(RouteStep(instruction=arrival, distance_km=0.0, duration_min=0.0))
        return steps
