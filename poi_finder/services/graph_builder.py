# poi_finder/services/graph_builder.py
import math
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

from poi_finder.core.logger import logger
from poi_finder.models.location import Category, Place
from poi_finder.services.geo import haversine_distance_km
from poi_finder.services.graph import Graph

USER_NODE_ID = "user"
USER_NODE_NAME = "Your location"

Candidate = Union[Place, Mapping[str, Any]]


def build_star_graph(
    user_lat: float,
    user_lng: float,
    candidates: Iterable[Candidate],
    radius_km: Optional[float] = None,
) -> Graph:
    """
    Build the per-request graph: one user node joined directly to every
    candidate (star topology, no candidate-to-candidate edges).

    - Candidates without usable numeric coordinates are skipped.
    - With radius_km set, only candidates within that great-circle distance
      get an edge; the others stay in the graph but are unreachable.
    """
    graph = Graph()
    graph.add_node(USER_NODE_ID, USER_NODE_NAME, user_lat, user_lng, Category.USER)

    kept = 0
    skipped = 0
    connected = 0

    for raw in candidates:
        place = _as_place(raw)
        if place is None:
            skipped += 1
            continue

        if place.id == USER_NODE_ID or place.id in graph:
            logger.warning(f"Duplicate candidate id {place.id!r}; keeping the first one")
            skipped += 1
            continue

        graph.add_node(
            place.id,
            place.name,
            place.lat,
            place.lng,
            Category.POINT_OF_INTEREST,
            address=place.address or None,
        )
        kept += 1

        distance_km = haversine_distance_km(user_lat, user_lng, place.lat, place.lng)
        if radius_km is not None and distance_km > radius_km:
            continue

        graph.add_edge(USER_NODE_ID, place.id, distance_km)
        connected += 1

    logger.info(
        f"Star graph built: {kept} candidate(s), {connected} within radius "
        f"{'unbounded' if radius_km is None else f'{radius_km:.2f} km'}, "
        f"{skipped} skipped"
    )
    return graph


# ---------------------------------------------------------------------- #
# Internal helpers
# ---------------------------------------------------------------------- #

def _as_place(raw: Candidate) -> Optional[Place]:
    if isinstance(raw, Place):
        return raw if _numeric_pair(raw.lat, raw.lng) else None

    coords = _numeric_pair(raw.get("lat"), raw.get("lng"))
    if coords is None or raw.get("id") is None:
        return None

    return Place(
        id=str(raw["id"]),
        name=str(raw.get("name") or raw["id"]),
        lat=coords[0],
        lng=coords[1],
        address=str(raw.get("address") or ""),
    )


def _numeric_pair(lat: Any, lng: Any) -> Optional[Tuple[float, float]]:
    for value in (lat, lng):
        # bool is an int subclass but never a coordinate
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        if not math.isfinite(value):
            return None
    return float(lat), float(lng)
