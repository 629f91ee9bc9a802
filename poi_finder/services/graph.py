# poi_finder/services/graph.py
import math
from typing import Dict, Iterator, List, Optional, Tuple, Union

from poi_finder.core.exceptions import UnknownNodeError
from poi_finder.models.location import Category, Location
from poi_finder.services.geo import haversine_distance_km


class Graph:
    """
    Small in-memory weighted undirected graph.

    Nodes live in an arena indexed by an integer handle (insertion order);
    callers address them by their string id. Each handle owns a list of
    outgoing (target handle, weight) entries, and every edge is stored once
    in each direction.
    """

    def __init__(self) -> None:
        self._nodes: List[Location] = []
        self._handles: Dict[str, int] = {}
        self._adjacency: List[List[Tuple[int, float]]] = []

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._handles

    def __iter__(self) -> Iterator[Location]:
        return iter(self._nodes)

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def add_node(
        self,
        node_id: str,
        name: str,
        lat: float,
        lng: float,
        category: Union[Category, str] = Category.GENERIC_NODE,
        address: Optional[str] = None,
    ) -> Location:
        """
        Insert a node, or replace the data of an existing one.

        Re-inserting an id keeps its handle and its edges; edge weights are
        not recomputed from the new coordinates.
        """
        location = Location(
            id=node_id,
            name=name,
            lat=lat,
            lng=lng,
            category=Category(category),
            address=address,
        )
        return self.add_location(location)

    def add_location(self, location: Location) -> Location:
        handle = self._handles.get(location.id)
        if handle is None:
            self._handles[location.id] = len(self._nodes)
            self._nodes.append(location)
            self._adjacency.append([])
        else:
            self._nodes[handle] = location
        return location

    def add_edge(self, id_a: str, id_b: str, weight: Optional[float] = None) -> float:
        """
        Connect two existing nodes in both directions and return the weight used.

        Without an explicit weight, the great-circle distance (km) between
        the endpoints is used. Unknown ids raise UnknownNodeError.
        """
        a = self.handle_of(id_a)
        b = self.handle_of(id_b)

        if weight is None:
            na, nb = self._nodes[a], self._nodes[b]
            weight = haversine_distance_km(na.lat, na.lng, nb.lat, nb.lng)

        weight = float(weight)
        if math.isnan(weight) or math.isinf(weight) or weight < 0:
            raise ValueError(
                f"Edge {id_a!r} <-> {id_b!r} needs a finite non-negative weight, got {weight}"
            )

        self._adjacency[a].append((b, weight))
        self._adjacency[b].append((a, weight))
        return weight

    def get_node(self, node_id: str) -> Optional[Location]:
        handle = self._handles.get(node_id)
        if handle is None:
            return None
        return self._nodes[handle]

    def neighbors(self, node_id: str) -> List[Tuple[str, float]]:
        """
        (target id, weight) pairs leaving node_id; empty for an unknown id.
        """
        handle = self._handles.get(node_id)
        if handle is None:
            return []
        return [(self._nodes[t].id, w) for t, w in self._adjacency[handle]]

    def edge_weight(self, id_a: str, id_b: str) -> Optional[float]:
        """
        Lightest weight among the edges joining two nodes, or None.
        """
        a = self._handles.get(id_a)
        b = self._handles.get(id_b)
        if a is None or b is None:
            return None
        weights = [w for t, w in self._adjacency[a] if t == b]
        return min(weights) if weights else None

    def all_nodes(self) -> List[Location]:
        return list(self._nodes)

    def nearest_node(
        self,
        lat: float,
        lng: float,
        category: Union[Category, str, None] = None,
    ) -> Optional[Location]:
        """
        Node closest to (lat, lng) by great-circle distance, optionally
        restricted to one category. First inserted wins on ties.
        """
        wanted = Category(category) if category is not None else None
        best: Optional[Location] = None
        best_dist = float("inf")

        for node in self._nodes:
            if wanted is not None and node.category != wanted:
                continue
            d = haversine_distance_km(lat, lng, node.lat, node.lng)
            if d < best_dist:
                best_dist = d
                best = node

        return best

    # ------------------------------------------------------------------ #
    # Handle-level access (used by the search algorithms)
    # ------------------------------------------------------------------ #

    def handle_of(self, node_id: str) -> int:
        try:
            return self._handles[node_id]
        except KeyError:
            raise UnknownNodeError(node_id) from None

    def node_at(self, handle: int) -> Location:
        return self._nodes[handle]

    def edges_from(self, handle: int) -> List[Tuple[int, float]]:
        return self._adjacency[handle]
