# poi_finder/services/shortest_path.py
import heapq
from collections import deque
from typing import Callable, Dict, List, Optional, Union

from poi_finder.core.logger import logger
from poi_finder.models.location import Category, Location, PathResult
from poi_finder.services.graph import Graph

# (handle, node) -> does the search stop here?
TargetTest = Callable[[int, Location], bool]


def shortest_path_to_category(
    graph: Graph,
    start_id: str,
    target_category: Union[Category, str],
) -> Optional[PathResult]:
    """
    Dijkstra from start_id to the closest node of target_category.

    The search stops as soon as a matching node is settled, so nodes
    further away than the winner are never expanded. Returns None when no
    matching node is reachable; the start itself matches if its own
    category does (zero-length path).
    """
    wanted = Category(target_category)
    start = graph.handle_of(start_id)
    return _dijkstra(graph, start, lambda _, node: node.category == wanted)


def shortest_path(graph: Graph, start_id: str, target_id: str) -> Optional[PathResult]:
    """
    Dijkstra between two node ids. Returns None when target_id is unreachable.
    """
    start = graph.handle_of(start_id)
    target = graph.handle_of(target_id)
    return _dijkstra(graph, start, lambda handle, _: handle == target)


def bfs_path(graph: Graph, start_id: str, target_id: str) -> List[Location]:
    """
    Fewest-hops path between two node ids, ignoring weights.
    Empty list when target_id cannot be reached.
    """
    start = graph.handle_of(start_id)
    target = graph.handle_of(target_id)
    end, parents = _bfs(graph, start, lambda handle, _: handle == target)
    if end is None:
        return []
    return [graph.node_at(h) for h in _walk_back(parents, end)]


def bfs_to_category(
    graph: Graph,
    start_id: str,
    target_category: Union[Category, str],
) -> Optional[PathResult]:
    """
    Fewest-hops path to a node of target_category.

    The reported distance is the weight of the hops actually taken, which
    may be larger than the Dijkstra distance.
    """
    wanted = Category(target_category)
    start = graph.handle_of(start_id)
    end, parents = _bfs(graph, start, lambda _, node: node.category == wanted)
    if end is None:
        return None

    handles = _walk_back(parents, end)
    total = 0.0
    for u, v in zip(handles[:-1], handles[1:]):
        total += min(w for t, w in graph.edges_from(u) if t == v)

    return PathResult(
        destination=graph.node_at(end),
        total_distance=total,
        path=[graph.node_at(h) for h in handles],
    )


# ---------------------------------------------------------------------- #
# Internal helpers
# ---------------------------------------------------------------------- #

def _dijkstra(graph: Graph, start: int, is_target: TargetTest) -> Optional[PathResult]:
    # Heap entries are (distance, handle): equal distances pop in insertion order.
    dist: Dict[int, float] = {start: 0.0}
    prev: Dict[int, int] = {}
    settled = set()
    heap = [(0.0, start)]

    while heap:
        d, u = heapq.heappop(heap)
        if u in settled:
            continue
        settled.add(u)

        node = graph.node_at(u)
        if is_target(u, node):
            logger.debug(f"Dijkstra settled {len(settled)} node(s), stopped at {node.id!r} ({d:.4f} km)")
            handles = _walk_back(prev, u)
            return PathResult(
                destination=node,
                total_distance=d,
                path=[graph.node_at(h) for h in handles],
            )

        for v, w in graph.edges_from(u):
            if v in settled:
                continue
            candidate = d + w
            if candidate < dist.get(v, float("inf")):
                dist[v] = candidate
                prev[v] = u
                heapq.heappush(heap, (candidate, v))

    logger.debug(f"Dijkstra exhausted {len(settled)} reachable node(s) without a match")
    return None


def _bfs(graph: Graph, start: int, is_target: TargetTest):
    parents: Dict[int, int] = {}
    seen = {start}
    queue = deque([start])

    while queue:
        u = queue.popleft()
        if is_target(u, graph.node_at(u)):
            return u, parents
        for v, _ in graph.edges_from(u):
            if v not in seen:
                seen.add(v)
                parents[v] = u
                queue.append(v)

    return None, parents


def _walk_back(prev: Dict[int, int], end: int) -> List[int]:
    handles = [end]
    while handles[-1] in prev:
        handles.append(prev[handles[-1]])
    handles.reverse()
    return handles
