# poi_finder/models/location.py

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel


class Category(str, Enum):
    """
    Node tags. Only used to decide where a shortest-path search stops.
    """
    GENERIC_NODE = "generic-node"
    POINT_OF_INTEREST = "point-of-interest"
    USER = "user"
    INTERSECTION = "intersection"


class Location(BaseModel):
    """
    A vertex of the graph: labelled point with coordinates (degrees) and a category.
    """
    id: str
    name: str
    lat: float
    lng: float
    category: Category = Category.GENERIC_NODE
    address: Optional[str] = None


class Place(BaseModel):
    """
    Candidate point of interest as returned by a places lookup.

    Coordinates may be missing; such places are dropped before a graph
    is built from them.
    """
    id: str
    name: str
    lat: Optional[float] = None
    lng: Optional[float] = None
    address: str = ""


class PathResult(BaseModel):
    """
    Outcome of a successful search: the matched node, the accumulated
    edge weight (km) and the nodes from start to destination inclusive.
    """
    destination: Location
    total_distance: float
    path: List[Location]
