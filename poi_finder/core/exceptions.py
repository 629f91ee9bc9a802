# poi_finder/core/exceptions.py


class PoiFinderError(Exception):
    """Base exception for the nearest point-of-interest finder."""


class UnknownNodeError(PoiFinderError, KeyError):
    """Raised when an operation references a node id absent from the graph."""

    def __init__(self, node_id: str) -> None:
        super().__init__(node_id)
        self.node_id = node_id

    def __str__(self) -> str:
        return f"Unknown node id: {self.node_id!r}"


class NearestNotFoundError(PoiFinderError):
    """No point of interest is reachable from the user's location."""


class PlacesLookupError(PoiFinderError):
    """The places lookup service failed or returned an unusable payload."""


class DirectionsError(PoiFinderError):
    """The routing service failed or returned no route."""
