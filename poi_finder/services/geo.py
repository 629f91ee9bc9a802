# poi_finder/services/geo.py
import math
from typing import List

# Mean Earth radius. Distances treat the Earth as a sphere.
EARTH_RADIUS_KM = 6_371.0

# Encoded polylines store coordinates as integers scaled by 1e5
POLYLINE_PRECISION = 1e5


def haversine_distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Compute great-circle distance between two points (lat/lng in degrees), in kilometres.
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlmb = math.radians(lng2 - lng1)

    h = (
        math.sin(dphi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    )
    # rounding can push h marginally above 1 for antipodal points; NaN passes through
    if h > 1.0:
        h = 1.0
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def decode_polyline(encoded: str) -> List[List[float]]:
    """
    Decode a Google encoded polyline into [lat, lng] pairs.

    Each coordinate is a zig-zag encoded delta from the previous one, split
    into 5-bit chunks offset by 63; a set 0x20 bit means another chunk follows.
    """
    coords: List[List[float]] = []
    index = 0
    lat = 0
    lng = 0
    length = len(encoded)

    def next_value() -> int:
        nonlocal index
        result = 0
        shift = 0
        while True:
            if index >= length:
                raise ValueError("Truncated polyline")
            b = ord(encoded[index]) - 63
            index += 1
            result |= (b & 0x1F) << shift
            shift += 5
            if b < 0x20:
                break
        return ~(result >> 1) if result & 1 else result >> 1

    while index < length:
        lat += next_value()
        lng += next_value()
        coords.append([lat / POLYLINE_PRECISION, lng / POLYLINE_PRECISION])

    return coords
