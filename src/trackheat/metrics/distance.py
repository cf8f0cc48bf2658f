import math
from typing import Callable, Protocol


class HasLocation(Protocol):
    lat: float
    lon: float


DistanceFn = Callable[[HasLocation, HasLocation], float]

EARTH_RADIUS_M = 6371000.0


def haversine_distance(a: HasLocation, b: HasLocation) -> float:
    """
    Great-circle distance in meters between two lat/lon positions.

    Args:
        a: Anything with `lat` and `lon` in degrees (Location, Trackpoint).
        b: Same as `a`.

    Returns:
        Non-negative distance in meters.
    """
    phi1 = math.radians(a.lat)
    phi2 = math.radians(b.lat)
    d_phi = math.radians(b.lat - a.lat)
    d_lambda = math.radians(b.lon - a.lon)

    h = math.sin(d_phi / 2.0) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2.0) ** 2
    # rounding can push h a hair over 1 for antipodal points
    h = min(1.0, h)
    return 2.0 * EARTH_RADIUS_M * math.atan2(math.sqrt(h), math.sqrt(1.0 - h))
