import math

import pytest

from trackheat.core.point import Trackpoint
from trackheat.core.track import Track


def planar_distance(a, b) -> float:
    """Flat distance in degrees; keeps expected lengths easy to compute by hand."""
    return math.hypot(b.lat - a.lat, b.lon - a.lon)


@pytest.fixture
def distance():
    return planar_distance


@pytest.fixture
def make_track():
    """Factory building a track from lists of (lat, lon, timestamp), one list per segment."""
    def _make(points_by_segment, distance=planar_distance) -> Track:
        track = Track(distance=distance)
        for segment in points_by_segment:
            track.start_segment()
            for lat, lon, t in segment:
                assert track.add_point(Trackpoint(lat=lat, lon=lon, timestamp=t))
        return track
    return _make


@pytest.fixture
def planar_track():
    return Track(distance=planar_distance)
