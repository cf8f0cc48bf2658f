from dataclasses import dataclass


@dataclass(frozen=True)
class Location:
    """
    A position on the earth's surface, in degrees.
    """
    lat: float
    lon: float


@dataclass(frozen=True)
class Trackpoint:
    """
    Represents a single GPS fix (lat, lon, t).
    frozen=True keeps stored points immutable; the track still hands out copies.
    """
    lat: float
    lon: float
    timestamp: int

    @property
    def location(self) -> Location:
        return Location(lat=self.lat, lon=self.lon)
