from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from trackheat.metrics.distance import DistanceFn
from .point import Trackpoint


@dataclass
class Segment:
    """
    One continuous recording interval of a track.
    Points are kept in time order and `length` caches the summed distance
    between consecutive points, so it never has to be recomputed from scratch.
    """
    points: List[Trackpoint] = field(default_factory=list)
    length: float = 0.0

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Trackpoint]:
        return iter(self.points)

    @property
    def is_empty(self) -> bool:
        return not self.points

    @property
    def first_point(self) -> Optional[Trackpoint]:
        return self.points[0] if self.points else None

    @property
    def last_point(self) -> Optional[Trackpoint]:
        return self.points[-1] if self.points else None

    @property
    def start_time(self) -> int:
        if not self.points:
            raise ValueError("Segment is empty")
        return self.points[0].timestamp

    @property
    def end_time(self) -> int:
        if not self.points:
            raise ValueError("Segment is empty")
        return self.points[-1].timestamp

    def append(self, point: Trackpoint, distance: DistanceFn) -> None:
        """
        Appends a point and extends the cached length by the last hop only.
        The caller is responsible for time ordering.
        """
        hop = distance(self.points[-1].location, point.location) if self.points else 0.0
        # length only changes once the point is stored
        self.points.append(point)
        self.length += hop

    def absorb(self, other: 'Segment', distance: DistanceFn) -> None:
        """
        Moves every point of `other` onto the end of this segment.
        The merged length is both cached lengths plus the hop bridging the junction.
        """
        hop = 0.0
        if self.points and other.points:
            hop = distance(self.points[-1].location, other.points[0].location)
        self.points.extend(other.points)
        self.length += hop + other.length
