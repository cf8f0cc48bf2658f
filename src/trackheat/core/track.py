import dataclasses
import logging
from typing import Iterator, List, Optional, Tuple

from trackheat.metrics.distance import DistanceFn, haversine_distance
from .point import Trackpoint
from .segment import Segment

logger = logging.getLogger(__name__)


class Track:
    """
    A full recording session: an ordered list of segments, possibly with gaps
    between them.

    Invariants maintained by the mutators:
    - there is always at least one segment (a new track holds one empty segment);
    - only the last segment may be empty;
    - timestamps strictly increase across the whole track, segment by segment.

    Points are copied on the way in and on the way out, so callers never share
    an object with the track's storage.
    """

    def __init__(self, distance: DistanceFn = haversine_distance):
        """
        Args:
            distance: Distance oracle used for the cached segment lengths.
                      Defaults to the great-circle distance in meters.
        """
        self.distance = distance
        self._segments: List[Segment] = [Segment()]

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._segments)

    @property
    def segments(self) -> Tuple[Segment, ...]:
        return tuple(self._segments)

    @property
    def total_points(self) -> int:
        return sum(len(segment) for segment in self._segments)

    def points(self) -> Iterator[Trackpoint]:
        """
        Yields every point of the track, segment by segment.
        """
        for segment in self._segments:
            yield from segment.points

    def last_point(self) -> Optional[Trackpoint]:
        for segment in reversed(self._segments):
            if segment.points:
                return segment.points[-1]
        return None

    def add_point(self, point: Trackpoint) -> bool:
        """
        Appends a copy of `point` to the current (last) segment.

        Returns:
            False, leaving the track untouched, if the point is not strictly
            after the last point of the track; True otherwise.
        """
        last = self.last_point()
        if last is not None and point.timestamp <= last.timestamp:
            logger.debug(
                "Rejected point at t=%s: not after last point at t=%s",
                point.timestamp, last.timestamp,
            )
            return False

        self._segments[-1].append(dataclasses.replace(point), self.distance)
        return True

    def start_segment(self) -> None:
        """
        Starts a new, empty segment. No effect if the current segment is empty.
        """
        if self._segments[-1].is_empty:
            return
        self._segments.append(Segment())

    def segment_count(self) -> int:
        return len(self._segments)

    def point_count(self, segment_index: int) -> int:
        """
        Number of points in the given segment, or 0 for an out-of-range index.
        """
        if 0 <= segment_index < len(self._segments):
            return len(self._segments[segment_index])
        return 0

    def get_point(self, segment_index: int, point_index: int) -> Optional[Trackpoint]:
        """
        Returns a copy of a stored point, or None if either index is out of range.
        Negative indices count as out of range.
        """
        if not 0 <= segment_index < len(self._segments):
            return None
        segment = self._segments[segment_index]
        if not 0 <= point_index < len(segment):
            return None
        return dataclasses.replace(segment.points[point_index])

    def segment_lengths(self) -> List[float]:
        return [segment.length for segment in self._segments]

    def merge_segments(self, start: int, end: int) -> None:
        """
        Merges segments [start, end) into the one at `start`; later segments
        shift down to fill the gap.

        No effect for an invalid or single-segment range. Time ordering across
        the merged segments is not re-checked: merge only time-contiguous runs.
        """
        count = len(self._segments)
        if start < 0 or start >= count or end < start or end > count:
            return
        if end - start <= 1:
            return

        merged = self._segments[start]
        for other in self._segments[start + 1:end]:
            merged.absorb(other, self.distance)
        del self._segments[start + 1:end]
