import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, TextIO, Union

from trackheat.metrics.distance import DistanceFn, haversine_distance
from .point import Trackpoint
from .track import Track

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SegmentBreak:
    """Marker between points that belong to different segments."""


SEGMENT_BREAK = SegmentBreak()

StreamItem = Union[Trackpoint, SegmentBreak]


class TrackStream:
    """
    Reads a whitespace-separated point stream, one `LAT LON TIMESTAMP` per line.
    A blank line marks a segment break.
    """

    def __init__(self, source: Union[str, Path, TextIO, Iterable[str]]):
        """
        Args:
            source: Path to a text file, or an already open text stream
                    (any iterable of lines works, e.g. sys.stdin).
        """
        if isinstance(source, (str, Path)):
            self.filepath = Path(source)
            if not self.filepath.exists():
                raise FileNotFoundError(f"File not found: {self.filepath}")
            self._lines = None
        else:
            self.filepath = None
            self._lines = source

    def __iter__(self) -> Iterator[StreamItem]:
        return self.stream()

    def stream(self) -> Iterator[StreamItem]:
        """
        Yields points and segment breaks in input order.
        """
        if self.filepath is None:
            yield from self._parse(self._lines)
            return

        with open(self.filepath, mode="r", encoding="utf-8") as f:
            yield from self._parse(f)

    def _parse(self, lines: Iterable[str]) -> Iterator[StreamItem]:
        for lineno, line in enumerate(lines, start=1):
            fields = line.split()
            if not fields:
                yield SEGMENT_BREAK
                continue

            if len(fields) != 3:
                logger.warning("Skipping line %d: expected 3 fields, got %d", lineno, len(fields))
                continue
            try:
                lat = float(fields[0])
                lon = float(fields[1])
                timestamp = int(fields[2])
            except ValueError:
                # Skip rows with invalid values
                logger.warning("Skipping line %d: cannot parse %r", lineno, line.rstrip("\n"))
                continue

            yield Trackpoint(lat=lat, lon=lon, timestamp=timestamp)


def load_track(
    source: Union[str, Path, TextIO, Iterable[str]],
    distance: DistanceFn = haversine_distance,
) -> Track:
    """
    Builds a Track from a point stream. Points that are not strictly after the
    previous one are dropped with a warning.
    """
    track = Track(distance=distance)
    rejected = 0
    for item in TrackStream(source).stream():
        if isinstance(item, SegmentBreak):
            track.start_segment()
        elif not track.add_point(item):
            rejected += 1
            logger.warning("Dropping out-of-order point at t=%d", item.timestamp)

    logger.info(
        "Loaded %d points in %d segments (%d rejected)",
        track.total_points, track.segment_count(), rejected,
    )
    return track
