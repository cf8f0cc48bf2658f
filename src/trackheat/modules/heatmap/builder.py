import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from trackheat.core.track import Track

logger = logging.getLogger(__name__)

MAX_CELL_WIDTH = 360.0
MAX_CELL_HEIGHT = 180.0


def normalize_longitude(lon):
    """
    Maps longitudes (scalar or array) onto [-180, 180).
    Values already in range pass through untouched, since the modulo would perturb them.
    """
    lon = np.asarray(lon, dtype=float)
    in_range = (lon >= -180.0) & (lon < 180.0)
    return np.where(in_range, lon, (lon + 180.0) % 360.0 - 180.0)


@dataclass(frozen=True)
class LongitudeWedge:
    """
    The narrowest band of longitude, read eastwards from `west_bound`,
    that holds every point of a track.
    """
    west_bound: float
    width: float


def find_longitude_wedge(longitudes: Sequence[float]) -> LongitudeWedge:
    """
    Finds the narrowest wedge between two meridians containing all longitudes.

    Seen on the 360 degree circle, the wedge is the complement of the largest
    empty gap between neighbouring longitudes: its western edge is the
    longitude just east of that gap. When several gaps are equally large the
    wedge with the lowest normalized western edge wins.

    Args:
        longitudes: Non-empty sequence of longitudes in degrees, in any range.

    Returns:
        LongitudeWedge with a normalized `west_bound` and a width in [0, 360).
    """
    lons = normalize_longitude(longitudes)
    if lons.size == 0:
        raise ValueError("Cannot find the wedge of an empty set of longitudes")

    distinct = np.unique(lons)
    if distinct.size == 1:
        return LongitudeWedge(west_bound=float(distinct[0]), width=0.0)

    # gaps[k] is the empty arc going east from distinct[k] to the next longitude
    gaps = np.diff(np.append(distinct, distinct[0] + 360.0))
    west_edges = np.roll(distinct, -1)
    west_bound = float(west_edges[gaps == gaps.max()].min())

    width = float(((lons - west_bound) % 360.0).max())
    return LongitudeWedge(west_bound=west_bound, width=width)


def _cell_indices(
    lats: np.ndarray,
    lons: np.ndarray,
    north_bound: float,
    west_bound: float,
    cell_width: float,
    cell_height: float,
    row_count: int,
    col_count: int,
) -> Tuple[np.ndarray, np.ndarray]:
    rows = np.floor((north_bound - lats) / cell_height).astype(np.int64)
    # normalized exactly as in find_longitude_wedge, so the western edge lands at offset 0
    # and the eastern edge at exactly the wedge width
    offsets = (normalize_longitude(lons) - west_bound) % 360.0
    cols = np.floor(offsets / cell_width).astype(np.int64)

    # Points on the south/east border fold into the last existing row/column
    np.minimum(rows, row_count - 1, out=rows)
    np.minimum(cols, col_count - 1, out=cols)
    return rows, cols


@dataclass(frozen=True, eq=False)
class HeatmapGrid:
    """
    Per-cell trackpoint counts over a lat/lon rectangle.

    Row 0 starts at `north_bound` and rows go south; column 0 starts at
    `west_bound` and columns go east. `counts` is read-only.
    For a track without points the grid is 1x1 and both bounds are None.
    """
    counts: np.ndarray
    north_bound: Optional[float]
    west_bound: Optional[float]
    cell_width: float
    cell_height: float

    def __post_init__(self):
        self.counts.setflags(write=False)

    @property
    def row_count(self) -> int:
        return int(self.counts.shape[0])

    @property
    def col_count(self) -> int:
        return int(self.counts.shape[1])

    @property
    def total(self) -> int:
        return int(self.counts.sum())

    def __getitem__(self, index: Tuple[int, int]) -> int:
        return int(self.counts[index])

    def rows(self) -> List[List[int]]:
        return self.counts.tolist()

    def cell_of(self, lat: float, lon: float) -> Optional[Tuple[int, int]]:
        """
        Cell (row, col) a coordinate is counted in, using the same border rules
        as the builder. None for the degenerate empty-track grid.
        """
        if self.north_bound is None or self.west_bound is None:
            return None
        rows, cols = _cell_indices(
            np.array([lat], dtype=float),
            np.array([lon], dtype=float),
            self.north_bound,
            self.west_bound,
            self.cell_width,
            self.cell_height,
            self.row_count,
            self.col_count,
        )
        return int(rows[0]), int(cols[0])


class HeatmapBuilder:
    """
    Bins every point of a track into a grid of cell_width x cell_height
    degree cells, sized to just cover the track.
    """

    def __init__(self, cell_width: float, cell_height: float):
        """
        Args:
            cell_width: Cell size in degrees of longitude, in (0, 360].
            cell_height: Cell size in degrees of latitude, in (0, 180].
        """
        self.cell_width = cell_width
        self.cell_height = cell_height

    @property
    def is_valid(self) -> bool:
        # written so that NaN fails both comparisons
        return (0.0 < self.cell_width <= MAX_CELL_WIDTH) and (0.0 < self.cell_height <= MAX_CELL_HEIGHT)

    def build(self, track: Track) -> Optional[HeatmapGrid]:
        """
        Builds the heatmap of `track`.

        Returns:
            The grid, or None if the cell size is invalid or the grid
            cannot be allocated.
        """
        if not self.is_valid:
            logger.warning(
                "Invalid cell size %r x %r (width must be in (0, %g], height in (0, %g])",
                self.cell_width, self.cell_height, MAX_CELL_WIDTH, MAX_CELL_HEIGHT,
            )
            return None

        if track.total_points == 0:
            return HeatmapGrid(
                counts=np.zeros((1, 1), dtype=np.int64),
                north_bound=None,
                west_bound=None,
                cell_width=self.cell_width,
                cell_height=self.cell_height,
            )

        lats = np.fromiter((p.lat for p in track.points()), dtype=float)
        lons = np.fromiter((p.lon for p in track.points()), dtype=float)

        north_bound = float(lats.max())
        south_bound = float(lats.min())
        wedge = find_longitude_wedge(lons)

        row_count = max(1, math.ceil((north_bound - south_bound) / self.cell_height))
        col_count = max(1, math.ceil(wedge.width / self.cell_width))
        logger.debug(
            "Heatmap bounds N=%g S=%g W=%g width=%g -> %d x %d cells",
            north_bound, south_bound, wedge.west_bound, wedge.width, row_count, col_count,
        )

        try:
            counts = np.zeros((row_count, col_count), dtype=np.int64)
        except (MemoryError, ValueError) as e:
            logger.error("Cannot allocate a %d x %d heatmap: %s", row_count, col_count, e)
            return None

        rows, cols = _cell_indices(
            lats, lons, north_bound, wedge.west_bound,
            self.cell_width, self.cell_height, row_count, col_count,
        )
        np.add.at(counts, (rows, cols), 1)

        return HeatmapGrid(
            counts=counts,
            north_bound=north_bound,
            west_bound=wedge.west_bound,
            cell_width=self.cell_width,
            cell_height=self.cell_height,
        )


def build_heatmap(track: Track, cell_width: float, cell_height: float) -> Optional[HeatmapGrid]:
    return HeatmapBuilder(cell_width, cell_height).build(track)
