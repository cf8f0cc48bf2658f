"""trackheat - GPS track storage and point-density heatmaps."""

__version__ = "0.1.0"

from .core import Location, Segment, Track, Trackpoint, TrackStream, load_track
from .modules.heatmap import HeatmapBuilder, HeatmapGrid, build_heatmap, render_rows

__all__ = [
    'Location',
    'Segment',
    'Track',
    'Trackpoint',
    'TrackStream',
    'load_track',
    'HeatmapBuilder',
    'HeatmapGrid',
    'build_heatmap',
    'render_rows',
]
