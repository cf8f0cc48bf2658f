from .builder import (
    HeatmapBuilder,
    HeatmapGrid,
    LongitudeWedge,
    build_heatmap,
    find_longitude_wedge,
    normalize_longitude,
)
from .render import glyph_index, render_rows

__all__ = [
    'HeatmapBuilder',
    'HeatmapGrid',
    'LongitudeWedge',
    'build_heatmap',
    'find_longitude_wedge',
    'normalize_longitude',
    'glyph_index',
    'render_rows',
]
