from typing import List

from .builder import HeatmapGrid


def glyph_index(count: int, bucket_width: int, glyph_count: int) -> int:
    """
    Index of the glyph for a cell holding `count` points.
    Each glyph covers `bucket_width` counts; counts past the last bucket use the last glyph.
    """
    return min(count // bucket_width, glyph_count - 1)


def render_rows(grid: HeatmapGrid, glyphs: str, bucket_width: int) -> List[str]:
    """
    Renders the heatmap as text, one string per grid row (north first).

    Args:
        grid: Heatmap to render.
        glyphs: Characters from coolest to hottest bucket, e.g. " .:oO@".
        bucket_width: Number of counts per glyph bucket, at least 1.
    """
    if not glyphs:
        raise ValueError("At least one glyph is required")
    if bucket_width < 1:
        raise ValueError(f"Bucket width must be at least 1, got {bucket_width}")

    return [
        "".join(glyphs[glyph_index(count, bucket_width, len(glyphs))] for count in row)
        for row in grid.rows()
    ]
