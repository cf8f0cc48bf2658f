"""Command-line interface for trackheat.

Run:
    trackheat 0.01 0.01 " .:oO@" 5 < track.txt
"""

import argparse
import logging
import sys
from typing import List, Optional

from trackheat.core.stream import load_track
from trackheat.modules.heatmap.builder import HeatmapBuilder
from trackheat.modules.heatmap.render import render_rows

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trackheat",
        description="Render a GPS track read as 'LAT LON TIMESTAMP' lines as a text heatmap.",
    )
    parser.add_argument("cell_width", type=float, help="Cell width in degrees of longitude, in (0, 360].")
    parser.add_argument("cell_height", type=float, help="Cell height in degrees of latitude, in (0, 180].")
    parser.add_argument("glyphs", type=str, help="Characters for each bucket, coolest first.")
    parser.add_argument("bucket_width", type=int, help="Number of points per glyph bucket (>= 1).")
    parser.add_argument(
        "--input",
        type=str,
        default="-",
        help="Track file; '-' reads standard input. Blank lines separate segments.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity on stderr.",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.glyphs:
        parser.error("glyphs must not be empty")
    if args.bucket_width < 1:
        parser.error("bucket_width must be at least 1")

    try:
        track = load_track(sys.stdin if args.input == "-" else args.input)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    grid = HeatmapBuilder(args.cell_width, args.cell_height).build(track)
    if grid is None:
        print(
            f"Error: cannot build a heatmap with {args.cell_width} x {args.cell_height} degree cells",
            file=sys.stderr,
        )
        return 1
    logger.info("Built %d x %d heatmap from %d points", grid.row_count, grid.col_count, grid.total)

    for row in render_rows(grid, args.glyphs, args.bucket_width):
        print(row)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
