import argparse
import os
import sys
from datetime import datetime

import matplotlib.pyplot as plt

# Add project root to sys.path to find src
current_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.join(current_dir, "..")
sys.path.append(os.path.join(project_root, "src"))

from trackheat.core.stream import load_track
from trackheat.modules.heatmap.builder import HeatmapBuilder, HeatmapGrid
from trackheat.modules.heatmap.render import render_rows


def plot_heatmap(grid: HeatmapGrid, output_img: str, title: str):
    """
    Draws the count grid with its geographic extent on the axes.
    Columns past the antimeridian are drawn east of 180 rather than wrapped.
    """
    west = grid.west_bound if grid.west_bound is not None else 0.0
    north = grid.north_bound if grid.north_bound is not None else 0.0
    east = west + grid.col_count * grid.cell_width
    south = north - grid.row_count * grid.cell_height

    fig, ax = plt.subplots(figsize=(12, 12))
    image = ax.imshow(
        grid.counts,
        extent=(west, east, south, north),
        origin="upper",
        cmap="inferno",
        interpolation="nearest",
        aspect="auto",
    )
    fig.colorbar(image, ax=ax, label="Trackpoints per cell")
    ax.set_title(f"{title}: {grid.row_count} x {grid.col_count} cells, {grid.total} points")
    ax.set_xlabel("Longitude")
    ax.set_ylabel("Latitude")

    plt.tight_layout()
    plt.savefig(output_img, dpi=300, bbox_inches='tight')
    print(f"Visualization saved to {output_img}")


def main():
    parser = argparse.ArgumentParser(description="Build a track heatmap and plot it.")
    parser.add_argument("--input", type=str, required=True, help="Track file of 'LAT LON TIMESTAMP' lines.")
    parser.add_argument("--cell-width", type=float, default=0.01, help="Cell width in degrees.")
    parser.add_argument("--cell-height", type=float, default=0.01, help="Cell height in degrees.")
    parser.add_argument("--glyphs", type=str, default=" .:-=+*#%@", help="Glyphs for the text preview.")
    parser.add_argument("--bucket-width", type=int, default=1, help="Counts per glyph bucket.")
    args = parser.parse_args()

    if not os.path.exists(args.input):
        print(f"Error: Input file {args.input} not found.")
        sys.exit(1)

    print(f"Loading track from {args.input}...")
    track = load_track(args.input)
    print(f"Loaded {track.total_points} points in {track.segment_count()} segments.")
    for i, segment in enumerate(track):
        if segment.is_empty:
            continue
        print(
            f" - Segment {i}: {len(segment)} points, t={segment.start_time}..{segment.end_time}, "
            f"{segment.length / 1000.0:.3f} km"
        )

    grid = HeatmapBuilder(args.cell_width, args.cell_height).build(track)
    if grid is None:
        print("Error: invalid cell size.")
        sys.exit(1)

    for row in render_rows(grid, args.glyphs, args.bucket_width):
        print(row)

    script_name = "demo_heatmap_plot"
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    input_filename = os.path.splitext(os.path.basename(args.input))[0]
    output_dir = os.path.join(project_root, "data", "processed", script_name, f"{timestamp}_{input_filename}")
    os.makedirs(output_dir, exist_ok=True)

    plot_heatmap(grid, os.path.join(output_dir, "heatmap.png"), input_filename)


if __name__ == "__main__":
    main()
