#!/usr/bin/env python3
"""
Render a top-down wireframe preview of world map segments without a 3-D viewer.

The geometry goes through the same decoder as wmx_to_obj.py, then the x/z
plane is rasterized with Pillow.  Example:

    python render_wmx_png.py wmx.obj --start 0 --end 31 \
        --preview row0.png --size 2048
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Callable, List, Sequence, Tuple

from PIL import Image, ImageDraw

from wmx.convert import convert_segments
from wmx.errors import ConversionError
from wmx.layout import SEGMENT_MAX, SEGMENT_MIN
from wmx.obj import MeshCollector

Point = Tuple[float, float]


def load_mesh(path: Path, start: int, end: int) -> MeshCollector:
    mesh = MeshCollector()
    with path.open("rb") as source:
        convert_segments(start, end, source, mesh)
    if not mesh.vertices:
        raise RuntimeError("No vertices were decoded from the requested segments.")
    return mesh


def _collect_bounds(mesh: MeshCollector) -> Tuple[float, float, float, float]:
    xs = [vertex[0] for vertex in mesh.vertices]
    zs = [vertex[2] for vertex in mesh.vertices]
    return min(xs), max(xs), min(zs), max(zs)


def _build_transform(
    bounds: Tuple[float, float, float, float],
    size_px: int,
    padding_ratio: float,
) -> Callable[[Point], Point]:
    min_x, max_x, min_z, max_z = bounds
    width = max(max_x - min_x, 1e-9)
    height = max(max_z - min_z, 1e-9)
    pad = max(width, height) * padding_ratio

    world_min_x = min_x - pad
    world_min_z = min_z - pad
    world_width = width + 2 * pad
    world_height = height + 2 * pad

    scale = min(size_px / world_width, size_px / world_height)
    offset_x = (size_px - world_width * scale) / 2.0
    offset_z = (size_px - world_height * scale) / 2.0

    # Grid rows grow along +z, so +z maps to image-down.
    def transform(point: Point) -> Point:
        x, z = point
        return (x - world_min_x) * scale + offset_x, (z - world_min_z) * scale + offset_z

    return transform


def triangle_outlines(mesh: MeshCollector) -> List[Tuple[Point, Point, Point]]:
    """Project every face whose indices resolve to collected vertices onto the x/z plane."""

    outlines: List[Tuple[Point, Point, Point]] = []
    for face in mesh.faces:
        corners = [mesh.resolve(index) for index in face]
        if any(corner is None for corner in corners):
            continue
        a, b, c = ((corner[0], corner[2]) for corner in corners)
        outlines.append((a, b, c))
    return outlines


def render_png(mesh: MeshCollector, destination: Path, size_px: int, *, padding_ratio: float = 0.02) -> int:
    transform = _build_transform(_collect_bounds(mesh), size_px, padding_ratio)

    image = Image.new("RGBA", (size_px, size_px), (255, 255, 255, 0))
    draw = ImageDraw.Draw(image)
    stroke = max(1, int(size_px / 1024))

    outlines = triangle_outlines(mesh)
    for a, b, c in outlines:
        points = [transform(a), transform(b), transform(c)]
        draw.line(points + points[:1], fill="black", width=stroke)

    destination.parent.mkdir(parents=True, exist_ok=True)
    image.save(destination)
    return len(outlines)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render world map segments to a top-down PNG wireframe.")
    parser.add_argument("input", type=Path, help="Path to wmx.obj")
    parser.add_argument("--preview", type=Path, required=True, help="Destination PNG")
    parser.add_argument("--start", type=int, default=SEGMENT_MIN, help=f"First segment (default {SEGMENT_MIN})")
    parser.add_argument("--end", type=int, help="Last segment, inclusive (default: same as --start)")
    parser.add_argument("--size", type=int, default=1024, help="Image size in pixels (square, default 1024)")
    args = parser.parse_args(argv)
    if args.end is None:
        args.end = args.start
    if not SEGMENT_MIN <= args.start <= args.end <= SEGMENT_MAX:
        parser.error(f"segment range {args.start}-{args.end} must lie within {SEGMENT_MIN}..{SEGMENT_MAX}")
    return args


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        mesh = load_mesh(args.input, args.start, args.end)
    except ConversionError as exc:
        raise SystemExit(f"Unable to decode {args.input}: {exc.detail}") from exc
    except RuntimeError as exc:
        raise SystemExit(f"Unable to render {args.input}: {exc}") from exc
    print(f"[+] Decoded {len(mesh.vertices)} vertices and {len(mesh.faces)} faces")
    drawn = render_png(mesh, args.preview, args.size)
    print(f"[+] Preview PNG with {drawn} triangle(s) written to {args.preview}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
