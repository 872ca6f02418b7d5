#!/usr/bin/env python3
"""
Summarize the block tables of a world map file without emitting geometry.

Usage:
    python summarize_wmx_segments.py wmx.obj --start 0 --end 63

Prints per-segment polygon/vertex totals plus a short corpus report so it is
easy to spot empty or unusually dense regions before a full conversion.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import BinaryIO, Sequence

import numpy as np

from wmx.errors import ConversionError, IOReadError
from wmx.layout import BLOCKS_PER_SEGMENT, SEGMENT_MAX, SEGMENT_MIN, SEGMENT_SIZE
from wmx.segment import read_block_headers, read_segment


def collect_counts(source: BinaryIO, start: int, end: int) -> np.ndarray:
    """
    Return an ``(segments, 16, 2)`` array of (polygon, vertex) counts per block.

    Stops quietly at EOF so truncated files can still be summarized.
    """

    buffer = bytearray(SEGMENT_SIZE)
    rows = []
    source.seek(start * SEGMENT_SIZE)
    for _ in range(start, end + 1):
        try:
            segment = read_segment(source, buffer)
        except IOReadError as exc:
            if exc.eof:
                break
            raise
        headers = read_block_headers(segment)
        rows.append([(header.polygon_count, header.vertex_count) for header in headers])
    if not rows:
        return np.zeros((0, BLOCKS_PER_SEGMENT, 2), dtype=np.int64)
    return np.asarray(rows, dtype=np.int64)


def summarize(counts: np.ndarray, start: int) -> None:
    totals = counts.sum(axis=1)
    for idx, (polys, verts) in enumerate(totals):
        print(f"segment {start + idx:03d}: polys={polys:5d} verts={verts:5d}")

    if counts.shape[0] == 0:
        return
    per_block = counts.reshape(-1, 2)
    empty_blocks = int(np.count_nonzero(per_block.sum(axis=1) == 0))
    print(f"\n{counts.shape[0]} segment(s), {per_block.shape[0]} block(s)")
    print(f"polygons: total={int(totals[:, 0].sum())} max/block={int(per_block[:, 0].max())} mean/block={per_block[:, 0].mean():.2f}")
    print(f"vertices: total={int(totals[:, 1].sum())} max/block={int(per_block[:, 1].max())} mean/block={per_block[:, 1].mean():.2f}")
    print(f"empty blocks: {empty_blocks}")
    densest = int(np.argmax(totals[:, 0]))
    print(f"densest segment: {start + densest:03d} ({int(totals[densest, 0])} polygons)")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Summarize world map block tables.")
    parser.add_argument("input", type=Path, help="Path to wmx.obj")
    parser.add_argument("--start", type=int, default=SEGMENT_MIN, help=f"First segment (default {SEGMENT_MIN})")
    parser.add_argument("--end", type=int, default=SEGMENT_MAX, help=f"Last segment (default {SEGMENT_MAX})")
    args = parser.parse_args(argv)
    if not SEGMENT_MIN <= args.start <= args.end <= SEGMENT_MAX:
        parser.error(f"segment range {args.start}-{args.end} must lie within {SEGMENT_MIN}..{SEGMENT_MAX}")
    return args


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        with args.input.open("rb") as source:
            counts = collect_counts(source, args.start, args.end)
    except ConversionError as exc:
        raise SystemExit(f"Unable to summarize {args.input}: {exc.detail}") from exc
    if counts.shape[0] == 0:
        print(f"No complete segments found at or after {args.start}.")
        return 1
    summarize(counts, args.start)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
