#!/usr/bin/env python3
"""
Convert Final Fantasy VIII world map geometry (``wmx.obj``) to Wavefront OBJ.

    python wmx_to_obj.py wmx.obj world.obj            # every segment
    python wmx_to_obj.py wmx.obj row0.obj 0 31         # first grid row only

Segments are 0x9000 bytes each and laid out 32 per row; the emitted model is
shifted so its origin stays close to (0, 0, 0) for the requested range.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable, Sequence

from wmx.convert import convert_segments
from wmx.errors import ConversionError
from wmx.layout import SEGMENT_MAX, SEGMENT_MIN
from wmx.logging import BlockTraceLogger
from wmx.obj import ObjWriter


def _segment_index(fail_msg: str) -> Callable[[str], int]:
    def parse(text: str) -> int:
        if not (text.isascii() and text.isdigit()):
            raise argparse.ArgumentTypeError(f"{fail_msg}: {text!r} is not a decimal integer")
        value = int(text, 10)
        if not SEGMENT_MIN <= value <= SEGMENT_MAX:
            raise argparse.ArgumentTypeError(f"{fail_msg}: {value} is outside {SEGMENT_MIN}..{SEGMENT_MAX}")
        return value

    return parse


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Push FF8 world map geometry (wmx.obj) to Wavefront OBJ.")
    parser.add_argument("input", type=Path, help="Path to wmx.obj")
    parser.add_argument("output", type=Path, help="Destination .obj file")
    parser.add_argument(
        "start",
        nargs="?",
        type=_segment_index("Bad start segment"),
        default=SEGMENT_MIN,
        help=f"First segment to convert (default {SEGMENT_MIN})",
    )
    parser.add_argument(
        "end",
        nargs="?",
        type=_segment_index("Bad end segment"),
        default=SEGMENT_MAX,
        help=f"Last segment to convert, inclusive (default {SEGMENT_MAX})",
    )
    parser.add_argument(
        "--dump-blocks",
        type=Path,
        help="Optional text file receiving one line per decoded block (offsets, counts, index base)",
    )
    args = parser.parse_args(argv)
    if args.end < args.start:
        parser.error(f"Bad end segment: {args.end} is below start segment {args.start}")
    return args


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)

    try:
        source = args.input.open("rb")
    except OSError as exc:
        raise SystemExit(f"Failed to open input file: {exc.strerror or exc}") from exc
    try:
        output = args.output.open("w", encoding="ascii", newline="\n")
    except OSError as exc:
        source.close()
        raise SystemExit(f"Failed to open output file: {exc.strerror or exc}") from exc

    trace = BlockTraceLogger(args.dump_blocks) if args.dump_blocks else None

    print(f"Starting conversion of segments {args.start}-{args.end} to {args.output}")
    try:
        with source, output:
            stats = convert_segments(args.start, args.end, source, ObjWriter(output), trace=trace)
    except ConversionError as exc:
        raise SystemExit(f"Conversion failed: {exc.detail}") from exc
    except OSError as exc:
        # Buffered output can still fail when the file is closed.
        raise SystemExit(f"Conversion failed: Write failed: {exc}") from exc
    finally:
        if trace:
            trace.flush()

    print(
        f"[+] Wrote {stats.vertices} vertices and {stats.polygons} faces "
        f"from {stats.segments} segment(s)"
    )
    if trace:
        print(f"[+] Block trace written to {args.dump_blocks}")
    print("Conversion successful")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
