from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, Iterator, Tuple

from .errors import AllocationError, IOReadError
from .indexing import VertexIndexState
from .layout import SEGMENT_MAX, SEGMENT_MIN, SEGMENT_SIZE, SEGMENTS_PER_ROW
from .logging import BlockTraceLogger
from .obj import GeometrySink
from .segment import decode_segment


@dataclass(frozen=True)
class ConversionStats:
    segments: int
    blocks: int
    polygons: int
    vertices: int
    last_index: int


def logical_start(start: int, end: int) -> int:
    """
    First logical segment position for a ``start..end`` run.

    Ranges that stay inside one grid row are shifted to column 0; ranges that
    cross rows keep ``start``'s column so the rows still line up.
    """

    if start // SEGMENTS_PER_ROW != end // SEGMENTS_PER_ROW:
        return start % SEGMENTS_PER_ROW
    return 0


def iter_segment_positions(start: int, end: int) -> Iterator[Tuple[int, int]]:
    """Yield ``(physical, logical)`` segment index pairs for ``start..end`` inclusive."""

    logical = logical_start(start, end)
    for physical in range(start, end + 1):
        yield physical, logical
        logical += 1


def check_segment_range(start: int, end: int) -> None:
    if not SEGMENT_MIN <= start <= SEGMENT_MAX:
        raise ValueError(f"start segment {start} is outside {SEGMENT_MIN}..{SEGMENT_MAX}")
    if not start <= end <= SEGMENT_MAX:
        raise ValueError(f"end segment {end} is outside {start}..{SEGMENT_MAX}")


def convert_segments(
    start: int,
    end: int,
    source: BinaryIO,
    sink: GeometrySink,
    *,
    trace: BlockTraceLogger | None = None,
) -> ConversionStats:
    """
    Decode segments ``start..end`` (inclusive) from ``source`` into ``sink``.

    Any failure aborts the run with a ``ConversionError``; whatever the sink
    has already received stays there.
    """

    check_segment_range(start, end)

    try:
        source.seek(start * SEGMENT_SIZE)
    except OSError as exc:
        raise IOReadError(f"Seek failed: {exc}") from exc

    try:
        buffer = bytearray(SEGMENT_SIZE)
    except MemoryError as exc:
        raise AllocationError("Out of memory") from exc

    index_state = VertexIndexState()
    segments = blocks = polygons = vertices = 0
    for physical, logical in iter_segment_positions(start, end):
        if trace:
            trace.begin_segment(physical, logical)
        headers = decode_segment(logical, source, sink, buffer, index_state, trace=trace)
        segments += 1
        blocks += len(headers)
        polygons += sum(header.polygon_count for header in headers)
        vertices += sum(header.vertex_count for header in headers)
    sink.flush()

    return ConversionStats(
        segments=segments,
        blocks=blocks,
        polygons=polygons,
        vertices=vertices,
        last_index=index_state.vert_max,
    )
