from __future__ import annotations

from .errors import FormatError
from .geometry import Origin, vertex_position
from .indexing import VertexIndexState
from .layout import POLYGON, POLYGON_SIZE, VERTEX, VERTEX_SIZE
from .obj import GeometrySink
from .records import ByteWindow


def decode_group(
    window: ByteWindow,
    polygon_count: int,
    vertex_count: int,
    origin: Origin,
    index_state: VertexIndexState,
    sink: GeometrySink,
) -> None:
    """
    Emit one block's faces followed by its vertices.

    ``window`` starts right after the 4-byte group header.  Polygon records
    only carry per-block offsets, so their global indices come from
    ``index_state`` which the caller has already rebased for this block.
    """

    needed = polygon_count * POLYGON_SIZE + vertex_count * VERTEX_SIZE
    if needed > len(window):
        raise FormatError(
            f"{window.label}: {polygon_count} polygon(s) and {vertex_count} vertex record(s) "
            f"need {needed} bytes but only {len(window)} remain in the segment"
        )

    for offsets in window.iter_unpack(POLYGON, polygon_count):
        a, b, c = (index_state.record_vertex(offset) for offset in offsets)
        sink.face(a, b, c)

    vertex_start = polygon_count * POLYGON_SIZE
    for raw_x, raw_y, raw_z in window.iter_unpack(VERTEX, vertex_count, vertex_start):
        sink.vertex(*vertex_position(origin, raw_x, raw_y, raw_z))
