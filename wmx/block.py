from __future__ import annotations

from .errors import FormatError
from .geometry import Origin, block_origin
from .group import decode_group
from .indexing import VertexIndexState
from .layout import (
    BLOCK_HEADER,
    BLOCK_HEADER_SIZE,
    BLOCK_OFFSET,
    BLOCK_OFFSET_MAX,
    BLOCK_OFFSET_SIZE,
    BLOCKS_PER_SEGMENT,
    GROUP_ID_SIZE,
)
from .logging import BlockTraceLogger
from .obj import GeometrySink
from .records import BlockHeader, ByteWindow


def read_block_header(position: int, segment: ByteWindow) -> BlockHeader:
    """Resolve a block through the segment's offset table and read its group header."""

    if not 0 <= position < BLOCKS_PER_SEGMENT:
        raise ValueError(f"block position {position} is outside 0..{BLOCKS_PER_SEGMENT - 1}")

    slot = GROUP_ID_SIZE + position * BLOCK_OFFSET_SIZE
    (offset,) = segment.unpack(BLOCK_OFFSET, slot)
    if offset > BLOCK_OFFSET_MAX:
        raise FormatError(
            f"Block offset too large: block {position} points at 0x{offset:X} "
            f"(limit 0x{BLOCK_OFFSET_MAX:X})"
        )
    polygon_count, vertex_count = segment.unpack(BLOCK_HEADER, offset)
    return BlockHeader(
        position=position,
        offset=offset,
        polygon_count=polygon_count,
        vertex_count=vertex_count,
    )


def decode_block(
    position: int,
    segment: ByteWindow,
    origin: Origin,
    index_state: VertexIndexState,
    sink: GeometrySink,
    *,
    trace: BlockTraceLogger | None = None,
) -> BlockHeader:
    header = read_block_header(position, segment)
    world = block_origin(position, origin)

    base = index_state.begin_block()
    if trace:
        trace.record(header, base_index=base, origin=world)

    group = segment.window(header.offset + BLOCK_HEADER_SIZE, label=f"block {position} group")
    decode_group(group, header.polygon_count, header.vertex_count, world, index_state, sink)
    index_state.end_block()
    return header
