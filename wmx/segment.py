from __future__ import annotations

from typing import BinaryIO, List

from .block import decode_block, read_block_header
from .errors import IOReadError
from .geometry import segment_origin
from .indexing import VertexIndexState
from .layout import BLOCKS_PER_SEGMENT, SEGMENT_SIZE
from .logging import BlockTraceLogger
from .obj import GeometrySink
from .records import BlockHeader, ByteWindow


def read_segment(source: BinaryIO, buffer: bytearray) -> ByteWindow:
    """
    Fill ``buffer`` with the next ``SEGMENT_SIZE`` bytes of ``source``.

    Raw streams may return fewer bytes than asked for, so we keep reading until
    the buffer is full or the stream reports EOF.
    """

    if len(buffer) < SEGMENT_SIZE:
        raise ValueError(f"segment buffer holds {len(buffer)} bytes, need {SEGMENT_SIZE}")
    view = memoryview(buffer)
    filled = 0
    try:
        while filled < SEGMENT_SIZE:
            count = source.readinto(view[filled:SEGMENT_SIZE])
            if not count:
                break
            filled += count
    except OSError as exc:
        raise IOReadError(f"Read failed: {exc}") from exc
    if filled < SEGMENT_SIZE:
        raise IOReadError(
            f"Read failed: EOF was reached after {filled} of {SEGMENT_SIZE} bytes",
            eof=True,
        )
    return ByteWindow.over(view[:SEGMENT_SIZE], label="segment")


def read_block_headers(segment: ByteWindow) -> List[BlockHeader]:
    return [read_block_header(position, segment) for position in range(BLOCKS_PER_SEGMENT)]


def decode_segment(
    logical_position: int,
    source: BinaryIO,
    sink: GeometrySink,
    buffer: bytearray,
    index_state: VertexIndexState,
    *,
    trace: BlockTraceLogger | None = None,
) -> List[BlockHeader]:
    segment = read_segment(source, buffer)
    origin = segment_origin(logical_position)
    return [
        decode_block(position, segment, origin, index_state, sink, trace=trace)
        for position in range(BLOCKS_PER_SEGMENT)
    ]
