from __future__ import annotations

import io

import pytest

from wmx.block import decode_block, read_block_header
from wmx.errors import FormatError, IOReadError
from wmx.group import decode_group
from wmx.indexing import VertexIndexState
from wmx.layout import BLOCK_OFFSET_MAX, BLOCK_SIZE, SEGMENT_SIZE
from wmx.logging import BlockTraceLogger
from wmx.obj import MeshCollector
from wmx.records import ByteWindow
from wmx.segment import decode_segment, read_block_headers, read_segment


def test_group_emits_faces_then_vertices():
    body = bytes([0, 1, 2]) + bytes(13) + bytes([0x10, 0x00, 0x20, 0x00, 0x30, 0x00, 0, 0])
    state = VertexIndexState()
    state.begin_block()
    mesh = MeshCollector()
    decode_group(ByteWindow.over(body), 1, 1, (0, 0), state, mesh)
    assert mesh.faces == [(1, 2, 3)]
    assert mesh.vertices == [pytest.approx((0.016, 0.032, 0.048))]


def test_group_rejects_counts_larger_than_window():
    state = VertexIndexState()
    with pytest.raises(FormatError, match="need 24 bytes"):
        decode_group(ByteWindow.over(bytes(20)), 1, 1, (0, 0), state, MeshCollector())


def test_block_header_resolves_through_offset_table(segment_builder, block_factory):
    segment = ByteWindow.over(segment_builder({0: block_factory(1), 1: block_factory(2)}))
    first = read_block_header(0, segment)
    second = read_block_header(1, segment)
    assert (first.polygon_count, first.vertex_count) == (2, 4)
    assert (second.polygon_count, second.vertex_count) == (4, 6)
    assert second.offset == first.offset + 4 + first.payload_size


def test_block_offset_at_limit_is_accepted(segment_builder):
    segment = ByteWindow.over(segment_builder(offsets={3: BLOCK_OFFSET_MAX}))
    header = read_block_header(3, segment)
    assert header.offset == SEGMENT_SIZE - BLOCK_SIZE


def test_block_offset_past_limit_is_a_format_error(segment_builder):
    segment = ByteWindow.over(segment_builder(offsets={3: BLOCK_OFFSET_MAX + 1}))
    with pytest.raises(FormatError, match="Block offset too large"):
        read_block_header(3, segment)


def test_block_group_overrunning_segment_is_a_format_error(segment_builder):
    data = bytearray(segment_builder(offsets={0: BLOCK_OFFSET_MAX}))
    data[BLOCK_OFFSET_MAX] = 255
    with pytest.raises(FormatError):
        decode_block(0, ByteWindow.over(data), (0, 0), VertexIndexState(), MeshCollector())


def test_block_vertices_use_block_origin(segment_builder):
    segment = ByteWindow.over(segment_builder({5: ((), [(1, 2, 3)])}))
    mesh = MeshCollector()
    decode_block(5, segment, (8192, 0), VertexIndexState(), mesh)
    # Position 5 sits in column 1, row 1 of the segment.
    assert mesh.vertices == [pytest.approx((10.241, 0.002, 2.051))]


def test_block_trace_records_offsets(segment_builder, block_factory, tmp_path):
    segment = ByteWindow.over(segment_builder({0: block_factory(1)}))
    trace = BlockTraceLogger(tmp_path / "trace.txt")
    decode_block(0, segment, (0, 0), VertexIndexState(), MeshCollector(), trace=trace)
    trace.flush()
    text = (tmp_path / "trace.txt").read_text(encoding="utf-8")
    assert "block[00] off=0x0044" in text
    assert "polys=2" in text
    assert "base=1" in text


def test_read_segment_requires_full_segment():
    with pytest.raises(IOReadError) as excinfo:
        read_segment(io.BytesIO(bytes(SEGMENT_SIZE - 1)), bytearray(SEGMENT_SIZE))
    assert excinfo.value.eof


def test_read_block_headers_lists_all_sixteen(segment_builder, block_factory):
    segment = read_segment(io.BytesIO(segment_builder({15: block_factory(3)})), bytearray(SEGMENT_SIZE))
    headers = read_block_headers(segment)
    assert [header.position for header in headers] == list(range(16))
    assert headers[15].polygon_count == 6
    assert all(header.polygon_count == 0 for header in headers[:15])


def test_segment_decodes_blocks_in_position_order(segment_builder):
    blocks = {position: ((), [(position, 0, 0)]) for position in range(16)}
    mesh = MeshCollector()
    headers = decode_segment(1, io.BytesIO(segment_builder(blocks)), mesh, bytearray(SEGMENT_SIZE), VertexIndexState())
    assert len(headers) == 16
    xs = [round(vertex[0] * 1000) - 8192 for vertex in mesh.vertices]
    assert xs == [position % 4 * 2048 + position for position in range(16)]
