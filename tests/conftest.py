from __future__ import annotations

import struct
from typing import Dict, List, Sequence, Tuple

import pytest

from wmx.layout import BLOCKS_PER_SEGMENT, GROUP_ID_SIZE, SEGMENT_SIZE

Polygon = Tuple[int, int, int]
Vertex = Tuple[int, int, int]
Block = Tuple[Sequence[Polygon], Sequence[Vertex]]

TABLE_END = GROUP_ID_SIZE + BLOCKS_PER_SEGMENT * 4


def build_segment(blocks: Dict[int, Block] | None = None, *, offsets: Dict[int, int] | None = None) -> bytes:
    """
    Lay out one segment: group id, offset table, then every block's group packed
    back to back.  Blocks missing from ``blocks`` get an empty group.
    ``offsets`` overrides individual table entries after layout.
    """

    blocks = blocks or {}
    body = bytearray(SEGMENT_SIZE)
    struct.pack_into("<I", body, 0, 0x57584D00)
    cursor = TABLE_END
    table: List[int] = []
    for position in range(BLOCKS_PER_SEGMENT):
        polygons, vertices = blocks.get(position, ((), ()))
        table.append(cursor)
        struct.pack_into("<BBH", body, cursor, len(polygons), len(vertices), 0)
        cursor += 4
        for a, b, c in polygons:
            struct.pack_into("<3B13x", body, cursor, a, b, c)
            cursor += 16
        for x, y, z in vertices:
            struct.pack_into("<HHH2x", body, cursor, x, y, z)
            cursor += 8
    for position, offset in (offsets or {}).items():
        table[position] = offset
    struct.pack_into(f"<{BLOCKS_PER_SEGMENT}I", body, GROUP_ID_SIZE, *table)
    return bytes(body)


def dense_block(quads: int = 2) -> Block:
    """A strip of ``quads`` quads: 2*quads triangles over 2*quads+2 vertices."""

    vertices = [(i * 10, 0, j * 10) for i in range(quads + 1) for j in (0, 1)]
    polygons = []
    for q in range(quads):
        base = q * 2
        polygons.append((base, base + 1, base + 2))
        polygons.append((base + 1, base + 3, base + 2))
    return polygons, vertices


@pytest.fixture
def segment_builder():
    return build_segment


@pytest.fixture
def dense_segment() -> bytes:
    return build_segment({position: dense_block(1 + position % 3) for position in range(BLOCKS_PER_SEGMENT)})


@pytest.fixture
def block_factory():
    return dense_block
