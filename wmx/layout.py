"""
Fixed layout of the world map geometry file (``wmx.obj``).

The file is a flat array of equally sized segments.  Each segment starts with
a 4-byte group identifier followed by a table of 16 little-endian block
offsets; the offsets point at block groups stored somewhere inside the same
segment.
"""

from __future__ import annotations

import struct

SEGMENT_SIZE = 0x9000
SEGMENT_MIN = 0
SEGMENT_MAX = 834
SEGMENTS_PER_ROW = 32
SEGMENT_BOUNDS = 8192

BLOCKS_PER_SEGMENT = 16
GROUP_ID_SIZE = 4
BLOCK_OFFSET_SIZE = 4
BLOCK_SIZE = SEGMENT_SIZE // BLOCKS_PER_SEGMENT
BLOCK_OFFSET_MAX = SEGMENT_SIZE - BLOCK_SIZE
BLOCK_HEADER_SIZE = 4
BLOCKS_PER_ROW = 4
BLOCK_BOUNDS = SEGMENT_BOUNDS // BLOCKS_PER_ROW

POLYGON_SIZE = 16
VERTEX_SIZE = 8
VERTICES_PER_POLYGON = 3

# Output units are thousandths of a raw coordinate step.
VERTEX_SCALE = 0.001

# OBJ vertex indices start from 1.
FIRST_VERTEX_INDEX = 1

BLOCK_OFFSET = struct.Struct("<I")
BLOCK_HEADER = struct.Struct("<BB2x")
POLYGON = struct.Struct(f"<{VERTICES_PER_POLYGON}B13x")
VERTEX = struct.Struct("<HHH2x")
