"""
Decoder for the world map geometry file (``wmx.obj``) and its OBJ exporter.
"""

from .block import decode_block, read_block_header
from .convert import ConversionStats, convert_segments, iter_segment_positions, logical_start
from .errors import AllocationError, ConversionError, FormatError, IOReadError, IOWriteError
from .geometry import block_origin, segment_origin, transform_coordinate, vertex_position
from .group import decode_group
from .indexing import VertexIndexState
from .logging import BlockTraceLogger
from .obj import GeometrySink, MeshCollector, ObjWriter
from .records import BlockHeader, ByteWindow
from .segment import decode_segment, read_block_headers, read_segment

__all__ = [
    "AllocationError",
    "BlockHeader",
    "BlockTraceLogger",
    "ByteWindow",
    "ConversionError",
    "ConversionStats",
    "FormatError",
    "GeometrySink",
    "IOReadError",
    "IOWriteError",
    "MeshCollector",
    "ObjWriter",
    "VertexIndexState",
    "block_origin",
    "convert_segments",
    "decode_block",
    "decode_group",
    "decode_segment",
    "iter_segment_positions",
    "logical_start",
    "read_block_header",
    "read_block_headers",
    "read_segment",
    "segment_origin",
    "transform_coordinate",
    "vertex_position",
]
