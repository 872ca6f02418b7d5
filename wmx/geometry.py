from __future__ import annotations

from typing import Tuple

from .layout import (
    BLOCK_BOUNDS,
    BLOCKS_PER_ROW,
    SEGMENT_BOUNDS,
    SEGMENTS_PER_ROW,
    VERTEX_SCALE,
)

Origin = Tuple[int, int]


def transform_coordinate(raw: int) -> int:
    """
    Apply the bounds correction to a raw 16-bit coordinate field.

    Values up to ``BLOCK_BOUNDS`` pass through.  Anything larger is treated as
    a negative 16-bit quantity and only its magnitude is kept.
    """

    if raw <= BLOCK_BOUNDS:
        return raw
    return (0x10000 - raw) & 0xFFFF


def segment_origin(logical_position: int) -> Origin:
    return (
        logical_position % SEGMENTS_PER_ROW * SEGMENT_BOUNDS,
        logical_position // SEGMENTS_PER_ROW * SEGMENT_BOUNDS,
    )


def block_origin(position: int, origin: Origin) -> Origin:
    return (
        origin[0] + position % BLOCKS_PER_ROW * BLOCK_BOUNDS,
        origin[1] + position // BLOCKS_PER_ROW * BLOCK_BOUNDS,
    )


def vertex_position(origin: Origin, raw_x: int, raw_y: int, raw_z: int) -> Tuple[float, float, float]:
    # Height (y) has no tiling component.
    return (
        (origin[0] + transform_coordinate(raw_x)) * VERTEX_SCALE,
        transform_coordinate(raw_y) * VERTEX_SCALE,
        (origin[1] + transform_coordinate(raw_z)) * VERTEX_SCALE,
    )
