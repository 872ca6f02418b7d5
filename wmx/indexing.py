from __future__ import annotations

from dataclasses import dataclass

from .layout import FIRST_VERTEX_INDEX


@dataclass
class VertexIndexState:
    """
    Running OBJ vertex index shared by every block of one conversion.

    ``prev_vert_max`` is the base that a block's per-polygon offsets are added
    to; ``vert_max`` is the highest index handed out so far.
    """

    vert_max: int = FIRST_VERTEX_INDEX
    prev_vert_max: int = FIRST_VERTEX_INDEX

    def begin_block(self) -> int:
        self.prev_vert_max = self.vert_max
        return self.prev_vert_max

    def record_vertex(self, local_offset: int) -> int:
        index = self.prev_vert_max + local_offset
        if index > self.vert_max:
            self.vert_max = index
        return index

    def end_block(self) -> None:
        # Keeps the next block's base past every index this block used,
        # even when the block had no polygons at all.
        self.vert_max += 1
