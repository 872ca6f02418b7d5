from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

from .records import BlockHeader


@dataclass
class BlockTraceLogger:
    """Collects one line per decoded block and writes them out on ``flush``."""

    destination: Path

    def __post_init__(self) -> None:
        self._lines: List[str] = []

    def begin_segment(self, segment: int, logical: int) -> None:
        self._lines.append(f"Segment #{segment:03d} logical={logical:03d}")

    def record(self, header: BlockHeader, *, base_index: int, origin: tuple[int, int]) -> None:
        self._lines.append(
            f"  block[{header.position:02}] off=0x{header.offset:04X} "
            f"polys={header.polygon_count:<3} verts={header.vertex_count:<3} "
            f"base={base_index} origin=({origin[0]},{origin[1]})"
        )

    def flush(self) -> None:
        if not self._lines:
            return
        self.destination.parent.mkdir(parents=True, exist_ok=True)
        self.destination.write_text("\n".join(self._lines) + "\n", encoding="utf-8")
