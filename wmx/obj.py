"""
Geometry sinks fed by the decoders.

A sink only needs ``face(a, b, c)``, ``vertex(x, y, z)`` and ``flush()``.
``ObjWriter`` streams Wavefront OBJ text; ``MeshCollector`` keeps everything
in memory for tools that post-process the mesh.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Protocol, TextIO, Tuple

from .errors import IOWriteError


class GeometrySink(Protocol):
    def face(self, a: int, b: int, c: int) -> None: ...

    def vertex(self, x: float, y: float, z: float) -> None: ...

    def flush(self) -> None: ...


class ObjWriter:
    def __init__(self, stream: TextIO) -> None:
        self.stream = stream

    def _emit(self, line: str) -> None:
        try:
            self.stream.write(line)
        except OSError as exc:
            raise IOWriteError(f"Write failed: {exc}") from exc

    def face(self, a: int, b: int, c: int) -> None:
        self._emit(f"f {a} {b} {c}\n")

    def vertex(self, x: float, y: float, z: float) -> None:
        self._emit(f"v {x:.3f} {y:.3f} {z:.3f}\n")

    def flush(self) -> None:
        try:
            self.stream.flush()
        except OSError as exc:
            raise IOWriteError(f"Write failed: {exc}") from exc


@dataclass
class MeshCollector:
    vertices: List[Tuple[float, float, float]] = field(default_factory=list)
    faces: List[Tuple[int, int, int]] = field(default_factory=list)

    def face(self, a: int, b: int, c: int) -> None:
        self.faces.append((a, b, c))

    def vertex(self, x: float, y: float, z: float) -> None:
        self.vertices.append((x, y, z))

    def flush(self) -> None:
        pass

    def resolve(self, index: int) -> Tuple[float, float, float] | None:
        """Look up a 1-based face index; ``None`` when it points past the collected vertices."""

        if 1 <= index <= len(self.vertices):
            return self.vertices[index - 1]
        return None
