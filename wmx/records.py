from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Iterator, Tuple, Union

from .errors import FormatError
from .layout import POLYGON_SIZE, VERTEX_SIZE

Buffer = Union[bytes, bytearray, memoryview]


@dataclass(frozen=True)
class BlockHeader:
    position: int
    offset: int
    polygon_count: int
    vertex_count: int

    @property
    def payload_size(self) -> int:
        return self.polygon_count * POLYGON_SIZE + self.vertex_count * VERTEX_SIZE


@dataclass(frozen=True)
class ByteWindow:
    """
    Read-only view over a slice of a segment buffer.

    Every access is checked against the window's own length, so a record that
    would spill past the end of its window raises ``FormatError`` instead of
    silently reading whatever follows it in the buffer.
    """

    data: memoryview
    label: str = "window"

    @classmethod
    def over(cls, data: Buffer, label: str = "window") -> "ByteWindow":
        return cls(memoryview(data).cast("B"), label)

    def __len__(self) -> int:
        return len(self.data)

    def _check(self, offset: int, size: int, what: str) -> None:
        if offset < 0 or size < 0 or offset + size > len(self.data):
            raise FormatError(
                f"{what} at 0x{offset:X} (+{size} bytes) runs past the end of "
                f"{self.label} ({len(self.data)} bytes)"
            )

    def window(self, offset: int, size: int | None = None, label: str | None = None) -> "ByteWindow":
        if size is None:
            size = len(self.data) - offset
        self._check(offset, size, "Sub-window")
        return ByteWindow(self.data[offset : offset + size], label or self.label)

    def unpack(self, record: struct.Struct, offset: int = 0) -> Tuple[int, ...]:
        self._check(offset, record.size, "Record")
        return record.unpack_from(self.data, offset)

    def iter_unpack(self, record: struct.Struct, count: int, offset: int = 0) -> Iterator[Tuple[int, ...]]:
        self._check(offset, record.size * count, f"{count} record(s)")
        return (record.unpack_from(self.data, offset + idx * record.size) for idx in range(count))
