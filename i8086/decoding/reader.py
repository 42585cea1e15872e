from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Dict, List

from .errors import OutOfBounds


@dataclass(frozen=True)
class LayoutEntry:
    key: str
    kind: str
    meta: Dict[str, object]


@dataclass
class ByteCursor:
    """
    Sequential, bounds-checked reader over an in-memory instruction buffer.

    The cursor is the only state the decoder carries between instructions:
    every successful decode leaves `pos` one byte past the instruction it
    consumed. When `record_layout` is set, sub-decoders append a
    `LayoutEntry` for every operand they read so callers can see exactly
    which bytes backed which operand.
    """

    data: bytes
    pos: int = 0
    record_layout: bool = False
    _layout: List[LayoutEntry] = field(default_factory=list, init=False)

    def __post_init__(self) -> None:
        if not 0 <= self.pos <= len(self.data):
            raise ValueError(
                f"Start position {self.pos} outside buffer of {len(self.data)} bytes"
            )

    def _require(self, count: int) -> None:
        if self.remaining() < count:
            raise OutOfBounds(self.pos, count, self.remaining())

    def _unpack(self, fmt: str) -> int:
        size = struct.calcsize(fmt)
        self._require(size)
        (value,) = struct.unpack_from("<" + fmt, self.data, self.pos)
        self.pos += size
        return value

    def record_operand(self, key: str, kind: str, *, start: int, **meta) -> None:
        if not self.record_layout:
            return
        meta.setdefault("offset", start)
        meta.setdefault("length_bytes", self.pos - start)
        self._layout.append(LayoutEntry(key=key, kind=kind, meta=dict(meta)))

    def peek(self) -> int:
        self._require(1)
        return self.data[self.pos]

    def take_u8(self) -> int:
        return self._unpack("B")

    def take_i8(self) -> int:
        return self._unpack("b")

    def take_u16_le(self) -> int:
        return self._unpack("H")

    def take_i8_sign_extended_u16(self) -> int:
        return self.take_i8() & 0xFFFF

    def position(self) -> int:
        return self.pos

    def remaining(self) -> int:
        return len(self.data) - self.pos

    def at_end(self) -> bool:
        return self.pos >= len(self.data)

    def snapshot_layout(self) -> tuple[LayoutEntry, ...]:
        return tuple(self._layout)
