from __future__ import annotations

from typing import Optional

from .bind import Immediate, Width
from .reader import ByteCursor


def _signed16(value: int) -> int:
    return value - 0x10000 if value & 0x8000 else value


def read_immediate(
    cursor: ByteCursor,
    width: Width,
    sign_extend: Optional[bool] = None,
    *,
    key: str = "imm",
) -> Immediate:
    """
    Read the immediate operand that follows an opcode (and its mod/reg/rm).

    `sign_extend=None` is the mov/accumulator convention: the encoding always
    carries the full declared width. With an explicit flag (arithmetic group
    0x80-0x83) a word-width operand with the flag set is a single byte
    widened by its sign bit. Byte width reads one byte either way.
    """

    start = cursor.position()
    encoded: Optional[Width] = None
    if width is Width.BYTE:
        value = cursor.take_i8()
        kind = "imm8"
    elif sign_extend:
        value = _signed16(cursor.take_i8_sign_extended_u16())
        kind = "imm8_sx"
        encoded = Width.BYTE
    else:
        value = _signed16(cursor.take_u16_le())
        kind = "imm16"
    cursor.record_operand(key, kind, start=start, width=width.value)
    return Immediate(value, width, encoded)
