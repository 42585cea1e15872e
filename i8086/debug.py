"""Raw byte dumps used when checking decoder output against a hex listing."""

from __future__ import annotations

from typing import Iterable


def bit_pattern(byte: int) -> str:
    if not 0 <= byte <= 0xFF:
        raise ValueError(f"Byte out of range: {byte:#x}")
    return f"{byte:08b}"


def format_bit_dump(data: Iterable[int]) -> str:
    """One `0xNN: bbbbbbbb` line per byte, newline terminated."""
    return "".join(f"0x{byte:02X}: {bit_pattern(byte)}\n" for byte in data)
