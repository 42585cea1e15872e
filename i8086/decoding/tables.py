"""Fixed 8086 register and effective-address tables, indexed by 3-bit fields."""

from __future__ import annotations

from typing import Dict, Tuple

from .bind import Condition, LoopKind, Register, Width

WORD_REGISTERS: Tuple[str, ...] = ("ax", "cx", "dx", "bx", "sp", "bp", "si", "di")
BYTE_REGISTERS: Tuple[str, ...] = ("al", "cl", "dl", "bl", "ah", "ch", "dh", "bh")

# r/m field (mode != 11) to effective-address base expression
EA_BASES: Tuple[str, ...] = (
    "bx + si",
    "bx + di",
    "bp + si",
    "bp + di",
    "si",
    "di",
    "bp",
    "bx",
)

DIRECT_ADDRESS_RM = 0b110

# Short jumps 0x70-0x7F follow the Condition enum order.
JCC_OPCODES: Dict[int, Condition] = {
    0x70 + index: cond for index, cond in enumerate(Condition)
}

LOOP_OPCODES: Dict[int, LoopKind] = {
    0xE0: LoopKind.LOOPNZ,
    0xE1: LoopKind.LOOPZ,
    0xE2: LoopKind.LOOP,
    0xE3: LoopKind.JCXZ,
}


def register_name(field: int, width: Width) -> str:
    table = WORD_REGISTERS if width is Width.WORD else BYTE_REGISTERS
    return table[field & 0x07]


def register(field: int, width: Width) -> Register:
    return Register(register_name(field, width), width)


def accumulator(width: Width) -> Register:
    return register(0, width)


def ea_base(rm: int) -> str:
    return EA_BASES[rm & 0x07]
