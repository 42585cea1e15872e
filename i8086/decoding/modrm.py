from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from .bind import DirectAddress, Memory, Operand, Register, Width
from .reader import ByteCursor
from .tables import DIRECT_ADDRESS_RM, ea_base, register

MODE_MEMORY = 0b00
MODE_DISP8 = 0b01
MODE_DISP16 = 0b10
MODE_REGISTER = 0b11

RmOperand = Union[Register, Memory, DirectAddress]


@dataclass(frozen=True, slots=True)
class ModRm:
    mode: int
    reg: int
    rm: int
    register: Register
    other: RmOperand


def split_modrm(byte: int) -> Tuple[int, int, int]:
    """Return the (mode, reg, rm) fields of a mod/reg/rm byte."""
    return (byte >> 6) & 0x03, (byte >> 3) & 0x07, byte & 0x07


def resolve_rm(cursor: ByteCursor, mode: int, rm: int, width: Width) -> RmOperand:
    """
    Resolve the r/m side of a mod/reg/rm byte, consuming any displacement.

    Displacements are kept unsigned: mode 01 yields 0..255 and mode 10 yields
    0..65535, and a literal zero displacement is dropped from the operand
    even though its bytes were read.
    """

    if mode == MODE_REGISTER:
        return register(rm, width)

    start = cursor.position()
    if mode == MODE_MEMORY:
        if rm == DIRECT_ADDRESS_RM:
            address = cursor.take_u16_le()
            cursor.record_operand("rm", "direct", start=start, width=16)
            return DirectAddress(address)
        return Memory(ea_base(rm))

    if mode == MODE_DISP8:
        disp = cursor.take_u8()
        cursor.record_operand("rm", "disp8", start=start, width=8)
    else:
        disp = cursor.take_u16_le()
        cursor.record_operand("rm", "disp16", start=start, width=16)
    return Memory(ea_base(rm), disp or None)


def resolve_modrm(modrm_byte: int, width: Width, cursor: ByteCursor) -> ModRm:
    mode, reg, rm = split_modrm(modrm_byte)
    return ModRm(
        mode=mode,
        reg=reg,
        rm=rm,
        register=register(reg, width),
        other=resolve_rm(cursor, mode, rm, width),
    )


def order_operands(modrm: ModRm, reg_is_destination: bool) -> Tuple[Operand, Operand]:
    if reg_is_destination:
        return modrm.register, modrm.other
    return modrm.other, modrm.register
