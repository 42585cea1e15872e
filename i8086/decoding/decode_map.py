from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Tuple

from .bind import Instruction, Mnemonic, Operand, RelativeOffset, Width
from .errors import UnknownExtensionOpcode, UnknownOpcode
from .immediate import read_immediate
from .modrm import order_operands, resolve_modrm, resolve_rm, split_modrm
from .reader import ByteCursor
from .tables import JCC_OPCODES, LOOP_OPCODES, accumulator, register

logger = logging.getLogger(__name__)

DecoderFunc = Callable[[int, ByteCursor, int], Instruction]

# reg field of the 0x80-0x83 group
ARITH_EXTENSIONS = {
    0b000: Mnemonic.ADD,
    0b101: Mnemonic.SUB,
    0b111: Mnemonic.CMP,
}

MOV_IMM_EXTENSION = 0b000


@dataclass(frozen=True)
class OpcodeFamily:
    name: str
    mask: int
    value: int
    handler: DecoderFunc

    def matches(self, opcode: int) -> bool:
        return opcode & self.mask == self.value


def _emit(
    cursor: ByteCursor,
    start: int,
    family: str,
    mnemonic: Mnemonic,
    *operands: Operand,
    **extra,
) -> Instruction:
    return Instruction(
        mnemonic=mnemonic,
        operands=tuple(operands),
        offset=start,
        length=cursor.position() - start,
        raw=bytes(cursor.data[start : cursor.position()]),
        family=family,
        **extra,
    )


def _take_modrm(cursor: ByteCursor) -> int:
    start = cursor.position()
    byte = cursor.take_u8()
    cursor.record_operand("modrm", "modrm", start=start, fields=split_modrm(byte))
    return byte


def _dec_rm_reg(
    opcode: int, cursor: ByteCursor, start: int, family: str, mnemonic: Mnemonic
) -> Instruction:
    width = Width.from_flag(bool(opcode & 0x01))
    reg_is_destination = bool(opcode & 0x02)
    modrm = resolve_modrm(_take_modrm(cursor), width, cursor)
    dst, src = order_operands(modrm, reg_is_destination)
    return _emit(cursor, start, family, mnemonic, dst, src)


def _dec_mov_imm_rm(opcode: int, cursor: ByteCursor, start: int) -> Instruction:
    width = Width.from_flag(bool(opcode & 0x01))
    mode, reg, rm = split_modrm(_take_modrm(cursor))
    if reg != MOV_IMM_EXTENSION:
        raise UnknownExtensionOpcode(opcode, reg, start)
    dst = resolve_rm(cursor, mode, rm, width)
    imm = read_immediate(cursor, width)
    return _emit(cursor, start, "mov_imm_rm", Mnemonic.MOV, dst, imm)


def _dec_mov_imm_reg(opcode: int, cursor: ByteCursor, start: int) -> Instruction:
    width = Width.from_flag(bool(opcode & 0x08))
    dst = register(opcode & 0x07, width)
    imm = read_immediate(cursor, width)
    return _emit(cursor, start, "mov_imm_reg", Mnemonic.MOV, dst, imm)


def _dec_arith_imm_rm(opcode: int, cursor: ByteCursor, start: int) -> Instruction:
    sign_extend = bool(opcode & 0x02)
    width = Width.from_flag(bool(opcode & 0x01))
    mode, reg, rm = split_modrm(_take_modrm(cursor))
    try:
        mnemonic = ARITH_EXTENSIONS[reg]
    except KeyError as exc:
        raise UnknownExtensionOpcode(opcode, reg, start) from exc
    dst = resolve_rm(cursor, mode, rm, width)
    imm = read_immediate(cursor, width, sign_extend)
    return _emit(cursor, start, "arith_imm_rm", mnemonic, dst, imm)


def _dec_imm_acc(
    opcode: int, cursor: ByteCursor, start: int, family: str, mnemonic: Mnemonic
) -> Instruction:
    width = Width.from_flag(bool(opcode & 0x01))
    imm = read_immediate(cursor, width)
    return _emit(cursor, start, family, mnemonic, accumulator(width), imm)


def _dec_short_jump(opcode: int, cursor: ByteCursor, start: int) -> Instruction:
    disp_start = cursor.position()
    target = RelativeOffset(cursor.take_i8())
    cursor.record_operand("disp", "rel8", start=disp_start, width=8)
    if opcode in LOOP_OPCODES:
        return _emit(
            cursor, start, "jump", Mnemonic.LOOP, target, loop_kind=LOOP_OPCODES[opcode]
        )
    return _emit(
        cursor, start, "jump", Mnemonic.JCC, target, condition=JCC_OPCODES[opcode]
    )


def _jump_families() -> Tuple[OpcodeFamily, ...]:
    codes = sorted({**JCC_OPCODES, **LOOP_OPCODES})
    return tuple(OpcodeFamily("jump", 0xFF, code, _dec_short_jump) for code in codes)


# First match wins; the order is part of the decoding contract.
FAMILIES: Tuple[OpcodeFamily, ...] = (
    OpcodeFamily(
        "mov_rm_reg",
        0xFC,
        0x88,
        lambda op, cur, start: _dec_rm_reg(op, cur, start, "mov_rm_reg", Mnemonic.MOV),
    ),
    OpcodeFamily("mov_imm_rm", 0xFE, 0xC6, _dec_mov_imm_rm),
    OpcodeFamily("mov_imm_reg", 0xF0, 0xB0, _dec_mov_imm_reg),
    OpcodeFamily(
        "add_rm_reg",
        0xFC,
        0x00,
        lambda op, cur, start: _dec_rm_reg(op, cur, start, "add_rm_reg", Mnemonic.ADD),
    ),
    OpcodeFamily(
        "sub_rm_reg",
        0xFC,
        0x28,
        lambda op, cur, start: _dec_rm_reg(op, cur, start, "sub_rm_reg", Mnemonic.SUB),
    ),
    OpcodeFamily(
        "cmp_rm_reg",
        0xFC,
        0x38,
        lambda op, cur, start: _dec_rm_reg(op, cur, start, "cmp_rm_reg", Mnemonic.CMP),
    ),
    OpcodeFamily("arith_imm_rm", 0xFC, 0x80, _dec_arith_imm_rm),
    OpcodeFamily(
        "add_imm_acc",
        0xFE,
        0x04,
        lambda op, cur, start: _dec_imm_acc(op, cur, start, "add_imm_acc", Mnemonic.ADD),
    ),
    OpcodeFamily(
        "sub_imm_acc",
        0xFE,
        0x2C,
        lambda op, cur, start: _dec_imm_acc(op, cur, start, "sub_imm_acc", Mnemonic.SUB),
    ),
    OpcodeFamily(
        "cmp_imm_acc",
        0xFE,
        0x3C,
        lambda op, cur, start: _dec_imm_acc(op, cur, start, "cmp_imm_acc", Mnemonic.CMP),
    ),
    *_jump_families(),
)


def match_family(opcode: int) -> Optional[OpcodeFamily]:
    for family in FAMILIES:
        if family.matches(opcode):
            return family
    return None


def decode_instruction(cursor: ByteCursor) -> Instruction:
    """Decode one instruction at the cursor and advance past it."""

    start = cursor.position()
    opcode = cursor.peek()
    family = match_family(opcode)
    if family is None:
        raise UnknownOpcode(opcode, start)
    cursor.take_u8()
    instr = family.handler(opcode, cursor, start)
    logger.debug("%04x %-12s %s len=%d", start, family.name, instr.text, instr.length)
    return instr


def iter_instructions(
    data: bytes, *, start: int = 0, record_layout: bool = False
) -> Iterator[Instruction]:
    """
    Lazily decode `data` from `start` until the buffer is exhausted.

    Any `DecodeError` ends the iteration; there is no attempt to skip ahead
    and resynchronise.
    """

    cursor = ByteCursor(bytes(data), pos=start, record_layout=record_layout)
    while not cursor.at_end():
        yield decode_instruction(cursor)


def decode_all(data: bytes, *, start: int = 0) -> List[Instruction]:
    return list(iter_instructions(data, start=start))
