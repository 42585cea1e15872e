"""Assembly text tokens and the renderer that turns instructions into them."""

from __future__ import annotations

import enum
from typing import Iterable, List

from .decoding.bind import (
    DirectAddress,
    Immediate,
    Instruction,
    Memory,
    Operand,
    Register,
    RelativeOffset,
)

LISTING_HEADER = "bits 16"


class TokenKind(enum.Enum):
    INSTRUCTION = "instruction"
    SEPARATOR = "separator"
    TEXT = "text"
    INTEGER = "integer"
    REGISTER = "register"
    BEGIN_MEMORY = "begin_memory"
    END_MEMORY = "end_memory"


class Token:
    kind: TokenKind

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return False
        return self.__dict__ == getattr(other, "__dict__", {})

    def __hash__(self) -> int:
        return hash((type(self).__name__, str(self)))


def asm_str(parts: Iterable[Token]) -> str:
    return "".join(str(part) for part in parts)


class TInstr(Token):
    kind = TokenKind.INSTRUCTION

    def __init__(self, instr: str) -> None:
        self.instr = instr

    def __repr__(self) -> str:
        return f"TInstr({self.instr})"

    def __str__(self) -> str:
        return self.instr


class TSep(Token):
    kind = TokenKind.SEPARATOR

    def __init__(self, sep: str) -> None:
        self.sep = sep

    def __repr__(self) -> str:
        return f"TSep({self.sep})"

    def __str__(self) -> str:
        return self.sep


class TText(Token):
    kind = TokenKind.TEXT

    def __init__(self, text: str) -> None:
        self.text = text

    def __repr__(self) -> str:
        return f"TText({self.text})"

    def __str__(self) -> str:
        return self.text


class TInt(Token):
    kind = TokenKind.INTEGER

    def __init__(self, value: int) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"TInt({self.value})"

    def __str__(self) -> str:
        return str(self.value)


class TReg(Token):
    kind = TokenKind.REGISTER

    def __init__(self, reg: str) -> None:
        self.reg = reg

    def __repr__(self) -> str:
        return f"TReg({self.reg})"

    def __str__(self) -> str:
        return self.reg


class TBegMem(Token):
    kind = TokenKind.BEGIN_MEMORY

    def __repr__(self) -> str:
        return "TBegMem()"

    def __str__(self) -> str:
        return "["


class TEndMem(Token):
    kind = TokenKind.END_MEMORY

    def __repr__(self) -> str:
        return "TEndMem()"

    def __str__(self) -> str:
        return "]"


def operand_tokens(operand: Operand) -> List[Token]:
    if isinstance(operand, Register):
        return [TReg(operand.name)]
    if isinstance(operand, Memory):
        parts: List[Token] = [TBegMem()]
        if operand.base is not None:
            parts.append(TText(operand.base))
            if operand.displacement:
                parts.append(TSep(" + "))
        if operand.displacement or operand.base is None:
            parts.append(TInt(operand.displacement or 0))
        parts.append(TEndMem())
        return parts
    if isinstance(operand, DirectAddress):
        return [TBegMem(), TInt(operand.address), TEndMem()]
    if isinstance(operand, Immediate):
        return [TInt(operand.unsigned)]
    if isinstance(operand, RelativeOffset):
        return [TInt(operand.displacement)]
    raise TypeError(f"Unsupported operand {operand!r}")


def render_tokens(instr: Instruction) -> List[Token]:
    parts: List[Token] = [TInstr(instr.text)]
    for index, operand in enumerate(instr.operands):
        parts.append(TSep(" " if index == 0 else ", "))
        parts.extend(operand_tokens(operand))
    return parts


def render(instr: Instruction) -> str:
    return asm_str(render_tokens(instr))


def render_listing(instrs: Iterable[Instruction], *, header: bool = True) -> str:
    """Render a NASM-style listing, one instruction per line."""

    lines = [LISTING_HEADER] if header else []
    lines.extend(render(instr) for instr in instrs)
    if not lines:
        return ""
    return "\n".join(lines) + "\n"
