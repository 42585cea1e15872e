from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


class Width(Enum):
    BYTE = 8
    WORD = 16

    @classmethod
    def from_flag(cls, word: bool) -> "Width":
        return cls.WORD if word else cls.BYTE

    @property
    def mask(self) -> int:
        return (1 << self.value) - 1


class Mnemonic(str, Enum):
    MOV = "mov"
    ADD = "add"
    SUB = "sub"
    CMP = "cmp"
    JCC = "jcc"
    LOOP = "loop"


class Condition(str, Enum):
    """Condition codes of the short conditional jumps, keyed by opcode order."""

    O = "jo"
    NO = "jno"
    B = "jb"
    NB = "jnb"
    E = "je"
    NE = "jne"
    BE = "jbe"
    A = "ja"
    S = "js"
    NS = "jns"
    P = "jp"
    NP = "jnp"
    L = "jl"
    NL = "jnl"
    LE = "jle"
    G = "jg"


class LoopKind(str, Enum):
    LOOPNZ = "loopnz"
    LOOPZ = "loopz"
    LOOP = "loop"
    JCXZ = "jcxz"


@dataclass(frozen=True, slots=True)
class Register:
    name: str
    width: Width


@dataclass(frozen=True, slots=True)
class Memory:
    base: Optional[str]
    displacement: Optional[int] = None  # unsigned, for display

    def __post_init__(self) -> None:
        if self.displacement is not None and not 0 <= self.displacement <= 0xFFFF:
            raise ValueError(f"Memory displacement out of range: {self.displacement}")
        if self.base is None and self.displacement is None:
            raise ValueError("Memory operand without base needs a displacement")


@dataclass(frozen=True, slots=True)
class DirectAddress:
    address: int

    def __post_init__(self) -> None:
        if not 0 <= self.address <= 0xFFFF:
            raise ValueError(f"DirectAddress out of range: {self.address:#x}")


@dataclass(frozen=True, slots=True)
class Immediate:
    value: int  # signed
    declared_width: Width
    # bytes actually present; narrower than declared_width when sign-extended
    encoded_width: Optional[Width] = None

    def __post_init__(self) -> None:
        if not -0x8000 <= self.value <= 0x7FFF:
            raise ValueError(f"Immediate out of range: {self.value}")

    @property
    def unsigned(self) -> int:
        return self.value & (self.encoded_width or self.declared_width).mask


@dataclass(frozen=True, slots=True)
class RelativeOffset:
    displacement: int

    def __post_init__(self) -> None:
        if not -0x80 <= self.displacement <= 0x7F:
            raise ValueError(f"RelativeOffset out of range: {self.displacement}")


Operand = Union[Register, Memory, DirectAddress, Immediate, RelativeOffset]


@dataclass(frozen=True, slots=True)
class Instruction:
    mnemonic: Mnemonic
    operands: Tuple[Operand, ...] = ()
    condition: Optional[Condition] = None
    loop_kind: Optional[LoopKind] = None
    offset: int = 0
    length: int = 0
    raw: bytes = b""
    family: Optional[str] = None

    def __post_init__(self) -> None:
        if len(self.operands) > 2:
            raise ValueError(f"Too many operands: {len(self.operands)}")
        if (self.mnemonic is Mnemonic.JCC) != (self.condition is not None):
            raise ValueError("condition must be set exactly for conditional jumps")
        if (self.mnemonic is Mnemonic.LOOP) != (self.loop_kind is not None):
            raise ValueError("loop_kind must be set exactly for loop instructions")

    @property
    def text(self) -> str:
        """Assembly spelling of the mnemonic, e.g. `jne` or `loopz`."""
        if self.condition is not None:
            return self.condition.value
        if self.loop_kind is not None:
            return self.loop_kind.value
        return self.mnemonic.value
