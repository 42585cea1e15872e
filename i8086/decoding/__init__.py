"""
Typed decoding helpers for 8086 instruction bytes.

`decode_map` holds the priority-ordered opcode family table; the operand
model lives in `bind` and the bounds-checked reader in `reader`.
"""

from .bind import (  # noqa: F401
    Condition,
    DirectAddress,
    Immediate,
    Instruction,
    LoopKind,
    Memory,
    Mnemonic,
    Operand,
    Register,
    RelativeOffset,
    Width,
)
from .errors import (  # noqa: F401
    DecodeError,
    OutOfBounds,
    UnknownExtensionOpcode,
    UnknownOpcode,
)
from .reader import ByteCursor  # noqa: F401
from .decode_map import (  # noqa: F401
    FAMILIES,
    OpcodeFamily,
    decode_all,
    decode_instruction,
    iter_instructions,
    match_family,
)

__all__ = [
    "ByteCursor",
    "Condition",
    "DecodeError",
    "DirectAddress",
    "FAMILIES",
    "Immediate",
    "Instruction",
    "LoopKind",
    "Memory",
    "Mnemonic",
    "OpcodeFamily",
    "Operand",
    "OutOfBounds",
    "Register",
    "RelativeOffset",
    "UnknownExtensionOpcode",
    "UnknownOpcode",
    "Width",
    "decode_all",
    "decode_instruction",
    "iter_instructions",
    "match_family",
]
