"""8086 machine-code decoder facade exports."""

from .decoding import (
    DecodeError,
    Instruction,
    OutOfBounds,
    UnknownExtensionOpcode,
    UnknownOpcode,
    decode_all,
    iter_instructions,
)
from .tokens import render, render_listing

__all__ = [
    "DecodeError",
    "Instruction",
    "OutOfBounds",
    "UnknownExtensionOpcode",
    "UnknownOpcode",
    "decode_all",
    "iter_instructions",
    "render",
    "render_listing",
]
