from __future__ import annotations


class DecodeError(ValueError):
    """Base class for every failure raised while decoding a byte stream."""

    def __init__(self, message: str, offset: int) -> None:
        super().__init__(message)
        self.offset = offset


class OutOfBounds(DecodeError):
    """Raised when an instruction needs more bytes than the buffer holds."""

    def __init__(self, offset: int, needed: int, available: int) -> None:
        super().__init__(
            f"Insufficient bytes at offset {offset:#06x}: need {needed}, "
            f"have {available} remaining",
            offset,
        )
        self.needed = needed
        self.available = available


class UnknownOpcode(DecodeError):
    def __init__(self, opcode: int, offset: int) -> None:
        super().__init__(
            f"No opcode family matches byte {opcode:#04x} at offset {offset:#06x}",
            offset,
        )
        self.opcode = opcode


class UnknownExtensionOpcode(DecodeError):
    """The reg field of a group opcode names no supported operation."""

    def __init__(self, opcode: int, extension: int, offset: int) -> None:
        super().__init__(
            f"Opcode {opcode:#04x} at offset {offset:#06x} has unsupported "
            f"extension {extension:03b}",
            offset,
        )
        self.opcode = opcode
        self.extension = extension
