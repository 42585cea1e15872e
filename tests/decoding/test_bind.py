import pytest

from i8086.decoding.bind import (
    Condition,
    DirectAddress,
    Immediate,
    Instruction,
    LoopKind,
    Memory,
    Mnemonic,
    Register,
    RelativeOffset,
    Width,
)


def test_width_from_flag_and_mask() -> None:
    assert Width.from_flag(True) is Width.WORD
    assert Width.from_flag(False) is Width.BYTE
    assert Width.WORD.mask == 0xFFFF
    assert Width.BYTE.mask == 0xFF


@pytest.mark.parametrize(
    "factory",
    [
        lambda: DirectAddress(0x10000),
        lambda: DirectAddress(-1),
        lambda: Memory("bx", 0x10000),
        lambda: Memory(None, None),
        lambda: Immediate(0x8000, Width.WORD),
        lambda: RelativeOffset(128),
        lambda: RelativeOffset(-129),
    ],
)
def test_out_of_range_operands_rejected(factory) -> None:
    with pytest.raises(ValueError):
        factory()


def test_condition_must_match_mnemonic() -> None:
    with pytest.raises(ValueError):
        Instruction(Mnemonic.JCC, (RelativeOffset(0),))
    with pytest.raises(ValueError):
        Instruction(Mnemonic.MOV, (), condition=Condition.E)
    with pytest.raises(ValueError):
        Instruction(Mnemonic.LOOP, (RelativeOffset(0),))


def test_too_many_operands_rejected() -> None:
    reg = Register("ax", Width.WORD)
    with pytest.raises(ValueError):
        Instruction(Mnemonic.MOV, (reg, reg, reg))


def test_instruction_text() -> None:
    assert Instruction(Mnemonic.SUB).text == "sub"
    jump = Instruction(Mnemonic.JCC, (RelativeOffset(-2),), condition=Condition.NE)
    assert jump.text == "jne"
    loop = Instruction(Mnemonic.LOOP, (RelativeOffset(-2),), loop_kind=LoopKind.LOOPZ)
    assert loop.text == "loopz"


def test_instructions_are_frozen() -> None:
    instr = Instruction(Mnemonic.ADD)
    with pytest.raises(AttributeError):
        instr.length = 3  # type: ignore[misc]
