from i8086.decoding.bind import (
    DirectAddress,
    Immediate,
    Instruction,
    Memory,
    Mnemonic,
    Register,
    Width,
)
from i8086.tokens import (
    TBegMem,
    TEndMem,
    TInstr,
    TInt,
    TReg,
    TSep,
    TText,
    TokenKind,
    asm_str,
    operand_tokens,
    render,
    render_listing,
    render_tokens,
)


def test_render_tokens_memory_with_displacement() -> None:
    instr = Instruction(
        Mnemonic.MOV,
        (Memory("bx + si", 4), Register("al", Width.BYTE)),
    )
    assert render_tokens(instr) == [
        TInstr("mov"),
        TSep(" "),
        TBegMem(),
        TText("bx + si"),
        TSep(" + "),
        TInt(4),
        TEndMem(),
        TSep(", "),
        TReg("al"),
    ]


def test_token_kinds() -> None:
    assert TReg("ax").kind is TokenKind.REGISTER
    assert TInt(1).kind is TokenKind.INTEGER
    assert TBegMem().kind is TokenKind.BEGIN_MEMORY


def test_memory_without_displacement() -> None:
    assert asm_str(operand_tokens(Memory("bp"))) == "[bp]"
    assert asm_str(operand_tokens(Memory("bp", None))) == "[bp]"


def test_memory_without_base_is_absolute() -> None:
    assert asm_str(operand_tokens(Memory(None, 5))) == "[5]"


def test_direct_address() -> None:
    assert asm_str(operand_tokens(DirectAddress(0xFFFF))) == "[65535]"


def test_immediate_rendered_unsigned_for_width() -> None:
    assert asm_str(operand_tokens(Immediate(-12, Width.BYTE))) == "244"
    assert asm_str(operand_tokens(Immediate(-2, Width.WORD))) == "65534"


def test_sign_extended_immediate_rendered_from_encoded_byte() -> None:
    imm = Immediate(-2, Width.WORD, encoded_width=Width.BYTE)
    assert asm_str(operand_tokens(imm)) == "254"


def test_render_zero_operands() -> None:
    assert render(Instruction(Mnemonic.CMP)) == "cmp"


def test_render_listing_header() -> None:
    instr = Instruction(
        Mnemonic.MOV, (Register("cx", Width.WORD), Register("bx", Width.WORD))
    )
    assert render_listing([instr]) == "bits 16\nmov cx, bx\n"
    assert render_listing([instr], header=False) == "mov cx, bx\n"
    assert render_listing([]) == "bits 16\n"
    assert render_listing([], header=False) == ""
