# tests/arch/chip8/test_chip8_decode.py
"""
命令デコーダ（decode_opcode）とディスパッチ表の網羅性の検証。
"""
import pytest

from chip8_tracer.arch.chip8.instructions import decode_opcode, split_nibbles
from chip8_tracer.arch.chip8.instructions.maps import FAMILY_MAP, MNEMONIC_MAP, EXECUTE_MAP
from chip8_tracer.core.errors import UnimplementedOpcodeError


def test_split_nibbles():
    assert split_nibbles(0xD12F) == (0xD, 0x1, 0x2, 0xF)


# @intent:test_case_coverage 全ての命令パターンがデコード表・ニーモニック表・実行表に揃っていることを検証します。
def test_tables_are_consistent():
    decoded_keys = {key for _, patterns in FAMILY_MAP.values() for key in patterns.values()}
    assert decoded_keys == set(MNEMONIC_MAP) == set(EXECUTE_MAP)
    assert len(decoded_keys) == 35
    assert set(FAMILY_MAP) == set(range(16))


@pytest.mark.parametrize("opcode, key, text", [
    (0x0000, "0000", "NOP"),
    (0x00E0, "00E0", "CLS"),
    (0x00EE, "00EE", "RET"),
    (0x1234, "1NNN", "JP $234"),
    (0x2ABC, "2NNN", "CALL $ABC"),
    (0x3A42, "3XNN", "SE VA, #$42"),
    (0x4B07, "4XNN", "SNE VB, #$07"),
    (0x5120, "5XY0", "SE V1, V2"),
    (0x6F00, "6XNN", "LD VF, #$00"),
    (0x7E01, "7XNN", "ADD VE, #$01"),
    (0x8340, "8XY0", "LD V3, V4"),
    (0x8341, "8XY1", "OR V3, V4"),
    (0x8342, "8XY2", "AND V3, V4"),
    (0x8343, "8XY3", "XOR V3, V4"),
    (0x8344, "8XY4", "ADD V3, V4"),
    (0x8345, "8XY5", "SUB V3, V4"),
    (0x8346, "8XY6", "SHR V3"),
    (0x8347, "8XY7", "SUBN V3, V4"),
    (0x834E, "8XYE", "SHL V3"),
    (0x9560, "9XY0", "SNE V5, V6"),
    (0xA2F0, "ANNN", "LD I, $2F0"),
    (0xB300, "BNNN", "JP V0, $300"),
    (0xC1FF, "CXNN", "RND V1, #$FF"),
    (0xD125, "DXYN", "DRW V1, V2, 5"),
    (0xE49E, "EX9E", "SKP V4"),
    (0xE4A1, "EXA1", "SKNP V4"),
    (0xF207, "FX07", "LD V2, DT"),
    (0xF20A, "FX0A", "LD V2, K"),
    (0xF215, "FX15", "LD DT, V2"),
    (0xF218, "FX18", "LD ST, V2"),
    (0xF21E, "FX1E", "ADD I, V2"),
    (0xF229, "FX29", "LD F, V2"),
    (0xF233, "FX33", "LD B, V2"),
    (0xF255, "FX55", "LD [I], V2"),
    (0xF265, "FX65", "LD V2, [I]"),
])
def test_decode_patterns(opcode, key, text):
    op = decode_opcode(opcode, 0x200)
    assert op.key == key
    assert op.opcode == opcode
    assert " ".join([op.mnemonic, ", ".join(op.operands)]).strip() == text


def test_operand_fields():
    op = decode_opcode(0xD7A3, 0x200)
    assert (op.x, op.y, op.n) == (0x7, 0xA, 0x3)
    assert op.nn == 0xA3
    assert op.nnn == 0x7A3
    assert op.opcode_hex == "D7A3"
    assert op.length == 2


@pytest.mark.parametrize("opcode", [
    0x0123, 0x00E1, 0x00FF, 0x5121, 0x8008, 0x800F, 0x9001, 0xE000, 0xE19F, 0xF000, 0xF0FF, 0xF156,
])
def test_unimplemented_patterns(opcode):
    with pytest.raises(UnimplementedOpcodeError) as excinfo:
        decode_opcode(opcode, 0x2A0)
    assert excinfo.value.opcode == opcode
    assert excinfo.value.address == 0x2A0
