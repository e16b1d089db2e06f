# src/chip8_tracer/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from chip8_tracer.transport.bus import Bus
from chip8_tracer.core.errors import UnimplementedOpcodeError
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.arch.chip8.state import Chip8State
from .maps import FAMILY_MAP, MNEMONIC_MAP, EXECUTE_MAP

# @intent:responsibility 16bit命令語を4つのニブルに分解します。
def split_nibbles(opcode: int):
    return ((opcode >> 12) & 0xF, (opcode >> 8) & 0xF, (opcode >> 4) & 0xF, opcode & 0xF)

# @intent:responsibility 命令語をデコードし、Operationオブジェクトを返します。
# @intent:post-condition 認識できない命令語の場合、UnimplementedOpcodeErrorを送出します。
def decode_opcode(opcode: int, address: int) -> Operation:
    """
    CHIP-8の命令語をデコードします。副作用の無い純粋関数です。
    `address` はエラー報告にのみ使用します。
    """
    nibbles = split_nibbles(opcode)
    selector, patterns = FAMILY_MAP[nibbles[0]]
    key = patterns.get(selector(nibbles))
    if key is None:
        raise UnimplementedOpcodeError(opcode, address)

    mnemonic, formats = MNEMONIC_MAP[key]
    fields = {"x": nibbles[1], "y": nibbles[2], "n": nibbles[3], "nn": opcode & 0xFF, "nnn": opcode & 0xFFF}
    operands = [fmt.format(**fields) for fmt in formats]
    return Operation(opcode=opcode, key=key, mnemonic=mnemonic, operands=operands, nibbles=nibbles)

# @intent:responsibility デコードされた命令を実行します。
def execute_instruction(operation: Operation, state: Chip8State, bus: Bus) -> None:
    EXECUTE_MAP[operation.key](state, bus, operation)
