# src/chip8_tracer/arch/chip8/disassembler.py
"""
CHIP-8 Disassembler

メモリ上のバイナリデータを解析し、CHIP-8のニーモニックに変換します。
Instruction Layerのデコードロジックを再利用し、読み込みには peek を使うため
バスアクセスログを汚しません。
"""
from typing import List

from chip8_tracer.common.types import DisassemblyLine
from chip8_tracer.core.errors import UnimplementedOpcodeError
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.instructions import decode_opcode
from chip8_tracer.arch.chip8.state import MEMORY_SIZE

# @intent:responsibility 指定されたメモリ範囲を逆アセンブルし、表示用データを生成します。
# @intent:rationale CHIP-8のプログラムにはスプライトなどのデータが混在するため、
#                  デコードできない語は例外にせず "DW" (データ語) として表示します。
def disassemble(bus: Bus, start_addr: int, length: int) -> List[DisassemblyLine]:
    """
    指定された範囲のメモリを2バイト単位で逆アセンブルします。

    Returns:
        List of (address, hex_bytes, mnemonic) tuples.
    """
    result = []
    end_addr = min(start_addr + length, MEMORY_SIZE)

    for addr in range(start_addr, end_addr - 1, 2):
        high = bus.peek(addr)
        low = bus.peek(addr + 1)
        opcode = (high << 8) | low
        hex_bytes = f"{high:02X} {low:02X}"

        try:
            operation = decode_opcode(opcode, addr)
        except UnimplementedOpcodeError:
            result.append((addr, hex_bytes, f"DW ${opcode:04X}"))
            continue

        mnemonic_str = operation.mnemonic
        if operation.operands:
            mnemonic_str += " " + ", ".join(operation.operands)
        result.append((addr, hex_bytes, mnemonic_str))

    return result
