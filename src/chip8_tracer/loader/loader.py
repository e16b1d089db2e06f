# chip8_tracer/loader/loader.py
"""
プログラムローダーモジュール。
生バイナリ（.ch8）および Intel HEX 形式のロードをサポートします。
"""
import os

from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.arch.chip8.state import MEMORY_SIZE, START_ADDRESS

# @intent:constant プログラム領域に収まる最大イメージサイズ。
MAX_PROGRAM_SIZE = MEMORY_SIZE - START_ADDRESS


class RomLoader:
    """
    生バイナリのプログラムイメージを読み込み、START_ADDRESS から配置するローダー。
    """
    # @intent:responsibility イメージがプログラム領域に収まることを検証してからCPUへ渡します。
    def load_rom(self, file_path: str, cpu: Chip8Cpu) -> int:
        with open(file_path, 'rb') as f:
            image = f.read()

        if len(image) > MAX_PROGRAM_SIZE:
            raise ValueError(
                f"Program image '{file_path}' is {len(image)} bytes; at most {MAX_PROGRAM_SIZE} bytes fit at {START_ADDRESS:#05x}."
            )
        cpu.load(image)
        return len(image)


class IntelHexLoader:
    """
    Intel HEX形式のファイルを解析し、データをCPUのメモリにロードするローダー。
    データレコード(00)と終端レコード(01)のみを扱い、アドレスはレコードの値をそのまま用います。
    """
    def load_intel_hex(self, file_path: str, cpu: Chip8Cpu) -> int:
        bus = cpu.get_bus()
        loaded = 0

        with open(file_path, 'r') as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line or not line.startswith(':'):
                    continue

                if len(line) < 11:
                    raise ValueError(f"Invalid Intel HEX record format on line {line_num}: Too short - {line}")

                try:
                    raw = bytes.fromhex(line[1:])
                except ValueError as e:
                    raise ValueError(f"Error parsing Intel HEX line {line_num}: {line} - {e}") from e

                data_length = raw[0]
                address = (raw[1] << 8) | raw[2]
                record_type = raw[3]
                data = raw[4:-1]

                if len(data) != data_length:
                    raise ValueError(f"Data length mismatch on line {line_num}")
                if sum(raw) & 0xFF != 0:
                    raise ValueError(f"Checksum mismatch on line {line_num}: {line}")

                if record_type == 0x00:
                    if address + data_length > MEMORY_SIZE:
                        raise ValueError(f"Record on line {line_num} exceeds memory ({address:#06x}+{data_length}).")
                    for offset, byte in enumerate(data):
                        bus.load(address + offset, byte)
                    loaded += data_length
                elif record_type == 0x01:
                    break
                else:
                    raise ValueError(f"Unsupported Intel HEX record type {record_type:02X} on line {line_num}")

        return loaded


# @intent:responsibility 拡張子に応じてローダーを選択し、プログラムをロードします。
def load_program(file_path: str, cpu: Chip8Cpu) -> int:
    ext = os.path.splitext(file_path)[1].lower()
    if ext in ('.hex', '.ihx'):
        return IntelHexLoader().load_intel_hex(file_path, cpu)
    return RomLoader().load_rom(file_path, cpu)
