# chip8_tracer/core/snapshot.py
"""
命令とスナップショットのデータ構造

デコード済み命令（Operation）と、1命令実行後の状態記録（Snapshot）を定義します。
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from chip8_tracer.core.state import CpuState
from chip8_tracer.transport.bus import BusAccess


# @intent:responsibility デコードされた命令の詳細を記録します。
# @intent:rationale 命令語から一意に決まる純粋な値であり、デコーダの出力として不変にします（frozen=True）。
@dataclass(frozen=True)
class Operation:
    """
    デコードされた命令（タグ付きの命令バリアント）。
    `key` は実行関数を引くための命令パターン（例: "8XY4"）です。
    """
    opcode: int # 16bit 命令語
    key: str # 例: "8XY4"
    mnemonic: str # 例: "ADD"
    operands: List[str] = field(default_factory=list) # 例: ["V0", "V1"]
    nibbles: Tuple[int, int, int, int] = (0, 0, 0, 0)
    length: int = 2 # 命令のバイト長

    @property
    def opcode_hex(self) -> str:
        return f"{self.opcode:04X}"

    @property
    def x(self) -> int:
        return self.nibbles[1]

    @property
    def y(self) -> int:
        return self.nibbles[2]

    @property
    def n(self) -> int:
        return self.nibbles[3]

    @property
    def nn(self) -> int:
        return self.opcode & 0xFF

    @property
    def nnn(self) -> int:
        return self.opcode & 0xFFF


# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True)
class Metadata:
    cycle_count: int # 累計実行命令数
    symbol_info: Optional[str] = None # 例: "ADD V0, V1"


# @intent:responsibility 1命令実行直後のCPU状態・命令・バスアクセスを記録します。
@dataclass(frozen=True)
class Snapshot:
    """
    1命令実行直後の状態記録。
    state は実行中のCPU状態への参照であり、コピーではありません。
    """
    state: CpuState
    operation: Operation
    metadata: Metadata
    bus_activity: List[BusAccess] = field(default_factory=list)
