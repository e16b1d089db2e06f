# src/chip8_tracer/arch/chip8/state.py
"""
CHIP-8 固有の状態定義。
"""
import random
from dataclasses import dataclass, field
from typing import List

from chip8_tracer.core.state import CpuState

# @intent:constant CHIP-8アーキテクチャの固定パラメータ。
SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
MEMORY_SIZE = 4096
START_ADDRESS = 0x200
REGISTER_COUNT = 16
STACK_SIZE = 16
KEY_COUNT = 16

FLAG_REGISTER = 0xF

# @intent:constant 組み込みフォント（16字 x 5バイト）。メモリ先頭 FONT_ADDRESS に配置されます。
FONT_ADDRESS = 0x000
FONT_GLYPH_SIZE = 5
FONTSET = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])


# @intent:responsibility CHIP-8のレジスタ、スタック、キーパッド、画面、タイマーの状態を保持します。
# @intent:rationale メモリ本体はBus上のRAMデバイスが保持し、ここには含めません。
@dataclass
class Chip8State(CpuState):
    """
    CHIP-8の状態を保持するデータクラス。
    VF(v[0xF]) は通常のレジスタとして格納し、フラグ用途でも特別扱いしません。
    """
    pc: int = START_ADDRESS
    v: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    i: int = 0x0000 # Index Register
    stack: List[int] = field(default_factory=lambda: [0] * STACK_SIZE)
    keys: List[bool] = field(default_factory=lambda: [False] * KEY_COUNT)
    screen: List[bool] = field(default_factory=lambda: [False] * (SCREEN_WIDTH * SCREEN_HEIGHT))
    delay_timer: int = 0
    sound_timer: int = 0
    # CXNN 用の乱数源。状態比較の対象外。
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)
