# src/chip8_tracer/arch/chip8/instructions/display.py
"""
画面命令（CLS, DRW）の実装。
"""
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.state import Chip8State, SCREEN_WIDTH, SCREEN_HEIGHT
from .base import set_flag, check_index_range

# --- 00E0 CLS ---
def execute_cls(state: Chip8State, bus: Bus, op: Operation) -> None:
    state.screen = [False] * (SCREEN_WIDTH * SCREEN_HEIGHT)

# --- DXYN DRW ---
# @intent:responsibility Iから読んだNバイトのスプライトを(VX, VY)にXOR描画し、消去された画素があればVF=1とします。
# @intent:rationale 座標は横・縦ともに画面サイズでの剰余により折り返します。
#                  スプライトの範囲は描画前に確認し、範囲外ならば画面を変更せずMemoryAccessErrorとなります。
def execute_drw(state: Chip8State, bus: Bus, op: Operation) -> None:
    origin_x = state.v[op.x]
    origin_y = state.v[op.y]
    collision = False
    check_index_range(state, op.n)

    for row in range(op.n):
        sprite_byte = bus.read(state.i + row)
        y = (origin_y + row) % SCREEN_HEIGHT
        for col in range(8):
            if sprite_byte & (0x80 >> col):
                x = (origin_x + col) % SCREEN_WIDTH
                idx = y * SCREEN_WIDTH + x
                collision |= state.screen[idx]
                state.screen[idx] = not state.screen[idx]

    set_flag(state, collision)
