# src/chip8_tracer/arch/chip8/instructions/load.py
"""
Iレジスタ、メモリ転送、タイマーアクセス命令の実装。
Iを基点とするメモリアクセスは全てBus経由で行い、範囲外はMemoryAccessErrorとなります。
範囲は実行前に確認するため、範囲外の場合はメモリもレジスタも一切変更されません。
"""
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.state import Chip8State, FONT_ADDRESS, FONT_GLYPH_SIZE
from .base import check_index_range

# --- ANNN LD I ---
def execute_ld_i(state: Chip8State, bus: Bus, op: Operation) -> None:
    state.i = op.nnn

# --- FX1E ADD I ---
def execute_add_i(state: Chip8State, bus: Bus, op: Operation) -> None:
    state.i = (state.i + state.v[op.x]) & 0xFFFF

# --- FX07 LD VX, DT ---
def execute_ld_vx_dt(state: Chip8State, bus: Bus, op: Operation) -> None:
    state.v[op.x] = state.delay_timer

# --- FX15 LD DT, VX ---
def execute_ld_dt_vx(state: Chip8State, bus: Bus, op: Operation) -> None:
    state.delay_timer = state.v[op.x]

# --- FX18 LD ST, VX ---
def execute_ld_st_vx(state: Chip8State, bus: Bus, op: Operation) -> None:
    state.sound_timer = state.v[op.x]

# --- FX29 LD F, VX ---
# @intent:responsibility VXの下位4bitが示す16進数字のグリフ先頭アドレスをIに設定します。
def execute_ld_f(state: Chip8State, bus: Bus, op: Operation) -> None:
    state.i = FONT_ADDRESS + FONT_GLYPH_SIZE * (state.v[op.x] & 0x0F)

# --- FX33 LD B, VX ---
# @intent:responsibility VXを10進の百・十・一の位に分解し、I, I+1, I+2 に格納します。
def execute_ld_b(state: Chip8State, bus: Bus, op: Operation) -> None:
    check_index_range(state, 3)
    value = state.v[op.x]
    bus.write(state.i, value // 100)
    bus.write(state.i + 1, (value // 10) % 10)
    bus.write(state.i + 2, value % 10)

# --- FX55 LD [I], VX ---
# @intent:responsibility V0..VX を I から始まるメモリへ格納します。Iは変化しません。
def execute_store_registers(state: Chip8State, bus: Bus, op: Operation) -> None:
    check_index_range(state, op.x + 1)
    for idx in range(op.x + 1):
        bus.write(state.i + idx, state.v[idx])

# --- FX65 LD VX, [I] ---
# @intent:responsibility I から始まるメモリを V0..VX へ読み込みます。Iは変化しません。
def execute_load_registers(state: Chip8State, bus: Bus, op: Operation) -> None:
    check_index_range(state, op.x + 1)
    for idx in range(op.x + 1):
        state.v[idx] = bus.read(state.i + idx)
