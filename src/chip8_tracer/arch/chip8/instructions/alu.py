# src/chip8_tracer/arch/chip8/instructions/alu.py
"""
算術論理演算命令の実装。
全ての結果は8bitで折り返され、VFへのフラグ書き込みは結果の書き込み後に行います。
"""
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.state import Chip8State
from .base import set_flag

# --- 6XNN LD ---
def execute_ld_imm(state: Chip8State, bus: Bus, op: Operation) -> None:
    state.v[op.x] = op.nn

# --- 7XNN ADD ---
# @intent:responsibility 即値を加算します。VFは変更しません。
def execute_add_imm(state: Chip8State, bus: Bus, op: Operation) -> None:
    state.v[op.x] = (state.v[op.x] + op.nn) & 0xFF

# --- 8XY0 LD ---
def execute_ld_reg(state: Chip8State, bus: Bus, op: Operation) -> None:
    state.v[op.x] = state.v[op.y]

# --- 8XY1 OR ---
def execute_or(state: Chip8State, bus: Bus, op: Operation) -> None:
    state.v[op.x] |= state.v[op.y]

# --- 8XY2 AND ---
def execute_and(state: Chip8State, bus: Bus, op: Operation) -> None:
    state.v[op.x] &= state.v[op.y]

# --- 8XY3 XOR ---
def execute_xor(state: Chip8State, bus: Bus, op: Operation) -> None:
    state.v[op.x] ^= state.v[op.y]

# --- 8XY4 ADD ---
# @intent:responsibility VX += VY。符号なし桁あふれでVF=1。
def execute_add_reg(state: Chip8State, bus: Bus, op: Operation) -> None:
    res = state.v[op.x] + state.v[op.y]
    state.v[op.x] = res & 0xFF
    set_flag(state, res > 0xFF)

# --- 8XY5 SUB ---
# @intent:responsibility VX -= VY。借りが発生しなければVF=1（キャリーとは逆の極性）。
def execute_sub(state: Chip8State, bus: Bus, op: Operation) -> None:
    v1 = state.v[op.x]
    v2 = state.v[op.y]
    state.v[op.x] = (v1 - v2) & 0xFF
    set_flag(state, v1 >= v2)

# --- 8XY7 SUBN ---
# @intent:responsibility VY = VY - VX。結果の格納先はVXではなくVYです。借りが発生しなければVF=1。
def execute_subn(state: Chip8State, bus: Bus, op: Operation) -> None:
    v1 = state.v[op.x]
    v2 = state.v[op.y]
    state.v[op.y] = (v2 - v1) & 0xFF
    set_flag(state, v2 >= v1)

# --- 8XY6 SHR ---
# @intent:responsibility VXを1bit右シフトし、押し出されたLSBをVFに格納します。VYは参照しません。
def execute_shr(state: Chip8State, bus: Bus, op: Operation) -> None:
    lsb = state.v[op.x] & 0x01
    state.v[op.x] >>= 1
    set_flag(state, lsb)

# --- 8XYE SHL ---
# @intent:responsibility VXを1bit左シフトし、押し出されたMSBをVFに格納します。
def execute_shl(state: Chip8State, bus: Bus, op: Operation) -> None:
    msb = (state.v[op.x] >> 7) & 0x01
    state.v[op.x] = (state.v[op.x] << 1) & 0xFF
    set_flag(state, msb)

# --- CXNN RND ---
# @intent:responsibility 一様乱数1バイトとNNの論理積をVXに格納します。
def execute_rnd(state: Chip8State, bus: Bus, op: Operation) -> None:
    state.v[op.x] = state.rng.randrange(0x100) & op.nn
