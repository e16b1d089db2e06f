# src/chip8_tracer/arch/chip8/instructions/keypad.py
"""
キーパッド入力命令（SKP, SKNP, LD VX, K）の実装。
キー番号には VX の下位4bit を用います。
"""
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.state import Chip8State
from .base import skip_next

# --- EX9E SKP ---
def execute_skp(state: Chip8State, bus: Bus, op: Operation) -> None:
    if state.keys[state.v[op.x] & 0x0F]:
        skip_next(state)

# --- EXA1 SKNP ---
def execute_sknp(state: Chip8State, bus: Bus, op: Operation) -> None:
    if not state.keys[state.v[op.x] & 0x0F]:
        skip_next(state)

# --- FX0A LD VX, K ---
# @intent:responsibility 押下中のキーを番号順に走査し、最初のキー番号をVXに格納します。
# @intent:rationale 押下中のキーが無い場合はPCを戻し、次のtickで同じ命令を再実行します（ビジーポーリング）。
def execute_wait_key(state: Chip8State, bus: Bus, op: Operation) -> None:
    for index, pressed in enumerate(state.keys):
        if pressed:
            state.v[op.x] = index
            return
    state.pc = (state.pc - op.length) & 0xFFFF
