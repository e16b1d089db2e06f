# src/chip8_tracer/arch/chip8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ）の実装。
"""
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.state import Chip8State
from .base import skip_next, push, pop

# --- 0000 NOP ---
def execute_nop(state: Chip8State, bus: Bus, op: Operation) -> None:
    # Intentional: NOP (No Operation)
    pass

# --- 00EE RET ---
# @intent:responsibility スタックから戻りアドレスをポップしてPCに設定します。
def execute_ret(state: Chip8State, bus: Bus, op: Operation) -> None:
    state.pc = pop(state)

# --- 1NNN JP ---
def execute_jp(state: Chip8State, bus: Bus, op: Operation) -> None:
    state.pc = op.nnn

# --- 2NNN CALL ---
# @intent:responsibility 戻りアドレスをスタックにプッシュしてからジャンプします。
def execute_call(state: Chip8State, bus: Bus, op: Operation) -> None:
    # state.pc は CPU.step で既に次の命令を指している
    push(state, state.pc)
    state.pc = op.nnn

# --- BNNN JP V0 ---
# @intent:responsibility V0 + NNN へジャンプします。
# @intent:rationale 結果は12bitに丸めません。範囲外ならば次のフェッチでMemoryAccessErrorになります。
def execute_jp_v0(state: Chip8State, bus: Bus, op: Operation) -> None:
    state.pc = state.v[0] + op.nnn

# --- 3XNN SE ---
def execute_se_imm(state: Chip8State, bus: Bus, op: Operation) -> None:
    if state.v[op.x] == op.nn:
        skip_next(state)

# --- 4XNN SNE ---
def execute_sne_imm(state: Chip8State, bus: Bus, op: Operation) -> None:
    if state.v[op.x] != op.nn:
        skip_next(state)

# --- 5XY0 SE ---
def execute_se_reg(state: Chip8State, bus: Bus, op: Operation) -> None:
    if state.v[op.x] == state.v[op.y]:
        skip_next(state)

# --- 9XY0 SNE ---
def execute_sne_reg(state: Chip8State, bus: Bus, op: Operation) -> None:
    if state.v[op.x] != state.v[op.y]:
        skip_next(state)
