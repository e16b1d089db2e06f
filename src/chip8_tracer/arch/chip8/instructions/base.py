# src/chip8_tracer/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通ユーティリティ。
"""
from chip8_tracer.core.errors import MemoryAccessError, StackOverflowError, StackUnderflowError
from chip8_tracer.arch.chip8.state import Chip8State, FLAG_REGISTER, MEMORY_SIZE, STACK_SIZE

# @intent:utility_function 次の命令を読み飛ばします（PCを1命令分進めます）。
def skip_next(state: Chip8State) -> None:
    state.pc = (state.pc + 2) & 0xFFFF

# @intent:utility_function VFに0/1のフラグ値を書き込みます。
# @intent:rationale 結果の書き込み後に呼ぶことで、X=Fの場合はフラグ値が優先されます。
def set_flag(state: Chip8State, value: bool) -> None:
    state.v[FLAG_REGISTER] = 1 if value else 0

# @intent:utility_function I から count バイトがアドレス空間に収まることを確認します。
# @intent:post-condition 収まらない場合はMemoryAccessErrorを送出し、状態とメモリは変更されません。
def check_index_range(state: Chip8State, count: int) -> None:
    if count > 0 and state.i + count > MEMORY_SIZE:
        raise MemoryAccessError(
            f"Access of {count} bytes at I={state.i:#05x} exceeds memory ({MEMORY_SIZE:#06x} bytes) at PC {state.pc:#05x}"
        )

# @intent:utility_function 戻りアドレスをコールスタックに積みます。
# @intent:pre-condition spがSTACK_SIZE未満であること。満杯の場合はStackOverflowErrorを送出します。
def push(state: Chip8State, address: int) -> None:
    if state.sp >= STACK_SIZE:
        raise StackOverflowError(f"Call stack overflow ({STACK_SIZE} entries) at PC {state.pc:#05x}")
    state.stack[state.sp] = address
    state.sp += 1

# @intent:utility_function コールスタックから戻りアドレスを取り出します。
def pop(state: Chip8State) -> int:
    if state.sp <= 0:
        raise StackUnderflowError(f"Return with empty call stack at PC {state.pc:#05x}")
    state.sp -= 1
    return state.stack[state.sp]
