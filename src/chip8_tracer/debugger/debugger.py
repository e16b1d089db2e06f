# chip8_tracer/debugger/debugger.py
"""
デバッガモジュール。

コアエンジンの実行を制御し、ユーザーが指定した条件（ブレークポイント）で
実行を中断させる責務を負います。
"""
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Dict, List, Optional

from chip8_tracer.core.cpu import AbstractCpu
from chip8_tracer.core.snapshot import Snapshot
from chip8_tracer.transport.bus import BusAccessType

# @intent:responsibility ブレークポイントの条件タイプを定義します。
class BreakpointConditionType(Enum):
    PC_MATCH = "PC_MATCH"               # プログラムカウンタが特定のアドレスに一致
    MEMORY_READ = "MEMORY_READ"         # 特定のアドレスが読み込まれた
    MEMORY_WRITE = "MEMORY_WRITE"       # 特定のアドレスに書き込まれた
    REGISTER_VALUE = "REGISTER_VALUE"   # 特定のレジスタが特定の値になった
    REGISTER_CHANGE = "REGISTER_CHANGE" # 特定のレジスタの値が変化した

# @intent:responsibility run() が停止した理由を表します。
class StopReason(Enum):
    BREAKPOINT = "BREAKPOINT"
    STOPPED = "STOPPED"
    STEP_LIMIT = "STEP_LIMIT"

# @intent:responsibility ブレークポイントをトリガーする条件を定義します。
# @intent:rationale ブレークポイント条件は、一度設定したら変更されないため、不変にします（frozen=True）。
@dataclass(frozen=True)
class BreakpointCondition:
    condition_type: BreakpointConditionType
    value: Optional[int] = None           # PC_MATCH, REGISTER_VALUEで使用
    address: Optional[int] = None         # MEMORY_READ, MEMORY_WRITEで使用
    register_name: Optional[str] = None   # REGISTER_VALUE, REGISTER_CHANGEで使用 (例: "V3", "I")
    enabled: bool = True

# @intent:responsibility コアエンジンの実行制御とブレークポイント管理を行います。
class Debugger:
    """
    CPUの実行を制御し、ブレークポイントの管理を行うクラス。
    レジスタ条件は cpu.get_register_map() の名前で評価します。
    """
    def __init__(self, cpu: AbstractCpu, history_size: int = 1024):
        self._cpu = cpu
        self._breakpoints: List[BreakpointCondition] = []
        self._running: bool = False
        self._previous_registers: Dict[str, int] = self._cpu.get_register_map()
        self._last_snapshot: Optional[Snapshot] = None
        self._history: Deque[Snapshot] = deque(maxlen=history_size)

    def add_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition not in self._breakpoints:
            self._breakpoints.append(condition)

    def remove_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition in self._breakpoints:
            self._breakpoints.remove(condition)

    def get_breakpoints(self) -> List[BreakpointCondition]:
        return list(self._breakpoints)

    def get_history(self) -> List[Snapshot]:
        return list(self._history)

    def get_last_snapshot(self) -> Optional[Snapshot]:
        return self._last_snapshot

    def _is_pc_breakpoint(self, pc: int) -> bool:
        for bp in self._breakpoints:
            if bp.enabled and bp.condition_type == BreakpointConditionType.PC_MATCH and bp.value == pc:
                return True
        return False

    # @intent:responsibility Snapshotに基づいてPC_MATCH以外のブレークポイントをチェックします。
    def _check_other_breakpoints(self, snapshot: Snapshot) -> bool:
        registers = self._cpu.get_register_map()

        for bp in self._breakpoints:
            if not bp.enabled:
                continue

            if bp.condition_type == BreakpointConditionType.MEMORY_READ:
                for access in snapshot.bus_activity:
                    if access.access_type == BusAccessType.READ and access.address == bp.address:
                        return True
            elif bp.condition_type == BreakpointConditionType.MEMORY_WRITE:
                for access in snapshot.bus_activity:
                    if access.access_type == BusAccessType.WRITE and access.address == bp.address:
                        return True
            elif bp.condition_type == BreakpointConditionType.REGISTER_VALUE:
                if registers.get(bp.register_name) == bp.value:
                    return True
            elif bp.condition_type == BreakpointConditionType.REGISTER_CHANGE:
                if bp.register_name in registers:
                    if registers[bp.register_name] != self._previous_registers.get(bp.register_name):
                        return True
        return False

    # @intent:responsibility CPUを1命令分実行し、その結果のSnapshotを履歴に追加して返します。
    def step_instruction(self) -> Snapshot:
        self._previous_registers = self._cpu.get_register_map()
        snapshot = self._cpu.step()
        self._last_snapshot = snapshot
        self._history.append(snapshot)
        return snapshot

    # @intent:responsibility ブレークポイント、stop()、または max_steps に達するまで実行を継続します。
    # @intent:rationale 現在のPCにブレークポイントがある場合は、まず1命令進めてから評価を始めます。
    def run(self, max_steps: Optional[int] = None) -> StopReason:
        """
        CPUの実行を継続し、停止理由を返します。
        エンジンの致命的エラー（Chip8Error）はそのまま呼び出し元へ伝播します。
        """
        self._running = True
        steps = 0

        if max_steps is not None and max_steps <= 0:
            self._running = False
            return StopReason.STEP_LIMIT

        if self._is_pc_breakpoint(self._cpu.get_state().pc):
            snapshot = self.step_instruction()
            steps += 1
            if self._check_other_breakpoints(snapshot):
                self._running = False
                print(f"Breakpoint hit at PC: {snapshot.state.pc:#06x}")
                return StopReason.BREAKPOINT

        while self._running:
            if max_steps is not None and steps >= max_steps:
                self._running = False
                return StopReason.STEP_LIMIT

            current_pc = self._cpu.get_state().pc
            if self._is_pc_breakpoint(current_pc):
                self._running = False
                print(f"Breakpoint hit at PC: {current_pc:#06x}")
                return StopReason.BREAKPOINT

            snapshot = self.step_instruction()
            steps += 1

            if self._check_other_breakpoints(snapshot):
                self._running = False
                print(f"Breakpoint hit at PC: {snapshot.state.pc:#06x}")
                return StopReason.BREAKPOINT

        return StopReason.STOPPED

    def stop(self) -> None:
        self._running = False
