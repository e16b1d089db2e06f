# src/chip8_tracer/arch/chip8/cpu.py
"""
CHIP-8 エミュレーションの中心モジュール。

フェッチ・デコード・実行サイクル（tick）とタイマー減算（tick_timers）の2つの入口を提供します。
いずれも外部ドライバが独立したレートで呼び出し、エンジン自身はスレッドやタイミングを持ちません。
"""
import random
from typing import Callable, Dict, List, Optional, Tuple

from chip8_tracer.common.types import DisassemblyLine, RegisterInfo, RegisterLayoutInfo
from chip8_tracer.core.cpu import AbstractCpu
from chip8_tracer.core.snapshot import Operation, Snapshot
from chip8_tracer.transport.bus import Bus, RAM
from chip8_tracer.arch.chip8.state import (
    Chip8State, FONTSET, FONT_ADDRESS, KEY_COUNT, MEMORY_SIZE, START_ADDRESS
)
from chip8_tracer.arch.chip8.instructions import decode_opcode, execute_instruction
from chip8_tracer.arch.chip8 import disassembler

SoundListener = Callable[[], None]


# @intent:responsibility CHIP-8 の具体的なエミュレーションロジック（フェッチ、デコード、実行、タイマー）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8 仮想マシン。

    構築直後と reset() 直後の状態は同一です（PC=0x200、フォント配置済み、それ以外は全てゼロ）。
    外部から状態を変更できるのは load() と set_key() のみで、それ以外の変更は tick() を通じて行われます。
    """
    # @intent:responsibility Chip8Cpuを初期化します。
    # @intent:pre-condition `bus` を渡す場合、0x000-0xFFF に4KBのメモリがマップされている必要があります。
    def __init__(self, bus: Optional[Bus] = None, rng: Optional[random.Random] = None):
        if bus is None:
            bus = Bus()
            bus.register_device(0x000, MEMORY_SIZE - 1, RAM(MEMORY_SIZE))
        self._rng = rng if rng is not None else random.Random()
        self._sound_listeners: List[SoundListener] = []
        super().__init__(bus)
        self.reset()

    def _create_initial_state(self) -> Chip8State:
        return Chip8State(rng=self._rng)

    # @intent:responsibility 状態・メモリを初期化し、フォントを再配置します。
    def reset(self) -> None:
        super().reset()
        self._bus.clear()
        for offset, byte in enumerate(FONTSET):
            self._bus.load(FONT_ADDRESS + offset, byte)

    # @intent:responsibility プログラムイメージを START_ADDRESS からそのままコピーします。
    # @intent:pre-condition イメージが (MEMORY_SIZE - START_ADDRESS) バイトに収まることは呼び出し元が保証します。
    def load(self, image: bytes) -> None:
        for offset, byte in enumerate(image):
            self._bus.load(START_ADDRESS + offset, byte)

    # @intent:responsibility キーパッドの押下状態を更新する唯一の外部インターフェースです。
    def set_key(self, index: int, pressed: bool) -> None:
        if not 0 <= index < KEY_COUNT:
            raise ValueError(f"Key index {index} out of range (0-{KEY_COUNT - 1}).")
        self._state.keys[index] = bool(pressed)

    # @intent:responsibility 描画用にフレームバッファの読み取り専用ビューを返します。
    def get_display(self) -> Tuple[bool, ...]:
        return tuple(self._state.screen)

    # @intent:responsibility 1命令を実行します。
    def tick(self) -> Snapshot:
        return self.step()

    # @intent:responsibility 遅延タイマーとサウンドタイマーを1つずつ減算します（0で飽和）。
    # @intent:post-condition サウンドタイマーが1から0になった時のみ、登録済みリスナーを1回ずつ呼び、Trueを返します。
    def tick_timers(self) -> bool:
        state = self._state
        if state.delay_timer > 0:
            state.delay_timer -= 1

        tone = False
        if state.sound_timer > 0:
            tone = state.sound_timer == 1
            state.sound_timer -= 1

        if tone:
            for listener in list(self._sound_listeners):
                listener()
        return tone

    def add_sound_listener(self, listener: SoundListener) -> None:
        self._sound_listeners.append(listener)

    def remove_sound_listener(self, listener: SoundListener) -> None:
        if listener in self._sound_listeners:
            self._sound_listeners.remove(listener)

    # @intent:responsibility PCからビッグエンディアンの16bit命令語を読み込みます。
    def _fetch(self) -> int:
        pc = self._state.pc
        return (self._bus.read(pc) << 8) | self._bus.read(pc + 1)

    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode, self._state.pc)

    def _execute(self, operation: Operation) -> None:
        execute_instruction(operation, self._state, self._bus)

    # @intent:responsibility UIやデバッガ向けに、現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        reg_map = {f"V{idx:X}": value for idx, value in enumerate(s.v)}
        reg_map.update({
            "I": s.i, "PC": s.pc, "SP": s.sp, "DT": s.delay_timer, "ST": s.sound_timer
        })
        return reg_map

    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{idx:X}", 8) for idx in range(16)]),
            RegisterLayoutInfo("Index/Pointers", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [
                RegisterInfo("DT", 8), RegisterInfo("ST", 8)
            ]),
        ]

    def disassemble(self, start_addr: int, length: int) -> List[DisassemblyLine]:
        return disassembler.disassemble(self._bus, start_addr, length)
