# tests/arch/chip8/test_chip8_display.py
"""
DRW / CLS 命令の検証。XOR描画、衝突フラグ、座標の折り返しを確認します。
"""
import pytest

from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.arch.chip8.state import SCREEN_WIDTH, SCREEN_HEIGHT
from chip8_tracer.arch.chip8.instructions import decode_opcode, execute_instruction
from chip8_tracer.core.errors import MemoryAccessError

SPRITE_ADDR = 0x300


@pytest.fixture
def cpu():
    return Chip8Cpu()


def execute(cpu, opcode):
    state = cpu.get_state()
    op = decode_opcode(opcode, state.pc)
    state.pc += op.length
    execute_instruction(op, state, cpu.get_bus())


def pixel(cpu, x, y):
    return cpu.get_display()[y * SCREEN_WIDTH + x]


def prepare_sprite(cpu, rows, x, y):
    bus = cpu.get_bus()
    for k, byte in enumerate(rows):
        bus.load(SPRITE_ADDR + k, byte)
    state = cpu.get_state()
    state.i = SPRITE_ADDR
    state.v[0] = x
    state.v[1] = y


class TestDraw:
    def test_draw_sets_pixels_msb_first(self, cpu):
        prepare_sprite(cpu, [0b10100000], 10, 5)
        execute(cpu, 0xD011)
        assert pixel(cpu, 10, 5)
        assert not pixel(cpu, 11, 5)
        assert pixel(cpu, 12, 5)
        assert sum(cpu.get_display()) == 2
        assert cpu.get_state().v[0xF] == 0

    # @intent:test_case_xor 同じ位置への2回描画で元に戻り、衝突フラグが 0 -> 1 となることを検証します。
    def test_double_draw_is_idempotent(self, cpu):
        prepare_sprite(cpu, [0xF0, 0x90, 0xF0], 20, 8)
        before = cpu.get_display()

        execute(cpu, 0xD013)
        assert cpu.get_state().v[0xF] == 0
        assert cpu.get_display() != before

        execute(cpu, 0xD013)
        assert cpu.get_state().v[0xF] == 1
        assert cpu.get_display() == before

    def test_partial_overlap_sets_collision(self, cpu):
        prepare_sprite(cpu, [0x80], 0, 0)
        execute(cpu, 0xD011)
        cpu.get_state().v[0] = 1
        cpu.get_bus().load(SPRITE_ADDR, 0xC0) # 1..2 列目
        execute(cpu, 0xD011)
        # (1,0) は新規点灯なので衝突なし、(0,0) は触れていない
        assert cpu.get_state().v[0xF] == 0
        cpu.get_state().v[0] = 0
        execute(cpu, 0xD011) # (0,0) と (1,0) を反転 -> (0,0) 消灯、(1,0) 消灯
        assert cpu.get_state().v[0xF] == 1
        assert not pixel(cpu, 0, 0)
        assert not pixel(cpu, 1, 0)
        assert pixel(cpu, 2, 0)

    def test_horizontal_wrap(self, cpu):
        prepare_sprite(cpu, [0xFF], SCREEN_WIDTH - 1, 0)
        execute(cpu, 0xD011)
        assert pixel(cpu, SCREEN_WIDTH - 1, 0)
        for x in range(7):
            assert pixel(cpu, x, 0)
        assert not pixel(cpu, 7, 0)

    # @intent:test_case_wrap 縦方向は画面高さでの剰余により先頭行へ折り返すことを検証します。
    def test_vertical_wrap(self, cpu):
        prepare_sprite(cpu, [0x80, 0x80, 0x80], 3, SCREEN_HEIGHT - 1)
        execute(cpu, 0xD013)
        assert pixel(cpu, 3, SCREEN_HEIGHT - 1)
        assert pixel(cpu, 3, 0)
        assert pixel(cpu, 3, 1)
        assert sum(cpu.get_display()) == 3

    def test_origin_beyond_screen_wraps(self, cpu):
        prepare_sprite(cpu, [0x80], SCREEN_WIDTH + 2, SCREEN_HEIGHT + 4)
        execute(cpu, 0xD011)
        assert pixel(cpu, 2, 4)

    def test_zero_rows_draws_nothing(self, cpu):
        prepare_sprite(cpu, [0xFF], 0, 0)
        cpu.get_state().v[0xF] = 1
        execute(cpu, 0xD010)
        assert not any(cpu.get_display())
        assert cpu.get_state().v[0xF] == 0

    # @intent:test_case_fatal スプライトがメモリ末尾を越える場合、画面とVFを変更せずに失敗することを検証します。
    def test_sprite_beyond_memory_leaves_screen_untouched(self, cpu):
        bus = cpu.get_bus()
        bus.load(0xFFE, 0xFF)
        bus.load(0xFFF, 0xFF)
        state = cpu.get_state()
        state.i = 0xFFE
        state.v[0] = 0
        state.v[1] = 0
        state.v[0xF] = 1
        with pytest.raises(MemoryAccessError):
            execute(cpu, 0xD013)
        assert not any(cpu.get_display())
        assert state.v[0xF] == 1

    def test_font_glyph(self, cpu):
        state = cpu.get_state()
        state.v[2] = 0x0
        execute(cpu, 0xF229) # I = glyph '0'
        state.v[0] = 0
        state.v[1] = 0
        execute(cpu, 0xD015)
        rows = [[pixel(cpu, x, y) for x in range(4)] for y in range(5)]
        assert rows[0] == [True, True, True, True]
        assert rows[1] == [True, False, False, True]


class TestClear:
    def test_cls_clears_only_screen(self, cpu):
        prepare_sprite(cpu, [0xFF], 0, 0)
        execute(cpu, 0xD011)
        state = cpu.get_state()
        registers = list(state.v)
        index = state.i

        execute(cpu, 0x00E0)
        assert not any(cpu.get_display())
        assert state.v == registers
        assert state.i == index
