import unittest

from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.arch.chip8.state import START_ADDRESS
from chip8_tracer.arch.chip8.instructions import decode_opcode, execute_instruction


class TestChip8ControlInstructions(unittest.TestCase):
    def setUp(self):
        self.cpu = Chip8Cpu()
        self.bus = self.cpu.get_bus()
        self.state = self.cpu.get_state()

    def _execute(self, opcode):
        op = decode_opcode(opcode, self.state.pc)
        self.state.pc += op.length
        execute_instruction(op, self.state, self.bus)

    def _assert_skipped(self, opcode, skipped):
        self.state.pc = START_ADDRESS
        before = list(self.state.v)
        self._execute(opcode)
        self.assertEqual(self.state.pc, START_ADDRESS + (4 if skipped else 2))
        self.assertEqual(self.state.v, before) # skip命令はレジスタを変更しない

    def test_jp(self):
        self._execute(0x1ABC)
        self.assertEqual(self.state.pc, 0xABC)

    def test_call_pushes_return_address(self):
        self._execute(0x2400)
        self.assertEqual(self.state.pc, 0x400)
        self.assertEqual(self.state.sp, 1)
        self.assertEqual(self.state.stack[0], START_ADDRESS + 2)

    def test_nested_call_and_ret(self):
        self._execute(0x2400)
        self._execute(0x2500)
        self.assertEqual(self.state.sp, 2)
        self._execute(0x00EE)
        self.assertEqual(self.state.pc, 0x402)
        self._execute(0x00EE)
        self.assertEqual(self.state.pc, START_ADDRESS + 2)
        self.assertEqual(self.state.sp, 0)

    def test_jp_v0(self):
        self.state.v[0] = 0x10
        self._execute(0xB300)
        self.assertEqual(self.state.pc, 0x310)

    def test_se_sne_immediate(self):
        self.state.v[3] = 0x42
        self._assert_skipped(0x3342, True)
        self._assert_skipped(0x3343, False)
        self._assert_skipped(0x4342, False)
        self._assert_skipped(0x4343, True)

    def test_se_sne_register(self):
        self.state.v[1] = 0x10
        self.state.v[2] = 0x10
        self.state.v[3] = 0x11
        self._assert_skipped(0x5120, True)
        self._assert_skipped(0x5130, False)
        self._assert_skipped(0x9120, False)
        self._assert_skipped(0x9130, True)

    def test_skp_sknp(self):
        self.state.v[6] = 0x0C
        self._assert_skipped(0xE69E, False)
        self._assert_skipped(0xE6A1, True)
        self.cpu.set_key(0xC, True)
        self._assert_skipped(0xE69E, True)
        self._assert_skipped(0xE6A1, False)

    def test_nop(self):
        before = list(self.state.v)
        self._execute(0x0000)
        self.assertEqual(self.state.pc, START_ADDRESS + 2)
        self.assertEqual(self.state.v, before)


if __name__ == '__main__':
    unittest.main()
