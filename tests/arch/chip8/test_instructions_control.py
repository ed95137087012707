import unittest

from retro_chip8.config.builder import SystemBuilder
from retro_chip8.config.models import EmulatorConfig
from retro_chip8.core.errors import StackUnderflowError, StackOverflowError

class TestChip8ControlInstructions(unittest.TestCase):
    def setUp(self):
        self.interpreter = SystemBuilder().build_system(EmulatorConfig(stack_depth=4))
        self.interpreter.init(b"")
        self.cpu = self.interpreter.cpu
        self.bus = self.interpreter.bus
        self.state = self.cpu.get_state()

    def _execute(self, opcode, current_pc=0x200):
        self.bus.write(current_pc, opcode >> 8)
        self.bus.write(current_pc + 1, opcode & 0xFF)
        self.state.pc = current_pc
        return self.cpu.step()

    def test_jp(self):
        self._execute(0x1ABC)
        self.assertEqual(self.state.pc, 0xABC)

    def test_call_pushes_advanced_pc(self):
        self._execute(0x2400, current_pc=0x300)
        self.assertEqual(self.state.pc, 0x400)
        self.assertEqual(self.state.stack.as_list(), [0x302])

    def test_call_ret(self):
        self._execute(0x2400, current_pc=0x300)
        self._execute(0x00EE, current_pc=0x400)
        self.assertEqual(self.state.pc, 0x302)
        self.assertTrue(self.state.stack.is_empty())

    def test_ret_with_empty_stack(self):
        with self.assertRaises(StackUnderflowError) as ctx:
            self._execute(0x00EE, current_pc=0x240)
        self.assertEqual(ctx.exception.opcode, 0x00EE)
        self.assertEqual(ctx.exception.pc, 0x240)

    def test_call_overflow(self):
        for depth in range(4):
            self._execute(0x2300, current_pc=0x300)
        self.assertEqual(len(self.state.stack), 4)

        with self.assertRaises(StackOverflowError) as ctx:
            self._execute(0x2300, current_pc=0x300)
        self.assertEqual(ctx.exception.pc, 0x300)
        self.assertEqual(ctx.exception.depth, 4)
        self.assertEqual(len(self.state.stack), 4)

    def test_se_imm_taken(self):
        self.state.v[3] = 0x42
        self._execute(0x3342, current_pc=0x200)
        self.assertEqual(self.state.pc, 0x204)

    def test_se_imm_not_taken(self):
        self.state.v[3] = 0x41
        self._execute(0x3342, current_pc=0x200)
        self.assertEqual(self.state.pc, 0x202)

    def test_sne_imm(self):
        self.state.v[3] = 0x41
        self._execute(0x4342)
        self.assertEqual(self.state.pc, 0x204)
        self.state.v[3] = 0x42
        self._execute(0x4342)
        self.assertEqual(self.state.pc, 0x202)

    def test_se_reg(self):
        self.state.v[1], self.state.v[2] = 7, 7
        self._execute(0x5120)
        self.assertEqual(self.state.pc, 0x204)
        self.state.v[2] = 8
        self._execute(0x5120)
        self.assertEqual(self.state.pc, 0x202)

    def test_se_reg_ignores_low_nibble(self):
        self.state.v[1], self.state.v[2] = 7, 7
        self._execute(0x5121)
        self.assertEqual(self.state.pc, 0x204)

    def test_sne_reg(self):
        self.state.v[1], self.state.v[2] = 7, 8
        self._execute(0x9120)
        self.assertEqual(self.state.pc, 0x204)
        self.state.v[2] = 7
        self._execute(0x9120)
        self.assertEqual(self.state.pc, 0x202)

    def test_jp_v0(self):
        self.state.v[0] = 0x10
        self._execute(0xB300)
        self.assertEqual(self.state.pc, 0x310)

if __name__ == '__main__':
    unittest.main()
