import unittest

from retro_chip8.config.builder import SystemBuilder
from retro_chip8.arch.chip8.font import GLYPH_HEIGHT
from retro_chip8.transport.bus import BusAccessType

class TestChip8LoadInstructions(unittest.TestCase):
    def setUp(self):
        self.interpreter = SystemBuilder().build_system()
        self.interpreter.init(b"")
        self.cpu = self.interpreter.cpu
        self.bus = self.interpreter.bus
        self.state = self.cpu.get_state()

    def _execute(self, opcode, current_pc=0x200):
        self.bus.write(current_pc, opcode >> 8)
        self.bus.write(current_pc + 1, opcode & 0xFF)
        self.state.pc = current_pc
        return self.cpu.step()

    def test_ld_imm(self):
        self._execute(0x6A5C)
        self.assertEqual(self.state.v[0xA], 0x5C)
        self.assertEqual(self.state.pc, 0x202)

    def test_ld_reg(self):
        self.state.v[2] = 0x99
        self._execute(0x8120)
        self.assertEqual(self.state.v[1], 0x99)

    def test_ld_i(self):
        self._execute(0xA123)
        self.assertEqual(self.state.i, 0x123)

    def test_timers(self):
        self.state.v[1] = 0x3C
        self._execute(0xF115)
        self._execute(0xF118)
        self.assertEqual(self.state.delay_timer, 0x3C)
        self.assertEqual(self.state.sound_timer, 0x3C)

        self.state.delay_timer = 0x07
        self._execute(0xF207)
        self.assertEqual(self.state.v[2], 0x07)

    def test_font_address(self):
        for digit in range(16):
            self.state.v[5] = digit
            self._execute(0xF529)
            self.assertEqual(self.state.i, digit * GLYPH_HEIGHT)

    def test_bcd(self):
        self.state.v[7] = 254
        self.state.i = 0x300
        self._execute(0xF733)
        self.assertEqual([self.bus.peek(0x300 + k) for k in range(3)], [2, 5, 4])

    def test_bcd_small_value(self):
        self.state.v[7] = 7
        self.state.i = 0x300
        self._execute(0xF733)
        self.assertEqual([self.bus.peek(0x300 + k) for k in range(3)], [0, 0, 7])

    def test_store_registers_inclusive(self):
        for index in range(16):
            self.state.v[index] = index + 1
        self.state.i = 0x400
        snapshot = self._execute(0xF355)

        self.assertEqual([self.bus.peek(0x400 + k) for k in range(5)], [1, 2, 3, 4, 0])
        self.assertEqual(self.state.i, 0x400)
        writes = [a.address for a in snapshot.bus_activity if a.access_type == BusAccessType.WRITE]
        self.assertEqual(writes, [0x400, 0x401, 0x402, 0x403])

    def test_load_registers_inclusive(self):
        self.bus.load(0x400, bytes([9, 8, 7, 6]))
        self.state.i = 0x400
        self._execute(0xF265)
        self.assertEqual([self.state.v[k] for k in range(4)], [9, 8, 7, 0])
        self.assertEqual(self.state.i, 0x400)

    def test_store_wraps_at_end_of_memory(self):
        self.state.v[0], self.state.v[1] = 0xAA, 0xBB
        self.state.i = 0xFFF
        self._execute(0xF155)
        self.assertEqual(self.bus.peek(0xFFF), 0xAA)
        self.assertEqual(self.bus.peek(0x000), 0xBB)

if __name__ == '__main__':
    unittest.main()
