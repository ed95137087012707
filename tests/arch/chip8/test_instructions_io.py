import unittest

from retro_chip8.config.builder import SystemBuilder
from retro_chip8.arch.chip8.state import RunState

class TestChip8IoInstructions(unittest.TestCase):
    def setUp(self):
        self.interpreter = SystemBuilder().build_system()
        self.interpreter.init(b"")
        self.cpu = self.interpreter.cpu
        self.bus = self.interpreter.bus
        self.display = self.interpreter.display
        self.keypad = self.interpreter.keypad
        self.state = self.cpu.get_state()

    def _execute(self, opcode, current_pc=0x200):
        self.bus.write(current_pc, opcode >> 8)
        self.bus.write(current_pc + 1, opcode & 0xFF)
        self.state.pc = current_pc
        return self.cpu.step()

    def test_cls(self):
        self.display.set_pixel(3, 4)
        self._execute(0x00E0)
        self.assertEqual(self.display.lit_pixel_count(), 0)

    def test_draw_sprite(self):
        self.bus.load(0x300, bytes([0b10100000, 0b01000000]))
        self.state.i = 0x300
        self.state.v[1], self.state.v[2] = 10, 5
        self._execute(0xD122)

        self.assertTrue(self.display.get_pixel(10, 5))
        self.assertFalse(self.display.get_pixel(11, 5))
        self.assertTrue(self.display.get_pixel(12, 5))
        self.assertTrue(self.display.get_pixel(11, 6))
        self.assertEqual(self.display.lit_pixel_count(), 3)
        self.assertEqual(self.state.vf, 0)

    def test_draw_twice_collides_and_erases(self):
        self.bus.load(0x300, bytes([0xFF, 0x81, 0xFF]))
        self.state.i = 0x300
        self._execute(0xD013)
        self.assertEqual(self.state.vf, 0)

        self._execute(0xD013)
        self.assertEqual(self.state.vf, 1)
        self.assertEqual(self.display.lit_pixel_count(), 0)

    def test_partial_overlap_sets_flag(self):
        self.bus.load(0x300, bytes([0x80]))
        self.state.i = 0x300
        self.display.set_pixel(0, 0)
        self.display.set_pixel(1, 0)
        self._execute(0xD011)
        self.assertEqual(self.state.vf, 1)
        self.assertFalse(self.display.get_pixel(0, 0))
        self.assertTrue(self.display.get_pixel(1, 0))

    def test_draw_clips_instead_of_wrapping(self):
        self.bus.load(0x300, bytes([0xFF, 0xFF]))
        self.state.i = 0x300
        self.state.v[1], self.state.v[2] = 60, 31
        self._execute(0xD122)

        lit = [(x, y) for y in range(32) for x in range(64) if self.display.get_pixel(x, y)]
        self.assertEqual(lit, [(60, 31), (61, 31), (62, 31), (63, 31)])

    def test_draw_fully_offscreen(self):
        self.bus.load(0x300, bytes([0xFF]))
        self.state.i = 0x300
        self.state.v[1], self.state.v[2] = 0xC8, 0x40
        self._execute(0xD121)
        self.assertEqual(self.display.lit_pixel_count(), 0)
        self.assertEqual(self.state.vf, 0)

    def test_draw_clears_flag_before_reading_vf_coordinate(self):
        # DF01: VFはクリアされてから座標として読まれる
        self.bus.load(0x300, bytes([0x80]))
        self.state.i = 0x300
        self.state.vf = 5
        self._execute(0xDF01)
        self.assertTrue(self.display.get_pixel(0, 0))
        self.assertFalse(self.display.get_pixel(5, 0))
        self.assertEqual(self.state.vf, 0)

    def test_draw_collision_moves_vf_coordinate(self):
        # 1ピクセル目の衝突でVF=1となり、2ピクセル目は x=VF+1=2 に描かれる
        self.bus.load(0x300, bytes([0xC0]))
        self.state.i = 0x300
        self.state.vf = 5
        self.display.set_pixel(0, 0)
        self._execute(0xDF01)
        self.assertFalse(self.display.get_pixel(0, 0))
        self.assertFalse(self.display.get_pixel(1, 0))
        self.assertTrue(self.display.get_pixel(2, 0))
        self.assertEqual(self.state.vf, 1)

    def test_skp(self):
        self.state.v[4] = 0xA
        self._execute(0xE49E)
        self.assertEqual(self.state.pc, 0x202)

        self.keypad.press(0xA)
        self._execute(0xE49E)
        self.assertEqual(self.state.pc, 0x204)

    def test_sknp(self):
        self.state.v[4] = 0xA
        self._execute(0xE4A1)
        self.assertEqual(self.state.pc, 0x204)

        self.keypad.press(0xA)
        self._execute(0xE4A1)
        self.assertEqual(self.state.pc, 0x202)

    def test_key_value_out_of_range_is_not_pressed(self):
        self.state.v[4] = 0x20
        self._execute(0xE49E)
        self.assertEqual(self.state.pc, 0x202)
        self._execute(0xE4A1)
        self.assertEqual(self.state.pc, 0x204)

    def test_wait_for_key(self):
        self._execute(0xF30A)
        self.assertEqual(self.state.run_state, RunState.AWAITING_KEY)
        self.assertEqual(self.state.pc, 0x202)

        # 待機中はstepしても何も実行されない
        self.assertIsNone(self.cpu.step())
        self.assertEqual(self.state.pc, 0x202)

        self.keypad.press(0x7)
        self.assertEqual(self.state.run_state, RunState.RUNNING)
        self.assertEqual(self.state.v[3], 0x7)

        # イベントは一度だけ消費される
        self.keypad.press(0x9)
        self.assertEqual(self.state.v[3], 0x7)

if __name__ == '__main__':
    unittest.main()
