# retro_chip8/arch/chip8/cpu.py
"""
CHIP-8 CPUエミュレーションの中心モジュール。
"""
import random
from typing import Dict, Optional

from retro_chip8.core.cpu import AbstractCpu
from retro_chip8.core.errors import RomCapacityError
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus, ADDRESS_SPACE_SIZE
from retro_chip8.peripherals.display import DisplaySink
from retro_chip8.peripherals.keypad import KeySource
from retro_chip8.arch.chip8.state import Chip8State, CallStack, PROGRAM_START, DEFAULT_STACK_DEPTH
from retro_chip8.arch.chip8.font import FONT_START, FONT_SPRITES
from retro_chip8.arch.chip8.instructions import decode_opcode, execute_instruction, Devices

# @intent:constant ROMを配置できる最大バイト数。
PROGRAM_CAPACITY = ADDRESS_SPACE_SIZE - PROGRAM_START

# @intent:responsibility CHIP-8 CPUの具体的なエミュレーションロジック（フェッチ、デコード、実行）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8 CPUをエミュレートするクラス。
    表示と入力は DisplaySink / KeySource を介してのみ行います。
    """
    # @intent:pre-condition stack_depthは正の整数である必要があります。
    def __init__(self, bus: Bus, display: DisplaySink, keypad: KeySource,
                 rng: Optional[random.Random] = None, stack_depth: int = DEFAULT_STACK_DEPTH):
        # _create_initial_state() が参照するため、基底クラスの初期化より前に設定する
        self._stack_depth = stack_depth
        self._devices = Devices(display=display, keypad=keypad, rng=rng or random.Random())
        super().__init__(bus)

    def _create_initial_state(self) -> Chip8State:
        return Chip8State(stack=CallStack(self._stack_depth))

    @property
    def devices(self) -> Devices:
        return self._devices

    # @intent:responsibility PCとPC+1の2バイトをビッグエンディアンの16ビットオペコードとして読み出します。
    def _fetch(self) -> int:
        pc = self._state.pc
        return (self._bus.read(pc) << 8) | self._bus.read(pc + 1)

    def _decode(self, opcode: int, address: int) -> Operation:
        return decode_opcode(opcode, address)

    def _execute(self, operation: Operation) -> None:
        execute_instruction(operation, self._state, self._bus, self._devices)

    # @intent:responsibility キー待ち（FX0A）の間は命令を実行しません。
    def _is_halted(self) -> bool:
        return self._state.is_awaiting_key

    # @intent:responsibility 組み込みフォントを低位アドレスに配置します。
    def load_font(self) -> None:
        self._bus.load(FONT_START, FONT_SPRITES)

    # @intent:responsibility ROMを0x200から配置します。
    # @intent:post-condition 容量を超える場合はRomCapacityErrorを送出し、メモリは一切変更しません。
    def load_program(self, rom: bytes) -> None:
        rom = bytes(rom)
        if len(rom) > PROGRAM_CAPACITY:
            raise RomCapacityError(len(rom), PROGRAM_CAPACITY)
        self._bus.load(PROGRAM_START, rom)

    def tick_timers(self) -> None:
        self._state.tick_timers()

    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        registers = {f"V{index:X}": value for index, value in enumerate(s.v)}
        registers.update({
            "I": s.i, "PC": s.pc, "SP": len(s.stack), "DT": s.delay_timer, "ST": s.sound_timer
        })
        return registers
