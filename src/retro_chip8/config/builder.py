import random
from typing import Optional

from retro_chip8.transport.bus import Bus, RAM, ADDRESS_SPACE_SIZE
from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.peripherals.display import FrameBuffer
from retro_chip8.peripherals.keypad import Keypad, KeyMap
from retro_chip8.runtime.interpreter import Interpreter
from .models import EmulatorConfig

# @intent:responsibility 設定（Config）に基づいて、Bus、Device、CPU、周辺機器を生成・接続し、Interpreterを組み立てます。
class SystemBuilder:
    def build_system(self, config: Optional[EmulatorConfig] = None) -> Interpreter:
        config = config or EmulatorConfig()

        bus = Bus()
        ram = RAM(ADDRESS_SPACE_SIZE)
        bus.register_device(0x000, ADDRESS_SPACE_SIZE - 1, ram)

        display = FrameBuffer()
        keypad = Keypad()
        key_map = KeyMap(config.key_map)

        # 乱数生成器はセッションごとに1つだけ生成し、CPUに注入する
        rng = random.Random(config.seed)

        cpu = Chip8Cpu(bus, display, keypad, rng=rng, stack_depth=config.stack_depth)
        return Interpreter(cpu, bus, ram, display, keypad, key_map=key_map, speed=config.speed)
