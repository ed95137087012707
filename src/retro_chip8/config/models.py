from dataclasses import dataclass, field
from typing import Dict, Optional

from retro_chip8.arch.chip8.state import DEFAULT_STACK_DEPTH
from retro_chip8.peripherals.keypad import DEFAULT_KEY_MAP
from retro_chip8.runtime.interpreter import DEFAULT_SPEED

@dataclass
class DisplayConfig:
    scale: int = 10  # 1ピクセルあたりの表示サイズ
    foreground: str = "#E0E0E0"
    background: str = "#101010"

@dataclass
class EmulatorConfig:
    speed: int = DEFAULT_SPEED      # 1フレームあたりの命令数
    frame_rate: int = 60            # drive() の呼び出し頻度 (Hz)
    seed: Optional[int] = None      # CXNN用乱数のシード。Noneなら非決定的
    stack_depth: int = DEFAULT_STACK_DEPTH
    key_map: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_KEY_MAP))
    display: DisplayConfig = field(default_factory=DisplayConfig)
