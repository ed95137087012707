# retro_chip8/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通ユーティリティ。
"""
import random
from dataclasses import dataclass
from typing import List, Optional

from retro_chip8.core.snapshot import Operation
from retro_chip8.peripherals.display import DisplaySink
from retro_chip8.peripherals.keypad import KeySource

# @intent:responsibility 命令実行時に参照される外部デバイス群をまとめます。
@dataclass
class Devices:
    display: DisplaySink
    keypad: KeySource
    rng: random.Random


# @intent:utility_function オペコードのフィールドから Operation を生成します。
def make_operation(opcode: int, address: int, pattern: str, mnemonic: str,
                   operands: Optional[List[str]] = None) -> Operation:
    return Operation(
        opcode=opcode,
        address=address,
        pattern=pattern,
        mnemonic=mnemonic,
        operands=operands or [],
    )


# @intent:utility_function オペランド表記の整形。
def reg(index: int) -> str:
    return f"V{index:X}"


def imm8(value: int) -> str:
    return f"#{value:02X}"


def addr12(value: int) -> str:
    return f"${value:03X}"


# @intent:utility_function 次の命令（2バイト）をスキップします。
def skip_next(state) -> None:
    state.pc = (state.pc + 2) & 0xFFFF
