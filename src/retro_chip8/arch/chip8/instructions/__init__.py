# retro_chip8/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from retro_chip8.core.errors import DecodeError
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8State
from .base import Devices
from .maps import DECODE_MAP, SUB_DECODE_MAP, EXECUTE_MAP

# @intent:responsibility CHIP-8のオペコードをデコードします。
# @intent:post-condition どのパターンにも一致しない場合はDecodeErrorを送出します。
def decode_opcode(opcode: int, address: int) -> Operation:
    """
    16ビットのオペコードをデコードし、Operationオブジェクトを返します。
    """
    family = (opcode >> 12) & 0xF
    decoder = DECODE_MAP.get(family)
    if decoder is None and family in SUB_DECODE_MAP:
        select, table = SUB_DECODE_MAP[family]
        decoder = table.get(select(opcode))
    if decoder is None:
        raise DecodeError(opcode, address)
    return decoder(opcode, address)

# @intent:responsibility デコードされたCHIP-8命令を実行します。
def execute_instruction(operation: Operation, state: Chip8State, bus: Bus, devices: Devices) -> None:
    """
    デコードされた命令を実行し、CPUの状態とデバイスを変更します。
    """
    executor = EXECUTE_MAP.get(operation.pattern)
    if executor is None:
        raise DecodeError(operation.opcode, operation.address)
    executor(state, bus, operation, devices)
