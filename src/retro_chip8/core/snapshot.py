# retro_chip8/core/snapshot.py
"""
実行結果の不変スナップショット

このモジュールは、デコード済み命令と、1命令実行後のCPUとバスの状態を記録する
不変のデータ構造を定義します。
"""
from dataclasses import dataclass, field
from typing import List

from retro_chip8.core.state import CpuState
from retro_chip8.transport.bus import BusAccess


# @intent:responsibility デコードされた命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class Operation:
    """
    デコードされた命令。オペコードの各フィールドを分解して保持します。
    """
    opcode: int        # 16ビットのオペコード (例: 0x8124)
    address: int       # 命令が格納されていたアドレス
    pattern: str       # 命令パターン (例: "8XY4")
    mnemonic: str      # 例: "ADD"
    operands: List[str] = field(default_factory=list) # 例: ["V1", "V2"]
    length: int = 2    # 命令のバイト長

    @property
    def opcode_hex(self) -> str:
        return f"{self.opcode:04X}"

    @property
    def x(self) -> int:
        return (self.opcode >> 8) & 0xF

    @property
    def y(self) -> int:
        return (self.opcode >> 4) & 0xF

    @property
    def n(self) -> int:
        return self.opcode & 0xF

    @property
    def nn(self) -> int:
        return self.opcode & 0xFF

    @property
    def nnn(self) -> int:
        return self.opcode & 0xFFF

    def __str__(self) -> str:
        text = self.mnemonic
        if self.operands:
            text += " " + ", ".join(self.operands)
        return text


# @intent:responsibility 1命令実行後の状態を記録します。
@dataclass(frozen=True) # 不変データ構造
class Snapshot:
    """
    ある一時点における、CPUとバスの状態を記録したデータ構造。
    """
    state: CpuState
    operation: Operation
    instruction_count: int
    bus_activity: List[BusAccess] = field(default_factory=list)

    # @intent:rationale stateはコピーされません。後続の命令で変化するため、
    #                  スナップショット生成直後に参照する用途に限定されます。
