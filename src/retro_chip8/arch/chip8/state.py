# retro_chip8/arch/chip8/state.py
"""
CHIP-8固有の状態定義。

レジスタファイル、コールスタック、タイマー、実行状態（キー待ち）を保持します。
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from retro_chip8.core.state import CpuState

# @intent:constant CHIP-8の各種定数。
NUM_REGISTERS = 16
PROGRAM_START = 0x200
DEFAULT_STACK_DEPTH = 16

# @intent:responsibility 16本の8ビット汎用レジスタ（V0-VF）を境界チェック付きで保持します。
class RegisterFile:
    """
    V0-VFの固定長レジスタファイル。
    インデックスは0-15、値は0-255のみを受け付けます。
    """
    def __init__(self):
        self._values = bytearray(NUM_REGISTERS)

    def __getitem__(self, index: int) -> int:
        if not 0 <= index < NUM_REGISTERS:
            raise IndexError(f"Register index {index} out of range V0-VF.")
        return self._values[index]

    def __setitem__(self, index: int, value: int) -> None:
        if not 0 <= index < NUM_REGISTERS:
            raise IndexError(f"Register index {index} out of range V0-VF.")
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Value {value} is not an 8-bit value.")
        self._values[index] = value

    def __len__(self) -> int:
        return NUM_REGISTERS

    def __iter__(self):
        return iter(self._values)

    def __eq__(self, other) -> bool:
        if not isinstance(other, RegisterFile):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return "RegisterFile(" + " ".join(f"V{i:X}={v:02X}" for i, v in enumerate(self._values)) + ")"

    def clear(self) -> None:
        self._values[:] = bytes(NUM_REGISTERS)


# @intent:responsibility リターンアドレスを保持する容量固定のLIFOスタック。
# @intent:pre-condition capacityは正の整数である必要があります。
class CallStack:
    """
    サブルーチン呼び出しのリターンアドレスを保持するスタック。
    容量を超えるpush、空のスタックからのpopはIndexErrorになります。
    命令レベルのエラー（StackOverflowError等）への変換は命令実装側で行います。
    """
    def __init__(self, capacity: int = DEFAULT_STACK_DEPTH):
        if not isinstance(capacity, int) or capacity <= 0:
            raise ValueError("Call stack capacity must be a positive integer.")
        self._capacity = capacity
        self._frames: List[int] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    def is_full(self) -> bool:
        return len(self._frames) >= self._capacity

    def is_empty(self) -> bool:
        return not self._frames

    def push(self, address: int) -> None:
        if self.is_full():
            raise IndexError(f"Call stack capacity {self._capacity} exceeded.")
        self._frames.append(address & 0xFFFF)

    def pop(self) -> int:
        if not self._frames:
            raise IndexError("Pop from empty call stack.")
        return self._frames.pop()

    def peek(self) -> Optional[int]:
        return self._frames[-1] if self._frames else None

    def __len__(self) -> int:
        return len(self._frames)

    def as_list(self) -> List[int]:
        return list(self._frames)

    def clear(self) -> None:
        self._frames.clear()


# @intent:responsibility インタプリタの実行状態（キー待ちによる一時停止を含む）を定義します。
class RunState(Enum):
    RUNNING = "RUNNING"
    AWAITING_KEY = "AWAITING_KEY"


# @intent:responsibility CHIP-8の全てのマシン状態を保持します。
@dataclass
class Chip8State(CpuState):
    """
    CHIP-8のレジスタ、インデックスレジスタ、コールスタック、タイマー、実行状態を保持するデータクラス。
    """
    pc: int = PROGRAM_START
    i: int = 0x0000          # Index Register
    v: RegisterFile = field(default_factory=RegisterFile)
    stack: CallStack = field(default_factory=CallStack)
    delay_timer: int = 0
    sound_timer: int = 0
    run_state: RunState = RunState.RUNNING
    key_wait_register: Optional[int] = None

    @property
    def vf(self) -> int:
        return self.v[0xF]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[0xF] = value

    @property
    def is_awaiting_key(self) -> bool:
        return self.run_state is RunState.AWAITING_KEY

    # @intent:responsibility FX0Aによるキー待ち状態へ遷移します。
    def begin_key_wait(self, register: int) -> None:
        if not 0 <= register < NUM_REGISTERS:
            raise IndexError(f"Register index {register} out of range V0-VF.")
        self.run_state = RunState.AWAITING_KEY
        self.key_wait_register = register

    # @intent:responsibility 押下されたキーを待機中のレジスタに書き込み、実行状態に戻します。
    # @intent:post-condition キー待ち中でなければ何もしません（イベントは一度だけ消費されます）。
    def resume_with_key(self, key: int) -> None:
        if self.run_state is not RunState.AWAITING_KEY:
            return
        self.v[self.key_wait_register] = key
        self.run_state = RunState.RUNNING
        self.key_wait_register = None

    # @intent:responsibility 両タイマーを1だけ減算します（下限0）。
    def tick_timers(self) -> None:
        if self.delay_timer > 0:
            self.delay_timer -= 1
        if self.sound_timer > 0:
            self.sound_timer -= 1
