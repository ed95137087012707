# retro_chip8/runtime/interpreter.py
"""
インタプリタ（エミュレーションセッション）モジュール。

ホストのフレームごとに drive() を1回呼び出すことで、決まった数の命令実行・
タイマー更新・画面反映を行います。実行のタイミング（フレームレート）はホストが決定します。
"""
from typing import List, Optional

from retro_chip8.core.errors import Chip8Error
from retro_chip8.core.snapshot import Snapshot
from retro_chip8.transport.bus import Bus, RAM
from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.arch.chip8.state import Chip8State
from retro_chip8.peripherals.display import FrameBuffer
from retro_chip8.peripherals.keypad import Keypad, KeyMap

# @intent:constant 1回のdriveで実行する命令数の既定値。
DEFAULT_SPEED = 10

# @intent:responsibility CPU・メモリ・表示・入力を束ね、セッションのライフサイクルと駆動サイクルを管理します。
class Interpreter:
    """
    CHIP-8のエミュレーションセッション。

    init() で状態をリセットしてROMをロードし、以降 drive() をホストのフレームごとに呼び出します。
    致命的なエラーが発生した後は停止状態となり、drive() は同じエラーを再送出します。
    """
    def __init__(self, cpu: Chip8Cpu, bus: Bus, ram: RAM, display: FrameBuffer,
                 keypad: Keypad, key_map: Optional[KeyMap] = None, speed: int = DEFAULT_SPEED):
        if not isinstance(speed, int) or speed <= 0:
            raise ValueError("Speed must be a positive integer.")
        self._cpu = cpu
        self._bus = bus
        self._ram = ram
        self._display = display
        self._keypad = keypad
        self._key_map = key_map or KeyMap()
        self._speed = speed
        self._halted_error: Optional[Chip8Error] = None

    @property
    def cpu(self) -> Chip8Cpu:
        return self._cpu

    @property
    def bus(self) -> Bus:
        return self._bus

    @property
    def display(self) -> FrameBuffer:
        return self._display

    @property
    def keypad(self) -> Keypad:
        return self._keypad

    @property
    def key_map(self) -> KeyMap:
        return self._key_map

    @property
    def speed(self) -> int:
        return self._speed

    @property
    def state(self) -> Chip8State:
        return self._cpu.get_state()

    @property
    def is_paused(self) -> bool:
        return self.state.is_awaiting_key

    # @intent:responsibility サウンドタイマーが動作中かどうかを返します（音声出力自体は行いません）。
    @property
    def is_sound_active(self) -> bool:
        return self.state.sound_timer > 0

    @property
    def halted_error(self) -> Optional[Chip8Error]:
        return self._halted_error

    # @intent:responsibility セッションを初期状態に戻し、フォントとROMをロードします。
    # @intent:post-condition PC=0x200、フォントロード済み、その他のメモリ・レジスタ・タイマー・画面は全て0。
    def init(self, rom: bytes) -> None:
        self._halted_error = None
        self._cpu.reset()
        self._ram.clear()
        self._display.clear()
        self._keypad.reset()
        self._bus.get_and_clear_activity_log()
        self._cpu.load_font()
        self.load(rom)

    # @intent:responsibility ROMバイト列を0x200から配置します。容量超過時はRomCapacityError。
    def load(self, rom: bytes) -> None:
        self._cpu.load_program(rom)

    # @intent:responsibility 1フレーム分の処理（命令実行 → タイマー更新 → 画面反映）を行います。
    def drive(self) -> List[Snapshot]:
        """
        最大 speed 個の命令を実行し、実行した命令のSnapshotのリストを返します。
        キー待ちに入った時点で命令実行を打ち切ります。
        キー待ち中は命令もタイマーも進みませんが、画面の反映は毎回行います。
        """
        if self._halted_error is not None:
            raise self._halted_error

        snapshots: List[Snapshot] = []
        for _ in range(self._speed):
            if self.is_paused:
                break
            try:
                snapshot = self._cpu.step()
            except Chip8Error as e:
                self._halted_error = e
                raise
            if snapshot is not None:
                snapshots.append(snapshot)

        if not self.is_paused:
            self._cpu.tick_timers()

        self._display.present()
        return snapshots

    def press_key(self, key: int) -> None:
        self._keypad.press(key)

    def release_key(self, key: int) -> None:
        self._keypad.release(key)

    # @intent:responsibility ホストのキー名をキーマップで変換して押下を通知します。割り当てのないキーは無視します。
    def press_host_key(self, host_key: str) -> bool:
        key = self._key_map.to_logical(host_key)
        if key is None:
            return False
        self._keypad.press(key)
        return True

    def release_host_key(self, host_key: str) -> bool:
        key = self._key_map.to_logical(host_key)
        if key is None:
            return False
        self._keypad.release(key)
        return True
