# retro_chip8/peripherals/keypad.py
"""
Key Source（入力元）の定義と、16キーのキーパッド実装。

ホスト側のキー名と CHIP-8 の論理キー（0x0-0xF）の対応表（KeyMap）もここで定義します。
"""
from abc import ABC, abstractmethod
from typing import Callable, Dict, Mapping, Optional

from retro_chip8.core.errors import ConfigError

NUM_KEYS = 16

KeyHandler = Callable[[int], None]

# @intent:constant 標準的なキー配置。左がホスト側のキー名、右が論理キー。
#   1 2 3 4      1 2 3 C
#   Q W E R  ->  4 5 6 D
#   A S D F      7 8 9 E
#   Z X C V      A 0 B F
DEFAULT_KEY_MAP: Dict[str, int] = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "Q": 0x4, "W": 0x5, "E": 0x6, "R": 0xD,
    "A": 0x7, "S": 0x8, "D": 0x9, "F": 0xE,
    "Z": 0xA, "X": 0x0, "C": 0xB, "V": 0xF,
}


def _check_key(key: int) -> None:
    if not isinstance(key, int) or not 0 <= key < NUM_KEYS:
        raise ValueError(f"Key {key!r} is not a CHIP-8 key (0x0-0xF).")


# @intent:responsibility ホストのキー名と論理キーの全単射を保持します。
class KeyMap:
    """
    16個の論理キーとホストのキー名の一対一対応。
    プロセスの実行中は変更されません。
    """
    # @intent:pre-condition mappingは0x0-0xFの各論理キーにちょうど1つのホストキーを割り当てる必要があります。
    def __init__(self, mapping: Optional[Mapping[str, int]] = None):
        mapping = DEFAULT_KEY_MAP if mapping is None else mapping
        normalized: Dict[str, int] = {}
        for host_key, logical in mapping.items():
            if not isinstance(logical, int) or not 0 <= logical < NUM_KEYS:
                raise ConfigError(f"Key map entry {host_key!r} -> {logical!r} is not a CHIP-8 key (0x0-0xF).")
            name = str(host_key).upper()
            if name in normalized:
                raise ConfigError(f"Host key {name!r} is mapped more than once.")
            normalized[name] = logical

        logical_keys = sorted(normalized.values())
        if logical_keys != list(range(NUM_KEYS)):
            raise ConfigError("Key map must assign exactly one host key to each CHIP-8 key 0x0-0xF.")

        self._to_logical = normalized
        self._to_host = {logical: name for name, logical in normalized.items()}

    def to_logical(self, host_key: str) -> Optional[int]:
        """ホストのキー名を論理キーに変換します。割り当てのないキーはNone。"""
        return self._to_logical.get(host_key.upper())

    def to_host(self, logical: int) -> str:
        _check_key(logical)
        return self._to_host[logical]

    def as_dict(self) -> Dict[str, int]:
        return dict(self._to_logical)


# @intent:responsibility インタプリタから見た入力デバイスのインターフェースを定義します。
class KeySource(ABC):
    @abstractmethod
    def is_pressed(self, key: int) -> bool:
        pass

    # @intent:responsibility 次のキー押下で一度だけ呼ばれるハンドラを登録します。
    @abstractmethod
    def subscribe_next_press(self, handler: KeyHandler) -> None:
        pass


# @intent:responsibility 16キーの押下状態と、一度限りの押下通知を管理します。
class Keypad(KeySource):
    """
    ホストの入力ディスパッチから press()/release() を受け取るキーパッド。
    """
    def __init__(self):
        self._pressed = [False] * NUM_KEYS
        self._next_press_handler: Optional[KeyHandler] = None

    def is_pressed(self, key: int) -> bool:
        _check_key(key)
        return self._pressed[key]

    def subscribe_next_press(self, handler: KeyHandler) -> None:
        self._next_press_handler = handler

    @property
    def has_pending_subscription(self) -> bool:
        return self._next_press_handler is not None

    # @intent:responsibility キー押下を記録し、登録済みのハンドラがあれば一度だけ呼び出します。
    def press(self, key: int) -> None:
        _check_key(key)
        self._pressed[key] = True
        handler = self._next_press_handler
        if handler is not None:
            # ハンドラ内で再登録できるよう、呼び出し前に解除する
            self._next_press_handler = None
            handler(key)

    def release(self, key: int) -> None:
        _check_key(key)
        self._pressed[key] = False

    # @intent:responsibility 押下状態と未処理の購読を全て破棄します（セッション開始・終了時）。
    def reset(self) -> None:
        self._pressed = [False] * NUM_KEYS
        self._next_press_handler = None
