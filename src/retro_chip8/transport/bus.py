# retro_chip8/transport/bus.py
"""
Transport Layer (共通バス)

このモジュールは、CHIP-8の4KBメモリアドレス空間を抽象化し、
読み書きアクセスを適切なデバイスに委譲する責務を負います。
"""
from abc import ABC, abstractmethod
from typing import List, Tuple
from dataclasses import dataclass
from enum import Enum

# @intent:constant CHIP-8のアドレス空間は12ビット（0x000-0xFFF）です。
ADDRESS_SPACE_SIZE = 0x1000
ADDRESS_MASK = 0x0FFF

# @intent:responsibility バスアクセスを記録するためのタイプを定義します。
class BusAccessType(Enum):
    READ = "READ"
    WRITE = "WRITE"

# @intent:responsibility 個々のバスアクセス操作を記録します。
@dataclass(frozen=True) # 不変データ構造
class BusAccess:
    """
    バス上で行われた単一のアクセス（読み込みまたは書き込み）を記録するデータクラス。
    """
    address: int
    data: int # 8bit value
    access_type: BusAccessType

# @intent:responsibility バスの抽象デバイスインターフェースを定義します。
class Device(ABC):
    """
    バスに接続されるデバイスの抽象基底クラス。
    """
    # @intent:pre-condition アドレスはデバイスの有効範囲内である必要があります。
    @abstractmethod
    def read(self, address: int) -> int:
        """
        指定されたオフセットから8bitのデータを読み出します。
        """
        pass

    # @intent:pre-condition アドレスはデバイスの有効範囲内であり、データは8bit値である必要があります。
    @abstractmethod
    def write(self, address: int, data: int) -> None:
        """
        指定されたオフセットに8bitのデータを書き込みます。
        """
        pass

# @intent:responsibility 固定長のバイトセル配列としてRAMを提供します。
class RAM(Device):
    """
    境界チェック付きのRAMデバイス。
    bytearrayを使用するため、1バイトを超える値が黙って格納されることはありません。
    """
    # @intent:pre-condition sizeは正の整数である必要があります。
    def __init__(self, size: int):
        if not isinstance(size, int) or size <= 0:
            raise ValueError("RAM size must be a positive integer.")
        self._memory = bytearray(size)
        self._size = size

    def read(self, address: int) -> int:
        if not 0 <= address < self._size:
            raise IndexError(f"Address {address} out of bounds for RAM of size {self._size}.")
        return self._memory[address]

    def write(self, address: int, data: int) -> None:
        if not 0 <= address < self._size:
            raise IndexError(f"Address {address} out of bounds for RAM of size {self._size}.")
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        self._memory[address] = data

    # @intent:responsibility 複数バイトを一括で書き込みます。範囲外の場合は一切書き込みません。
    def load_block(self, address: int, data: bytes) -> None:
        end = address + len(data)
        if address < 0 or end > self._size:
            raise IndexError(
                f"Block {address:#05x}-{end:#05x} does not fit in RAM of size {self._size}."
            )
        self._memory[address:end] = data

    # @intent:responsibility 全セルを0で初期化します。
    def clear(self) -> None:
        self._memory[:] = bytes(self._size)

    def get_size(self) -> int:
        return self._size

# @intent:responsibility メモリアドレス空間を管理し、デバイスへのアクセスをディスパッチする共通バス。
# @intent:rationale 命令が計算したアドレス（PC+1, I+n など）は全てバス上で12ビットに折り返します。
#                  これにより、有効な命令から範囲外アクセスが発生することは構造的にありません。
class Bus:
    """
    CHIP-8のメモリアドレス空間を管理し、デバイスへのアクセスをディスパッチする共通バス。
    バス上で行われた全てのメモリアクセスを記録する機能を提供します。
    """
    def __init__(self):
        # メモリマップ: (start_address, end_address, device) のタプルリスト
        self._memory_map: List[Tuple[int, int, Device]] = []
        self._bus_activity_log: List[BusAccess] = []

    def _log_access(self, address: int, data: int, access_type: BusAccessType) -> None:
        self._bus_activity_log.append(BusAccess(address=address, data=data, access_type=access_type))

    # @intent:responsibility 記録されたバスアクティビティログを取得し、クリアします。
    def get_and_clear_activity_log(self) -> List[BusAccess]:
        log = self._bus_activity_log
        self._bus_activity_log = []
        return log

    # @intent:responsibility 指定されたアドレス範囲にデバイスを登録します。
    # @intent:pre-condition 範囲は12ビットアドレス空間内であり、RAMのサイズは範囲と一致する必要があります。
    def register_device(self, start_address: int, end_address: int, device: Device) -> None:
        """
        指定されたアドレス範囲にデバイスを登録します。
        アドレス範囲の重複チェックは行いません。呼び出し元が責任を持ちます。
        """
        if not (0 <= start_address <= end_address <= ADDRESS_MASK):
            raise ValueError(
                "Invalid address range: start_address must be <= end_address and within 0x000-0xFFF."
            )
        if not isinstance(device, Device):
            raise TypeError("Device must be an instance of a class derived from Device.")

        if isinstance(device, RAM):
            expected_size = end_address - start_address + 1
            if device.get_size() != expected_size:
                raise ValueError(
                    f"Registered {type(device).__name__} device size ({device.get_size()} bytes) does not match "
                    f"the specified address range size ({expected_size} bytes)."
                )

        self._memory_map.append((start_address, end_address, device))

    # @intent:post-condition デバイスが見つからなかった場合、IndexErrorを発生させます。
    def _find_device(self, address: int) -> Tuple[Device, int]:
        for start, end, device in self._memory_map:
            if start <= address <= end:
                return device, address - start
        raise IndexError(f"Address {address:#05x} not mapped to any device.")

    def read(self, address: int) -> int:
        """
        指定されたアドレス（12ビットに折り返し）から8bitのデータを読み出します。
        アクセスはログに記録されます。
        """
        address &= ADDRESS_MASK
        device, offset = self._find_device(address)
        data = device.read(offset)
        self._log_access(address, data, BusAccessType.READ)
        return data

    # @intent:responsibility ログを記録せずに指定されたアドレスからデータを読み出します。
    def peek(self, address: int) -> int:
        address &= ADDRESS_MASK
        device, offset = self._find_device(address)
        return device.read(offset)

    def write(self, address: int, data: int) -> None:
        """
        指定されたアドレス（12ビットに折り返し）に8bitのデータを書き込みます。
        """
        address &= ADDRESS_MASK
        device, offset = self._find_device(address)
        device.write(offset, data)
        self._log_access(address, data, BusAccessType.WRITE)

    # @intent:responsibility 連続したバイト列をログなしで書き込みます（フォントやROMの配置用）。
    # @intent:pre-condition ブロック全体が単一のRAMデバイス内に収まる必要があります。
    def load(self, address: int, data: bytes) -> None:
        if not data:
            return
        device, offset = self._find_device(address)
        if not isinstance(device, RAM):
            raise TypeError(f"Device at {address:#05x} does not support block loads.")
        device.load_block(offset, data)
