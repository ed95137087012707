# retro_chip8/loader/loader.py
"""
ROMローダーモジュール。
CHIP-8のROMはヘッダを持たない生のバイナリです。
"""
from retro_chip8.arch.chip8.cpu import PROGRAM_CAPACITY
from retro_chip8.core.errors import RomCapacityError
from retro_chip8.runtime.interpreter import Interpreter

class RomLoader:
    """
    ROMファイルを読み込み、インタプリタのセッションを開始するローダー。
    """
    # @intent:post-condition 容量を超えるファイルはRomCapacityErrorとなります。
    def load_rom(self, file_path: str) -> bytes:
        with open(file_path, 'rb') as f:
            data = f.read()
        if len(data) > PROGRAM_CAPACITY:
            raise RomCapacityError(len(data), PROGRAM_CAPACITY)
        return data

    # @intent:responsibility ROMファイルを読み込み、インタプリタを初期化します。
    def load_into(self, file_path: str, interpreter: Interpreter) -> bytes:
        rom = self.load_rom(file_path)
        interpreter.init(rom)
        return rom
