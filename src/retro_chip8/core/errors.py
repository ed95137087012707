# retro_chip8/core/errors.py
"""
インタプリタのエラー分類。

いずれのエラーもリトライされず、セッションにとって致命的です。
"""

class Chip8Error(Exception):
    """retro_chip8が送出する全ての例外の基底クラス。"""


# @intent:responsibility 特定の命令に起因する致命的エラー。オペコードと命令アドレスを保持します。
class ExecutionError(Chip8Error):
    def __init__(self, message: str, opcode: int, pc: int):
        super().__init__(f"{message}: opcode {opcode:#06x} at PC {pc:#06x}")
        self.opcode = opcode
        self.pc = pc


class DecodeError(ExecutionError):
    """どのパターンにも一致しないオペコード。"""
    def __init__(self, opcode: int, pc: int):
        super().__init__("Unknown opcode", opcode, pc)


class CallStackError(ExecutionError):
    pass


class StackUnderflowError(CallStackError):
    def __init__(self, opcode: int, pc: int):
        super().__init__("Return with empty call stack", opcode, pc)


class StackOverflowError(CallStackError):
    def __init__(self, opcode: int, pc: int, depth: int):
        super().__init__(f"Call stack depth {depth} exceeded", opcode, pc)
        self.depth = depth


# @intent:responsibility ROMがプログラム領域に収まらない場合のエラー。部分的なロードは行われません。
class RomCapacityError(Chip8Error):
    def __init__(self, size: int, capacity: int):
        super().__init__(f"ROM of {size} bytes exceeds program memory capacity of {capacity} bytes")
        self.size = size
        self.capacity = capacity


class ConfigError(Chip8Error):
    """設定ファイルの値が不正です。"""
