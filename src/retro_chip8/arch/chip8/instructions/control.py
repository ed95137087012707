# retro_chip8/arch/chip8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ）の実装。
"""
from retro_chip8.core.errors import StackOverflowError, StackUnderflowError
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8State
from .base import Devices, make_operation, reg, imm8, addr12, skip_next

# --- RET (00EE) ---
def decode_ret(opcode: int, address: int) -> Operation:
    return make_operation(opcode, address, "00EE", "RET")

# @intent:responsibility コールスタックからリターンアドレスを取り出してPCに設定します。
# @intent:post-condition スタックが空の場合はStackUnderflowErrorを送出します。
def execute_ret(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    if state.stack.is_empty():
        raise StackUnderflowError(op.opcode, op.address)
    state.pc = state.stack.pop()

# --- JP addr (1NNN) ---
def decode_jp(opcode: int, address: int) -> Operation:
    return make_operation(opcode, address, "1NNN", "JP", [addr12(opcode & 0xFFF)])

def execute_jp(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    state.pc = op.nnn

# --- CALL addr (2NNN) ---
def decode_call(opcode: int, address: int) -> Operation:
    return make_operation(opcode, address, "2NNN", "CALL", [addr12(opcode & 0xFFF)])

# @intent:responsibility 現在のPC（フェッチ後に進められた値）をプッシュし、サブルーチンへ分岐します。
# @intent:post-condition スタックが満杯の場合はStackOverflowErrorを送出し、状態は変更しません。
def execute_call(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    if state.stack.is_full():
        raise StackOverflowError(op.opcode, op.address, state.stack.capacity)
    state.stack.push(state.pc)
    state.pc = op.nnn

# --- SE Vx, byte (3XNN) ---
def decode_se_imm(opcode: int, address: int) -> Operation:
    x = (opcode >> 8) & 0xF
    return make_operation(opcode, address, "3XNN", "SE", [reg(x), imm8(opcode & 0xFF)])

def execute_se_imm(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    if state.v[op.x] == op.nn:
        skip_next(state)

# --- SNE Vx, byte (4XNN) ---
def decode_sne_imm(opcode: int, address: int) -> Operation:
    x = (opcode >> 8) & 0xF
    return make_operation(opcode, address, "4XNN", "SNE", [reg(x), imm8(opcode & 0xFF)])

def execute_sne_imm(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    if state.v[op.x] != op.nn:
        skip_next(state)

# --- SE Vx, Vy (5XY0) ---
# 下位ニブルは検査しない（5XY1 なども同じ命令として扱う）
def decode_se_reg(opcode: int, address: int) -> Operation:
    x, y = (opcode >> 8) & 0xF, (opcode >> 4) & 0xF
    return make_operation(opcode, address, "5XY0", "SE", [reg(x), reg(y)])

def execute_se_reg(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    if state.v[op.x] == state.v[op.y]:
        skip_next(state)

# --- SNE Vx, Vy (9XY0) ---
def decode_sne_reg(opcode: int, address: int) -> Operation:
    x, y = (opcode >> 8) & 0xF, (opcode >> 4) & 0xF
    return make_operation(opcode, address, "9XY0", "SNE", [reg(x), reg(y)])

def execute_sne_reg(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    if state.v[op.x] != state.v[op.y]:
        skip_next(state)

# --- JP V0, addr (BNNN) ---
def decode_jp_v0(opcode: int, address: int) -> Operation:
    return make_operation(opcode, address, "BNNN", "JP", ["V0", addr12(opcode & 0xFFF)])

def execute_jp_v0(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    state.pc = (op.nnn + state.v[0]) & 0xFFFF
