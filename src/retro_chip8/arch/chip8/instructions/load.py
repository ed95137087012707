# retro_chip8/arch/chip8/instructions/load.py
"""
転送命令（レジスタ・インデックス・タイマー・メモリ間のロード/ストア）の実装。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8State
from retro_chip8.arch.chip8.font import glyph_address
from .base import Devices, make_operation, reg, imm8, addr12

# --- LD Vx, byte (6XNN) ---
def decode_ld_imm(opcode: int, address: int) -> Operation:
    x = (opcode >> 8) & 0xF
    return make_operation(opcode, address, "6XNN", "LD", [reg(x), imm8(opcode & 0xFF)])

def execute_ld_imm(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    state.v[op.x] = op.nn

# --- LD Vx, Vy (8XY0) ---
def decode_ld_reg(opcode: int, address: int) -> Operation:
    x, y = (opcode >> 8) & 0xF, (opcode >> 4) & 0xF
    return make_operation(opcode, address, "8XY0", "LD", [reg(x), reg(y)])

def execute_ld_reg(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    state.v[op.x] = state.v[op.y]

# --- LD I, addr (ANNN) ---
def decode_ld_i(opcode: int, address: int) -> Operation:
    return make_operation(opcode, address, "ANNN", "LD", ["I", addr12(opcode & 0xFFF)])

def execute_ld_i(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    state.i = op.nnn

# --- LD Vx, DT (FX07) ---
def decode_ld_vx_dt(opcode: int, address: int) -> Operation:
    return make_operation(opcode, address, "FX07", "LD", [reg((opcode >> 8) & 0xF), "DT"])

def execute_ld_vx_dt(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    state.v[op.x] = state.delay_timer

# --- LD DT, Vx (FX15) ---
def decode_ld_dt_vx(opcode: int, address: int) -> Operation:
    return make_operation(opcode, address, "FX15", "LD", ["DT", reg((opcode >> 8) & 0xF)])

def execute_ld_dt_vx(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    state.delay_timer = state.v[op.x]

# --- LD ST, Vx (FX18) ---
def decode_ld_st_vx(opcode: int, address: int) -> Operation:
    return make_operation(opcode, address, "FX18", "LD", ["ST", reg((opcode >> 8) & 0xF)])

def execute_ld_st_vx(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    state.sound_timer = state.v[op.x]

# --- LD F, Vx (FX29) ---
def decode_ld_font(opcode: int, address: int) -> Operation:
    return make_operation(opcode, address, "FX29", "LD", ["F", reg((opcode >> 8) & 0xF)])

# @intent:responsibility Vxの数字に対応するフォントグリフのアドレスをIに設定します。
def execute_ld_font(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    state.i = glyph_address(state.v[op.x]) & 0xFFFF

# --- LD B, Vx (FX33) ---
def decode_ld_bcd(opcode: int, address: int) -> Operation:
    return make_operation(opcode, address, "FX33", "LD", ["B", reg((opcode >> 8) & 0xF)])

# @intent:responsibility Vxの10進表現（百・十・一の位）を I, I+1, I+2 に格納します。
def execute_ld_bcd(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    value = state.v[op.x]
    bus.write(state.i, value // 100)
    bus.write(state.i + 1, (value // 10) % 10)
    bus.write(state.i + 2, value % 10)

# --- LD [I], Vx (FX55) ---
def decode_ld_store(opcode: int, address: int) -> Operation:
    return make_operation(opcode, address, "FX55", "LD", ["[I]", reg((opcode >> 8) & 0xF)])

# @intent:responsibility V0からVxまで（Vxを含む）をIから始まるメモリに書き込みます。Iは変化しません。
def execute_ld_store(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    for index in range(op.x + 1):
        bus.write(state.i + index, state.v[index])

# --- LD Vx, [I] (FX65) ---
def decode_ld_load(opcode: int, address: int) -> Operation:
    return make_operation(opcode, address, "FX65", "LD", [reg((opcode >> 8) & 0xF), "[I]"])

def execute_ld_load(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    for index in range(op.x + 1):
        state.v[index] = bus.read(state.i + index)
