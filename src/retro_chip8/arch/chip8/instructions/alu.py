# retro_chip8/arch/chip8/instructions/alu.py
"""
算術論理演算命令の実装。

VFはフラグとして使用されます。フラグを更新する命令では、
VFを0にクリア → 条件に応じて1をセット → Vxへ結果を書き込む、の順で処理します。
比較と演算はフラグ更新後のレジスタ値を読むため、X=F または Y=F の場合は
フラグの値がオペランドとして使われ、X=F の場合は演算結果がフラグを上書きします。
(8XY4 のみ、加算結果をフラグのクリア前に求めます。)
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8State
from .base import Devices, make_operation, reg, imm8

def _xy(opcode: int):
    return (opcode >> 8) & 0xF, (opcode >> 4) & 0xF

# --- ADD Vx, byte (7XNN) ---
def decode_add_imm(opcode: int, address: int) -> Operation:
    x = (opcode >> 8) & 0xF
    return make_operation(opcode, address, "7XNN", "ADD", [reg(x), imm8(opcode & 0xFF)])

# @intent:responsibility Vxに即値を加算します（256で折り返し、VFは変化しない）。
def execute_add_imm(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    state.v[op.x] = (state.v[op.x] + op.nn) & 0xFF

# --- OR Vx, Vy (8XY1) ---
def decode_or(opcode: int, address: int) -> Operation:
    x, y = _xy(opcode)
    return make_operation(opcode, address, "8XY1", "OR", [reg(x), reg(y)])

def execute_or(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    state.v[op.x] = state.v[op.x] | state.v[op.y]

# --- AND Vx, Vy (8XY2) ---
def decode_and(opcode: int, address: int) -> Operation:
    x, y = _xy(opcode)
    return make_operation(opcode, address, "8XY2", "AND", [reg(x), reg(y)])

def execute_and(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    state.v[op.x] = state.v[op.x] & state.v[op.y]

# --- XOR Vx, Vy (8XY3) ---
def decode_xor(opcode: int, address: int) -> Operation:
    x, y = _xy(opcode)
    return make_operation(opcode, address, "8XY3", "XOR", [reg(x), reg(y)])

def execute_xor(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    state.v[op.x] = state.v[op.x] ^ state.v[op.y]

# --- ADD Vx, Vy (8XY4) ---
def decode_add_reg(opcode: int, address: int) -> Operation:
    x, y = _xy(opcode)
    return make_operation(opcode, address, "8XY4", "ADD", [reg(x), reg(y)])

# @intent:responsibility Vx += Vy。桁あふれした場合にVF=1。
def execute_add_reg(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    total = state.v[op.x] + state.v[op.y]
    state.vf = 0
    if total > 0xFF:
        state.vf = 1
    state.v[op.x] = total & 0xFF

# --- SUB Vx, Vy (8XY5) ---
def decode_sub(opcode: int, address: int) -> Operation:
    x, y = _xy(opcode)
    return make_operation(opcode, address, "8XY5", "SUB", [reg(x), reg(y)])

# @intent:responsibility Vx -= Vy。フラグのクリア後、減算前に Vx > Vy であればVF=1（借りなし）。
def execute_sub(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    state.vf = 0
    if state.v[op.x] > state.v[op.y]:
        state.vf = 1
    state.v[op.x] = (state.v[op.x] - state.v[op.y]) & 0xFF

# --- SHR Vx (8XY6) ---
def decode_shr(opcode: int, address: int) -> Operation:
    x = (opcode >> 8) & 0xF
    return make_operation(opcode, address, "8XY6", "SHR", [reg(x)])

# @intent:responsibility Vxを右に1ビットシフトし、押し出された最下位ビットをVFに格納します（Vyは無視）。
def execute_shr(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    state.vf = state.v[op.x] & 0x1
    state.v[op.x] = state.v[op.x] >> 1

# --- SUBN Vx, Vy (8XY7) ---
def decode_subn(opcode: int, address: int) -> Operation:
    x, y = _xy(opcode)
    return make_operation(opcode, address, "8XY7", "SUBN", [reg(x), reg(y)])

# @intent:responsibility Vx = Vy - Vx。フラグのクリア後、減算前に Vy > Vx であればVF=1。
def execute_subn(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    state.vf = 0
    if state.v[op.y] > state.v[op.x]:
        state.vf = 1
    state.v[op.x] = (state.v[op.y] - state.v[op.x]) & 0xFF

# --- SHL Vx (8XYE) ---
def decode_shl(opcode: int, address: int) -> Operation:
    x = (opcode >> 8) & 0xF
    return make_operation(opcode, address, "8XYE", "SHL", [reg(x)])

# @intent:responsibility Vxを左に1ビットシフトし、押し出された最上位ビットをVFに格納します（Vyは無視）。
def execute_shl(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    state.vf = 0
    if state.v[op.x] & 0x80:
        state.vf = 1
    state.v[op.x] = (state.v[op.x] << 1) & 0xFF

# --- RND Vx, byte (CXNN) ---
def decode_rnd(opcode: int, address: int) -> Operation:
    x = (opcode >> 8) & 0xF
    return make_operation(opcode, address, "CXNN", "RND", [reg(x), imm8(opcode & 0xFF)])

# @intent:responsibility セッションが所有する乱数生成器から0-255の一様乱数を得て、NNとのANDをVxに格納します。
def execute_rnd(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    state.v[op.x] = devices.rng.randint(0, 0xFF) & op.nn

# --- ADD I, Vx (FX1E) ---
def decode_add_i(opcode: int, address: int) -> Operation:
    return make_operation(opcode, address, "FX1E", "ADD", ["I", reg((opcode >> 8) & 0xF)])

# @intent:responsibility I += Vx。16ビットで折り返し、VFは変化しません。
def execute_add_i(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    state.i = (state.i + state.v[op.x]) & 0xFFFF
