# retro_chip8/arch/chip8/instructions/io.py
"""
表示・入力命令（画面消去、スプライト描画、キー判定、キー待ち）の実装。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8State
from retro_chip8.peripherals.display import SCREEN_WIDTH, SCREEN_HEIGHT
from retro_chip8.peripherals.keypad import NUM_KEYS
from .base import Devices, make_operation, reg, skip_next

SPRITE_WIDTH = 8

# --- CLS (00E0) ---
def decode_cls(opcode: int, address: int) -> Operation:
    return make_operation(opcode, address, "00E0", "CLS")

def execute_cls(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    devices.display.clear()

# --- DRW Vx, Vy, nibble (DXYN) ---
def decode_drw(opcode: int, address: int) -> Operation:
    x, y, n = (opcode >> 8) & 0xF, (opcode >> 4) & 0xF, opcode & 0xF
    return make_operation(opcode, address, "DXYN", "DRW", [reg(x), reg(y), f"{n:X}"])

# @intent:responsibility I から N バイトのスプライトを (Vx, Vy) にXOR合成で描画します。
# @intent:rationale 画面外のピクセルは描画しません（折り返さない）。
#                  VFは最初にクリアされ、いずれかのピクセルが消灯した時点で1になります。
#                  座標はピクセルごとに現在のVx, Vyから読むため、X=F または Y=F の場合はフラグの値が座標になります。
def execute_drw(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    state.vf = 0

    for row in range(op.n):
        sprite = bus.read(state.i + row)
        for col in range(SPRITE_WIDTH):
            if not sprite & (0x80 >> col):
                continue
            x_pos = state.v[op.x] + col
            y_pos = state.v[op.y] + row
            if x_pos >= SCREEN_WIDTH or y_pos >= SCREEN_HEIGHT:
                continue
            if devices.display.set_pixel(x_pos, y_pos):
                state.vf = 1

# --- SKP Vx (EX9E) ---
def decode_skp(opcode: int, address: int) -> Operation:
    return make_operation(opcode, address, "EX9E", "SKP", [reg((opcode >> 8) & 0xF)])

# Vxが0x0-0xFの範囲外であれば、押下されていないものとして扱う
def _key_down(state: Chip8State, op: Operation, devices: Devices) -> bool:
    key = state.v[op.x]
    return key < NUM_KEYS and devices.keypad.is_pressed(key)

def execute_skp(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    if _key_down(state, op, devices):
        skip_next(state)

# --- SKNP Vx (EXA1) ---
def decode_sknp(opcode: int, address: int) -> Operation:
    return make_operation(opcode, address, "EXA1", "SKNP", [reg((opcode >> 8) & 0xF)])

def execute_sknp(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    if not _key_down(state, op, devices):
        skip_next(state)

# --- LD Vx, K (FX0A) ---
def decode_ld_key(opcode: int, address: int) -> Operation:
    return make_operation(opcode, address, "FX0A", "LD", [reg((opcode >> 8) & 0xF), "K"])

# @intent:responsibility キー待ち状態へ遷移し、次のキー押下を一度だけ購読します。
# @intent:post-condition 押下されたキーはVxに書き込まれ、実行状態はRUNNINGへ戻ります。
def execute_ld_key(state: Chip8State, bus: Bus, op: Operation, devices: Devices) -> None:
    state.begin_key_wait(op.x)
    devices.keypad.subscribe_next_press(state.resume_with_key)
