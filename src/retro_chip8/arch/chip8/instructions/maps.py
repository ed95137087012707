# retro_chip8/arch/chip8/instructions/maps.py
"""
オペコードと命令実装のマッピング定義。

デコードは上位ニブルで一次ディスパッチし、ファミリ 0/8/E/F は
下位フィールドで二次ディスパッチします。
"""
from . import control
from . import load
from . import alu
from . import io

# @intent:map 上位ニブルだけで命令が確定するファミリ。
DECODE_MAP = {
    0x1: control.decode_jp,
    0x2: control.decode_call,
    0x3: control.decode_se_imm,
    0x4: control.decode_sne_imm,
    0x5: control.decode_se_reg,
    0x6: load.decode_ld_imm,
    0x7: alu.decode_add_imm,
    0x9: control.decode_sne_reg,
    0xA: load.decode_ld_i,
    0xB: control.decode_jp_v0,
    0xC: alu.decode_rnd,
    0xD: io.decode_drw,
}

# @intent:map 二次ディスパッチが必要なファミリ。値は (サブキー抽出関数, サブキー → デコード関数)。
SUB_DECODE_MAP = {
    0x0: (lambda opcode: opcode & 0x0FFF, {
        0x0E0: io.decode_cls,
        0x0EE: control.decode_ret,
    }),
    0x8: (lambda opcode: opcode & 0x000F, {
        0x0: load.decode_ld_reg,
        0x1: alu.decode_or,
        0x2: alu.decode_and,
        0x3: alu.decode_xor,
        0x4: alu.decode_add_reg,
        0x5: alu.decode_sub,
        0x6: alu.decode_shr,
        0x7: alu.decode_subn,
        0xE: alu.decode_shl,
    }),
    0xE: (lambda opcode: opcode & 0x00FF, {
        0x9E: io.decode_skp,
        0xA1: io.decode_sknp,
    }),
    0xF: (lambda opcode: opcode & 0x00FF, {
        0x07: load.decode_ld_vx_dt,
        0x0A: io.decode_ld_key,
        0x15: load.decode_ld_dt_vx,
        0x18: load.decode_ld_st_vx,
        0x1E: alu.decode_add_i,
        0x29: load.decode_ld_font,
        0x33: load.decode_ld_bcd,
        0x55: load.decode_ld_store,
        0x65: load.decode_ld_load,
    }),
}

# @intent:map 命令パターンから実行関数へのマッピングテーブル。
EXECUTE_MAP = {
    # Control
    "00EE": control.execute_ret,
    "1NNN": control.execute_jp,
    "2NNN": control.execute_call,
    "3XNN": control.execute_se_imm,
    "4XNN": control.execute_sne_imm,
    "5XY0": control.execute_se_reg,
    "9XY0": control.execute_sne_reg,
    "BNNN": control.execute_jp_v0,

    # Load/Store
    "6XNN": load.execute_ld_imm,
    "8XY0": load.execute_ld_reg,
    "ANNN": load.execute_ld_i,
    "FX07": load.execute_ld_vx_dt,
    "FX15": load.execute_ld_dt_vx,
    "FX18": load.execute_ld_st_vx,
    "FX29": load.execute_ld_font,
    "FX33": load.execute_ld_bcd,
    "FX55": load.execute_ld_store,
    "FX65": load.execute_ld_load,

    # ALU
    "7XNN": alu.execute_add_imm,
    "8XY1": alu.execute_or,
    "8XY2": alu.execute_and,
    "8XY3": alu.execute_xor,
    "8XY4": alu.execute_add_reg,
    "8XY5": alu.execute_sub,
    "8XY6": alu.execute_shr,
    "8XY7": alu.execute_subn,
    "8XYE": alu.execute_shl,
    "CXNN": alu.execute_rnd,
    "FX1E": alu.execute_add_i,

    # Display/Input
    "00E0": io.execute_cls,
    "DXYN": io.execute_drw,
    "EX9E": io.execute_skp,
    "EXA1": io.execute_sknp,
    "FX0A": io.execute_ld_key,
}
