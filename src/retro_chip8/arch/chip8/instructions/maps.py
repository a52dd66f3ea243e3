# src/retro_chip8/arch/chip8/instructions/maps.py
"""
オペコードと命令実装のマッピング定義。

キーは (上位ニブル, 副キー)。副キーは命令ファミリによって異なります:
0x0/0xE/0xF は下位バイト、0x5/0x8/0x9 は下位ニブル、それ以外は None。
"""
from typing import Optional, Tuple

from . import load
from . import alu
from . import control
from . import draw
from .fields import family, kk, n

DispatchKey = Tuple[int, Optional[int]]

# @intent:responsibility 命令ワードから検索キーを求めます。
def dispatch_key(opcode: int) -> DispatchKey:
    group = family(opcode)
    if group in (0x0, 0xE, 0xF):
        return group, kk(opcode)
    if group in (0x5, 0x8, 0x9):
        return group, n(opcode)
    return group, None

# @intent:map 検索キーからデコード関数へのマッピングテーブル。
DECODE_MAP = {
    # System / Draw
    (0x0, 0xE0): draw.decode_cls,
    (0x0, 0xEE): control.decode_ret,
    (0xD, None): draw.decode_drw,

    # Control
    (0x1, None): control.decode_jp,
    (0x2, None): control.decode_call,
    (0x3, None): control.decode_se_byte,
    (0x4, None): control.decode_sne_byte,
    (0x5, 0x0): control.decode_se_reg,
    (0x9, 0x0): control.decode_sne_reg,
    (0xB, None): control.decode_jp_v0,
    (0xE, 0x9E): control.decode_skp,
    (0xE, 0xA1): control.decode_sknp,

    # ALU
    (0x6, None): alu.decode_ld_byte,
    (0x7, None): alu.decode_add_byte,
    (0x8, 0x0): alu.decode_ld_reg,
    (0x8, 0x1): alu.decode_or,
    (0x8, 0x2): alu.decode_and,
    (0x8, 0x3): alu.decode_xor,
    (0x8, 0x4): alu.decode_add,
    (0x8, 0x5): alu.decode_sub,
    (0x8, 0x6): alu.decode_shr,
    (0x8, 0x7): alu.decode_subn,
    (0x8, 0xE): alu.decode_shl,
    (0xC, None): alu.decode_rnd,

    # Load
    (0xA, None): load.decode_ld_i,
    (0xF, 0x07): load.decode_ld_vx_dt,
    (0xF, 0x0A): load.decode_ld_vx_k,
    (0xF, 0x15): load.decode_ld_dt_vx,
    (0xF, 0x18): load.decode_ld_st_vx,
    (0xF, 0x1E): load.decode_add_i,
    (0xF, 0x29): load.decode_ld_f,
    (0xF, 0x33): load.decode_ld_b,
    (0xF, 0x55): load.decode_store,
    (0xF, 0x65): load.decode_read,
}

# @intent:map 検索キーから実行関数へのマッピングテーブル。
EXECUTE_MAP = {
    # System / Draw
    (0x0, 0xE0): draw.execute_cls,
    (0x0, 0xEE): control.execute_ret,
    (0xD, None): draw.execute_drw,

    # Control
    (0x1, None): control.execute_jp,
    (0x2, None): control.execute_call,
    (0x3, None): control.execute_se_byte,
    (0x4, None): control.execute_sne_byte,
    (0x5, 0x0): control.execute_se_reg,
    (0x9, 0x0): control.execute_sne_reg,
    (0xB, None): control.execute_jp_v0,
    (0xE, 0x9E): control.execute_skp,
    (0xE, 0xA1): control.execute_sknp,

    # ALU
    (0x6, None): alu.execute_ld_byte,
    (0x7, None): alu.execute_add_byte,
    (0x8, 0x0): alu.execute_ld_reg,
    (0x8, 0x1): alu.execute_or,
    (0x8, 0x2): alu.execute_and,
    (0x8, 0x3): alu.execute_xor,
    (0x8, 0x4): alu.execute_add,
    (0x8, 0x5): alu.execute_sub,
    (0x8, 0x6): alu.execute_shr,
    (0x8, 0x7): alu.execute_subn,
    (0x8, 0xE): alu.execute_shl,
    (0xC, None): alu.execute_rnd,

    # Load
    (0xA, None): load.execute_ld_i,
    (0xF, 0x07): load.execute_ld_vx_dt,
    (0xF, 0x0A): load.execute_ld_vx_k,
    (0xF, 0x15): load.execute_ld_dt_vx,
    (0xF, 0x18): load.execute_ld_st_vx,
    (0xF, 0x1E): load.execute_add_i,
    (0xF, 0x29): load.execute_ld_f,
    (0xF, 0x33): load.execute_ld_b,
    (0xF, 0x55): load.execute_store,
    (0xF, 0x65): load.execute_read,
}
