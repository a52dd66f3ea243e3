# src/retro_chip8/arch/chip8/quirks.py
"""
命令互換性スイッチ。
"""
from dataclasses import dataclass

# @intent:responsibility 一部の命令について、既存ROMが前提とする別解釈への切り替えを保持します。
@dataclass(frozen=True)
class Quirks:
    """
    shift_flag_raw: 8xyE でVFに正規化前のビット値(0x80)をそのまま格納する。
    index_load_skips: Annn 実行時にPCを追加で2進める（正味+4）。
    """
    shift_flag_raw: bool = False
    index_load_skips: bool = False
