# retro_chip8/core/state.py
"""
Core Layer (CPU状態)
"""
from dataclasses import dataclass

# @intent:responsibility どのCPUにも共通するレジスタ。アーキテクチャ固有の状態はこれを継承して追加します。
@dataclass
class CpuState:
    pc: int = 0x000  # プログラムカウンタ
    sp: int = 0      # スタックの深さ
