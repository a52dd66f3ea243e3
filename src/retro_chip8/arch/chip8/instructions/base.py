# src/retro_chip8/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通ユーティリティ。
"""
from retro_chip8.arch.chip8.state import Chip8CpuState

# @intent:constant 1命令のバイト長。分岐命令はこの値だけ手前にジャンプ先を補正します。
INSTRUCTION_LENGTH = 2

# @intent:utility_function オペランド表記（ニーモニック表示用）。
def reg(index: int) -> str:
    return f"V{index:X}"

def imm(value: int) -> str:
    return f"#{value:02X}"

def addr(value: int) -> str:
    return f"${value:03X}"

# @intent:utility_function 条件成立時に次の命令をスキップします（サイクル側の+2と合わせて正味+4）。
def skip_if(state: Chip8CpuState, condition: bool) -> None:
    if condition:
        state.pc += INSTRUCTION_LENGTH

# @intent:utility_function サイクル側の無条件+2を見越して、PCを指定アドレスへ設定します。
def jump_to(state: Chip8CpuState, target: int) -> None:
    state.pc = target - INSTRUCTION_LENGTH
