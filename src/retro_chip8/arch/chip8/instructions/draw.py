# src/retro_chip8/arch/chip8/instructions/draw.py
"""
画面命令（消去、スプライト描画）の実装。
"""
from retro_chip8.core.operation import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState
from .fields import x, y, n
from .base import reg

SPRITE_WIDTH = 8

# --- CLS (00E0) ---
def decode_cls(opcode: int) -> Operation:
    return Operation(opcode, "CLS")

def execute_cls(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.display.clear()

# --- DRW Vx, Vy, nibble (Dxyn) ---
def decode_drw(opcode: int) -> Operation:
    return Operation(opcode, "DRW", [reg(x(opcode)), reg(y(opcode)), f"{n(opcode):X}"])

# @intent:responsibility Iから始まるnバイトのスプライトを(Vx, Vy)へXOR合成し、消えたピクセルがあればVF=1とします。
# @intent:rationale 横方向は同じ行の先頭へ折り返し、画面下端を越える行は描画しません（縦方向の折り返しなし）。
def execute_drw(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    display = state.display
    origin_x = state.v[x(op.opcode)]
    origin_y = state.v[y(op.opcode)]
    height = n(op.opcode)

    state.vf = 0
    for row in range(height):
        target_y = origin_y + row
        if target_y >= display.height:
            break
        sprite_row = bus.read(state.i + row)
        for column in range(SPRITE_WIDTH):
            if not sprite_row & (0x80 >> column):
                continue
            index = display.index_of((origin_x + column) % display.width, target_y)
            if display.get(index):
                state.vf = 1
            display.xor(index, 1)
